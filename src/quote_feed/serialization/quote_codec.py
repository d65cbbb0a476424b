import json
from dataclasses import asdict
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quote_feed.domain.models import Quote


class QuoteDecodeError(ValueError):
    pass


class QuotePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    company: Optional[str] = Field(None, description="Company identifier or ticker.")
    value: Optional[float] = Field(None, description="Current price, null when unknown.")
    change: Optional[float] = Field(
        None, description="Delta from the prior value, null when unknown."
    )
    time: Optional[str] = Field(None, description="Free-form observation timestamp.")

    @field_validator("value", "change", mode="before")
    @classmethod
    def _reject_booleans(cls, raw: Any) -> Any:
        # lax float parsing would turn true/false into 1.0/0.0
        if isinstance(raw, bool):
            raise ValueError("boolean is not a number")
        return raw


def to_dict(quote: Quote) -> dict:
    return asdict(quote)


def from_dict(data: Mapping[str, Any]) -> Quote:
    if not isinstance(data, Mapping):
        raise QuoteDecodeError(
            "Quote payload must be an object, got {0}.".format(type(data).__name__)
        )

    try:
        payload = QuotePayload.model_validate(dict(data))
    except ValidationError as exc:
        raise QuoteDecodeError("Invalid quote payload: {0}".format(exc)) from exc

    return Quote(
        company=payload.company,
        value=payload.value,
        change=payload.change,
        time=payload.time,
    )


def encode(quote: Quote) -> str:
    return json.dumps(to_dict(quote), ensure_ascii=False, separators=(",", ":"))


def decode(raw: Union[str, bytes]) -> Quote:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise QuoteDecodeError("Quote payload is not valid JSON.") from exc

    return from_dict(data)
