from dataclasses import dataclass, replace
from typing import Optional


@dataclass(unsafe_hash=True)
class Quote:
    """One observed market quote.

    Every field is optional and freely settable. Absent numbers stay ``None``
    so that "unknown" never collapses into ``0.0``.
    """

    company: Optional[str] = None
    value: Optional[float] = None
    change: Optional[float] = None
    time: Optional[str] = None

    def snapshot(self) -> "Quote":
        return replace(self)
