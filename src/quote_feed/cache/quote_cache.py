import json
import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, List, Optional

from quote_feed.domain.models import Quote
from quote_feed.serialization.quote_codec import QuoteDecodeError, from_dict, to_dict

LOGGER = logging.getLogger(__name__)

CACHE_VERSION = 1


class QuoteCache:
    """Keeps one JSON file per board under ``cache_dir``."""

    CACHE_VERSION = CACHE_VERSION

    def __init__(self, cache_dir: str) -> None:
        self._cache_dir = Path(cache_dir)
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    def load(self, board: str, ttl_minutes: int) -> Optional[List[Quote]]:
        path = self._cache_file(board)
        if not path.exists():
            return None

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            LOGGER.warning("Invalid cache file: %s", path)
            return None

        return read_envelope(payload, ttl_minutes, str(path))

    def save(self, board: str, records: List[Quote]) -> Path:
        path = self._cache_file(board)
        path.write_text(
            json.dumps(
                build_envelope(board, records),
                ensure_ascii=False,
                separators=(",", ":"),
            ),
            encoding="utf-8",
        )
        return path

    def _cache_file(self, board: str) -> Path:
        return self._cache_dir / "{0}.json".format(normalize_board(board))


def build_envelope(board: str, records: List[Quote]) -> dict:
    return {
        "version": CACHE_VERSION,
        "board": board,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "records": [to_dict(record) for record in records],
    }


def read_envelope(payload: Any, ttl_minutes: int, location: str) -> Optional[List[Quote]]:
    """Decode a stored board envelope.

    Returns ``None`` for anything that is not a fresh envelope of the current
    version. Records that fail to decode are skipped.
    """
    if not isinstance(payload, dict):
        LOGGER.warning("Invalid cache payload: %s", location)
        return None

    if payload.get("version") != CACHE_VERSION:
        return None

    created_at_raw = payload.get("created_at")
    if not created_at_raw:
        return None

    try:
        created_at = datetime.fromisoformat(created_at_raw)
    except (TypeError, ValueError):
        return None

    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    ttl = timedelta(minutes=max(ttl_minutes, 0))
    if datetime.now(timezone.utc) - created_at > ttl:
        return None

    records = payload.get("records", [])
    if not isinstance(records, list):
        LOGGER.warning("Invalid cache payload: %s", location)
        return None

    quotes = []
    for record in records:
        try:
            quotes.append(from_dict(record))
        except QuoteDecodeError as exc:
            LOGGER.warning("Skipping cached record in %s: %s", location, exc)

    return quotes


def normalize_board(board: str) -> str:
    normalized = board.strip().lower()
    normalized = re.sub(r"[^a-z0-9]+", "_", normalized)
    normalized = normalized.strip("_")
    return normalized or "unknown_board"
