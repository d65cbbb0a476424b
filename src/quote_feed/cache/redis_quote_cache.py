import json
import logging
from typing import List, Optional

from redis import Redis
from redis.exceptions import RedisError

from quote_feed.cache.quote_cache import (
    CACHE_VERSION,
    build_envelope,
    normalize_board,
    read_envelope,
)
from quote_feed.domain.models import Quote

LOGGER = logging.getLogger(__name__)


class RedisQuoteCache:
    CACHE_VERSION = CACHE_VERSION

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "quote_feed:boards",
        client: Optional[Redis] = None,
    ) -> None:
        self._key_prefix = key_prefix.rstrip(":") or "quote_feed:boards"
        self._client = client or Redis.from_url(redis_url, decode_responses=True)

    def load(self, board: str, ttl_minutes: int) -> Optional[List[Quote]]:
        key = self._cache_key(board)
        try:
            payload_raw = self._client.get(key)
        except RedisError as exc:
            LOGGER.warning("Redis cache lookup failed (%s): %s", key, exc)
            return None

        if not payload_raw:
            return None

        try:
            payload = json.loads(payload_raw)
        except ValueError:
            LOGGER.warning("Invalid payload in Redis cache (%s).", key)
            return None

        return read_envelope(payload, ttl_minutes, key)

    def save(self, board: str, records: List[Quote]) -> str:
        key = self._cache_key(board)
        try:
            self._client.set(
                key,
                json.dumps(
                    build_envelope(board, records),
                    ensure_ascii=False,
                    separators=(",", ":"),
                ),
            )
        except RedisError as exc:
            LOGGER.warning("Redis cache write failed (%s): %s", key, exc)

        return key

    def _cache_key(self, board: str) -> str:
        return "{0}:{1}".format(self._key_prefix, normalize_board(board))
