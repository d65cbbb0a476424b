import logging
import os
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)


@dataclass
class QuoteFeedConfig:
    board: str = "default"
    cache_enabled: bool = False
    cache_backend: str = "redis"
    cache_dir: str = ".cache/quote_feed"
    cache_ttl_minutes: int = 30
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "quote_feed:boards"

    @classmethod
    def from_env(cls) -> "QuoteFeedConfig":
        defaults = cls()
        return cls(
            board=os.getenv("QUOTE_FEED_BOARD", defaults.board),
            cache_backend=os.getenv("QUOTE_FEED_CACHE_BACKEND", defaults.cache_backend),
            cache_dir=os.getenv("QUOTE_FEED_CACHE_DIR", defaults.cache_dir),
            cache_ttl_minutes=_int_env(
                "QUOTE_FEED_CACHE_TTL_MINUTES", defaults.cache_ttl_minutes
            ),
            redis_url=os.getenv("QUOTE_FEED_REDIS_URL", defaults.redis_url),
            redis_key_prefix=os.getenv(
                "QUOTE_FEED_REDIS_KEY_PREFIX", defaults.redis_key_prefix
            ),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default

    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer %s=%r, using %s.", name, raw, default)
        return default
