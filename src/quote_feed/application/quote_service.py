import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from quote_feed.cache.quote_cache import QuoteCache
from quote_feed.cache.redis_quote_cache import RedisQuoteCache
from quote_feed.config import QuoteFeedConfig
from quote_feed.domain.models import Quote
from quote_feed.output.csv_writer import CsvWriter
from quote_feed.utils.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)


@dataclass
class QuoteJobParams:
    company: str
    value: Optional[float] = None
    change: Optional[float] = None
    time: Optional[str] = None
    board: str = "default"
    out: str = "output/quotes.csv"
    log_level: str = "INFO"
    use_cache: bool = False
    cache_backend: str = "redis"
    cache_dir: str = ".cache/quote_feed"
    cache_ttl_minutes: int = 30
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "quote_feed:boards"


@dataclass
class QuoteJobResult:
    output_path: str
    total_records: int
    source: str  # cache | new


def build_quote(params: QuoteJobParams) -> Quote:
    quote = Quote(params.company)
    quote.value = params.value
    quote.change = params.change
    quote.time = params.time
    return quote


def upsert_quote(records: List[Quote], quote: Quote) -> List[Quote]:
    """Return a new board where ``quote`` replaces the entry for its company."""
    board = [record for record in records if record.company != quote.company]
    board.append(quote.snapshot())
    return board


def run_quote_job(params: QuoteJobParams) -> QuoteJobResult:
    configure_logging(params.log_level)

    config = QuoteFeedConfig(
        board=params.board,
        cache_enabled=params.use_cache,
        cache_backend=params.cache_backend,
        cache_dir=params.cache_dir,
        cache_ttl_minutes=params.cache_ttl_minutes,
        redis_url=params.redis_url,
        redis_key_prefix=params.redis_key_prefix,
    )

    cache = _build_cache(config)
    quote = build_quote(params)
    LOGGER.debug("Recording %s on board '%s'.", quote, config.board)

    source = "new"
    records: List[Quote] = []
    if cache is not None:
        cached_records = cache.load(config.board, config.cache_ttl_minutes)
        if cached_records is not None:
            LOGGER.info("Cache HIT for board '%s'.", config.board)
            records = cached_records
            source = "cache"

    records = upsert_quote(records, quote)

    if cache is not None:
        cache_location = cache.save(config.board, records)
        LOGGER.info("Cache saved at: %s", cache_location)

    CsvWriter.write(params.out, records)
    return QuoteJobResult(
        output_path=params.out,
        total_records=len(records),
        source=source,
    )


def _build_cache(
    config: QuoteFeedConfig,
) -> Optional[Union[QuoteCache, RedisQuoteCache]]:
    if not config.cache_enabled:
        return None

    if config.cache_backend == "redis":
        return RedisQuoteCache(
            redis_url=config.redis_url,
            key_prefix=config.redis_key_prefix,
        )
    if config.cache_backend == "file":
        return QuoteCache(config.cache_dir)

    raise ValueError("Unknown cache backend: {0}".format(config.cache_backend))
