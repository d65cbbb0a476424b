import argparse
import logging
import sys
from typing import Optional

from quote_feed.application.quote_service import QuoteJobParams, run_quote_job
from quote_feed.config import QuoteFeedConfig
from quote_feed.utils.logging_config import configure_logging


def _build_args(argv: Optional[list] = None) -> argparse.Namespace:
    defaults = QuoteFeedConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Record a stock quote on a board and export the board to CSV."
    )
    parser.add_argument(
        "--company",
        required=True,
        help='Company identifier or ticker. Example: "ACME"',
    )
    parser.add_argument(
        "--value",
        type=float,
        default=None,
        help="Current price. Left absent when omitted.",
    )
    parser.add_argument(
        "--change",
        type=float,
        default=None,
        help="Change from the prior value. Left absent when omitted.",
    )
    parser.add_argument(
        "--time",
        default=None,
        help='Observation time, free-form. Example: "2024-01-01T10:00:00Z"',
    )
    parser.add_argument(
        "--board",
        default=defaults.board,
        help="Board name the quote is recorded on. Default: {0}".format(defaults.board),
    )
    parser.add_argument(
        "--out",
        default="output/quotes.csv",
        help="Output CSV path. Default: output/quotes.csv",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    )
    parser.add_argument(
        "--use-cache",
        action="store_true",
        help="Keep the board between runs.",
    )
    parser.add_argument(
        "--cache-backend",
        choices=["redis", "file"],
        default=defaults.cache_backend,
        help="Board storage backend. Default: {0}".format(defaults.cache_backend),
    )
    parser.add_argument(
        "--cache-dir",
        default=defaults.cache_dir,
        help="Directory for the file backend.",
    )
    parser.add_argument(
        "--cache-ttl-minutes",
        type=int,
        default=defaults.cache_ttl_minutes,
        help="Cache time-to-live in minutes.",
    )
    parser.add_argument(
        "--redis-url",
        default=defaults.redis_url,
        help="Redis connection URL. Example: redis://localhost:6379/0",
    )
    parser.add_argument(
        "--redis-key-prefix",
        default=defaults.redis_key_prefix,
        help="Redis key prefix.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = _build_args(argv)
    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    params = QuoteJobParams(
        company=args.company,
        value=args.value,
        change=args.change,
        time=args.time,
        board=args.board,
        out=args.out,
        log_level=args.log_level,
        use_cache=args.use_cache,
        cache_backend=args.cache_backend,
        cache_dir=args.cache_dir,
        cache_ttl_minutes=args.cache_ttl_minutes,
        redis_url=args.redis_url,
        redis_key_prefix=args.redis_key_prefix,
    )

    try:
        result = run_quote_job(params)
        logger.info("Board source: %s", result.source)
        logger.info("CSV generated at: %s", result.output_path)
        logger.info("Total records written: %s", result.total_records)
        return 0
    except Exception as exc:
        logger.exception("Quote job failed: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
