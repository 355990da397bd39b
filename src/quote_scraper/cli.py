import argparse
import logging
import sys
from typing import Optional

from quote_scraper.application.scrape_service import ScrapeExecutionParams, run_scrape_job
from quote_scraper.domain.models import DEFAULT_SYMBOLS
from quote_scraper.utils.logging_config import configure_logging


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected an integer, got '{0}'".format(value))
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1, got {0}".format(number))
    return number


def _build_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Yahoo Finance quote scraper (requests + BeautifulSoup) with CSV output."
    )
    parser.add_argument(
        "--symbols",
        nargs="+",
        default=list(DEFAULT_SYMBOLS),
        help="Ticker symbols to visit, in order. Default: {0}".format(
            " ".join(DEFAULT_SYMBOLS)
        ),
    )
    parser.add_argument(
        "--out",
        default="stocks.csv",
        help="Output CSV path. Default: stocks.csv",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=20,
        help="HTTP request timeout in seconds.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    )
    parser.add_argument(
        "--use-cache",
        action="store_true",
        help="Reuse quotes cached in Redis instead of fetching them again.",
    )
    parser.add_argument(
        "--cache-ttl-minutes",
        type=int,
        default=30,
        help="Cache time-to-live in minutes. Default: 30.",
    )
    parser.add_argument(
        "--redis-url",
        default="redis://localhost:6379/0",
        help="Redis connection URL. Example: redis://localhost:6379/0",
    )
    parser.add_argument(
        "--redis-key-prefix",
        default="quote_scraper:quotes",
        help="Redis key prefix. Default: quote_scraper:quotes",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = _build_args(argv)
    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    params = ScrapeExecutionParams(
        symbols=args.symbols,
        out=args.out,
        timeout_seconds=args.timeout,
        log_level=args.log_level,
        use_cache=args.use_cache,
        cache_ttl_minutes=args.cache_ttl_minutes,
        redis_url=args.redis_url,
        redis_key_prefix=args.redis_key_prefix,
    )

    try:
        result = run_scrape_job(params)
        logger.info("Result source: %s", result.source)
        logger.info("CSV generated at: %s", result.output_path)
        logger.info(
            "Total records written: %s (failed symbols: %s)",
            result.total_records,
            result.failed_symbols,
        )
        return 0
    except Exception as exc:
        logger.exception("Scraper execution failed: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
