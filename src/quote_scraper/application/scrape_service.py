import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from quote_scraper.application.quote_scraper import QuoteScraper
from quote_scraper.cache.redis_quote_cache import RedisQuoteCache
from quote_scraper.config import ScraperConfig, normalize_symbols
from quote_scraper.domain.models import DEFAULT_SYMBOLS, QuoteRecord
from quote_scraper.infrastructure.quote_page_client import QuotePageClient
from quote_scraper.infrastructure.session_factory import SessionFactory
from quote_scraper.output.csv_writer import CsvWriter
from quote_scraper.parsing.quote_parser import QuoteParser
from quote_scraper.utils.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)


@dataclass
class ScrapeExecutionParams:
    symbols: Sequence[str] = DEFAULT_SYMBOLS
    out: str = "stocks.csv"
    timeout_seconds: int = 20
    log_level: str = "INFO"
    use_cache: bool = False
    cache_ttl_minutes: int = 30
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "quote_scraper:quotes"


@dataclass
class ScrapeExecutionResult:
    output_path: str
    total_records: int
    failed_symbols: int = 0
    source: str = "live"  # live | cache | mixed
    records: List[QuoteRecord] = field(default_factory=list, repr=False)


def run_scrape_job(params: ScrapeExecutionParams) -> ScrapeExecutionResult:
    configure_logging(params.log_level)

    config = ScraperConfig(
        timeout_seconds=params.timeout_seconds,
        cache_enabled=params.use_cache,
        cache_ttl_minutes=params.cache_ttl_minutes,
        redis_url=params.redis_url,
        redis_key_prefix=params.redis_key_prefix,
    )
    symbols = normalize_symbols(params.symbols)
    cache = _build_cache(config)

    session = SessionFactory(config).create()
    client = QuotePageClient(session, config)
    scraper = QuoteScraper(client, QuoteParser())
    records: List[QuoteRecord] = []

    try:
        scraper.scrape(
            symbols,
            records=records,
            cache=cache,
            ttl_minutes=config.cache_ttl_minutes,
        )
    finally:
        client.close()

    # The file is only created once every symbol has been visited.
    path = CsvWriter.write(params.out, records)
    LOGGER.info("Data saved to %s", path)

    stats = scraper.last_run_stats
    return ScrapeExecutionResult(
        output_path=params.out,
        total_records=len(records),
        failed_symbols=stats["failed"],
        source=_resolve_source(stats),
        records=records,
    )


def _build_cache(config: ScraperConfig) -> Optional[RedisQuoteCache]:
    if not config.cache_enabled:
        return None

    return RedisQuoteCache(
        redis_url=config.redis_url,
        key_prefix=config.redis_key_prefix,
    )


def _resolve_source(stats: Dict[str, int]) -> str:
    if stats["cache"] and stats["live"]:
        return "mixed"
    if stats["cache"]:
        return "cache"
    return "live"
