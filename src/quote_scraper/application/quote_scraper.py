import logging
from typing import Dict, Iterable, List, Optional

from quote_scraper.cache.redis_quote_cache import RedisQuoteCache
from quote_scraper.domain.models import QuoteRecord
from quote_scraper.errors import QuoteFetchError
from quote_scraper.infrastructure.quote_page_client import QuotePageClient
from quote_scraper.parsing.quote_parser import QuoteParser

LOGGER = logging.getLogger(__name__)


class QuoteScraper:
    def __init__(self, client: QuotePageClient, parser: QuoteParser) -> None:
        self._client = client
        self._parser = parser
        self.last_run_stats: Dict[str, int] = {"live": 0, "cache": 0, "failed": 0}

    def scrape(
        self,
        symbols: Iterable[str],
        records: Optional[List[QuoteRecord]] = None,
        cache: Optional[RedisQuoteCache] = None,
        ttl_minutes: int = 0,
    ) -> List[QuoteRecord]:
        """Visit every symbol in order and append one record per page.

        Symbols whose page cannot be fetched are logged and left out.
        """
        if records is None:
            records = []
        stats = {"live": 0, "cache": 0, "failed": 0}

        for symbol in symbols:
            if cache is not None:
                cached = cache.load(symbol, ttl_minutes)
                if cached is not None:
                    LOGGER.info("Cache HIT for '%s'.", symbol)
                    records.append(cached)
                    stats["cache"] += 1
                    continue

            try:
                html = self._client.fetch(symbol)
            except QuoteFetchError as exc:
                LOGGER.error("Error occurred: %s", exc)
                stats["failed"] += 1
                continue

            record = self._parser.parse_quote(symbol, html)
            LOGGER.info(
                "Scraped: %s | company=%r | price=%r | change=%r",
                symbol,
                record.company,
                record.price,
                record.change,
            )
            records.append(record)
            stats["live"] += 1

            if cache is not None:
                cache.save(symbol, record)

        self.last_run_stats = stats
        return records
