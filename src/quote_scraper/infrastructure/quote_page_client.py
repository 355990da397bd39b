import logging

import requests
from bs4.dammit import EncodingDetector

from quote_scraper.config import ScraperConfig
from quote_scraper.errors import QuoteFetchError

LOGGER = logging.getLogger(__name__)


class QuotePageClient:
    def __init__(self, session: requests.Session, config: ScraperConfig) -> None:
        self._session = session
        self._config = config

    def fetch(self, symbol: str) -> str:
        url = self._config.quote_url(symbol)
        LOGGER.info("Visiting: %s", url)
        try:
            response = self._session.get(url, timeout=self._config.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise QuoteFetchError(symbol, url, exc) from exc

        # Without a charset in Content-Type requests assumes ISO-8859-1 for text/html.
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = self._declared_encoding(response.content)
        return response.text

    def close(self) -> None:
        self._session.close()

    def _declared_encoding(self, content: bytes) -> str:
        declared = EncodingDetector.find_declared_encoding(content, is_html=True)
        return declared or "utf-8"
