from typing import Union

from bs4 import BeautifulSoup, Tag

from quote_scraper.domain.models import QuoteRecord


class QuoteParser:
    CONTAINER_SELECTOR = "div.container"
    COMPANY_SELECTOR = "h1"
    PRICE_SELECTOR = "fin-streamer[data-field='regularMarketPrice']"
    CHANGE_SELECTOR = "fin-streamer[data-field='regularMarketChangePercent']"

    def parse_quote(self, symbol: str, html: str) -> QuoteRecord:
        soup = BeautifulSoup(html, "lxml")
        scope = soup.select_one(self.CONTAINER_SELECTOR) or soup

        return QuoteRecord(
            symbol=symbol,
            company=self._child_text(scope, self.COMPANY_SELECTOR),
            price=self._child_text(scope, self.PRICE_SELECTOR),
            change=self._child_text(scope, self.CHANGE_SELECTOR),
        )

    def _child_text(self, scope: Union[BeautifulSoup, Tag], selector: str) -> str:
        node = scope.select_one(selector)
        if not node:
            return ""
        return self._normalize_text(node.get_text(" ", strip=True))

    def _normalize_text(self, raw_text: str) -> str:
        return " ".join(raw_text.replace("\xa0", " ").split())
