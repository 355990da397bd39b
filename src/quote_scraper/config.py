from dataclasses import dataclass
from typing import Iterable, List


@dataclass
class ScraperConfig:
    quote_url_template: str = "https://finance.yahoo.com/quote/{symbol}/"
    timeout_seconds: int = 20
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"
    cache_enabled: bool = False
    cache_ttl_minutes: int = 30
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "quote_scraper:quotes"

    def quote_url(self, symbol: str) -> str:
        return self.quote_url_template.format(symbol=symbol.strip().upper())


def normalize_symbols(symbols: Iterable[str]) -> List[str]:
    normalized = []
    for symbol in symbols:
        cleaned = (symbol or "").strip().upper()
        if cleaned:
            normalized.append(cleaned)
    return normalized
