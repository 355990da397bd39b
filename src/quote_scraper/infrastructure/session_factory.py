import requests

from quote_scraper.config import ScraperConfig


class SessionFactory:
    def __init__(self, config: ScraperConfig) -> None:
        self._config = config

    def create(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": self._config.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": self._config.accept_language,
            }
        )
        return session
