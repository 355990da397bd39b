class QuoteScraperError(Exception):
    """Base error for the quote scraper."""


class QuoteFetchError(QuoteScraperError):
    def __init__(self, symbol: str, url: str, cause: Exception) -> None:
        super().__init__("Failed to fetch '{0}' ({1}): {2}".format(symbol, url, cause))
        self.symbol = symbol
        self.url = url
        self.cause = cause


class OutputWriteError(QuoteScraperError):
    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__("Failed to create CSV file '{0}': {1}".format(path, cause))
        self.path = path
        self.cause = cause
