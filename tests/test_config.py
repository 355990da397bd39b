from quote_scraper.config import ScraperConfig, normalize_symbols


def test_quote_url_uses_template_and_upper_cases_symbol() -> None:
    config = ScraperConfig()

    assert config.quote_url("aapl") == "https://finance.yahoo.com/quote/AAPL/"


def test_quote_url_respects_custom_template() -> None:
    config = ScraperConfig(quote_url_template="http://localhost:8080/q/{symbol}")

    assert config.quote_url("goog") == "http://localhost:8080/q/GOOG"


def test_normalize_symbols_strips_blanks_and_keeps_order_and_duplicates() -> None:
    assert normalize_symbols([" msft", "", "IBM ", "  ", "msft"]) == ["MSFT", "IBM", "MSFT"]
