from pathlib import Path

from quote_scraper.parsing.quote_parser import QuoteParser


def _load_fixture(name: str) -> str:
    return (Path(__file__).parent / "fixtures" / name).read_text(encoding="utf-8")


def test_parser_extracts_company_price_change() -> None:
    parser = QuoteParser()
    html = _load_fixture("quote_page_msft.html")

    record = parser.parse_quote("MSFT", html)

    assert record.symbol == "MSFT"
    assert record.company == "Microsoft Corporation (MSFT)"
    assert record.price == "418.16"
    assert record.change == "(+0.25%)"


def test_parser_returns_empty_strings_for_missing_nodes() -> None:
    parser = QuoteParser()
    html = _load_fixture("quote_page_missing_fields.html")

    record = parser.parse_quote("IBM", html)

    assert record.company == "International Business Machines Corporation (IBM)"
    assert record.price == ""
    assert record.change == ""


def test_parser_falls_back_to_whole_document_without_container() -> None:
    parser = QuoteParser()
    html = """
    <html><body>
      <h1>Apple Inc. (AAPL)</h1>
      <fin-streamer data-field="regularMarketPrice">231.30</fin-streamer>
      <fin-streamer data-field="regularMarketChangePercent">(-0.42%)</fin-streamer>
    </body></html>
    """

    record = parser.parse_quote("AAPL", html)

    assert record.as_row() == ["Apple Inc. (AAPL)", "231.30", "(-0.42%)"]


def test_parser_handles_empty_document() -> None:
    record = QuoteParser().parse_quote("GOOG", "")

    assert record.as_row() == ["", "", ""]
