import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from quote_scraper.config import ScraperConfig
from quote_scraper.errors import QuoteFetchError
from quote_scraper.infrastructure.quote_page_client import QuotePageClient
from quote_scraper.infrastructure.session_factory import SessionFactory
from quote_scraper.parsing.quote_parser import QuoteParser

PAGES = {
    "/quote/SOGN/": (
        "text/html",
        "<div class='container'><h1>Société Générale</h1></div>".encode("utf-8"),
    ),
    "/quote/LATN/": (
        "text/html",
        '<html><head><meta charset="iso-8859-1"></head>'
        "<body><h1>Nestlé</h1></body></html>".encode("iso-8859-1"),
    ),
    "/quote/HDRS/": (
        "text/html; charset=iso-8859-1",
        "<h1>Crédit Agricole</h1>".encode("iso-8859-1"),
    ),
}


class _QuotePageHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:
        page = PAGES.get(self.path)
        if page is None:
            self.send_error(404)
            return
        content_type, body = page
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *_args) -> None:
        pass


@pytest.fixture
def quote_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _QuotePageHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield "http://127.0.0.1:{0}".format(server.server_address[1])
    finally:
        server.shutdown()
        server.server_close()


def _local_client(base_url: str) -> QuotePageClient:
    config = ScraperConfig(quote_url_template=base_url + "/quote/{symbol}/")
    session = SessionFactory(config).create()
    session.trust_env = False
    return QuotePageClient(session, config)


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code
        self.headers = {"Content-Type": "text/html; charset=utf-8"}
        self.encoding = "utf-8"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError("{0} Client Error".format(self.status_code))


class FakeSession:
    def __init__(self, response=None, error=None) -> None:
        self._response = response
        self._error = error
        self.calls = []
        self.closed = False

    def get(self, url: str, timeout: int):
        self.calls.append((url, timeout))
        if self._error is not None:
            raise self._error
        return self._response

    def close(self) -> None:
        self.closed = True


def test_fetch_requests_quote_url_with_timeout() -> None:
    session = FakeSession(response=FakeResponse("<html>ok</html>"))
    client = QuotePageClient(session, ScraperConfig(timeout_seconds=7))

    html = client.fetch(" msft ")

    assert html == "<html>ok</html>"
    assert session.calls == [("https://finance.yahoo.com/quote/MSFT/", 7)]


def test_fetch_raises_quote_fetch_error_on_http_status() -> None:
    session = FakeSession(response=FakeResponse("Not Found", status_code=404))
    client = QuotePageClient(session, ScraperConfig())

    with pytest.raises(QuoteFetchError) as excinfo:
        client.fetch("ZZZZ")

    assert excinfo.value.symbol == "ZZZZ"
    assert excinfo.value.url == "https://finance.yahoo.com/quote/ZZZZ/"
    assert isinstance(excinfo.value.cause, requests.HTTPError)


def test_fetch_raises_quote_fetch_error_on_connection_failure() -> None:
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    client = QuotePageClient(session, ScraperConfig())

    with pytest.raises(QuoteFetchError, match="connection refused"):
        client.fetch("IBM")


def test_close_closes_session() -> None:
    session = FakeSession(response=FakeResponse(""))
    client = QuotePageClient(session, ScraperConfig())

    client.close()

    assert session.closed is True


def test_session_factory_sets_browser_headers() -> None:
    config = ScraperConfig(user_agent="test-agent/1.0", accept_language="pt-BR")

    session = SessionFactory(config).create()
    try:
        assert session.headers["User-Agent"] == "test-agent/1.0"
        assert session.headers["Accept-Language"] == "pt-BR"
        assert "text/html" in session.headers["Accept"]
    finally:
        session.close()


def test_fetch_decodes_utf8_page_served_without_charset(quote_server) -> None:
    client = _local_client(quote_server)
    try:
        html = client.fetch("SOGN")
    finally:
        client.close()

    record = QuoteParser().parse_quote("SOGN", html)
    assert record.company == "Société Générale"


def test_fetch_uses_meta_charset_when_header_has_none(quote_server) -> None:
    client = _local_client(quote_server)
    try:
        html = client.fetch("LATN")
    finally:
        client.close()

    assert QuoteParser().parse_quote("LATN", html).company == "Nestlé"


def test_fetch_keeps_charset_from_content_type_header(quote_server) -> None:
    client = _local_client(quote_server)
    try:
        html = client.fetch("HDRS")
    finally:
        client.close()

    assert QuoteParser().parse_quote("HDRS", html).company == "Crédit Agricole"


def test_fetch_reports_missing_page_from_server(quote_server) -> None:
    client = _local_client(quote_server)
    try:
        with pytest.raises(QuoteFetchError) as excinfo:
            client.fetch("NOPE")
    finally:
        client.close()

    assert isinstance(excinfo.value.cause, requests.HTTPError)
