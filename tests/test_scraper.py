"""Tests for the page fetcher and markup helpers.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during fetch tests.
- ``trafilatura.extract`` is patched where a test needs the BeautifulSoup
  fallback path to run.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx

from siteaudit.errors import TransportError
from siteaudit.scraper.extractor import _bs4_fallback, extract_visible_text, parse_html
from siteaudit.scraper.fetcher import (
    ROBOTS_NOT_FOUND,
    build_client,
    fetch_page,
    fetch_robots_txt,
)
from siteaudit.scraper.models import RawPage


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Test Page</title></head>
<body>
  <main>
    <p>This is the main content of the test page with enough text for extraction.</p>
    <p>It discusses topics such as renewable energy and battery technology.</p>
  </main>
</body>
</html>
"""

_SPA_HTML = """\
<!DOCTYPE html>
<html>
<head><title>React App</title></head>
<body>
  <div id="root"></div>
  <script src="/bundle.js"></script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# fetch_page tests
# ---------------------------------------------------------------------------

class TestFetchPage:
    def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get("https://example.com/article").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            with build_client() as client:
                raw = fetch_page(client, "https://example.com/article")

        assert isinstance(raw, RawPage)
        assert raw.url == "https://example.com/article"
        assert raw.final_url == "https://example.com/article"
        assert raw.status_code == 200
        assert "<title>Test Page</title>" in raw.html
        assert raw.elapsed_ms >= 0

    def test_follows_redirects(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(
                    301, headers={"Location": "https://example.com/new"}
                )
            )
            respx.get("https://example.com/new").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            with build_client() as client:
                raw = fetch_page(client, "https://example.com/old")

        assert raw.url == "https://example.com/old"
        assert raw.final_url == "https://example.com/new"

    def test_http_error_raises_transport_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with build_client() as client:
                with pytest.raises(TransportError, match="HTTP 404"):
                    fetch_page(client, "https://example.com/missing")

    def test_connection_error_raises_transport_error(self) -> None:
        with respx.mock:
            respx.get("https://down.example.com/").mock(
                side_effect=httpx.ConnectError("connection refused")
            )
            with build_client() as client:
                with pytest.raises(TransportError) as excinfo:
                    fetch_page(client, "https://down.example.com/")

        assert excinfo.value.url == "https://down.example.com/"
        assert "connection refused" in excinfo.value.reason

    def test_sends_configured_user_agent(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            with patch("siteaudit.scraper.fetcher.settings.user_agent", "AuditBot/2.0"):
                with build_client() as client:
                    fetch_page(client, "https://example.com/")

        assert route.calls.last.request.headers["User-Agent"] == "AuditBot/2.0"


# ---------------------------------------------------------------------------
# fetch_robots_txt tests
# ---------------------------------------------------------------------------

class TestFetchRobotsTxt:
    def test_returns_body_when_present(self) -> None:
        with respx.mock:
            respx.get("https://example.com/robots.txt").mock(
                return_value=httpx.Response(200, text="User-agent: *\nDisallow:")
            )
            with build_client() as client:
                body = fetch_robots_txt(client, "https://example.com/some/page")

        assert body.startswith("User-agent: *")

    def test_missing_robots_is_not_found(self) -> None:
        with respx.mock:
            respx.get("https://example.com/robots.txt").mock(
                return_value=httpx.Response(404)
            )
            with build_client() as client:
                body = fetch_robots_txt(client, "https://example.com/")

        assert body == ROBOTS_NOT_FOUND

    def test_transport_failure_is_not_found(self) -> None:
        with respx.mock:
            respx.get("https://example.com/robots.txt").mock(
                side_effect=httpx.ConnectTimeout("timed out")
            )
            with build_client() as client:
                body = fetch_robots_txt(client, "https://example.com/")

        assert body == ROBOTS_NOT_FOUND


# ---------------------------------------------------------------------------
# Extractor tests
# ---------------------------------------------------------------------------

class TestBs4Fallback:
    def test_extracts_main_content(self) -> None:
        text = _bs4_fallback(_SIMPLE_HTML)
        assert "main content" in text.lower()

    def test_strips_scripts_and_styles(self) -> None:
        html = """\
<html><body>
  <script>alert('x')</script>
  <style>.a{color:red}</style>
  <main><p>Real content here.</p></main>
</body></html>
"""
        text = _bs4_fallback(html)
        assert "alert" not in text
        assert "color" not in text
        assert "Real content" in text

    def test_script_only_page_has_no_text(self) -> None:
        assert _bs4_fallback(_SPA_HTML) == ""


class TestExtractVisibleText:
    def test_returns_page_text(self) -> None:
        raw = RawPage(url="https://example.com/", final_url="https://example.com/",
                      html=_SIMPLE_HTML, status_code=200)
        text = extract_visible_text(raw)
        assert "renewable energy" in text

    def test_trafilatura_fallback_to_bs4(self) -> None:
        raw = RawPage(url="https://example.com/", final_url="https://example.com/",
                      html=_SIMPLE_HTML, status_code=200)
        with patch("siteaudit.scraper.extractor.trafilatura.extract", return_value=None):
            text = extract_visible_text(raw)

        assert "main content" in text.lower()

    def test_js_only_page_yields_empty_text(self) -> None:
        raw = RawPage(url="https://spa.example.com/", final_url="https://spa.example.com/",
                      html=_SPA_HTML, status_code=200)
        with patch("siteaudit.scraper.extractor.trafilatura.extract", return_value=None):
            assert extract_visible_text(raw) == ""


class TestParseHtml:
    def test_parses_document(self) -> None:
        soup = parse_html(_SIMPLE_HTML)
        assert soup.title is not None
        assert soup.title.get_text() == "Test Page"

    def test_size_kb(self) -> None:
        raw = RawPage(url="u", final_url="u", html="x" * 2048, status_code=200)
        assert raw.size_kb == pytest.approx(2.0)
