"""Signal sources: where the four signal bundles come from.

Two implementations share one interface:

``LiveSignalSource``
    Fetches the page over HTTP once per session and extracts every bundle
    from its markup.  Performance is estimated, not measured.

``FixtureSignalSource``
    Returns canned bundles keyed by URL pattern ("degraded mode").  Used for
    offline runs and tests.

A source hands out a :class:`SignalSession` via ``source.session(url)``, a
context manager that owns any network resources for one audit and releases
them on exit.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import ContextManager, Iterator

import httpx
from bs4 import BeautifulSoup

from siteaudit.audit import fixtures
from siteaudit.audit.models import (
    AccessibilitySignals,
    CrawlabilitySignals,
    PerformanceSignals,
    SeoSignals,
)
from siteaudit.audit.signals import (
    estimate_performance,
    extract_accessibility,
    extract_crawlability,
    extract_seo,
)
from siteaudit.config import settings
from siteaudit.errors import TransportError
from siteaudit.scraper.extractor import extract_visible_text, parse_html
from siteaudit.scraper.fetcher import build_client, fetch_page, fetch_robots_txt
from siteaudit.scraper.models import RawPage

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class SignalSession(ABC):
    """Per-audit handle producing one bundle per category.

    The four methods are called concurrently and independently; an exception
    from one of them only affects that category.
    """

    def __init__(self, url: str) -> None:
        self.url = url

    @abstractmethod
    def performance(self) -> PerformanceSignals: ...

    @abstractmethod
    def seo(self) -> SeoSignals: ...

    @abstractmethod
    def accessibility(self) -> AccessibilitySignals: ...

    @abstractmethod
    def crawlability(self) -> CrawlabilitySignals: ...


class SignalSource(ABC):
    """Factory for :class:`SignalSession` handles."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in configuration and logs."""

    @abstractmethod
    def session(self, url: str) -> ContextManager[SignalSession]:
        """Return a context manager yielding a session for *url*."""


# ---------------------------------------------------------------------------
# Fixture source (degraded mode)
# ---------------------------------------------------------------------------

class FixtureSession(SignalSession):
    def performance(self) -> PerformanceSignals:
        return fixtures.performance_for(self.url)

    def seo(self) -> SeoSignals:
        return fixtures.seo_for(self.url)

    def accessibility(self) -> AccessibilitySignals:
        return fixtures.accessibility_for(self.url)

    def crawlability(self) -> CrawlabilitySignals:
        return fixtures.crawlability_for(self.url)


class FixtureSignalSource(SignalSource):
    @property
    def name(self) -> str:
        return "fixture"

    @contextmanager
    def session(self, url: str) -> Iterator[SignalSession]:
        yield FixtureSession(url)


# ---------------------------------------------------------------------------
# Live source
# ---------------------------------------------------------------------------

class LiveSession(SignalSession):
    """Lazily fetches the page once and shares it between categories.

    The first fetch outcome is kept: if it failed, every later category that
    needs the page sees the same :class:`TransportError` without a retry.
    """

    def __init__(self, url: str, client: httpx.Client) -> None:
        super().__init__(url)
        self._client = client
        self._lock = threading.Lock()
        self._page: tuple[RawPage, BeautifulSoup] | None = None
        self._error: TransportError | None = None

    def _load(self) -> tuple[RawPage, BeautifulSoup]:
        with self._lock:
            if self._error is not None:
                raise self._error
            if self._page is None:
                try:
                    raw = fetch_page(self._client, self.url)
                except TransportError as exc:
                    logger.warning("Page fetch failed for %s: %s", self.url, exc.reason)
                    self._error = exc
                    raise
                self._page = (raw, parse_html(raw.html))
            return self._page

    def performance(self) -> PerformanceSignals:
        raw, soup = self._load()
        return estimate_performance(raw, soup)

    def seo(self) -> SeoSignals:
        raw, soup = self._load()
        robots_txt = fetch_robots_txt(self._client, raw.final_url or self.url)
        return extract_seo(raw, soup, robots_txt)

    def accessibility(self) -> AccessibilitySignals:
        _, soup = self._load()
        return extract_accessibility(soup)

    def crawlability(self) -> CrawlabilitySignals:
        raw, soup = self._load()
        return extract_crawlability(raw, soup, extract_visible_text(raw))


class LiveSignalSource(SignalSource):
    @property
    def name(self) -> str:
        return "live"

    @contextmanager
    def session(self, url: str) -> Iterator[SignalSession]:
        with build_client() as client:
            yield LiveSession(url, client)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

_SOURCES: dict[str, type[SignalSource]] = {
    "live": LiveSignalSource,
    "fixture": FixtureSignalSource,
}


def get_signal_source(name: str | None = None) -> SignalSource:
    """Return the source named *name* (default: ``settings.signal_source``).

    Raises:
        ValueError: If the name is not ``live`` or ``fixture``.
    """
    key = (name or settings.signal_source).strip().lower()
    try:
        return _SOURCES[key]()
    except KeyError:
        raise ValueError(
            f"Unknown signal source {key!r}. Use: {' | '.join(_SOURCES)}"
        ) from None
