"""HTTP fetcher for audited pages and their robots.txt."""

from __future__ import annotations

import logging
from urllib.parse import urljoin

import httpx

from siteaudit.config import settings
from siteaudit.errors import TransportError
from siteaudit.scraper.models import RawPage

logger = logging.getLogger(__name__)

ROBOTS_NOT_FOUND = "Not found"


def build_client(timeout: float | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured with the audit User-Agent."""
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=timeout if timeout is not None else settings.request_timeout,
        follow_redirects=True,
    )


def fetch_page(client: httpx.Client, url: str) -> RawPage:
    """Fetch *url* with *client* and return a :class:`RawPage`.

    Raises:
        TransportError: On connection failure, timeout or a 4xx/5xx status.
    """
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransportError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise TransportError(url, str(exc) or type(exc).__name__) from exc

    elapsed_ms = response.elapsed.total_seconds() * 1000.0
    logger.debug("Fetched %s (HTTP %s, %.0f ms)", url, response.status_code, elapsed_ms)
    return RawPage(
        url=url,
        final_url=str(response.url),
        html=response.text,
        status_code=response.status_code,
        elapsed_ms=elapsed_ms,
    )


def fetch_robots_txt(client: httpx.Client, url: str) -> str:
    """Return the body of the site's ``/robots.txt`` or ``"Not found"``.

    A missing robots.txt is an SEO finding, not a failure, so every transport
    problem collapses to the ``"Not found"`` marker.
    """
    robots_url = urljoin(url, "/robots.txt")
    try:
        response = client.get(robots_url, timeout=settings.robots_timeout)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.debug("robots.txt unavailable at %s: %s", robots_url, exc)
        return ROBOTS_NOT_FOUND
    return response.text
