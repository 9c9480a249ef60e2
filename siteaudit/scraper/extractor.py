"""Markup parsing helpers shared by the live signal extractors."""

from __future__ import annotations

import trafilatura
from bs4 import BeautifulSoup

from siteaudit.scraper.models import RawPage


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _bs4_fallback(html: str) -> str:
    """Extract readable text using BeautifulSoup ``<main>``/``<article>`` heuristics."""
    soup = BeautifulSoup(html, "html.parser")
    # Strip non-content elements
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    container = soup.find("main") or soup.find("article") or soup.body
    if container is None:
        return soup.get_text(separator=" ", strip=True)
    return container.get_text(separator=" ", strip=True)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* into a BeautifulSoup document."""
    return BeautifulSoup(html, "html.parser")


def extract_visible_text(raw: RawPage) -> str:
    """Return the text a crawler would see without running JavaScript.

    Tries ``trafilatura`` first.  Falls back to a BeautifulSoup heuristic when
    trafilatura returns ``None`` or an empty string, which is common for
    short pages.
    """
    text: str | None = trafilatura.extract(
        raw.html,
        include_links=False,
        include_images=False,
        include_tables=True,
        no_fallback=False,
        url=raw.final_url or raw.url,
    )
    if not text:
        text = _bs4_fallback(raw.html)
    return (text or "").strip()
