"""Scraper package: page fetch & markup parsing."""

from siteaudit.scraper.extractor import extract_visible_text, parse_html
from siteaudit.scraper.fetcher import fetch_page, fetch_robots_txt
from siteaudit.scraper.models import RawPage

__all__ = [
    "fetch_page",
    "fetch_robots_txt",
    "parse_html",
    "extract_visible_text",
    "RawPage",
]
