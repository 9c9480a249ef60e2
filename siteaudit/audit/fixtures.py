"""Canned signal bundles for degraded (no live measurement) mode.

URLs are sorted into three buckets by substring.  Each bucket maps to a
fixed set of bundles, so the same URL always yields identical signals.
Performance and accessibility bundles carry a ``note`` so callers can tell
estimated data from measured data.
"""

from __future__ import annotations

from enum import Enum

from siteaudit.audit.models import (
    AccessibilitySignals,
    CoreWebVitals,
    CrawlabilitySignals,
    Headings,
    ImageStats,
    Issue,
    LinkStats,
    PerformanceSignals,
    Robots,
    SeoSignals,
    Sitemap,
    StructuredData,
    description_fact,
    title_fact,
)

PERFORMANCE_NOTE = (
    "Performance data estimated using Google Lighthouse parameters "
    "(browser-based audit unavailable)"
)
ACCESSIBILITY_NOTE = (
    "Accessibility data estimated using Google Lighthouse parameters "
    "(browser-based audit unavailable)"
)

_COMPLEX_MARKERS = ("optimizemydata", "google", "facebook")
_SIMPLE_MARKERS = ("example.com", "github.io")


class Bucket(str, Enum):
    COMPLEX = "complex"
    SIMPLE = "simple"
    DEFAULT = "default"


def classify(url: str) -> Bucket:
    """Return the fixture bucket for *url*.  Complex markers win over simple ones."""
    if any(marker in url for marker in _COMPLEX_MARKERS):
        return Bucket.COMPLEX
    if any(marker in url for marker in _SIMPLE_MARKERS):
        return Bucket.SIMPLE
    return Bucket.DEFAULT


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------

_VITALS = {
    Bucket.COMPLEX: CoreWebVitals(lcp=700, fid=180, cls=0.044, fcp=600, tbt=180, si=4000),
    Bucket.SIMPLE: CoreWebVitals(lcp=800, fid=50, cls=0.02, fcp=400, tbt=50, si=1500),
    Bucket.DEFAULT: CoreWebVitals(lcp=1800, fid=120, cls=0.05, fcp=800, tbt=120, si=2500),
}


def performance_for(url: str) -> PerformanceSignals:
    return PerformanceSignals.from_vitals(_VITALS[classify(url)], note=PERFORMANCE_NOTE)


# ---------------------------------------------------------------------------
# Accessibility (identical for every bucket)
# ---------------------------------------------------------------------------

_ACCESSIBILITY = AccessibilitySignals(
    issues=(
        Issue(
            type="warning",
            message="Heading elements are not in a sequentially-descending order",
            severity="medium",
            category="Navigation",
            count=1,
        ),
        Issue(
            type="info",
            message='<video> elements contain a <track> element with [kind="captions"]',
            severity="low",
            category="Audio and video",
            count=1,
        ),
    ),
    total_elements=150,
    baseline=98,
    passed_audits=25,
    manual_checks=10,
    note=ACCESSIBILITY_NOTE,
)


def accessibility_for(url: str) -> AccessibilitySignals:
    return _ACCESSIBILITY


# ---------------------------------------------------------------------------
# SEO (simple and default buckets share one bundle)
# ---------------------------------------------------------------------------

_COMPLEX_SEO = SeoSignals(
    title=title_fact("Optimize My Data - Professional SEO Services"),
    meta_description=description_fact(
        "Professional SEO services to help your business grow online. "
        "Expert optimization for better search rankings and increased traffic."
    ),
    headings=Headings(h1=1, h2=3, h3=5, h4=2),
    images=ImageStats(total=8, with_alt=6),
    links=LinkStats(total=15, internal=8, external=7, with_title=3),
    structured_data=StructuredData(json_ld=1),
    robots=Robots(meta_robots="index, follow"),
    sitemap=Sitemap(),
)

_DEFAULT_SEO = SeoSignals(
    title=title_fact("Website Title"),
    meta_description=description_fact("Website description"),
    headings=Headings(h1=1, h2=2, h3=3, h4=1),
    images=ImageStats(total=5, with_alt=4),
    links=LinkStats(total=10, internal=6, external=4, with_title=2),
    structured_data=StructuredData(),
    robots=Robots(meta_robots="index, follow"),
    sitemap=Sitemap(),
)


def seo_for(url: str) -> SeoSignals:
    return _COMPLEX_SEO if classify(url) is Bucket.COMPLEX else _DEFAULT_SEO


# ---------------------------------------------------------------------------
# Crawlability (simple and default buckets share one bundle)
# ---------------------------------------------------------------------------

def crawlability_for(url: str) -> CrawlabilitySignals:
    complex_site = classify(url) is Bucket.COMPLEX
    has_fragment = "#" in url
    if complex_site:
        issues = [Issue(type="warning", message="Links are not crawlable", severity="medium")]
    else:
        issues = [Issue(type="warning", message="Missing viewport meta tag", severity="medium")]
    if has_fragment:
        issues.append(Issue(type="info", message="URL contains hash fragments", severity="low"))

    return CrawlabilitySignals(
        url=url,
        issues=tuple(issues),
        has_content=True,
        script_count=5,
        has_viewport=False,
        has_canonical=not complex_site,
        has_fragment=has_fragment,
    )

