"""Live signal extraction from a fetched page.

Every extractor works on the static markup returned by the server; no
JavaScript is executed.  Performance figures are therefore estimates built
from network timing and page weight, and carry a ``note`` saying so.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

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
from siteaudit.scraper.models import RawPage

ESTIMATED_PERFORMANCE_NOTE = (
    "Performance data estimated from network timing and page weight "
    "(browser-based audit unavailable)"
)

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_TEXT_TAGS = ["p", "span", "div", *_HEADING_TAGS]
_UNLABELLED_INPUT_TYPES_SKIPPED = {"hidden", "submit", "button", "reset", "image"}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _rel_values(tag: Tag) -> list[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [r.lower() for r in rel]


def _find_link_rel(soup: BeautifulSoup, rel: str) -> Tag | None:
    for link in soup.find_all("link"):
        if rel in _rel_values(link):
            return link
    return None


def _find_meta(soup: BeautifulSoup, name: str) -> Tag | None:
    for meta in soup.find_all("meta"):
        if str(meta.get("name", "")).lower() == name:
            return meta
    return None


def _inline_style(tag: Tag) -> dict[str, str]:
    """Parse a ``style`` attribute into a lower-cased property map."""
    declarations: dict[str, str] = {}
    for part in str(tag.get("style", "")).split(";"):
        if ":" not in part:
            continue
        prop, _, value = part.partition(":")
        declarations[prop.strip().lower()] = value.strip().lower().replace(" ", "")
    return declarations


def _is_blocking_script(tag: Tag) -> bool:
    return bool(tag.get("src")) and not tag.has_attr("async") and not tag.has_attr("defer")


# ---------------------------------------------------------------------------
# SEO
# ---------------------------------------------------------------------------

def _link_stats(soup: BeautifulSoup, host: str) -> LinkStats:
    anchors = soup.find_all("a")
    internal = external = with_title = 0
    for a in anchors:
        href = str(a.get("href", ""))
        on_host = bool(host) and host in href
        if href.startswith("/") or on_host:
            internal += 1
        elif href.startswith("http"):
            external += 1
        if a.has_attr("title"):
            with_title += 1
    return LinkStats(
        total=len(anchors), internal=internal, external=external, with_title=with_title
    )


def extract_seo(raw: RawPage, soup: BeautifulSoup, robots_txt: str) -> SeoSignals:
    """Collect on-page SEO facts from *soup*.

    *robots_txt* is the body of the site's robots.txt or ``"Not found"``.
    """
    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag is not None else None

    description_tag = _find_meta(soup, "description")
    description = (
        str(description_tag.get("content", "")) if description_tag is not None else None
    )

    robots_meta = _find_meta(soup, "robots")
    sitemap_link = _find_link_rel(soup, "sitemap")
    images = soup.find_all("img")
    host = urlsplit(raw.final_url or raw.url).hostname or ""

    return SeoSignals(
        title=title_fact(title),
        meta_description=description_fact(description),
        headings=Headings(**{h: len(soup.find_all(h)) for h in _HEADING_TAGS}),
        images=ImageStats(
            total=len(images), with_alt=sum(1 for img in images if img.has_attr("alt"))
        ),
        links=_link_stats(soup, host),
        structured_data=StructuredData(
            json_ld=len(soup.find_all("script", attrs={"type": "application/ld+json"})),
            microdata=len(soup.find_all(attrs={"itemscope": True})),
            rdfa=len(soup.find_all(attrs={"typeof": True})),
        ),
        robots=Robots(
            meta_robots=str(robots_meta.get("content", "")) if robots_meta else "",
            robots_txt=robots_txt,
        ),
        sitemap=Sitemap(
            present=sitemap_link is not None,
            url=str(sitemap_link.get("href", "")) if sitemap_link is not None else "",
        ),
    )


# ---------------------------------------------------------------------------
# Accessibility
# ---------------------------------------------------------------------------

def _heading_skips(soup: BeautifulSoup) -> int:
    """Count headings that jump more than one level below the previous one."""
    skips = 0
    previous = 0
    for heading in soup.find_all(_HEADING_TAGS):
        level = int(heading.name[1])
        if level > previous + 1:
            skips += 1
        previous = level
    return skips


def _unlabelled_inputs(soup: BeautifulSoup) -> int:
    label_targets = {str(label.get("for")) for label in soup.find_all("label") if label.get("for")}
    count = 0
    for element in soup.find_all("input"):
        if str(element.get("type", "text")).lower() in _UNLABELLED_INPUT_TYPES_SKIPPED:
            continue
        if element.has_attr("aria-label") or element.has_attr("aria-labelledby"):
            continue
        if element.get("id") and str(element.get("id")) in label_targets:
            continue
        if element.find_parent("label") is not None:
            continue
        count += 1
    return count


def _contrast_collisions(soup: BeautifulSoup) -> int:
    count = 0
    for tag in soup.find_all(_TEXT_TAGS):
        style = _inline_style(tag)
        color = style.get("color")
        background = style.get("background-color") or style.get("background")
        if color and color == background:
            count += 1
    return count


def extract_accessibility(soup: BeautifulSoup) -> AccessibilitySignals:
    """Run the static-markup accessibility checks."""
    issues: list[Issue] = []

    missing_alt = sum(1 for img in soup.find_all("img") if not img.has_attr("alt"))
    if missing_alt:
        issues.append(Issue(
            type="error",
            message=f"{missing_alt} images missing alt text",
            severity="high",
            category="Images",
            count=missing_alt,
            rule="missing-alt",
        ))

    skips = _heading_skips(soup)
    if skips:
        issues.append(Issue(
            type="warning",
            message="Heading structure may skip levels",
            severity="medium",
            category="Navigation",
            count=skips,
            rule="heading-skip",
        ))

    unlabelled = _unlabelled_inputs(soup)
    if unlabelled:
        issues.append(Issue(
            type="error",
            message=f"{unlabelled} form inputs missing labels",
            severity="high",
            category="Forms",
            count=unlabelled,
            rule="missing-label",
        ))

    collisions = _contrast_collisions(soup)
    if collisions:
        issues.append(Issue(
            type="warning",
            message=f"{collisions} potential color contrast issues",
            severity="medium",
            category="Contrast",
            count=collisions,
            rule="contrast",
        ))

    return AccessibilitySignals(
        issues=tuple(issues),
        total_elements=len(soup.find_all(True)),
    )


# ---------------------------------------------------------------------------
# Crawlability
# ---------------------------------------------------------------------------

def extract_crawlability(
    raw: RawPage, soup: BeautifulSoup, visible_text: str
) -> CrawlabilitySignals:
    """Check what a non-JavaScript crawler can reach on the page."""
    url = raw.final_url or raw.url
    script_count = len(soup.find_all("script"))
    has_content = bool(visible_text.strip())
    has_viewport = _find_meta(soup, "viewport") is not None
    has_canonical = _find_link_rel(soup, "canonical") is not None
    has_fragment = "#" in url

    issues: list[Issue] = []
    if script_count > 0 and not has_content:
        issues.append(Issue(
            type="error",
            message="Page appears to be JavaScript-only with no visible content",
            severity="high",
        ))
    if not has_viewport:
        issues.append(Issue(type="warning", message="Missing viewport meta tag", severity="medium"))
    if not has_canonical:
        issues.append(Issue(type="warning", message="Missing canonical URL", severity="medium"))
    if has_fragment:
        issues.append(Issue(type="info", message="URL contains hash fragments", severity="low"))

    return CrawlabilitySignals(
        url=url,
        issues=tuple(issues),
        has_content=has_content,
        script_count=script_count,
        has_viewport=has_viewport,
        has_canonical=has_canonical,
        has_fragment=has_fragment,
    )


# ---------------------------------------------------------------------------
# Performance (estimated)
# ---------------------------------------------------------------------------

def estimate_performance(raw: RawPage, soup: BeautifulSoup) -> PerformanceSignals:
    """Heuristic Core Web Vitals without a browser.

    - FCP ≈ response time + parse cost (1.5 ms/KB, 40 ms per script,
      20 ms per stylesheet)
    - LCP ≈ max(FCP, response time) + 30 ms per image (first 30 images)
    - TBT ≈ 50 ms per render-blocking script + 10 ms per inline script
    - FID ≈ half of TBT
    - CLS ≈ 0.02 per image or iframe without explicit dimensions
    """
    scripts = soup.find_all("script")
    blocking = sum(1 for s in scripts if _is_blocking_script(s))
    inline = sum(1 for s in scripts if not s.get("src"))
    stylesheets = sum(1 for link in soup.find_all("link") if "stylesheet" in _rel_values(link))
    images = soup.find_all("img")
    unsized = sum(
        1
        for el in (*images, *soup.find_all("iframe"))
        if not (el.has_attr("width") and el.has_attr("height"))
    )

    elapsed = raw.elapsed_ms
    fcp = _clamp(elapsed + 1.5 * raw.size_kb + 40 * len(scripts) + 20 * stylesheets, 50, 30000)
    lcp = _clamp(max(fcp, elapsed) + 30 * min(len(images), 30), fcp, 60000)
    tbt = 50 * blocking + 10 * inline
    vitals = CoreWebVitals(
        lcp=round(lcp),
        fid=round(tbt / 2),
        cls=round(min(0.02 * unsized, 1.0), 3),
        fcp=round(fcp),
        tbt=tbt,
        si=round((fcp + lcp) / 2),
    )
    return PerformanceSignals.from_vitals(vitals, note=ESTIMATED_PERFORMANCE_NOTE)
