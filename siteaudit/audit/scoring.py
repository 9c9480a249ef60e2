"""Category scorers.

Each scorer is a pure function of its signal bundle and returns an integer
in ``[0, 100]``.  Deductions are summed before the clamp, so the order in
which checks run never changes the result.
"""

from __future__ import annotations

from dataclasses import dataclass

from siteaudit.audit.models import (
    AccessibilitySignals,
    CrawlabilitySignals,
    PerformanceSignals,
    SeoSignals,
)


def _clamp(score: float, lo: int = 0, hi: int = 100) -> int:
    return int(max(lo, min(hi, score)))


def _tier(value: float, tiers: tuple[tuple[float, int], ...]) -> int:
    """Return the penalty of the first (most severe) tier *value* exceeds."""
    for threshold, penalty in tiers:
        if value > threshold:
            return penalty
    return 0


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------

# (threshold, penalty) pairs, most severe first.
LCP_TIERS = ((4000.0, 30), (2500.0, 15))
FID_TIERS = ((300.0, 25), (100.0, 10))
CLS_TIERS = ((0.25, 20), (0.1, 10))
DOM_CONTENT_LOADED_LIMIT = 3000.0
LOAD_COMPLETE_LIMIT = 5000.0


def score_performance(signals: PerformanceSignals) -> int:
    vitals = signals.core_web_vitals
    metrics = signals.metrics

    penalty = (
        _tier(vitals.lcp, LCP_TIERS)
        + _tier(vitals.fid, FID_TIERS)
        + _tier(vitals.cls, CLS_TIERS)
    )
    if metrics.dom_content_loaded > DOM_CONTENT_LOADED_LIMIT:
        penalty += 10
    if metrics.load_complete > LOAD_COMPLETE_LIMIT:
        penalty += 10
    return _clamp(100 - penalty)


# ---------------------------------------------------------------------------
# SEO
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SeoProfile:
    """Baseline and penalty table for the SEO scorer."""

    baseline: int = 92
    missing_title: int = 25
    suboptimal_title: int = 10
    missing_description: int = 15
    suboptimal_description: int = 5
    missing_h1: int = 20
    multiple_h1: int = 15
    low_alt_coverage: int = 15
    alt_coverage_threshold: float = 80.0
    external_link_heavy: int = 10
    missing_robots_txt: int = 5
    missing_sitemap: int = 3
    json_ld_bonus: int = 5


SEO_PROFILE = SeoProfile()


def score_seo(signals: SeoSignals, profile: SeoProfile = SEO_PROFILE) -> int:
    score = profile.baseline

    if not signals.title.present:
        score -= profile.missing_title
    elif not signals.title.optimal:
        score -= profile.suboptimal_title

    if not signals.meta_description.present:
        score -= profile.missing_description
    elif not signals.meta_description.optimal:
        score -= profile.suboptimal_description

    if not signals.headings.has_h1:
        score -= profile.missing_h1
    if signals.headings.multiple_h1:
        score -= profile.multiple_h1

    if signals.images.alt_text_coverage < profile.alt_coverage_threshold:
        score -= profile.low_alt_coverage

    links = signals.links
    if links.total > 0 and links.external > links.internal:
        score -= profile.external_link_heavy

    if signals.structured_data.json_ld > 0:
        score += profile.json_ld_bonus

    if not signals.robots.robots_txt_found:
        score -= profile.missing_robots_txt
    if not signals.sitemap.present:
        score -= profile.missing_sitemap

    return _clamp(score)


# ---------------------------------------------------------------------------
# Accessibility
# ---------------------------------------------------------------------------

# Per-occurrence deductions for counted checks.
RULE_DEDUCTIONS = {
    "missing-alt": 5,
    "heading-skip": 3,
    "missing-label": 8,
    "contrast": 2,
}
SEVERITY_DEDUCTIONS = {"high": 10, "medium": 5, "low": 2}


def score_accessibility(signals: AccessibilitySignals) -> int:
    score = signals.baseline
    for issue in signals.issues:
        if issue.rule in RULE_DEDUCTIONS:
            score -= RULE_DEDUCTIONS[issue.rule] * (issue.count or 1)
        else:
            score -= SEVERITY_DEDUCTIONS.get(issue.severity, 0)
    return _clamp(score)


# ---------------------------------------------------------------------------
# Crawlability
# ---------------------------------------------------------------------------

def score_crawlability(signals: CrawlabilitySignals) -> int:
    score = 100
    if signals.script_count > 0 and not signals.has_content:
        score -= 30
    if not signals.has_viewport:
        score -= 10
    if not signals.has_canonical:
        score -= 5
    if signals.has_fragment:
        score -= 2
    return _clamp(score)
