"""Rule-based recommendations derived from scored categories.

Rules run per category in a fixed order (performance, SEO, accessibility,
crawlability) and their output is kept in that order; nothing is re-sorted
by priority.  A category scoring at or above ``THRESHOLD`` produces nothing,
and neither does a category whose extraction failed.
"""

from __future__ import annotations

from siteaudit.audit.models import (
    Category,
    CategoryResult,
    Recommendation,
    SeoSignals,
)

THRESHOLD = 70


def _needs_work(result: CategoryResult) -> bool:
    return result.ok and result.score is not None and result.score < THRESHOLD


def _performance(result: CategoryResult) -> list[Recommendation]:
    if not _needs_work(result):
        return []
    return [
        Recommendation(
            category=Category.PERFORMANCE.label,
            priority="high",
            message="Improve Core Web Vitals - focus on LCP, FID, and CLS",
            details=(
                "Consider optimizing images, reducing JavaScript execution time, "
                "and minimizing layout shifts"
            ),
        )
    ]


def _seo(result: CategoryResult) -> list[Recommendation]:
    if not _needs_work(result):
        return []
    signals = result.signals
    if not isinstance(signals, SeoSignals):
        return []

    found: list[Recommendation] = []
    if not signals.title.present:
        found.append(
            Recommendation(
                category=Category.SEO.label,
                priority="high",
                message="Add a title tag to your page",
                details="Title tags are crucial for SEO and should be 30-60 characters long",
            )
        )
    if not signals.meta_description.present:
        found.append(
            Recommendation(
                category=Category.SEO.label,
                priority="medium",
                message="Add a meta description",
                details=(
                    "Meta descriptions should be 120-160 characters and describe "
                    "your page content"
                ),
            )
        )
    return found


def _accessibility(result: CategoryResult) -> list[Recommendation]:
    if not _needs_work(result):
        return []
    return [
        Recommendation(
            category=Category.ACCESSIBILITY.label,
            priority="high",
            message="Improve accessibility compliance",
            details="Focus on alt text for images, proper heading structure, and form labels",
        )
    ]


def _crawlability(result: CategoryResult) -> list[Recommendation]:
    if not _needs_work(result):
        return []
    return [
        Recommendation(
            category=Category.CRAWLABILITY.label,
            priority="medium",
            message="Improve page crawlability",
            details="Ensure content is accessible without JavaScript and add proper meta tags",
        )
    ]


def recommend(
    performance: CategoryResult,
    seo: CategoryResult,
    accessibility: CategoryResult,
    crawlability: CategoryResult,
) -> list[Recommendation]:
    """Return the ordered recommendations for the four category results."""
    return [
        *_performance(performance),
        *_seo(seo),
        *_accessibility(accessibility),
        *_crawlability(crawlability),
    ]

