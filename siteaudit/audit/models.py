"""Dataclass models for signal bundles, category results and audit results.

Every model is frozen: a bundle is produced once per audit and never
mutated afterwards.  ``to_dict`` methods produce the camelCase JSON shape
returned by the HTTP API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Union

Severity = Literal["high", "medium", "low"]
Priority = Literal["high", "medium", "low"]


class Category(str, Enum):
    PERFORMANCE = "performance"
    SEO = "seo"
    ACCESSIBILITY = "accessibility"
    CRAWLABILITY = "crawlability"

    @property
    def label(self) -> str:
        """Display name used in recommendations."""
        return "SEO" if self is Category.SEO else self.value.capitalize()


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CoreWebVitals:
    lcp: float
    fid: float
    cls: float
    fcp: float
    tbt: float
    si: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "lcp": self.lcp,
            "fid": self.fid,
            "cls": self.cls,
            "fcp": self.fcp,
            "tbt": self.tbt,
            "si": self.si,
        }


@dataclass(frozen=True)
class NavigationMetrics:
    dom_content_loaded: float
    load_complete: float
    first_paint: float
    first_contentful_paint: float
    largest_contentful_paint: float
    total_blocking_time: float
    speed_index: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "domContentLoaded": self.dom_content_loaded,
            "loadComplete": self.load_complete,
            "firstPaint": self.first_paint,
            "firstContentfulPaint": self.first_contentful_paint,
            "largestContentfulPaint": self.largest_contentful_paint,
            "totalBlockingTime": self.total_blocking_time,
            "speedIndex": self.speed_index,
        }


@dataclass(frozen=True)
class PerformanceSignals:
    core_web_vitals: CoreWebVitals
    metrics: NavigationMetrics
    note: str | None = None

    @classmethod
    def from_vitals(
        cls, vitals: CoreWebVitals, note: str | None = None
    ) -> "PerformanceSignals":
        """Derive navigation metrics from *vitals* when no timeline is available."""
        metrics = NavigationMetrics(
            dom_content_loaded=round(vitals.fcp + 200),
            load_complete=round(vitals.lcp + 300),
            first_paint=round(max(vitals.fcp - 50, 0)),
            first_contentful_paint=vitals.fcp,
            largest_contentful_paint=vitals.lcp,
            total_blocking_time=vitals.tbt,
            speed_index=vitals.si,
        )
        return cls(core_web_vitals=vitals, metrics=metrics, note=note)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "coreWebVitals": self.core_web_vitals.to_dict(),
            "metrics": self.metrics.to_dict(),
        }
        if self.note:
            data["note"] = self.note
        return data


# ---------------------------------------------------------------------------
# SEO
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextFact:
    """A text element (title, meta description) with its length check."""

    present: bool
    content: str
    min_length: int
    max_length: int

    @property
    def length(self) -> int:
        return len(self.content)

    @property
    def optimal(self) -> bool:
        return self.min_length <= self.length <= self.max_length

    def to_dict(self) -> dict[str, Any]:
        return {
            "present": self.present,
            "content": self.content,
            "length": self.length,
            "optimal": self.optimal,
        }


def title_fact(content: str | None) -> TextFact:
    return TextFact(content is not None, (content or "").strip(), 30, 60)


def description_fact(content: str | None) -> TextFact:
    return TextFact(content is not None, content or "", 120, 160)


@dataclass(frozen=True)
class Headings:
    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0

    @property
    def has_h1(self) -> bool:
        return self.h1 > 0

    @property
    def multiple_h1(self) -> bool:
        return self.h1 > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "h1": self.h1,
            "h2": self.h2,
            "h3": self.h3,
            "h4": self.h4,
            "h5": self.h5,
            "h6": self.h6,
            "hasH1": self.has_h1,
            "multipleH1": self.multiple_h1,
        }


@dataclass(frozen=True)
class ImageStats:
    total: int = 0
    with_alt: int = 0

    @property
    def without_alt(self) -> int:
        return self.total - self.with_alt

    @property
    def alt_text_coverage(self) -> float:
        """Percentage of images carrying an ``alt`` attribute (100 when none)."""
        if self.total == 0:
            return 100.0
        return self.with_alt / self.total * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "withAlt": self.with_alt,
            "withoutAlt": self.without_alt,
            "altTextCoverage": round(self.alt_text_coverage, 2),
        }


@dataclass(frozen=True)
class LinkStats:
    total: int = 0
    internal: int = 0
    external: int = 0
    with_title: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "internal": self.internal,
            "external": self.external,
            "withTitle": self.with_title,
        }


@dataclass(frozen=True)
class StructuredData:
    json_ld: int = 0
    microdata: int = 0
    rdfa: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"jsonLd": self.json_ld, "microdata": self.microdata, "rdfa": self.rdfa}


@dataclass(frozen=True)
class Robots:
    meta_robots: str = ""
    robots_txt: str = "Not found"

    @property
    def robots_txt_found(self) -> bool:
        return self.robots_txt != "Not found"

    def to_dict(self) -> dict[str, Any]:
        return {"metaRobots": self.meta_robots, "robotsTxt": self.robots_txt}


@dataclass(frozen=True)
class Sitemap:
    present: bool = False
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"present": self.present, "url": self.url}


@dataclass(frozen=True)
class SeoSignals:
    title: TextFact
    meta_description: TextFact
    headings: Headings = field(default_factory=Headings)
    images: ImageStats = field(default_factory=ImageStats)
    links: LinkStats = field(default_factory=LinkStats)
    structured_data: StructuredData = field(default_factory=StructuredData)
    robots: Robots = field(default_factory=Robots)
    sitemap: Sitemap = field(default_factory=Sitemap)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title.to_dict(),
            "metaDescription": self.meta_description.to_dict(),
            "headings": self.headings.to_dict(),
            "images": self.images.to_dict(),
            "links": self.links.to_dict(),
            "structuredData": self.structured_data.to_dict(),
            "robots": self.robots.to_dict(),
            "sitemap": self.sitemap.to_dict(),
        }


# ---------------------------------------------------------------------------
# Accessibility & crawlability
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Issue:
    """A single finding.  ``rule`` names a counted accessibility check."""

    type: str
    message: str
    severity: Severity
    category: str | None = None
    count: int | None = None
    rule: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "message": self.message,
            "severity": self.severity,
        }
        if self.category is not None:
            data["category"] = self.category
        if self.count is not None:
            data["count"] = self.count
        if self.rule is not None:
            data["rule"] = self.rule
        return data


@dataclass(frozen=True)
class AccessibilitySignals:
    issues: tuple[Issue, ...]
    total_elements: int
    baseline: int = 100
    passed_audits: int | None = None
    manual_checks: int | None = None
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "issues": [i.to_dict() for i in self.issues],
            "totalElements": self.total_elements,
        }
        if self.passed_audits is not None:
            data["passedAudits"] = self.passed_audits
        if self.manual_checks is not None:
            data["manualChecks"] = self.manual_checks
        if self.note:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class CrawlabilitySignals:
    url: str
    issues: tuple[Issue, ...]
    has_content: bool
    script_count: int
    has_viewport: bool = True
    has_canonical: bool = True
    has_fragment: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "issues": [i.to_dict() for i in self.issues],
            "url": self.url,
            "hasContent": self.has_content,
            "scriptCount": self.script_count,
        }


Signals = Union[PerformanceSignals, SeoSignals, AccessibilitySignals, CrawlabilitySignals]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryResult:
    """Outcome of one category: a scored bundle or an error marker."""

    signals: Signals | None = None
    score: int | None = None
    error: str | None = None

    @classmethod
    def scored(cls, signals: Signals, score: int) -> "CategoryResult":
        return cls(signals=signals, score=score)

    @classmethod
    def failed(cls, error: str) -> "CategoryResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.score is not None

    def to_dict(self) -> dict[str, Any]:
        if not self.ok:
            return {"error": self.error or "Unknown error", "score": 0}
        data = self.signals.to_dict()  # type: ignore[union-attr]
        data["score"] = self.score
        return data


@dataclass(frozen=True)
class Recommendation:
    category: str
    priority: Priority
    message: str
    details: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "priority": self.priority,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True)
class AuditResult:
    url: str
    timestamp: datetime
    performance: CategoryResult
    seo: CategoryResult
    accessibility: CategoryResult
    crawlability: CategoryResult
    overall_score: int
    recommendations: tuple[Recommendation, ...] = ()

    def category(self, category: Category) -> CategoryResult:
        return getattr(self, category.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "performance": self.performance.to_dict(),
            "seo": self.seo.to_dict(),
            "accessibility": self.accessibility.to_dict(),
            "crawlability": self.crawlability.to_dict(),
            "overallScore": self.overall_score,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
