"""Audit runner: drives one audit from URL to :class:`AuditResult`.

The four category extractions run **in parallel** on a
``ThreadPoolExecutor``.  Each one writes only its own slot, and a failure in
one category is contained there: that category becomes an error marker and
is left out of the overall score.  Only when every category fails, or the
whole audit exceeds ``settings.audit_timeout``, does the audit itself fail.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import HttpUrl, TypeAdapter, ValidationError

from siteaudit.audit.aggregate import aggregate
from siteaudit.audit.models import AuditResult, Category, CategoryResult
from siteaudit.audit.recommendations import recommend
from siteaudit.audit.scoring import (
    score_accessibility,
    score_crawlability,
    score_performance,
    score_seo,
)
from siteaudit.audit.sources import SignalSession, SignalSource, get_signal_source
from siteaudit.config import settings
from siteaudit.errors import AuditFailedError, InvalidUrlError, TransportError

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(HttpUrl)

# category -> (extract from session, score bundle)
_PIPELINES: dict[Category, tuple[Callable[[SignalSession], Any], Callable[[Any], int]]] = {
    Category.PERFORMANCE: (lambda s: s.performance(), score_performance),
    Category.SEO: (lambda s: s.seo(), score_seo),
    Category.ACCESSIBILITY: (lambda s: s.accessibility(), score_accessibility),
    Category.CRAWLABILITY: (lambda s: s.crawlability(), score_crawlability),
}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_url(url: str | None) -> str:
    """Return *url* stripped, or raise :class:`InvalidUrlError`.

    The URL must be absolute, use ``http`` or ``https`` and name a host.
    """
    if url is None or not str(url).strip():
        raise InvalidUrlError(
            "Please provide a valid URL to analyze", title="URL is required"
        )
    candidate = str(url).strip()
    try:
        _URL_ADAPTER.validate_python(candidate)
    except ValidationError as exc:
        raise InvalidUrlError(
            "Please provide a valid URL (e.g., https://example.com)"
        ) from exc
    return candidate


# ---------------------------------------------------------------------------
# Per-category work
# ---------------------------------------------------------------------------

def _run_category(
    session: SignalSession, category: Category, abandoned: threading.Event
) -> CategoryResult:
    extract, score = _PIPELINES[category]
    try:
        signals = extract(session)
    except Exception as exc:
        if abandoned.is_set():
            # The audit already timed out and its session may be closed.
            logger.debug("[%s] discarded after timeout: %s", category.value, exc)
            return CategoryResult.failed(str(exc))
        if isinstance(exc, TransportError):
            logger.warning("[%s] %s: %s", category.value, session.url, exc)
            return CategoryResult.failed(str(exc))
        logger.exception("[%s] extraction failed for %s", category.value, session.url)
        return CategoryResult.failed(f"{category.label} audit failed: {exc}")
    return CategoryResult.scored(signals, score(signals))


def _collect(
    session: SignalSession, timeout: float
) -> dict[Category, CategoryResult]:
    """Start all four categories, then wait for every one to settle.

    On timeout the pool is shut down without waiting.  Workers still running
    finish against a session that is about to be closed; their outcome is
    discarded and only logged at debug level.
    """
    abandoned = threading.Event()
    pool = ThreadPoolExecutor(max_workers=len(_PIPELINES), thread_name_prefix="audit")
    futures = {
        category: pool.submit(_run_category, session, category, abandoned)
        for category in _PIPELINES
    }
    try:
        _, pending = wait(futures.values(), timeout=timeout)
        if pending:
            abandoned.set()
            raise AuditFailedError(f"Audit timed out after {timeout:g}s")
        return {category: future.result() for category, future in futures.items()}
    finally:
        pool.shutdown(wait=False, cancel_futures=True)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def run_audit(
    url: str,
    source: SignalSource | None = None,
    timeout: float | None = None,
) -> AuditResult:
    """Audit *url* and return the scored result.

    Args:
        url: Absolute http(s) URL of the page to audit.
        source: Where signals come from; defaults to the configured source.
        timeout: Seconds allowed for the whole audit; defaults to
            ``settings.audit_timeout``.

    Raises:
        InvalidUrlError: If *url* is missing or malformed.
        AuditFailedError: If every category failed or the audit timed out.
    """
    url = validate_url(url)
    source = source or get_signal_source()
    timeout = settings.audit_timeout if timeout is None else timeout

    logger.info("Starting audit for %s (source=%s)", url, source.name)
    with source.session(url) as session:
        results = _collect(session, timeout)

    if not any(r.ok for r in results.values()):
        first_error = results[Category.PERFORMANCE].error or "no category produced a score"
        logger.error("Audit failed for %s: %s", url, first_error)
        raise AuditFailedError(f"Unable to perform audit: {first_error}")

    overall = aggregate({c: r.score if r.ok else None for c, r in results.items()})
    recommendations = recommend(
        results[Category.PERFORMANCE],
        results[Category.SEO],
        results[Category.ACCESSIBILITY],
        results[Category.CRAWLABILITY],
    )

    result = AuditResult(
        url=url,
        timestamp=datetime.now(timezone.utc),
        performance=results[Category.PERFORMANCE],
        seo=results[Category.SEO],
        accessibility=results[Category.ACCESSIBILITY],
        crawlability=results[Category.CRAWLABILITY],
        overall_score=overall,
        recommendations=tuple(recommendations),
    )
    failed = [c.value for c, r in results.items() if not r.ok]
    logger.info(
        "Audit completed for %s: overall=%d recommendations=%d failed=%s",
        url, overall, len(recommendations), failed or "none",
    )
    return result
