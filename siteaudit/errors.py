"""Exception hierarchy for the audit service.

``InvalidUrlError`` is the only error a caller can fix; the HTTP layer turns
it into a 400.  ``TransportError`` is contained per category by the runner.
``AuditFailedError`` means no usable result could be produced at all.
"""

from __future__ import annotations


class AuditError(Exception):
    """Base class for every error raised by the audit service."""


class InvalidUrlError(AuditError):
    """The target URL is missing or is not an absolute http(s) URL."""

    def __init__(self, message: str, *, title: str = "Invalid URL format") -> None:
        super().__init__(message)
        self.title = title


class TransportError(AuditError):
    """Fetching the target page (or one of its resources) failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class AuditFailedError(AuditError):
    """The audit could not produce a result (all categories failed or timed out)."""
