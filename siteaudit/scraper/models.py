"""Data models for the page fetch pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawPage:
    """The raw HTTP response for a single page fetch."""

    url: str
    final_url: str
    html: str
    status_code: int
    elapsed_ms: float = 0.0

    @property
    def size_kb(self) -> float:
        """Size of the HTML payload in kilobytes."""
        return len(self.html.encode("utf-8")) / 1024.0
