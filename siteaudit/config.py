"""Centralised settings for the site audit service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_BROWSER_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    service_name: str = field(
        default_factory=lambda: os.environ.get("SERVICE_NAME", "Website Audit Tool")
    )

    # ------------------------------------------------------------------
    # Signal source
    # ------------------------------------------------------------------
    signal_source: str = field(
        default_factory=lambda: os.environ.get("AUDIT_SIGNAL_SOURCE", "live")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("AUDIT_USER_AGENT", _BROWSER_UA)
    )

    # ------------------------------------------------------------------
    # Timeouts (seconds)
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    robots_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ROBOTS_TIMEOUT", "5.0"))
    )
    audit_timeout: float = field(
        default_factory=lambda: float(os.environ.get("AUDIT_TIMEOUT", "60.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


# Module-level singleton, import this everywhere:
#   from siteaudit.config import settings
settings = Settings()
