"""Audit endpoints.

Routes
------
POST /api/audit/analyze    Body: {"url": "https://..."}    → run_audit
GET  /api/audit/health                                      → liveness probe
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from siteaudit.audit.runner import run_audit
from siteaudit.config import settings
from siteaudit.errors import AuditError, InvalidUrlError

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    # Optional so a missing url reaches the handler and becomes a 400.
    url: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/analyze", response_model=None)
def analyze(body: AnalyzeRequest, request: Request) -> dict[str, Any] | JSONResponse:
    """Audit a URL and return its scores and recommendations.

    Runs synchronously in FastAPI's threadpool; the four categories are
    extracted in parallel inside :func:`run_audit`.
    """
    source = request.app.state.signal_source
    try:
        result = run_audit(body.url, source=source)
    except InvalidUrlError as exc:
        return _error(400, exc.title, str(exc))
    except AuditError as exc:
        logger.error("Audit error for %r: %s", body.url, exc)
        return _error(500, "Audit failed", str(exc))
    except Exception:
        logger.exception("Unexpected error while auditing %r", body.url)
        return _error(500, "Audit failed", "An unexpected error occurred during the audit")

    return {"success": True, "data": result.to_dict()}


@router.get("/health")
def health() -> dict[str, Any]:
    """Liveness probe."""
    return {
        "status": "healthy",
        "timestamp": _now_iso(),
        "service": settings.service_name,
    }
