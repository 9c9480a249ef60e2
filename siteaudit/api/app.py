"""FastAPI application factory.

Signal source
-------------
The source that feeds every audit (``live`` or ``fixture``) is chosen once
when the app is built and kept on ``app.state.signal_source``.  Tests pass a
source explicitly.

Routers
-------
    /api/audit  : audit analysis and health check

Errors
------
Malformed request bodies become a 400 ``{error, message}``; anything that
escapes a route becomes a 500 with a generic message.  Details are logged
server-side only.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from siteaudit import __version__
from siteaudit.audit.sources import SignalSource, get_signal_source
from siteaudit.logger import configure_logging

from siteaudit.api.routers import audit as audit_router

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation Error",
            "message": "Please provide a JSON body of the form {\"url\": \"https://example.com\"}",
        },
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": "An unexpected error occurred"},
    )


def create_app(signal_source: SignalSource | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Website Audit API",
        description=(
            "Audits a web page for performance, SEO, accessibility and "
            "crawlability, and returns weighted scores with recommendations."
        ),
        version=__version__,
    )
    app.state.signal_source = signal_source or get_signal_source()

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(audit_router.router, prefix="/api/audit", tags=["audit"])

    logger.info("Audit API ready (signal source: %s)", app.state.signal_source.name)
    return app


# Module-level instance used by uvicorn:
#   uvicorn siteaudit.api.app:app --reload
app = create_app()
