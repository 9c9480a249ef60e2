"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from siteaudit.api import app

    uvicorn siteaudit.api:app --reload
"""

from siteaudit.api.app import app

__all__ = ["app"]
