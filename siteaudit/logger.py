"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging

from siteaudit.config import settings

_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once from ``settings.log_level``.

    Calling it again only adjusts the level, so the API factory and the CLI
    can both call it without stacking handlers.
    """
    root = logging.getLogger()
    resolved = (level or settings.log_level).upper()
    if not root.handlers:
        logging.basicConfig(format=_FORMAT)
    root.setLevel(resolved)
