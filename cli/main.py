"""Site audit CLI: entry-point for running audits and the API server.

Usage:
    python cli/main.py --help

Commands:
    audit  → run one audit and print the scores (or the JSON result)
    serve  → start the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from siteaudit.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from siteaudit.audit.models import AuditResult, Category
from siteaudit.audit.runner import run_audit
from siteaudit.audit.sources import get_signal_source
from siteaudit.config import settings
from siteaudit.errors import AuditError, InvalidUrlError
from siteaudit.logger import configure_logging

app = typer.Typer(
    name="siteaudit",
    help="Website audit CLI.",
    no_args_is_help=True,
)


def _print_summary(result: AuditResult) -> None:
    typer.echo(f"[audit] URL      : {result.url}")
    typer.echo(f"[audit] Overall  : {result.overall_score}/100")
    for category in Category:
        outcome = result.category(category)
        if outcome.ok:
            line = f"{outcome.score}/100"
            note = getattr(outcome.signals, "note", None)
            if note:
                line += "  (estimated)"
        else:
            line = f"failed ({outcome.error})"
        typer.echo(f"[audit] {category.label:<14}: {line}")

    if not result.recommendations:
        typer.echo("[audit] No recommendations, every category passed.")
        return
    typer.echo("")
    for rec in result.recommendations:
        typer.echo(f"  [{rec.priority.upper():<6}] {rec.category}: {rec.message}")
        typer.echo(f"           {rec.details}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("audit")
def audit(
    url: str = typer.Argument(..., help="Absolute http(s) URL to audit."),
    source: Optional[str] = typer.Option(
        None, "--source", help="Signal source: live | fixture (default from settings)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
) -> None:
    """Audit a URL and print its category scores and recommendations."""
    configure_logging("DEBUG" if verbose else "WARNING")

    try:
        signal_source = get_signal_source(source)
    except ValueError as exc:
        typer.echo(f"[audit] {exc}", err=True)
        raise typer.Exit(2)

    try:
        result = run_audit(url, source=signal_source)
    except InvalidUrlError as exc:
        typer.echo(f"[audit] {exc.title}: {exc}", err=True)
        raise typer.Exit(2)
    except AuditError as exc:
        typer.echo(f"[audit] Audit failed: {exc}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    _print_summary(result)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Listen host (default: HOST)."),
    port: Optional[int] = typer.Option(None, help="Listen port (default: PORT)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"[serve] Website Audit Tool running on http://{bind_host}:{bind_port}")
    uvicorn.run(
        "siteaudit.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
