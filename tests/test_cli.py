"""Tests for the siteaudit CLI commands."""

import json
from dataclasses import replace
from unittest.mock import patch

from typer.testing import CliRunner

from cli.main import app
from siteaudit.audit import fixtures
from siteaudit.audit.models import title_fact

runner = CliRunner()


def test_audit_prints_summary():
    result = runner.invoke(app, ["audit", "https://example.com", "--source", "fixture"])
    assert result.exit_code == 0
    assert "87/100" in result.stdout
    assert "Performance" in result.stdout
    assert "(estimated)" in result.stdout
    assert "No recommendations" in result.stdout


def test_audit_json_output():
    result = runner.invoke(
        app, ["audit", "https://www.google.com", "--source", "fixture", "--json"]
    )
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["overallScore"] == 84
    assert data["seo"]["score"] == 74


def test_audit_lists_recommendations(monkeypatch):
    untitled = replace(fixtures._DEFAULT_SEO, title=title_fact(None))
    monkeypatch.setattr(fixtures, "_DEFAULT_SEO", untitled)

    result = runner.invoke(app, ["audit", "https://acme.test", "--source", "fixture"])
    assert result.exit_code == 0
    assert "[HIGH  ] SEO: Add a title tag to your page" in result.stdout


def test_audit_invalid_url():
    result = runner.invoke(app, ["audit", "not a url", "--source", "fixture"])
    assert result.exit_code == 2


def test_audit_unknown_source():
    result = runner.invoke(app, ["audit", "https://example.com", "--source", "browser"])
    assert result.exit_code == 2


def test_serve_starts_uvicorn():
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(app, ["serve", "--host", "127.0.0.1", "--port", "8123"])
    assert result.exit_code == 0
    assert "http://127.0.0.1:8123" in result.stdout
    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args == ("siteaudit.api.app:app",)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8123
