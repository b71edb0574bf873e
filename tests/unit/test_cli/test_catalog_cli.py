"""Tests for the catalog-service management CLI."""

from __future__ import annotations

import json

from click.testing import CliRunner
import pytest

from catalog_service.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_help_lists_command_groups(runner):
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for group in ("db", "server", "config"):
        assert group in result.output


def test_config_show_hides_secrets(runner):
    result = runner.invoke(cli, ["config", "show", "--format", "json"])

    assert result.exit_code == 0
    payload = json.loads(result.output[result.output.index("{"):])
    assert payload["app"]["service_name"] == "catalog-service"
    assert payload["database"]["password"] == "***"
    assert "url" not in payload["database"]
    assert payload["rabbit"]["exchange_name"] == "catalog.events"


def test_config_show_table(runner):
    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 0
    assert "[PAGINATION]" in result.output


def test_db_init_creates_schema(runner, monkeypatch, tmp_path):
    monkeypatch.setenv("DB_SQLITE_URL", f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")

    result = runner.invoke(cli, ["db", "init"])

    assert result.exit_code == 0, result.output
    assert "Database initialized successfully!" in result.output
    assert (tmp_path / "catalog.db").exists()


def test_server_run_passes_settings_to_uvicorn(runner, monkeypatch):
    captured: dict = {}
    monkeypatch.setattr(
        "catalog_service.cli.commands.server.uvicorn.run",
        lambda app, **kwargs: captured.update(app=app, **kwargs),
    )

    result = runner.invoke(cli, ["server", "run", "--port", "9001"])

    assert result.exit_code == 0, result.output
    assert captured["app"] == "catalog_service.app.main:app"
    assert captured["port"] == 9001
    assert captured["reload"] is False
