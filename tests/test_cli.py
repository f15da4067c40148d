"""Tests for the command line interface."""

import os
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from bookshelf import __version__
from bookshelf.cli import cli
from bookshelf.config import settings
from bookshelf.database.seed_data import SAMPLE_BOOKS


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_seed_with_memory_store(monkeypatch):
    monkeypatch.setattr(settings, "store_backend", "memory")
    monkeypatch.setattr(settings, "password_hash_rounds", 4)

    result = CliRunner().invoke(cli, ["seed"])

    assert result.exit_code == 0, result.output
    assert f"Seeded {len(SAMPLE_BOOKS)} book(s)" in result.output
    assert "The Hobbit" in result.output


def test_seed_reports_store_failure(monkeypatch):
    monkeypatch.setattr(settings, "store_backend", "cassandra")

    result = CliRunner().invoke(cli, ["seed"])

    assert result.exit_code == 1
    assert "Error seeding database" in result.output


def test_init_db_creates_schema():
    with patch("bookshelf.database.connection.create_schema", new=AsyncMock()) as create_schema:
        result = CliRunner().invoke(
            cli, ["init-db", "--database-url", "postgresql://u:p@localhost:1/db"]
        )

    assert result.exit_code == 0, result.output
    create_schema.assert_awaited_once()
    assert "Database tables ready" in result.output


def test_serve_runs_app_factory():
    with patch("bookshelf.cli.uvicorn.run") as run:
        result = CliRunner().invoke(cli, ["serve", "--port", "9999"])

    assert result.exit_code == 0, result.output
    args, kwargs = run.call_args
    assert args == ("bookshelf.api.app:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 9999


def test_serve_log_level_reaches_app_logging(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "INFO")

    with (
        patch("bookshelf.cli.uvicorn.run") as run,
        patch("bookshelf.cli.configure_logging") as configure_logging,
    ):
        result = CliRunner().invoke(cli, ["serve", "--log-level", "warning"])

    assert result.exit_code == 0, result.output
    assert settings.log_level == "WARNING"
    assert os.environ["BOOKSHELF_LOG_LEVEL"] == "WARNING"
    configure_logging.assert_called_once_with("WARNING", debug=settings.debug)
    assert run.call_args.kwargs["log_level"] == "warning"


def test_serve_defaults_to_settings_log_level(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "ERROR")
    monkeypatch.delenv("BOOKSHELF_LOG_LEVEL", raising=False)

    with patch("bookshelf.cli.uvicorn.run") as run, patch("bookshelf.cli.configure_logging"):
        result = CliRunner().invoke(cli, ["serve"])

    assert result.exit_code == 0, result.output
    assert run.call_args.kwargs["log_level"] == "error"
    assert "BOOKSHELF_LOG_LEVEL" not in os.environ
