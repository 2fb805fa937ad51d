"""Tests for the operator CLI."""

from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from src.books_api.cli import app
from src.books_api.cli.server_commands import run_smoke_checks
from src.books_api.core.services.database import SAMPLE_BOOKS

runner = CliRunner()


@pytest.fixture
def db_file(tmp_path: Path) -> str:
    return str(tmp_path / "cli-books.db")


class TestDbCommands:
    def test_init_seeds_sample_books(self, db_file: str):
        result = runner.invoke(app, ["db", "init", "--db-path", db_file])

        assert result.exit_code == 0, result.output
        assert "Database ready" in result.output
        assert f"Sample books inserted: {len(SAMPLE_BOOKS)}" in result.output
        assert Path(db_file).exists()

    def test_init_twice_does_not_reseed(self, db_file: str):
        runner.invoke(app, ["db", "init", "--db-path", db_file])

        result = runner.invoke(app, ["db", "init", "--db-path", db_file])

        assert result.exit_code == 0, result.output
        assert "Sample books inserted: 0" in result.output

    def test_init_without_seed(self, db_file: str):
        result = runner.invoke(app, ["db", "init", "--no-seed", "--db-path", db_file])

        assert result.exit_code == 0, result.output
        assert "Sample books inserted: 0" in result.output

    def test_list(self, db_file: str):
        runner.invoke(app, ["db", "init", "--db-path", db_file])

        result = runner.invoke(app, ["db", "list", "--db-path", db_file])

        assert result.exit_code == 0, result.output
        assert f"Books ({len(SAMPLE_BOOKS)})" in result.output

    def test_list_empty_database(self, db_file: str):
        result = runner.invoke(app, ["db", "list", "--db-path", db_file])

        assert result.exit_code == 0, result.output
        assert "Books (0)" in result.output


class TestServerCommands:
    def test_smoke_checks_pass_against_app(self, seeded_client: TestClient):
        results = run_smoke_checks(seeded_client)

        assert [r.name for r in results] == [
            "health",
            "list books",
            "cors headers",
            "cors preflight",
        ]
        assert all(r.passed for r in results), results

    def test_smoke_checks_report_connection_failure(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with httpx.Client(
            base_url="http://books.test", transport=httpx.MockTransport(refuse)
        ) as client:
            results = run_smoke_checks(client)

        assert len(results) == 1
        assert results[0].name == "connection"
        assert not results[0].passed

    def test_check_fails_when_server_unreachable(self):
        result = runner.invoke(
            app, ["server", "check", "--url", "http://127.0.0.1:1", "--timeout", "1"]
        )

        assert result.exit_code == 1
        assert "connection" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])

        assert "server" in result.output
        assert "db" in result.output
