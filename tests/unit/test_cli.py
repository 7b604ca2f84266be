#!/usr/bin/env python3
"""Tests for the shelfql CLI."""

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from shelfql.cli import app
from shelfql.runtime import server

runner = CliRunner()


class TestSchemaCommand:
    def test_prints_sdl(self) -> None:
        result = runner.invoke(app, ["schema"])

        assert result.exit_code == 0
        assert "type Query {" in result.output
        assert "deleteBook(id: ID!): Boolean!" in result.output

    def test_writes_sdl_to_file(self, tmp_path: Path) -> None:
        target = tmp_path / "schema.graphql"

        result = runner.invoke(app, ["schema", "--output", str(target)])

        assert result.exit_code == 0
        assert "type Book {" in target.read_text()


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "shelfql" in result.output


class TestServeCommand:
    @pytest.fixture
    def started(self, monkeypatch: pytest.MonkeyPatch) -> list[Any]:
        """Replace uvicorn startup with a recorder of the configs passed in."""
        configs: list[Any] = []
        for name in ("SHELFQL_HOST", "SHELFQL_PORT", "SHELFQL_GRAPHIQL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(server, "run_app", configs.append)
        return configs

    def test_prints_url_once(self, started: list[Any]) -> None:
        result = runner.invoke(app, ["serve", "--port", "4100"])

        assert result.exit_code == 0
        assert result.output.count("http://127.0.0.1:4100/graphql") == 1
        assert "GraphiQL enabled" in result.output
        assert started[0].port == 4100

    def test_no_graphiql_hint_when_disabled(self, started: list[Any]) -> None:
        result = runner.invoke(app, ["serve", "--no-graphiql"])

        assert result.exit_code == 0
        assert "GraphiQL" not in result.output
        assert started[0].enable_graphiql is False
