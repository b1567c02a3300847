"""Tests for recordspine.cli — command smoke tests via CliRunner."""

from __future__ import annotations

import json
import sqlite3

import pytest
from typer.testing import CliRunner

from recordspine import __version__
from recordspine.cli.app import app

runner = CliRunner()


@pytest.fixture
def school_db(tmp_path):
    path = tmp_path / "school.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE students (id INTEGER PRIMARY KEY, name TEXT)")
    conn.executemany("INSERT INTO students (name) VALUES (?)", [("Ada",), ("Grace",)])
    conn.commit()
    conn.close()
    return path


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"recordspine {__version__}" in result.output


class TestQuery:
    def test_json_rows(self, school_db):
        result = runner.invoke(
            app, ["query", "SELECT * FROM students WHERE id = ?", "2", "-d", str(school_db), "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"id": 2, "name": "Grace"}]

    def test_table_output(self, school_db):
        result = runner.invoke(app, ["query", "SELECT name FROM students", "--database", str(school_db)])
        assert result.exit_code == 0
        assert "Ada" in result.output
        assert "Grace" in result.output

    def test_no_rows(self, school_db):
        result = runner.invoke(app, ["query", "SELECT * FROM students WHERE id = ?", "42", "-d", str(school_db)])
        assert result.exit_code == 0
        assert "No rows" in result.output

    def test_database_from_env(self, school_db, monkeypatch):
        monkeypatch.setenv("RECORDSPINE_DATABASE", str(school_db))
        result = runner.invoke(app, ["query", "SELECT COUNT(*) AS n FROM students", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"n": 2}]

    def test_write_statement(self, school_db):
        result = runner.invoke(
            app, ["query", "UPDATE students SET name = ? WHERE id = ?", "Ada L.", "1", "-d", str(school_db)]
        )
        assert result.exit_code == 0

        conn = sqlite3.connect(school_db)
        assert conn.execute("SELECT name FROM students WHERE id = 1").fetchone() == ("Ada L.",)
        conn.close()

    def test_store_error_exits_nonzero(self, school_db):
        result = runner.invoke(app, ["query", "SELEKT 1", "-d", str(school_db)])
        assert result.exit_code == 1
        assert "OperationalError" in result.output

    def test_unsupported_location(self):
        result = runner.invoke(app, ["query", "SELECT 1", "-d", "postgresql://localhost/school"])
        assert result.exit_code == 1
        assert "InvalidConfigError" in result.output


class TestLogLevel:
    def test_valid_level(self, school_db):
        result = runner.invoke(app, ["--log-level", "warning", "query", "SELECT 1 AS one", "-d", str(school_db), "--json"])
        assert result.exit_code == 0

    def test_unknown_level_exits_cleanly(self, school_db):
        result = runner.invoke(app, ["--log-level", "BOGUS", "query", "SELECT 1", "-d", str(school_db)])
        assert result.exit_code == 1
        assert "InvalidLogLevel" in result.output
        assert "unknown log level" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
