"""
Shared pytest fixtures for recordspine tests.

This module provides:
- Isolation of the shared Record connection between tests
- An in-memory store with a ``students`` table
- The ``Student`` record type used across the suite
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Ensure recordspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from recordspine.core.connection import ConnectionContext
from recordspine.core.record import Record
from recordspine.core.settings import reset_settings

STUDENTS_DDL = """
    CREATE TABLE students (
        id INTEGER PRIMARY KEY,
        name TEXT,
        email TEXT UNIQUE,
        birthday DATE,
        active BOOLEAN,
        created_at DATETIME,
        updated_at DATETIME
    )
"""


class Student(Record):
    table_name = "students"
    attribute_names = ("id", "name", "email", "birthday", "active", "created_at", "updated_at")


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_shared_context() -> Generator[None, None, None]:
    """Start and finish every test with no shared connection bound."""
    Record.bind(None)
    yield
    if Record._context is not None:
        Record._context.close()
    Record.bind(None)


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings and stray RECORDSPINE_* variables."""
    monkeypatch.delenv("RECORDSPINE_DATABASE", raising=False)
    monkeypatch.delenv("RECORDSPINE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("RECORDSPINE_LOG_JSON", raising=False)
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def context() -> Generator[ConnectionContext, None, None]:
    """Connected in-memory context holding an empty ``students`` table."""
    ctx = ConnectionContext().connect(":memory:")
    ctx.connection.execute(STUDENTS_DDL)
    yield ctx
    ctx.close()


@pytest.fixture
def db(context: ConnectionContext) -> ConnectionContext:
    """The in-memory context, bound as the shared Record connection."""
    Record.bind(context)
    return context


@pytest.fixture
def student_model() -> type[Student]:
    return Student
