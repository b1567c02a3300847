"""Parameterized statement execution against a :class:`ConnectionContext`.

Architecture::

    ┌──────────────────────────────────────────────────────────────┐
    │                       QueryExecutor                          │
    │                                                              │
    │   context: ConnectionContext                                 │
    │                                                              │
    │   execute(sql, *args, table=None) → ResultSet (list[dict])   │
    │   last_insert_identifier()        → int | None               │
    └──────────────────────────────────────────────────────────────┘

Every bind argument passes through :func:`prepare_value` first: temporal
values become ISO-8601 text, everything else is bound as-is.

Usage::

    executor = QueryExecutor(ctx)
    rows = executor.execute("SELECT * FROM students WHERE id = ?", 1)
    rows[0]["name"]

    # typed read: DATE/DATETIME/BOOLEAN columns of "students" are coerced
    executor.execute("SELECT * FROM students", table="students")
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, time
from typing import Any

from recordspine.core.connection import ConnectionContext, coerce_row
from recordspine.core.errors import NotConnectedError
from recordspine.core.logging import get_logger
from recordspine.core.timestamps import to_iso8601

logger = get_logger(__name__)


def prepare_value(value: Any) -> Any:
    """Coerce a bind value into a form the driver accepts.

    ``date``, ``datetime`` and ``time`` values become their ISO-8601 string;
    all other values pass through unchanged.
    """
    if isinstance(value, (date, time)):
        return to_iso8601(value)
    return value


class ResultSet(list):
    """Decoded rows of one statement, plus the driver's row count.

    ``rowcount`` is the number of rows an INSERT/UPDATE touched, or ``-1``
    when the driver does not report one (e.g. SELECT on SQLite).
    """

    def __init__(self, rows: Iterable[dict[str, Any]] = (), rowcount: int = -1) -> None:
        super().__init__(rows)
        self.rowcount = rowcount

    def __repr__(self) -> str:
        return f"ResultSet({list(self)!r}, rowcount={self.rowcount})"


class QueryExecutor:
    """Executes parameterized statements on an explicit connection context."""

    def __init__(self, context: ConnectionContext) -> None:
        self.context = context

    def execute(self, query: str, *args: Any, table: str | None = None) -> ResultSet:
        """Run *query* with *args* bound positionally.

        With *table*, returned rows are coerced by that table's declared
        column types (see :func:`coerce_row`); without it they hold the
        store's native scalars.

        Raises :class:`NotConnectedError` before touching the store if the
        context has no connection. Driver errors propagate unchanged.
        """
        if not self.context.is_connected:
            raise NotConnectedError()

        params = tuple(prepare_value(arg) for arg in args)
        logger.debug("query_executed", sql=query, bind_count=len(params))

        cursor = self.context.connection.execute(query, params)
        rows = [dict(row) for row in cursor.fetchall()]
        rowcount = cursor.rowcount

        if table is not None and rows:
            column_types = self.context.column_types(table)
            rows = [coerce_row(row, column_types) for row in rows]
        return ResultSet(rows, rowcount=rowcount)

    def last_insert_identifier(self) -> int | None:
        """Identifier generated by the most recent insert on this connection.

        Only meaningful immediately after an insert.
        """
        if not self.context.is_connected:
            raise NotConnectedError()
        row = self.context.connection.execute("SELECT last_insert_rowid()").fetchone()
        return row[0] if row is not None else None

    def __repr__(self) -> str:
        return f"QueryExecutor({self.context!r})"


__all__ = [
    "QueryExecutor",
    "ResultSet",
    "prepare_value",
]
