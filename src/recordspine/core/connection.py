"""Connection context: the single handle to the backing store.

A :class:`ConnectionContext` starts out unconnected. ``connect(location)``
opens (or creates) the SQLite store and configures it so that

1. rows decode as name→value mappings (``sqlite3.Row``), and
2. rows read for a table can be coerced by the declared column types:
   ``DATE``, ``DATETIME``, ``TIMESTAMP`` and ``BOOLEAN`` columns come back
   as ``date``, ``datetime`` and ``bool`` (see :func:`coerce_row`).

No converters are registered on the ``sqlite3`` module, so other
connections in the process read these types unchanged.

The connection runs in autocommit mode: every statement is its own atomic
unit and nothing spans statements.

Supported locations
-------------------
==================  ==========================================
Location            Meaning
==================  ==========================================
``None``            in-memory store
``:memory:``        in-memory store
``memory``          in-memory store
``sqlite:///p.db``  SQLite file at ``p.db``
``./data/p.db``     SQLite file at ``./data/p.db``
==================  ==========================================

Threading: the handle is opened with ``check_same_thread=False`` and has no
internal lock. Callers sharing one context between threads must serialize
access themselves.

Usage::

    ctx = ConnectionContext()
    ctx.is_connected          # False
    ctx.connect("school.db")
    ctx.connection.execute("SELECT 1")
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

from recordspine.core.errors import InvalidConfigError, NotConnectedError
from recordspine.core.logging import get_logger
from recordspine.core.protocols import Connection
from recordspine.core.settings import RecordSpineSettings, get_settings

logger = get_logger(__name__)

MEMORY = ":memory:"


# ── Read-side type coercion ──────────────────────────────────────────────
#
# Values arrive as the store's native scalars (str, int, float, bytes).
# Anything a converter cannot interpret is returned unchanged.


def _convert_date(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return value


def _convert_datetime(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return value


def _convert_boolean(value: Any) -> Any:
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() not in ("0", "false", "f", "")
    return value


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "DATE": _convert_date,
    "DATETIME": _convert_datetime,
    "TIMESTAMP": _convert_datetime,
    "BOOLEAN": _convert_boolean,
}


def _type_name(declared: str | None) -> str:
    """First word of a declared column type, upper-cased (``"DATETIME"``)."""
    words = (declared or "").split("(", 1)[0].split()
    return words[0].upper() if words else ""


def coerce_row(row: Mapping[str, Any], column_types: Mapping[str, str]) -> dict[str, Any]:
    """Convert the values of *row* according to their declared column types.

    Columns with no declared type, a type without a converter, or a NULL
    value are copied as-is.
    """
    coerced = {}
    for name, value in row.items():
        converter = _CONVERTERS.get(_type_name(column_types.get(name)))
        coerced[name] = converter(value) if converter is not None and value is not None else value
    return coerced


# ── Location parsing ─────────────────────────────────────────────────────


def resolve_location(location: str | Path | None) -> str:
    """Turn a location string into something ``sqlite3.connect`` accepts."""
    if location is None:
        return MEMORY

    location = str(location)
    if location in ("", "memory", MEMORY):
        return MEMORY

    for prefix in ("sqlite:///", "sqlite://"):
        if location.startswith(prefix):
            path = location[len(prefix):]
            return path if path and path != MEMORY else MEMORY

    if "://" in location:
        raise InvalidConfigError(
            "database",
            location,
            f"Unsupported store location {location!r}: only SQLite paths are accepted",
        )

    return location


class ConnectionContext:
    """Lazily established handle to the backing store.

    Parameters:
        location: Default location used when ``connect()`` is called
                  without one.
    """

    def __init__(self, location: str | Path | None = None) -> None:
        self.location = str(location) if location is not None else None
        self._conn: Connection | None = None

    # -- Construction helpers ----------------------------------------------

    @classmethod
    def from_connection(cls, conn: Connection, location: str | None = None) -> ConnectionContext:
        """Wrap an already-open DB-API connection.

        The caller is responsible for how that connection decodes rows.
        """
        ctx = cls(location)
        ctx._conn = conn
        return ctx

    @classmethod
    def from_settings(cls, settings: RecordSpineSettings | None = None) -> ConnectionContext:
        """Create and connect a context at ``settings.database``."""
        settings = settings or get_settings()
        ctx = cls(settings.database)
        ctx.connect()
        return ctx

    # -- Lifecycle ---------------------------------------------------------

    def connect(self, location: str | Path | None = None) -> ConnectionContext:
        """Open or create the store at *location*.

        Errors raised by ``sqlite3`` propagate unchanged.
        """
        if location is not None:
            self.location = str(location)
        target = resolve_location(self.location)

        if target != MEMORY:
            Path(target).parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(
            target,
            isolation_level=None,
            check_same_thread=False,
        )
        # Return the results as name/value mappings instead of tuples
        conn.row_factory = sqlite3.Row

        if self._conn is not None:
            logger.debug("connection_replaced", location=self.location)
            self._conn.close()
        self._conn = conn

        logger.debug("connection_opened", location=target)
        return self

    def close(self) -> None:
        """Close the underlying connection; the context becomes unconnected."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("connection_closed", location=self.location)

    # -- Accessors ---------------------------------------------------------

    @property
    def connection(self) -> Connection:
        """The open connection; raises :class:`NotConnectedError` if none."""
        if self._conn is None:
            raise NotConnectedError()
        return self._conn

    @property
    def is_connected(self) -> bool:
        """Whether ``connect`` has succeeded (and ``close`` was not called)."""
        return self._conn is not None

    def column_types(self, table: str) -> dict[str, str]:
        """Declared type of each column of *table* (``{}`` if it does not exist)."""
        rows = self.connection.execute(f"PRAGMA table_info({table})").fetchall()
        # (cid, name, type, notnull, dflt_value, pk)
        return {row[1]: row[2] for row in rows}

    def __repr__(self) -> str:
        state = "connected" if self.is_connected else "unconnected"
        return f"ConnectionContext(location={self.location!r}, {state})"


__all__ = [
    "ConnectionContext",
    "MEMORY",
    "coerce_row",
    "resolve_location",
]
