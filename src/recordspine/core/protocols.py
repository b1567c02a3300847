"""
Structural protocols for the DB-API objects recordspine talks to.

``ConnectionContext`` normally owns a ``sqlite3.Connection``, but any object
with this shape can be injected through ``ConnectionContext.from_connection``
(a recording fake in tests, or a caller-managed driver connection).

Guardrails:
    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """The slice of a DB-API 2.0 cursor the executor reads."""

    rowcount: int

    def fetchall(self) -> list[Any]: ...

    def fetchone(self) -> Any: ...


@runtime_checkable
class Connection(Protocol):
    """
    Minimal SYNCHRONOUS connection interface.

    ::

        execute(sql, params) → Cursor
        close()              → release the handle
    """

    def execute(self, sql: str, parameters: Sequence[Any] = ...) -> Cursor: ...

    def close(self) -> None: ...


__all__ = [
    "Connection",
    "Cursor",
]
