"""
CLI utility helpers — output formatting and connection management.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from recordspine.core.connection import ConnectionContext
from recordspine.core.settings import get_settings

console = Console()
err_console = Console(stderr=True)


def open_context(database: str | None = None) -> ConnectionContext:
    """Connect to *database*, or to ``RECORDSPINE_DATABASE`` when omitted."""
    return ConnectionContext(database or get_settings().database).connect()


def fail(message: str, *, code: str = "ERROR") -> None:
    """Print an error line and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({escape(code)}): {escape(message)}")
    raise typer.Exit(code=1)


def output_rows(rows: list[dict[str, Any]], *, as_json: bool = False, title: str = "") -> None:
    """Render decoded rows as JSON or a Rich table."""
    if as_json:
        console.print_json(json.dumps(list(rows), default=str))
        return

    if not rows:
        console.print("[dim]No rows.[/dim]")
        return

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row.values()))
    console.print(table)
