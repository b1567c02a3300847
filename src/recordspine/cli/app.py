"""
Root Typer application for the recordspine CLI.
"""

from __future__ import annotations

import sqlite3

import typer
from typer import Typer

from recordspine.cli.utils import fail, open_context, output_rows
from recordspine.core.errors import RecordSpineError
from recordspine.core.executor import QueryExecutor
from recordspine.core.logging import configure_logging
from recordspine.core.settings import get_settings, normalize_log_level

app = Typer(
    name="recordspine",
    help="recordspine — run parameterized statements against a record store.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from recordspine import __version__

        typer.echo(f"recordspine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override RECORDSPINE_LOG_LEVEL."),
) -> None:
    """recordspine CLI."""
    settings = get_settings()
    try:
        level = normalize_log_level(log_level or settings.log_level)
    except ValueError as e:
        fail(str(e), code="InvalidLogLevel")
    configure_logging(level=level, json_format=settings.log_json)


@app.command()
def query(
    sql: str = typer.Argument(..., help="Statement with ? placeholders."),
    args: list[str] | None = typer.Argument(None, help="Values bound to the placeholders, in order."),
    database: str | None = typer.Option(None, "--database", "-d", help="Store location"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Execute a statement and print the returned rows."""
    try:
        context = open_context(database)
    except (RecordSpineError, sqlite3.Error) as e:
        fail(str(e), code=type(e).__name__)

    try:
        rows = QueryExecutor(context).execute(sql, *(args or []))
    except (RecordSpineError, sqlite3.Error) as e:
        fail(str(e), code=type(e).__name__)
    finally:
        context.close()

    output_rows(rows, as_json=json_out, title="Rows")
