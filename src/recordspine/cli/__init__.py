"""
CLI layer for recordspine.

Thin terminal transport over :class:`~recordspine.core.executor.QueryExecutor`:
argument parsing, coloured output, and table formatting.

Entry point::

    recordspine --help
"""

from recordspine.cli.app import app

__all__ = ["app"]
