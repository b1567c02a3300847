"""
UTC timestamp utilities (stdlib-only).

``utc_now()`` stamps ``created_at`` / ``updated_at`` on save; the ISO-8601
helper defines the canonical text form temporal values take in the store.

STDLIB ONLY - NO PYDANTIC.
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_iso8601(value: date | time | None) -> str | None:
    """Convert a date, time or datetime to its ISO 8601 string."""
    if value is None:
        return None
    return value.isoformat()
