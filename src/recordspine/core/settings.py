"""Settings for recordspine.

Configuration is read from ``RECORDSPINE_*`` environment variables and an
optional ``.env`` file, validated by pydantic at load time.

Examples:
    >>> from recordspine.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.database
    ':memory:'

Tags:
    settings, configuration, pydantic, environment, recordspine
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_log_level(value: str) -> str:
    """Upper-case *value*; raise ``ValueError`` unless it names a logging level."""
    level = value.upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"unknown log level: {value!r}")
    return level


class RecordSpineSettings(BaseSettings):
    """recordspine configuration.

    Fields
    ──────
    database     : Store location (``:memory:``, a file path or ``sqlite:///path``)
    log_level    : Structlog log level
    log_json     : JSON log output; ``None`` auto-detects from the TTY
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    database: str = Field(
        default=":memory:",
        description="Location of the backing SQLite store",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        return normalize_log_level(value)


@lru_cache(maxsize=1)
def get_settings() -> RecordSpineSettings:
    """Return the process-wide settings, loading them on first use."""
    return RecordSpineSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next ``get_settings()`` reloads."""
    get_settings.cache_clear()


__all__ = [
    "RecordSpineSettings",
    "get_settings",
    "normalize_log_level",
    "reset_settings",
]
