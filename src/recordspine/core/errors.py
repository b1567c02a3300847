"""
Structured error types for recordspine.

The persistence layer raises exactly three kinds of errors of its own, and
lets a fourth kind (store errors) pass through untouched:

- **Schema violation:** an attribute name outside the declared set was used
  anywhere (constructor, item access, SQL column assembly).
- **Not connected:** a statement was attempted before a connection existed.
- **Config:** settings could not be resolved into a usable value.
- **Store errors:** anything raised by ``sqlite3`` (constraint violation,
  malformed SQL, type mismatch) propagates exactly as the driver raised it.

Manifesto:
    - **Typed hierarchy:** callers catch by kind, not by message text
    - **Name the offenders:** schema errors list every bad attribute
    - **No translation:** driver errors are never wrapped or swallowed
    - **Rich context:** errors carry metadata for structured logging

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    RecordSpineError                       │
        │          (category, context, cause, to_dict)              │
        ├──────────────────────────────────────────────────────────┤
        │  ValidationError      DatabaseError      ConfigError      │
        │  (VALIDATION)         (DATABASE)         (CONFIG)         │
        │       │                    │                  │           │
        │  SchemaViolation      NotConnected       InvalidConfig    │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = SchemaViolationError(["nickname"], owner="Student")
    >>> error.attributes
    ['nickname']
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>

Guardrails:
    ❌ DON'T: Wrap ``sqlite3.IntegrityError`` in a recordspine error
    ✅ DO: Let store errors reach the caller unchanged

    ❌ DON'T: Raise a bare ``KeyError`` for an unknown attribute
    ✅ DO: Raise ``SchemaViolationError`` naming every offender

Tags:
    error-handling, exception-hierarchy, validation, recordspine
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    DATABASE = "DATABASE"         # Connection state, statement execution
    VALIDATION = "VALIDATION"     # Schema violations
    CONFIG = "CONFIG"             # Missing or invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        record_type: Name of the record class involved
        table: Table the operation targeted
        operation: Operation name (``insert``, ``update``, ``where`` ...)
        metadata: Additional key-value pairs
    """

    record_type: str | None = None
    table: str | None = None
    operation: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["record_type", "table", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RecordSpineError(Exception):
    """
    Base exception for all recordspine errors.

    Subclasses set ``default_category``; instances carry a message, an
    :class:`ErrorContext` and an optional chained ``cause``.

    Examples:
        >>> error = RecordSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(table="students").context.table
        'students'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RecordSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise NotConnectedError().with_context(table="students")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(RecordSpineError):
    """Input does not satisfy a declared contract."""

    default_category = ErrorCategory.VALIDATION


class SchemaViolationError(ValidationError):
    """
    One or more attribute names are outside the declared attribute set.

    Every offending name is listed in the message and in ``attributes``,
    in the order the caller supplied them.
    """

    def __init__(
        self,
        attributes: Iterable[str],
        *,
        owner: str | None = None,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.attributes = list(attributes)
        self.owner = owner
        names = ", ".join(str(name) for name in self.attributes)
        if message is None:
            message = f"Invalid attribute for {owner}: {names}" if owner else f"Invalid attribute: {names}"
        super().__init__(message, **kwargs)
        if owner:
            self.context.record_type = owner


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(RecordSpineError):
    """Connection-state error raised by recordspine itself."""

    default_category = ErrorCategory.DATABASE


class NotConnectedError(DatabaseError):
    """A statement was attempted before a connection was established."""

    def __init__(self, message: str = "You are not connected to a database.", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(RecordSpineError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RecordSpineError",
    "ValidationError",
    "SchemaViolationError",
    "DatabaseError",
    "NotConnectedError",
    "ConfigError",
    "InvalidConfigError",
]
