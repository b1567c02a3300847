"""recordspine.core -- the persistence layer.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Error taxonomy (SchemaViolationError, NotConnectedError)
        protocols.py       DB-API Connection / Cursor protocols
        timestamps.py      UTC + ISO-8601 helpers (stdlib-only)

    Layer 2 -- Store Access
        schema.py          AttributeSchema: declared attribute sets
        connection.py      ConnectionContext: the shared store handle
        executor.py        QueryExecutor: bind preparation + execution

    Layer 3 -- Records
        record.py          Record: attribute bag, save/insert/update, finders

    Cross-Cutting
        logging.py         Structured logging (structlog)
        settings.py        RecordSpineSettings (pydantic-settings)

Tags:
    recordspine, persistence, active-record, sqlite
"""

from recordspine.core.connection import ConnectionContext
from recordspine.core.errors import (
    ConfigError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    NotConnectedError,
    RecordSpineError,
    SchemaViolationError,
    ValidationError,
)
from recordspine.core.executor import QueryExecutor, ResultSet, prepare_value
from recordspine.core.record import Record
from recordspine.core.schema import AttributeSchema

__all__ = [
    "AttributeSchema",
    "ConfigError",
    "ConnectionContext",
    "DatabaseError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "NotConnectedError",
    "QueryExecutor",
    "Record",
    "RecordSpineError",
    "ResultSet",
    "SchemaViolationError",
    "ValidationError",
    "prepare_value",
]
