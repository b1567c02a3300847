"""Record base class: attribute bag, persistence and finders.

A concrete record type names its table and declares its attribute set in
the class body. The declaration is validated once, when the class is
created::

    class Student(Record):
        table_name = "students"
        attribute_names = ("id", "name", "email", "created_at", "updated_at")

    Record.connect("school.db")

    student = Student.create(name="Ada")      # INSERT, assigns id
    student["email"] = "ada@example.com"
    student.save()                            # UPDATE ... WHERE id = <baseline id>
    Student.find(student["id"])

Two attribute maps are kept per instance:

- ``attributes``: the current values, always holding every declared name.
- ``baseline``: a snapshot from construction/load or the last successful
  ``save()``. Updates target the row by the *baseline* ``id``, so changing
  ``id`` in memory and saving rewrites the row it was loaded as.

All record types share one :class:`ConnectionContext`, held on ``Record``
itself. Each type has its own :class:`AttributeSchema`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Self

from recordspine.core.connection import ConnectionContext
from recordspine.core.errors import ConfigError, NotConnectedError
from recordspine.core.executor import QueryExecutor, ResultSet
from recordspine.core.logging import LogContext, get_logger
from recordspine.core.schema import CONVENTION_COLUMNS, AttributeSchema
from recordspine.core.timestamps import utc_now

logger = get_logger(__name__)


class Record:
    """Base class for persisted record types."""

    table_name: ClassVar[str | None] = None
    attribute_names: ClassVar[tuple[str, ...]] = ()
    schema: ClassVar[AttributeSchema] = AttributeSchema(owner="Record")

    # Shared by every record type; only ever set on Record itself.
    _context: ClassVar[ConnectionContext | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.declare_attributes(cls.attribute_names)

    # -- Setup -------------------------------------------------------------

    @classmethod
    def declare_attributes(cls, names: Iterable[str]) -> AttributeSchema:
        """Declare (or re-declare) the permitted attribute set for this type.

        A non-empty set must include ``id``, ``created_at`` and
        ``updated_at``.
        """
        schema = AttributeSchema(names, owner=cls.__name__)
        if len(schema):
            schema.require(CONVENTION_COLUMNS)
        cls.schema = schema
        cls.attribute_names = schema.attribute_names
        return schema

    @classmethod
    def connect(cls, location: str | None = None) -> ConnectionContext:
        """Establish the shared connection to the store at *location*."""
        context = Record._context or ConnectionContext()
        context.connect(location)
        Record._context = context
        return context

    @classmethod
    def bind(cls, context: ConnectionContext | None) -> None:
        """Install *context* as the shared connection (``None`` unbinds)."""
        Record._context = context

    @classmethod
    def context(cls) -> ConnectionContext:
        if Record._context is None:
            raise NotConnectedError()
        return Record._context

    @classmethod
    def is_connected(cls) -> bool:
        return Record._context is not None and Record._context.is_connected

    @classmethod
    def executor(cls) -> QueryExecutor:
        return QueryExecutor(cls.context())

    @classmethod
    def execute(cls, query: str, *args: Any, table: str | None = None) -> ResultSet:
        """Run a raw parameterized statement on the shared connection."""
        return cls.executor().execute(query, *args, table=table)

    @classmethod
    def table(cls) -> str:
        if not cls.table_name:
            raise ConfigError(f"{cls.__name__} does not define table_name")
        return cls.table_name

    # -- Construction & access ---------------------------------------------

    def __init__(self, attributes: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        if not len(self.schema):
            raise ConfigError(f"{type(self).__name__} declares no attributes")

        supplied = {**(attributes or {}), **kwargs}
        self.schema.validate(list(supplied))

        # Every declared name is present, even if it was not supplied
        self._attributes: dict[str, Any] = {name: supplied.get(name) for name in self.schema}
        self._baseline: dict[str, Any] = dict(self._attributes)

    def __getitem__(self, name: str) -> Any:
        self.schema.validate(name)
        return self._attributes[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.schema.validate(name)
        self._attributes[name] = value

    @property
    def attributes(self) -> dict[str, Any]:
        """Copy of the current attribute values."""
        return dict(self._attributes)

    @property
    def baseline(self) -> dict[str, Any]:
        """Copy of the attribute values as of load or the last save."""
        return dict(self._baseline)

    @property
    def is_new(self) -> bool:
        return self._attributes["id"] is None

    @property
    def changes(self) -> dict[str, tuple[Any, Any]]:
        """``{name: (baseline, current)}`` for every attribute that differs."""
        return {
            name: (self._baseline[name], value)
            for name, value in self._attributes.items()
            if self._baseline[name] != value
        }

    def describe(self) -> str:
        pairs = ", ".join(f"{name}={value!r}" for name, value in self._attributes.items())
        return f"<{type(self).__name__} {pairs}>"

    __str__ = describe
    __repr__ = describe

    # -- Persistence -------------------------------------------------------

    def save(self) -> int:
        """Insert a new record or update a persisted one.

        Returns the row count reported by the store. On success the
        baseline is reset to the current attributes; on failure the
        exception propagates and the baseline is left as it was.
        """
        with LogContext(record_type=type(self).__name__):
            if self.is_new:
                result = self.insert()
            else:
                result = self.update()

        self._baseline = dict(self._attributes)
        return result

    def insert(self) -> int:
        """INSERT every declared column, then adopt the store-assigned id."""
        executor = self.executor()
        table = self.table()

        now = utc_now()
        self["created_at"] = now
        self["updated_at"] = now

        columns = self._columns()
        marks = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({marks})"

        result = executor.execute(sql, *(self._attributes[c] for c in columns))

        # Fetch the new primary key and update this instance
        self["id"] = executor.last_insert_identifier()
        logger.debug("record_inserted", table=table, id=self._attributes["id"])
        return result.rowcount

    def update(self) -> int:
        """UPDATE every declared column of the row known by the baseline id."""
        executor = self.executor()
        table = self.table()

        self["updated_at"] = utc_now()

        columns = self._columns()
        assignments = ", ".join(f"{c} = ?" for c in columns)
        sql = f"UPDATE {table} SET {assignments} WHERE id = ?"

        # The caller may have re-set id; target the row we were loaded as
        target_id = self._baseline["id"]
        result = executor.execute(sql, *(self._attributes[c] for c in columns), target_id)
        logger.debug("record_updated", table=table, id=target_id, rowcount=result.rowcount)
        return result.rowcount

    def _columns(self) -> list[str]:
        columns = list(self._attributes)
        self.schema.validate(columns)
        return columns

    # -- Finders -----------------------------------------------------------

    @classmethod
    def all(cls) -> list[Self]:
        """Every row of the table, as records."""
        table = cls.table()
        return [cls(row) for row in cls.execute(f"SELECT * FROM {table}", table=table)]

    @classmethod
    def where(cls, fragment: str, *args: Any) -> list[Self]:
        """Rows matching a caller-authored SQL predicate.

        *fragment* is inserted into the statement verbatim and is neither
        parsed nor sanitized. Only the positional *args* are bound as
        parameters; never interpolate untrusted input into *fragment*.

        Example:
            Student.where("name = ? AND age > ?", "Ada", 30)
        """
        table = cls.table()
        rows = cls.execute(f"SELECT * FROM {table} WHERE {fragment}", *args, table=table)
        return [cls(row) for row in rows]

    @classmethod
    def find(cls, pk: Any) -> Self | None:
        """The record with ``id == pk``, or ``None``."""
        matches = cls.where("id = ?", pk)
        return matches[0] if matches else None

    @classmethod
    def create(cls, attributes: Mapping[str, Any] | None = None, **kwargs: Any) -> Self:
        """Construct a record and save it.

        The record is returned even when the store reported no rows
        affected; store errors propagate from ``save()``.
        """
        record = cls(attributes, **kwargs)
        record.save()
        return record


__all__ = [
    "Record",
]
