"""Declared attribute sets for record types.

An :class:`AttributeSchema` is the ordered set of attribute names a record
type permits. The order is the column order used for every INSERT and
UPDATE the type emits.

Usage::

    schema = AttributeSchema(["id", "name", "created_at", "updated_at"])
    schema.validate("name")               # ok
    schema.validate(["name", "nickname"])  # SchemaViolationError: nickname
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from recordspine.core.errors import SchemaViolationError

# Columns every persisted record type carries.
CONVENTION_COLUMNS: tuple[str, ...] = ("id", "created_at", "updated_at")


class AttributeSchema:
    """Ordered, validated set of permitted attribute names.

    Parameters:
        names: Attribute names, in column order.
        owner: Name of the record type the schema belongs to, used in
               error messages.
    """

    def __init__(self, names: Iterable[str] = (), *, owner: str | None = None) -> None:
        self.owner = owner
        self._names: tuple[str, ...] = ()
        self.attribute_names = names

    @property
    def attribute_names(self) -> tuple[str, ...]:
        """The permitted attribute names, in declared order."""
        return self._names

    @attribute_names.setter
    def attribute_names(self, names: Iterable[str]) -> None:
        if isinstance(names, str):
            names = (names,)
        names = tuple(names)

        bad = [n for n in names if not isinstance(n, str) or not n.isidentifier()]
        if bad:
            raise SchemaViolationError(
                bad,
                owner=self.owner,
                message=f"Attribute names must be identifiers: {', '.join(map(repr, bad))}",
            )

        seen: set[str] = set()
        duplicates = []
        for name in names:
            if name in seen:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise SchemaViolationError(
                duplicates,
                owner=self.owner,
                message=f"Duplicate attribute names: {', '.join(duplicates)}",
            )

        self._names = names

    def validate(self, name_or_names: str | Iterable[str]) -> None:
        """Raise :class:`SchemaViolationError` naming every undeclared name.

        Accepts a single name or any iterable of names.
        """
        if isinstance(name_or_names, str):
            name_or_names = (name_or_names,)
        offending = [name for name in name_or_names if name not in self._names]
        if offending:
            raise SchemaViolationError(offending, owner=self.owner)

    def require(self, names: Iterable[str]) -> None:
        """Raise if any of *names* is missing from the declared set."""
        missing = [name for name in names if name not in self._names]
        if missing:
            raise SchemaViolationError(
                missing,
                owner=self.owner,
                message=f"{self.owner or 'Schema'} must declare: {', '.join(missing)}",
            )

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"AttributeSchema({list(self._names)!r}, owner={self.owner!r})"


__all__ = [
    "AttributeSchema",
    "CONVENTION_COLUMNS",
]
