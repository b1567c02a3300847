"""Tests for ``recordspine.core.schema`` — declared attribute sets."""

from __future__ import annotations

import pytest

from recordspine.core.errors import SchemaViolationError
from recordspine.core.schema import CONVENTION_COLUMNS, AttributeSchema


@pytest.fixture
def schema() -> AttributeSchema:
    return AttributeSchema(["id", "name", "created_at", "updated_at"], owner="Student")


class TestAttributeNames:
    def test_keeps_declared_order(self, schema: AttributeSchema) -> None:
        assert schema.attribute_names == ("id", "name", "created_at", "updated_at")

    def test_setter_replaces_set(self, schema: AttributeSchema) -> None:
        schema.attribute_names = ["id", "title"]
        assert schema.attribute_names == ("id", "title")
        assert "name" not in schema

    def test_single_string_is_one_name(self) -> None:
        assert AttributeSchema("id").attribute_names == ("id",)

    def test_duplicates_rejected(self) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            AttributeSchema(["id", "name", "name"])
        assert exc_info.value.attributes == ["name"]

    def test_non_identifier_rejected(self) -> None:
        with pytest.raises(SchemaViolationError, match="identifiers"):
            AttributeSchema(["id", "first name"])

    def test_setter_failure_keeps_previous_set(self, schema: AttributeSchema) -> None:
        with pytest.raises(SchemaViolationError):
            schema.attribute_names = ["id; DROP TABLE students"]
        assert "name" in schema


class TestValidate:
    def test_single_valid_name(self, schema: AttributeSchema) -> None:
        schema.validate("name")

    def test_sequence_of_valid_names(self, schema: AttributeSchema) -> None:
        schema.validate(["id", "name"])

    def test_empty_sequence(self, schema: AttributeSchema) -> None:
        schema.validate([])

    def test_single_invalid_name(self, schema: AttributeSchema) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            schema.validate("nickname")
        assert exc_info.value.attributes == ["nickname"]
        assert "nickname" in str(exc_info.value)
        assert "Student" in str(exc_info.value)

    def test_names_every_offender(self, schema: AttributeSchema) -> None:
        with pytest.raises(SchemaViolationError) as exc_info:
            schema.validate(["name", "nickname", "age"])
        assert exc_info.value.attributes == ["nickname", "age"]
        assert "nickname" in str(exc_info.value)
        assert "age" in str(exc_info.value)


class TestRequire:
    def test_present(self, schema: AttributeSchema) -> None:
        schema.require(CONVENTION_COLUMNS)

    def test_missing(self) -> None:
        schema = AttributeSchema(["id", "name"], owner="Course")
        with pytest.raises(SchemaViolationError) as exc_info:
            schema.require(CONVENTION_COLUMNS)
        assert exc_info.value.attributes == ["created_at", "updated_at"]


class TestContainer:
    def test_contains(self, schema: AttributeSchema) -> None:
        assert "id" in schema
        assert "nickname" not in schema

    def test_len_and_iter(self, schema: AttributeSchema) -> None:
        assert len(schema) == 4
        assert list(schema) == ["id", "name", "created_at", "updated_at"]
