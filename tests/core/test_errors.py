"""Tests for recordspine.core.errors module."""

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


class TestErrorContext:
    def test_empty_context(self):
        assert ErrorContext().to_dict() == {}

    def test_fields_and_metadata(self):
        ctx = ErrorContext(table="students", operation="insert")
        ctx.metadata["rowcount"] = 0
        assert ctx.to_dict() == {"table": "students", "operation": "insert", "rowcount": 0}


class TestRecordSpineError:
    def test_defaults(self):
        error = RecordSpineError("boom")
        assert error.message == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = ValueError("bad")
        error = RecordSpineError("wrapped", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "bad"

    def test_with_context(self):
        error = RecordSpineError("boom").with_context(table="students", attempt=2)
        assert error.context.table == "students"
        assert error.context.metadata == {"attempt": 2}

    def test_to_dict(self):
        error = RecordSpineError("boom").with_context(operation="update")
        assert error.to_dict() == {
            "error_type": "RecordSpineError",
            "message": "boom",
            "category": "INTERNAL",
            "context": {"operation": "update"},
        }

    def test_repr(self):
        assert repr(NotConnectedError()) == (
            "NotConnectedError('You are not connected to a database.', category=DATABASE)"
        )


class TestSchemaViolationError:
    def test_hierarchy(self):
        error = SchemaViolationError(["nickname"])
        assert isinstance(error, ValidationError)
        assert error.category == ErrorCategory.VALIDATION

    def test_message_names_owner_and_attributes(self):
        error = SchemaViolationError(["nickname", "age"], owner="Student")
        assert str(error) == "Invalid attribute for Student: nickname, age"
        assert error.attributes == ["nickname", "age"]
        assert error.context.record_type == "Student"

    def test_without_owner(self):
        assert str(SchemaViolationError(["x"])) == "Invalid attribute: x"


class TestNotConnectedError:
    def test_hierarchy_and_message(self):
        error = NotConnectedError()
        assert isinstance(error, DatabaseError)
        assert error.category == ErrorCategory.DATABASE
        assert "not connected" in str(error)


class TestConfigErrors:
    def test_invalid_config(self):
        error = InvalidConfigError("database", "postgres://x")
        assert isinstance(error, ConfigError)
        assert error.category == ErrorCategory.CONFIG
        assert error.key == "database"
        assert "postgres://x" in str(error)
