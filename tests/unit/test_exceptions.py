"""Unit tests for custom exception hierarchy"""
from datetime import datetime

import psycopg
import pytest

from wellness_engine.exceptions import (
    WellnessEngineError,
    ValidationError,
    DatabaseError,
    ConnectionError,
    QueryError,
    RecordNotFoundError,
    ConfigurationError,
    wrap_external_exception,
)


class TestWellnessEngineError:
    """Test base exception class"""

    def test_basic_exception(self):
        error = WellnessEngineError("Test error")
        assert error.message == "Test error"
        assert error.user_message == "Something went wrong while updating your progress."
        assert error.request_id is not None
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_context(self):
        error = WellnessEngineError(
            message="Snapshot save failed",
            user_id="user-1",
            operation="upsert_streak_snapshot",
            context={"activity_kind": "meditation"},
            user_message="Could not save your streak"
        )
        assert error.user_id == "user-1"
        assert error.operation == "upsert_streak_snapshot"
        assert error.context["activity_kind"] == "meditation"
        assert error.user_message == "Could not save your streak"

    def test_exception_logs_on_creation(self, caplog):
        with caplog.at_level("ERROR", logger="wellness_engine.exceptions"):
            WellnessEngineError("Logged error", operation="test_op")

        assert "WellnessEngineError: Logged error" in caplog.text

    def test_to_dict(self):
        error = WellnessEngineError("Test error", request_id="req-1")
        data = error.to_dict()

        assert data["error"] == "WellnessEngineError"
        assert data["message"] == "Test error"
        assert data["request_id"] == "req-1"
        assert "timestamp" in data


class TestSubclasses:

    def test_validation_error(self):
        error = ValidationError("must be meditation or workout", field="activity_kind", value="yoga")
        assert error.user_message == "Invalid activity_kind: must be meditation or workout"
        assert error.context == {"field": "activity_kind", "value": "yoga"}

    def test_database_hierarchy(self):
        assert issubclass(ConnectionError, DatabaseError)
        assert issubclass(QueryError, DatabaseError)
        assert issubclass(RecordNotFoundError, DatabaseError)
        assert issubclass(DatabaseError, WellnessEngineError)

    def test_query_error_merges_context(self):
        error = QueryError("failed", query="SELECT 1", context={"activity_kind": "workout"})
        assert error.context == {"query": "SELECT 1", "activity_kind": "workout"}

    def test_record_not_found(self):
        error = RecordNotFoundError("missing", record_type="Celebration", record_id="abc")
        assert error.user_message == "Celebration not found."

    def test_configuration_error(self):
        error = ConfigurationError("bad tz", config_key="ENGINE_TIMEZONE")
        assert error.config_key == "ENGINE_TIMEZONE"
        assert error.user_message == "Check the ENGINE_TIMEZONE setting."


class TestWrapExternalException:

    def test_operational_error_becomes_connection_error(self):
        original = psycopg.OperationalError("connection refused")
        wrapped = wrap_external_exception(original, operation="fetch_completion_dates", user_id="u1")

        assert isinstance(wrapped, ConnectionError)
        assert wrapped.cause is original
        assert wrapped.user_id == "u1"

    def test_psycopg_error_becomes_query_error(self):
        wrapped = wrap_external_exception(
            psycopg.errors.UniqueViolation("duplicate key"),
            operation="insert_achievement_unlock",
            context={"badge_type": "first_meditation"},
        )

        assert isinstance(wrapped, QueryError)
        assert wrapped.context["badge_type"] == "first_meditation"

    def test_engine_error_passes_through(self):
        original = RecordNotFoundError("missing")
        assert wrap_external_exception(original, operation="x") is original

    def test_other_errors_become_base_error(self):
        wrapped = wrap_external_exception(ValueError("boom"), operation="compute")

        assert type(wrapped) is WellnessEngineError
        assert wrapped.message == "compute failed: boom"
