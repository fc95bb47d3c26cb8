"""
Exception hierarchy for the wellness engine

Every engine error carries a request ID, the failing operation and its
context, and is logged once when it is raised.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

import psycopg

logger = logging.getLogger(__name__)


class WellnessEngineError(Exception):
    """
    Base exception for the engine

    Example:
        raise WellnessEngineError(
            message="Failed to store streak snapshot",
            user_id="user-123",
            operation="upsert_streak_snapshot",
            context={"activity_kind": "meditation"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Something went wrong while updating your progress."
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    def _log_error(self) -> None:
        extra = {
            "error_type": type(self).__name__,
            "error_message": self.message,  # 'message' is reserved by logging
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
        }
        logger.error(f"{type(self).__name__}: {self.message}", extra=extra, exc_info=self.cause)

    def to_dict(self) -> Dict[str, Any]:
        """Error type, request ID and messages, as reported to Sentry and the CLI"""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


class ValidationError(WellnessEngineError):
    """Caller passed a value the engine does not accept, e.g. an unknown activity kind"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


class DatabaseError(WellnessEngineError):
    """Persistence failure"""


class ConnectionError(DatabaseError):

    def __init__(self, message: str = "Database connection failed", **kwargs):
        super().__init__(
            message=message,
            user_message="Your streaks are temporarily unavailable.",
            **kwargs
        )


class QueryError(DatabaseError):

    def __init__(self, message: str, query: Optional[str] = None, **kwargs):
        self.query = query
        context = kwargs.pop("context", None) or {}
        super().__init__(
            message=message,
            user_message="Your progress could not be saved.",
            context={"query": query, **context},
            **kwargs
        )


class RecordNotFoundError(DatabaseError):

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


class ConfigurationError(WellnessEngineError):
    """Missing or invalid environment setting"""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message=f"Check the {config_key} setting." if config_key else "Check the engine settings.",
            context={"config_key": config_key},
            **kwargs
        )


def wrap_external_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> WellnessEngineError:
    """
    Map a psycopg (or other foreign) error onto the engine hierarchy

    OperationalError becomes ConnectionError, any other psycopg.Error becomes
    QueryError, and engine errors are returned unchanged.

    Example:
        try:
            await queries.upsert_streak_snapshot(user_id, kind, snapshot)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="upsert_streak_snapshot", user_id=user_id) from e
    """
    if isinstance(error, WellnessEngineError):
        return error

    if isinstance(error, psycopg.OperationalError):
        error_class, message = ConnectionError, f"Database connection failed: {error}"
    elif isinstance(error, psycopg.Error):
        error_class, message = QueryError, f"Database query failed: {error}"
    else:
        error_class, message = WellnessEngineError, f"{operation} failed: {error}"

    return error_class(
        message=message,
        user_id=user_id,
        operation=operation,
        context=context,
        cause=error
    )
