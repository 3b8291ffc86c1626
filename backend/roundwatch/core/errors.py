"""Error Hierarchy — typed, categorized exceptions for all Roundwatch failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; configuration and
      infrastructure errors (500-level) abort the whole run
    - to_response() produces the REST envelope
    - Absence ("no prior round", "no round at this timestamp") is never an error

Design Decisions:
    - Single hierarchy with RoundwatchError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Configuration errors abort materialization and projection alike; the
      caller's transaction rolls back every write of the failed run
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    round_type_id: int | None = None
    round_config_id: int | None = None
    round_timestamp: str | None = None
    debug_info: dict[str, Any] | None = None


class RoundwatchError(Exception):
    """Base exception for all Roundwatch errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "round_type_id": self.context.round_type_id,
                    "round_config_id": self.context.round_config_id,
                    "round_timestamp": self.context.round_timestamp,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidWindowError(RoundwatchError):
    """Projection window starts after it ends, or spans too long."""
    def __init__(
        self, window_start: str, now: str, context: ErrorContext | None = None,
        message: str | None = None,
    ):
        super().__init__(
            message or f"Window start {window_start} is after {now}",
            "INVALID_WINDOW", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.window_start = window_start
        self.now = now


class ResourceNotFoundError(RoundwatchError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class DuplicateResourceError(RoundwatchError):
    """Resource already exists under a unique key."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Configuration Errors (fatal) ───────────────────────────────

class RoundConfigurationError(RoundwatchError):
    """A RoundConfig or its RoundType cannot drive a lattice walk."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class UnsupportedDurationUnitError(RoundConfigurationError):
    """RoundType duration unit is not minutes."""
    def __init__(self, unit: str, context: ErrorContext | None = None):
        super().__init__(
            f"Only minutes round duration is supported, got '{unit}'",
            "UNSUPPORTED_DURATION_UNIT", context,
        )
        self.unit = unit


class InvalidDurationError(RoundConfigurationError):
    """RoundType duration amount is not a positive integer."""
    def __init__(self, amount: int, context: ErrorContext | None = None):
        super().__init__(
            f"Round duration must be positive, got {amount}",
            "INVALID_DURATION", context,
        )
        self.amount = amount


class MissingRoundTypeError(RoundConfigurationError):
    """RoundConfig references a RoundType that does not exist."""
    def __init__(self, round_type_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"RoundConfig references missing RoundType {round_type_id}",
            "MISSING_ROUND_TYPE", context,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RoundwatchError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
