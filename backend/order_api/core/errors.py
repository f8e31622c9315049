"""Error Hierarchy — typed, categorized exceptions for every OrderItem API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Store-level errors are typed: callers branch on the class, never on message text
    - to_response() produces the same {status, message, data} envelope the handlers return
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with OrderApiError base: FastAPI global handler catches all
    - ErrorContext records where a store error was raised (resource, operation, document)
      for the global handler's log line, without coupling to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
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
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Where an error was raised: which resource, which operation, which document."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    operation: str | None = None
    document_id: str | None = None


class OrderApiError(Exception):
    """Base exception for all OrderItem API errors."""

    envelope_status = "FAILURE"

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
        """Convert to the standard response envelope."""
        return {
            "status": self.envelope_status,
            "message": self.message,
            "data": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Store Errors ───────────────────────────────────────────────

class DocumentValidationError(OrderApiError):
    """Document violates the stored schema (type, required field, immutable key)."""

    envelope_status = "VALIDATION_ERROR"

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )


class InvalidQueryError(OrderApiError):
    """Filter references an unknown field or an unsupported operator."""

    envelope_status = "BAD_REQUEST"

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class DuplicateKeyError(OrderApiError):
    """Unique key already taken by another document."""

    envelope_status = "CONFLICT"

    def __init__(self, message: str = "Data duplication found.", context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_KEY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Request Errors ─────────────────────────────────────────────

class UnauthenticatedError(OrderApiError):
    """Request carries no caller identity."""

    envelope_status = "UNAUTHORIZED"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You are not authorized to access the request.",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(OrderApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
