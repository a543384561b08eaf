"""Error Hierarchy - typed, categorized exceptions for every transaction failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the {"status": "error", ...} envelope
    - public_message is what clients see; message may carry internal detail for logs

Design Decisions:
    - Single hierarchy with TransactionApiError base: one FastAPI handler renders all of them
    - ErrorContext as dataclass: carries trace number / debug info into logs only
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    CONSTRAINT = "constraint"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging, never serialized to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    trace_number: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TransactionApiError(Exception):
    """Base exception for all transactions API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.public_message = public_message or message

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        return {"status": "error", "message": self.public_message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class PayloadValidationError(TransactionApiError):
    """Client-supplied fields failed validation (includes malformed JSON)."""
    def __init__(self, errors: dict[str, str], context: ErrorContext | None = None):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.errors = errors

    def to_response(self) -> dict:
        body = super().to_response()
        body["errors"] = self.errors
        return body


class DuplicateTraceNumberError(TransactionApiError):
    """Storage rejected the insert on the trace_number unique constraint."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Duplicate trace number detected", "DUPLICATE_TRACE_NUMBER",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, context, 400,
        )


class ConstraintViolationError(TransactionApiError):
    """Storage rejected the insert on a check constraint."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid data: Check constraints failed", "CONSTRAINT_VIOLATION",
            ErrorCategory.CONSTRAINT, ErrorSeverity.ERROR, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceFailureError(TransactionApiError):
    """Unexpected storage-layer failure (connectivity, syntax, driver)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}", "PERSISTENCE_FAILURE",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, ctx, 500,
            public_message="Database error occurred",
        )
        self.operation = operation


class StoreInvariantError(TransactionApiError):
    """A statement succeeded but did not produce the row the store relies on."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "STORE_INVARIANT", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
            public_message="An unexpected error occurred",
        )
