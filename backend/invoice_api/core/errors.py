"""Error Hierarchy — typed, categorized exceptions for all invoice API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() always carries a top-level "message"
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with InvoiceApiError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Request-shape failures are not in this hierarchy: Pydantic raises them and
      api/error_handlers.py renders them
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    invoice_id: int | None = None


class InvoiceApiError(Exception):
    """Base exception for all invoice API errors."""

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
        return {"message": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(InvoiceApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(InvoiceApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class IntegrityViolationError(InvoiceApiError):
    """A write broke a table constraint (CHECK, FK, NOT NULL).

    The database is reachable; the row itself was rejected, so this is a
    409 rather than the 503 of an outage.
    """
    def __init__(self, constraint: str | None, context: ErrorContext | None = None):
        detail = f"constraint '{constraint}'" if constraint else "a table constraint"
        super().__init__(
            f"Database commit failed: {detail} violated",
            "INTEGRITY_VIOLATION", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.constraint = constraint
