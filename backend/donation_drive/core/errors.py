"""Error Hierarchy — typed, categorized exceptions for all donation drive failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are client-caused; storage errors (500-level) are not
    - to_response() produces the {success: false, message} envelope
    - Internal detail only appears in the response when verbose=True

Design Decisions:
    - Single hierarchy with DonationDriveError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    backend: str | None = None
    debug_info: dict[str, Any] | None = None


class DonationDriveError(Exception):
    """Base exception for all donation drive errors."""

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

    @property
    def detail(self) -> str | None:
        """Internal detail, shown to clients only in verbose mode."""
        return None

    def to_response(self, verbose: bool = False) -> dict:
        """Convert to the standard error envelope."""
        body: dict = {"success": False, "message": self.message}
        if verbose:
            body["error"] = {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "operation": self.context.operation,
                "backend": self.context.backend,
                "detail": self.detail,
            }
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class DonationRejectedError(DonationDriveError):
    """Submission failed the validation gate."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Storage Errors (500-level) ─────────────────────────────────

class StorageNotConfiguredError(DonationDriveError):
    """No DATABASE_URL was provided, so no store exists."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Database not configured. Please set DATABASE_URL.",
            "STORAGE_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StorageUnavailableError(DonationDriveError):
    """The configured backend is unreachable or a storage operation failed."""
    def __init__(
        self,
        operation: str,
        cause: BaseException | str | None = None,
        backend: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.backend = backend
        super().__init__(
            "Server error. Please try again later.",
            "STORAGE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.cause = cause

    @property
    def detail(self) -> str | None:
        if self.cause is None:
            return f"{self.operation} failed"
        return f"{self.operation} failed: {self.cause}"
