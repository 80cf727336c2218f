"""Error Hierarchy: typed, categorized exceptions for every relay failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client faults (ValidationError 400, NotFoundError 404) carry their message to the caller
    - UpstreamError (500) never surfaces its cause: to_response() uses a generic message,
      the cause is only logged by the global handler

Design Decisions:
    - Single hierarchy with RelayError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Upstream subclasses per capability (database, completion, chat provider) share one
      HTTP status so callers cannot distinguish which dependency failed
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


GENERIC_SERVER_ERROR = "Internal Server Error"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class RelayError(Exception):
    """Base exception for all relay errors."""

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
    def public_message(self) -> str:
        """Message safe to show the caller."""
        return self.message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.public_message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(RelayError):
    """Required input missing or blank."""
    def __init__(self, message: str, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields


class NotFoundError(RelayError):
    """Referenced identity is absent from the directory or the store."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamError(RelayError):
    """An external capability was unreachable or returned an error."""
    def __init__(
        self,
        message: str,
        code: str = "UPSTREAM_ERROR",
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, 500,
        )

    @property
    def public_message(self) -> str:
        return GENERIC_SERVER_ERROR


class DatabaseError(UpstreamError):
    """Store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, ctx,
        )
        self.operation = operation


class CompletionAPIError(UpstreamError):
    """Completion capability call failed."""
    def __init__(
        self, message: str, api_error_type: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Completion API error ({api_error_type}): {message}",
            "COMPLETION_API_ERROR", ErrorCategory.EXTERNAL_API, context,
        )
        self.api_error_type = api_error_type


class ChatProviderError(UpstreamError):
    """Real-time chat provider call failed (directory or channel)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Chat provider {operation} failed: {message}",
            "CHAT_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API, ctx,
        )
        self.operation = operation
