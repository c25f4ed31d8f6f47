"""Error Hierarchy — typed, categorized exceptions for all filter service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - str(error) is the bare message: the filter dispatcher embeds it verbatim
      in plain-text response bodies
    - http_status is nominal; the filter dispatcher flattens provider errors to 500,
      only the global handlers (errors raised outside the dispatcher) honour it
    - to_response() produces the REST envelope used by the global handlers

Design Decisions:
    - Single hierarchy with FilterServiceError base: FastAPI global handler catches all
      (ADR: uniform error shape)
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    filter_id: str | None = None
    operation: str | None = None
    provider: str | None = None
    debug_info: dict[str, Any] | None = None


class FilterServiceError(Exception):
    """Base exception for all filter service errors."""

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
                    "filter_id": self.context.filter_id,
                    "operation": self.context.operation,
                    "provider": self.context.provider,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidFilterQueryError(FilterServiceError):
    """A list/get/delete parameter could not be interpreted by the provider."""
    def __init__(self, message: str, parameter: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_FILTER_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.parameter = parameter


class FilterNotFoundError(FilterServiceError):
    """Requested filter does not exist."""
    def __init__(self, filter_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.filter_id = filter_id
        super().__init__(
            f"filter '{filter_id}' not found",
            "FILTER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class TokenUnavailableError(FilterServiceError):
    """The caller's provider token could not be resolved from the request."""
    def __init__(self, message: str = "no provider token in request", context: ErrorContext | None = None):
        super().__init__(
            message, "TOKEN_UNAVAILABLE", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ProviderUnavailableError(FilterServiceError):
    """No provider has been initialized for this process."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "provider not initialized",
            "PROVIDER_UNAVAILABLE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
        )


class DatabaseError(FilterServiceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class RemoteRepositoryError(FilterServiceError):
    """Fetching a file from a source-control repository failed."""
    def __init__(
        self, message: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "REMOTE_REPOSITORY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.status_code = status_code


class RemoteProviderError(FilterServiceError):
    """The remote content service rejected or failed a request."""
    def __init__(
        self, message: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "REMOTE_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.status_code = status_code
