"""Error Hierarchy: typed, categorized exceptions for every Product API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are raised before the store is touched; store errors are 500
    - to_response() always carries a human-readable "message"
    - Diagnostic text (detail) is a stringified cause, never a stack trace

Design Decisions:
    - Single hierarchy with ProductApiError base: the handler boundary and the FastAPI
      global handler both catch one type (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs, never for clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    product_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_seconds: int | None = None


class ProductApiError(Exception):
    """Base exception for all Product API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.detail = detail

    def to_response(self) -> dict:
        """Convert to the JSON error body returned to clients."""
        body: dict[str, Any] = {"message": self.message}
        if self.detail is not None:
            body["error"] = self.detail
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(ProductApiError):
    """Malformed or missing input, rejected before the store is called."""
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(ProductApiError):
    """The store returned no match."""
    def __init__(self, message: str = "Product not found", context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class RateLimitExceededError(ProductApiError):
    """Client exceeded its request budget for the current window."""
    def __init__(self, retry_after_seconds: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(
            "Too many requests, please try again later.",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, ctx, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreError(ProductApiError):
    """Any failure raised by the product store: connectivity, rejection, cast."""
    def __init__(self, cause: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "Server error", "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500, detail=cause,
        )
        self.operation = operation
