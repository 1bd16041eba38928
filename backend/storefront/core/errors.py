"""Error Hierarchy — typed, categorized exceptions for every store-service failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are recoverable; store and conflict errors (5xx) are critical
    - to_response() produces the REST envelope used by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StorefrontError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ConcurrencyConflictError maps to 500, not 409: a row that changed underneath a
      full-record replace is an anomaly to surface, not a negotiable client condition
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
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    store: str | None = None
    entity: str | None = None
    entity_id: int | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontError(Exception):
    """Base exception for all store-service errors."""

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
                    "store": self.context.store,
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class EntityValidationError(StorefrontError):
    """Entity payload failed a business rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class IdentityMismatchError(StorefrontError):
    """Path identity and payload identity of a replace request differ."""
    def __init__(
        self, path_id: int, payload_id: int | None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Path id {path_id} does not match payload id {payload_id}",
            "IDENTITY_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.path_id = path_id
        self.payload_id = payload_id


class ResourceNotFoundError(StorefrontError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class ConcurrencyConflictError(StorefrontError):
    """Row still exists but changed between read and conditioned write."""
    def __init__(
        self, resource_type: str, resource_id: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' was modified concurrently",
            "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(StorefrontError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
