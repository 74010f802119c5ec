"""Error Hierarchy — typed, categorized exceptions for every payroll-sync failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by api/error_handlers.py
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PayrollError base: FastAPI global handler catches all
    - UpstreamUnavailableError carries an UpstreamErrorKind so callers can apply
      different failure policies (employee sync swallows, contribution cache propagates)
    - DecodeFailureError subclasses UpstreamUnavailableError: a malformed payload
      is handled exactly like an unreachable upstream
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
    CONFLICT = "conflict"
    DATABASE = "database"
    CACHE = "cache"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


class UpstreamErrorKind(str, Enum):
    """Distinguishable remote failure modes."""
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


@dataclass
class ErrorContext:
    """Business key and operation attached to an error for diagnosis."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rssb_number: str | None = None
    operation: str | None = None
    cache_key: str | None = None
    debug_info: dict[str, Any] | None = None


class PayrollError(Exception):
    """Base exception for all payroll-sync errors."""

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
                    "rssb_number": self.context.rssb_number,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(PayrollError):
    """A field failed explicit input validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(PayrollError):
    """Business key absent from every source consulted."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictOnInsertError(PayrollError):
    """Create rejected by a unique business-key constraint."""
    def __init__(
        self, resource_type: str, business_key: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{business_key}' already exists",
            "CONFLICT_ON_INSERT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.resource_type = resource_type
        self.business_key = business_key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamUnavailableError(PayrollError):
    """Call to the oracle master-data API failed."""
    def __init__(
        self,
        message: str,
        kind: UpstreamErrorKind,
        status_code: int | None = None,
        context: ErrorContext | None = None,
        code: str = "UPSTREAM_UNAVAILABLE",
    ):
        super().__init__(
            f"Upstream error ({kind.value}): {message}",
            code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.kind = kind
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return (
            self.kind == UpstreamErrorKind.HTTP_STATUS
            and self.status_code == 404
        )


class DecodeFailureError(UpstreamUnavailableError):
    """Upstream answered but the payload could not be decoded."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, UpstreamErrorKind.DECODE,
            context=context, code="UPSTREAM_DECODE_FAILURE",
        )


class CacheUnavailableError(PayrollError):
    """Cache store read, write or scan failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cache {operation} failed: {message}",
            "CACHE_UNAVAILABLE", ErrorCategory.CACHE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DatabaseError(PayrollError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
