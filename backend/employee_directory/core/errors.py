"""Error Hierarchy — typed, categorized exceptions for every directory failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Record-level failures (duplicate id, validation, store) surface as HTTP 400
    - A missing update target surfaces as HTTP 404
    - to_response() produces the REST envelope; messages never carry driver internals

Design Decisions:
    - Single hierarchy with EmployeeDirectoryError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields travel with the error, not the logger
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
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    employee_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class EmployeeDirectoryError(Exception):
    """Base exception for all employee directory errors."""

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
                    "employee_id": self.context.employee_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Record Errors (400-level) ──────────────────────────────────

class DuplicateIdentifierError(EmployeeDirectoryError):
    """Business identifier already taken by another record."""
    CODE = "DUPLICATE_IDENTIFIER"

    def __init__(self, employee_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(operation="create")
        ctx.employee_id = employee_id
        super().__init__(
            f"Employee with id '{employee_id}' already exists",
            self.CODE, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.employee_id = employee_id


class RecordValidationError(EmployeeDirectoryError):
    """Record payload failed field-level validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(EmployeeDirectoryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.employee_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Store Errors ────────────────────────────────────────────────

class DatabaseError(EmployeeDirectoryError):
    """Any other persistence failure."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 400,
        )
        self.operation = operation


# ─── Client Errors ───────────────────────────────────────────────

class DirectoryAPIError(EmployeeDirectoryError):
    """Directory API round trip failed (dashboard client side)."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        status_code: int | None = None,
        error_code: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Directory API error ({api_error_type}): {message}",
            "DIRECTORY_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.api_error_type = api_error_type
        self.status_code = status_code
        # code reported by the service, e.g. DUPLICATE_IDENTIFIER
        self.error_code = error_code

    @property
    def is_duplicate_identifier(self) -> bool:
        return self.error_code == DuplicateIdentifierError.CODE
