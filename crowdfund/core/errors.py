"""Error Hierarchy — typed, categorized exceptions for every project lifecycle failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CrowdfundError base: FastAPI global handler catches all
    - Error kinds map 1:1 to the operation table codes:
      INVALID_PAYLOAD, NOT_FOUND, INVALID_STATUS, PROJECT_EXPIRED, FAIL
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    project_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class CrowdfundError(Exception):
    """Base exception for all crowdfund errors."""

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
                    "project_id": self.context.project_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidPayloadError(CrowdfundError):
    """Missing/zero required field, overflow, or a recomputed deadline already past."""
    def __init__(
        self, message: str, fields: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields or []


class ProjectNotFoundError(CrowdfundError):
    """Project id absent from the store."""
    def __init__(self, project_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.project_id = project_id
        super().__init__(
            f"Project with id={project_id} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class InvalidStatusError(CrowdfundError):
    """Status string is not a recognized ProjectStatus value."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid status '{status}'. Expected one of: Funding, Successful, Expired",
            "INVALID_STATUS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.status = status


class ProjectExpiredError(CrowdfundError):
    """Contribution attempted against a terminal or past-deadline project."""
    def __init__(self, project_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.project_id = project_id
        super().__init__(
            f"Project with id={project_id} has expired",
            "PROJECT_EXPIRED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )


class ConcurrencyError(CrowdfundError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class OperationFailedError(CrowdfundError):
    """Unexpected internal failure during an operation."""
    def __init__(
        self, message: str, category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None, http_status: int = 500,
    ):
        super().__init__(
            message, "FAIL", category,
            ErrorSeverity.CRITICAL, context, http_status,
        )


class IdAllocationError(OperationFailedError):
    """No unused project id found within the retry bound."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"Could not allocate a unique project id after {attempts} attempts",
            context=context,
        )
        self.attempts = attempts


class DatabaseError(OperationFailedError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCategory.DATABASE, context, 503,
        )
        self.operation = operation
