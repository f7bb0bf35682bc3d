"""Error Hierarchy — typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller/input errors, never retried by the registry
    - ConcurrencyError is the only transient category; callers may retry it
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with RegistryError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Pure core checks RETURN these instances; the shell raises them after rollback
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    domain_name: str | None = None
    organization_id: str | None = None
    space_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retryable: bool = False


class RegistryError(Exception):
    """Base exception for all domain registry errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "retryable": self.context.retryable,
                "context": {
                    "domain_name": self.context.domain_name,
                    "organization_id": self.context.organization_id,
                    "space_id": self.context.space_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidNameFormatError(RegistryError):
    """Domain name fails the name grammar."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        super().__init__(
            f"'{name}' is not a valid domain name",
            "INVALID_NAME_FORMAT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.name = name


class DuplicateNameError(RegistryError):
    """Domain name already registered (case-insensitive)."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        super().__init__(
            f"Domain '{name}' is already registered",
            "DUPLICATE_NAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.name = name


class OverlappingDomainError(RegistryError):
    """Candidate name overlaps a domain it may not coexist with."""
    def __init__(
        self, name: str, conflicting_name: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        super().__init__(
            f"Domain '{name}' overlaps registered domain '{conflicting_name}'",
            "OVERLAPPING_DOMAIN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.name = name
        self.conflicting_name = conflicting_name


class WildcardInUseError(RegistryError):
    """Wildcard cannot be disabled while hosted routes exist."""
    def __init__(
        self, name: str, hosted_routes: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        super().__init__(
            f"Cannot disable wildcard on '{name}': "
            f"{hosted_routes} route(s) with a host depend on it",
            "WILDCARD_IN_USE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.hosted_routes = hosted_routes


class InvalidSpaceRelationError(RegistryError):
    """Space belongs to an organization other than the domain owner."""
    def __init__(
        self, name: str, space_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        ctx.space_id = space_id
        super().__init__(
            f"Space '{space_id}' does not belong to the organization owning '{name}'",
            "INVALID_SPACE_RELATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class InvalidOrganizationRelationError(RegistryError):
    """Owned domain cannot be associated with a second organization."""
    def __init__(
        self, name: str, organization_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        ctx.organization_id = organization_id
        super().__init__(
            f"Organization '{organization_id}' cannot be associated with '{name}'",
            "INVALID_ORGANIZATION_RELATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class UnauthorizedSharedDomainCreationError(RegistryError):
    """Non-privileged actor attempted to create a shared domain."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        super().__init__(
            f"Only privileged actors may create shared domain '{name}'",
            "UNAUTHORIZED_SHARED_DOMAIN_CREATION", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, ctx, 403,
        )


class HostNotAllowedError(RegistryError):
    """Route with a host under a domain without the wildcard flag."""
    def __init__(self, name: str, host: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        super().__init__(
            f"Host '{host}' requires wildcard to be enabled on '{name}'",
            "HOST_NOT_ALLOWED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class DomainNotInSpaceError(RegistryError):
    """Route requested in a space that is not associated with the domain."""
    def __init__(
        self, name: str, space_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.domain_name = name
        ctx.space_id = space_id
        super().__init__(
            f"Domain '{name}' is not associated with space '{space_id}'",
            "DOMAIN_NOT_IN_SPACE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class ResourceNotFoundError(RegistryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level / transient) ──────────────

class DatabaseError(RegistryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConcurrencyError(RegistryError):
    """Concurrent modification detected by the storage substrate. Safe to retry."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.retryable = True
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
