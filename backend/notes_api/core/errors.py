"""Error Hierarchy — typed, categorized exceptions for every request failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error maps to exactly one HTTP status; all are terminal for the request
    - Messages are generic: nothing reveals whether a username exists
    - to_response() produces the single REST error envelope

Design Decisions:
    - Single hierarchy with NotesApiError base: one global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    note_id: int | None = None
    client_id: str | None = None
    retry_after_ms: int | None = None


class NotesApiError(Exception):
    """Base exception for all Notes API errors."""

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
                    "note_id": self.context.note_id,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Admission & Authentication (401/429) ──────────────────────

class RateLimitedError(NotesApiError):
    """Client exhausted its request budget for the current window."""
    def __init__(
        self, retry_after_ms: int | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            "Too many requests", "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, ctx, 429,
        )


class MissingTokenError(NotesApiError):
    """No auth-token header on a protected request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Access denied", "MISSING_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(NotesApiError):
    """Token signature, format, or claims failed verification."""
    def __init__(
        self,
        message: str = "Invalid token",
        code: str = "INVALID_TOKEN",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class TokenExpiredError(InvalidTokenError):
    """Token verified but its exp claim is in the past."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Token expired", "TOKEN_EXPIRED", context)


class AccessDeniedError(NotesApiError):
    """Authenticated actor is neither the owner nor an admin."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Access denied", "ACCESS_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(NotesApiError):
    """Login failed. Same message whether the username or the password was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 400,
        )


# ─── Domain Errors (400/404) ────────────────────────────────────

class InputValidationError(NotesApiError):
    """Required request fields missing or malformed."""
    def __init__(
        self,
        message: str,
        field: str,
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, http_status,
        )
        self.field = field

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["context"]["field"] = self.field
        return body


class DuplicateUsernameError(NotesApiError):
    """Registration attempted with a username that is already taken."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User with this username already exists", "DUPLICATE_USERNAME",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, context, 400,
        )


class ResourceNotFoundError(NotesApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class NoteNotFoundError(ResourceNotFoundError):
    """No live note with the given id (never created, or soft-deleted)."""
    def __init__(self, note_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.note_id = note_id
        super().__init__("Note", str(note_id), ctx)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(NotesApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
