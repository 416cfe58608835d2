"""Error Hierarchy — typed, categorized exceptions for all browser failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Navigation errors (CacheUnavailable, InvalidAddress, SnapshotNotFound, DomainExpired)
      are recoverable: the resolver turns them into views, they never crash the process
    - to_response() produces REST envelope; to_view() produces the page payload
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BrowserError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from goggles.core.domain_types import NAME_NOT_RESOLVED


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    NAVIGATION = "navigation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CACHE = "cache"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tab_id: int | None = None
    address: str | None = None
    host: str | None = None
    request_id: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class BrowserError(Exception):
    """Base exception for all browser errors."""

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
        self.diagnostic: str | None = None

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
                    "tab_id": self.context.tab_id,
                    "address": self.context.address,
                    "request_id": self.context.request_id,
                },
            }
        }

    def to_view(self) -> dict:
        """Convert to the props of an error page view."""
        return {
            "code": self.code,
            "diagnostic": self.diagnostic,
            "message": self.context.user_message or self.message,
            "host": self.context.host,
            "recoverable": self.severity in (
                ErrorSeverity.INFO, ErrorSeverity.WARNING,
            ),
        }


# ─── Navigation Errors (rendered as pages) ──────────────────────

class CacheUnavailableError(BrowserError):
    """Search requested while the result cache is empty or unhydrated."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or (
            "Search cache not found. Please restart the scenario."
        )
        super().__init__(
            "Search cache is empty or not yet hydrated",
            "CACHE_UNAVAILABLE", ErrorCategory.CACHE,
            ErrorSeverity.WARNING, ctx, 503,
        )


class InvalidAddressError(BrowserError):
    """Address fails URL parsing and matches no synthetic pattern."""
    def __init__(self, address: str, host: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.address = address
        ctx.host = host
        ctx.user_message = ctx.user_message or (
            f"This site can't be reached. Check {host} for a typo."
        )
        super().__init__(
            f"Invalid address: {address}",
            "INVALID_ADDRESS", ErrorCategory.NAVIGATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.address = address
        self.diagnostic = NAME_NOT_RESOLVED


class SnapshotNotFoundError(BrowserError):
    """Archive address is well-formed but no record is archived for it."""
    def __init__(self, inner_address: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.address = inner_address
        ctx.user_message = ctx.user_message or (
            "Playback Machine has not archived that URL."
        )
        super().__init__(
            f"No archived snapshot for {inner_address}",
            "SNAPSHOT_NOT_FOUND", ErrorCategory.NAVIGATION,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.inner_address = inner_address


class DomainExpiredError(BrowserError):
    """Record exists but its domain is flagged expired."""
    def __init__(self, address: str, host: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.address = address
        ctx.host = host
        ctx.user_message = ctx.user_message or (
            f"This site can't be reached. Check {host} for a typo."
        )
        super().__init__(
            f"Domain expired: {address}",
            "DOMAIN_EXPIRED", ErrorCategory.NAVIGATION,
            ErrorSeverity.WARNING, ctx, 410,
        )
        self.address = address
        self.diagnostic = NAME_NOT_RESOLVED


# ─── Shell Errors (raised to the API) ───────────────────────────

class TabNotFoundError(BrowserError):
    """Requested tab does not exist."""
    def __init__(self, tab_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tab_id = tab_id
        super().__init__(
            f"Tab '{tab_id}' not found",
            "TAB_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class SeedValidationError(BrowserError):
    """Seed record is missing required fields or has the wrong shape."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SEED_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class RendererRegistryError(BrowserError):
    """Renderer table does not cover exactly the closed Template set."""
    def __init__(self, missing: list[str], extra: list[str]):
        super().__init__(
            f"Renderer table mismatch: missing={missing} extra={extra}",
            "RENDERER_REGISTRY_MISMATCH", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.missing = missing
        self.extra = extra


class DatabaseError(BrowserError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
