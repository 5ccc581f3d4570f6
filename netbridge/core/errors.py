"""Error Hierarchy — typed exceptions for the outer surfaces of netbridge.

Invariants:
    - The registry itself never raises these; they are for callers (the
      inspection API) that turn a None/[] sentinel into a failure
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with NetBridgeError base: one FastAPI handler catches all
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    address: str | None = None
    endpoint_key: str | None = None
    room: str | None = None
    debug_info: dict[str, Any] | None = None


class NetBridgeError(Exception):
    """Base exception for all netbridge errors."""

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

    def context_fields(self) -> dict[str, str | None]:
        """Address, endpoint key and room the error refers to."""
        return {
            "address": self.context.address,
            "endpoint_key": self.context.endpoint_key,
            "room": self.context.room,
        }

    def log_extra(self) -> dict[str, str | None]:
        """Fields for logger `extra=`; matches JSONFormatter.EXTRA_FIELDS."""
        return {"error_code": self.code, **self.context_fields()}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": self.context_fields(),
        }
        if self.context.debug_info:
            body.update(self.context.debug_info)
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidAddressError(NetBridgeError):
    """Address normalizes to an empty endpoint key."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.address = address
        super().__init__(
            f"Address '{address}' has neither an origin nor a path",
            "INVALID_ADDRESS", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.address = address


class EndpointNotFoundError(NetBridgeError):
    """No server is registered on the requested endpoint."""
    def __init__(self, endpoint_key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.endpoint_key = endpoint_key
        super().__init__(
            f"No server registered on '{endpoint_key}'",
            "ENDPOINT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.endpoint_key = endpoint_key


class InvalidRequestError(NetBridgeError):
    """Query parameters failed pydantic validation (e.g. missing address)."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"details": details}
        super().__init__(
            "Invalid request data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.details = details
