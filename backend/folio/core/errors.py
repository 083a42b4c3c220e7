"""Error Hierarchy - typed, categorized exceptions for every Folio failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Callers only ever see three store-facing errors: ResourceValidationError,
      ResourceNotFoundError, StoreUnavailableError
    - to_response() produces the REST envelope; messages are safe for display
    - from_response() rebuilds the same typed error on the client side

Design Decisions:
    - Single hierarchy with FolioError base: one FastAPI handler catches all
    - ErrorContext as dataclass: operation / kind / id travel with the error
      without coupling to the logging framework
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
    UNAVAILABLE = "unavailable"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Where an error happened: which operation on which resource."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    resource_kind: str | None = None
    resource_id: str | None = None


class FolioError(Exception):
    """Base exception for all Folio errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity != ErrorSeverity.CRITICAL

    def with_context(self, **fields: Any) -> "FolioError":
        """Fill in context fields that are still unset. Returns self for re-raise."""
        for key, value in fields.items():
            if getattr(self.context, key, None) is None:
                setattr(self.context, key, value)
        return self

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
                    "operation": self.context.operation,
                    "resource_kind": self.context.resource_kind,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# --- Domain Errors (400-level) --------------------------------------------------

class ResourceValidationError(FolioError):
    """Input failed schema rules or a store-level constraint."""
    def __init__(
        self,
        fields: dict[str, list[str]],
        message: str = "Invalid input",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = self.fields
        return response


class ResourceNotFoundError(FolioError):
    """Referenced resource does not exist (or no longer exists)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = ctx.resource_id or resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class FormBusyError(FolioError):
    """A mutation is already in flight for this form."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Another submission is still in progress",
            "FORM_BUSY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# --- Infrastructure Errors (500-level) -----------------------------------------

class StoreUnavailableError(FolioError):
    """Storage unreachable or failed; internal detail is logged, never returned."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Storage is temporarily unavailable",
            "STORE_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.ERROR, context, 503,
        )
        self.operation = operation


# --- Envelope decoding ------------------------------------------------------------

def error_from_response(status_code: int, payload: Any) -> FolioError:
    """Rebuild a typed error from a REST error envelope (client side)."""
    body = payload.get("error", {}) if isinstance(payload, dict) else {}
    raw_ctx = body.get("context") or {}
    context = ErrorContext(
        operation=raw_ctx.get("operation"),
        resource_kind=raw_ctx.get("resource_kind"),
        resource_id=raw_ctx.get("resource_id"),
    )
    code = body.get("code")

    if code == "VALIDATION_ERROR" or status_code in (400, 422):
        fields = body.get("fields") or _fields_from_details(body.get("details"))
        return ResourceValidationError(
            fields, body.get("message", "Invalid input"), context,
        )
    if code == "RESOURCE_NOT_FOUND" or status_code == 404:
        kind = context.resource_kind or "Resource"
        return ResourceNotFoundError(
            kind.capitalize(), context.resource_id or "unknown", context,
        )
    if code == "FORM_BUSY":
        return FormBusyError(context)
    return StoreUnavailableError(context.operation or "request", context)


def _fields_from_details(details: Any) -> dict[str, list[str]]:
    """Collapse RequestValidationError details into field-keyed messages."""
    fields: dict[str, list[str]] = {}
    for item in details or []:
        name = str(item.get("field", "")).split(".")[-1] or "request"
        fields.setdefault(name, []).append(item.get("message", "Invalid value"))
    return fields
