"""
Custom exception classes for the application.

Every error a route can surface derives from AppError so it can be
rendered with the standard error body.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "ITEM_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: Any,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# BUSINESS ERRORS
# ===================

class BusinessNotFoundError(NotFoundError):
    """Business not found."""

    def __init__(self, business_id: int):
        super().__init__(
            resource="Business",
            identifier=business_id,
            code="BUSINESS_NOT_FOUND"
        )


# ===================
# ITEM ERRORS
# ===================

class ItemNotFoundError(NotFoundError):
    """Item not found."""

    def __init__(self, item_id: int):
        super().__init__(
            resource="Item",
            identifier=item_id,
            code="ITEM_NOT_FOUND"
        )


class NoBusinessAvailableError(ValidationError):
    """Import needs at least one business to attach items to."""

    def __init__(self):
        super().__init__(
            code="NO_BUSINESS_AVAILABLE",
            message="No businesses available. Create a business first."
        )


class ItemImportError(ValidationError):
    """Imported content could not be turned into items."""

    def __init__(self, errors: list[str], warnings: Optional[list[str]] = None):
        super().__init__(
            code="ITEM_IMPORT_FAILED",
            message=errors[0] if errors else "Import failed",
            details={"errors": errors, "warnings": warnings or []}
        )


# ===================
# LITERAL PARSER ERRORS
# ===================

class LiteralParseError(ValidationError):
    """Table or object literal text could not be parsed."""

    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(
            code="LITERAL_PARSE_ERROR",
            message=f"{message} (line {line}, column {column})",
            details={"line": line, "column": column}
        )


# ===================
# WEBHOOK ERRORS
# ===================

class WebhookNotFoundError(NotFoundError):
    """Webhook not found."""

    def __init__(self, webhook_id: int):
        super().__init__(
            resource="Webhook",
            identifier=webhook_id,
            code="WEBHOOK_NOT_FOUND"
        )


class InvalidWebhookUrlError(ValidationError):
    """Webhook URL is not a valid http(s) URL."""

    def __init__(self, url: str):
        super().__init__(
            code="WEBHOOK_INVALID_URL",
            message="Webhook URL is not valid",
            details={"url": url}
        )


# ===================
# JOBS GATEWAY ERRORS
# ===================

class DatabaseNotConfiguredError(AppError):
    """Jobs database connection has not been configured."""

    def __init__(self):
        super().__init__(
            code="DATABASE_NOT_CONFIGURED",
            message="Jobs database is not configured",
            status_code=400
        )


class JobsGatewayError(ExternalServiceError):
    """Jobs gateway request failed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="jobs_gateway",
            message=message,
            details=details
        )


class JobNotFoundError(NotFoundError):
    """Job not found."""

    def __init__(self, job_id: int):
        super().__init__(
            resource="Job",
            identifier=job_id,
            code="JOB_NOT_FOUND"
        )
