"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Businesses
    BusinessNotFoundError,

    # Items
    ItemNotFoundError,
    NoBusinessAvailableError,
    ItemImportError,

    # Literal parser
    LiteralParseError,

    # Webhooks
    WebhookNotFoundError,
    InvalidWebhookUrlError,

    # Jobs gateway
    DatabaseNotConfiguredError,
    JobsGatewayError,
    JobNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Businesses
    "BusinessNotFoundError",

    # Items
    "ItemNotFoundError",
    "NoBusinessAvailableError",
    "ItemImportError",

    # Literal parser
    "LiteralParseError",

    # Webhooks
    "WebhookNotFoundError",
    "InvalidWebhookUrlError",

    # Jobs gateway
    "DatabaseNotConfiguredError",
    "JobsGatewayError",
    "JobNotFoundError",
]
