"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.business import (
    BusinessType,
    BusinessStatus,
    BusinessCreate,
    BusinessUpdate,
    BusinessResponse,
    BusinessListResponse,
)
from models.item_import import (
    ImportedItem,
    ImportResult,
    ItemImportRequest,
    ItemImportPreviewRequest,
)
from models.item import (
    ItemType,
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemPreviewRequest,
    ItemListResponse,
    ItemCounts,
    ItemImportResponse,
    ItemCodeResponse,
    ImportPreviewResponse,
)
from models.sale import (
    SaleResponse,
    SaleListResponse,
    Statistics,
    BusinessTypeCount,
    DashboardResponse,
    SalesExportFormat,
)
from models.webhook import (
    WebhookEvent,
    WebhookCreate,
    WebhookUpdate,
    WebhookConfig,
    WebhookDispatchResult,
    WebhookSendRequest,
    WebhookTestResponse,
)
from models.job import (
    Job,
    JobCreate,
    JobUpdate,
    JobListResponse,
    DatabaseConfig,
    ConnectionTestResult,
    DatabaseStats,
)

__all__ = [
    # Base
    "BaseSchema",

    # Business
    "BusinessType",
    "BusinessStatus",
    "BusinessCreate",
    "BusinessUpdate",
    "BusinessResponse",
    "BusinessListResponse",

    # Import
    "ImportedItem",
    "ImportResult",
    "ItemImportRequest",
    "ItemImportPreviewRequest",

    # Item
    "ItemType",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemPreviewRequest",
    "ItemListResponse",
    "ItemCounts",
    "ItemImportResponse",
    "ItemCodeResponse",
    "ImportPreviewResponse",

    # Sales
    "SaleResponse",
    "SaleListResponse",
    "Statistics",
    "BusinessTypeCount",
    "DashboardResponse",
    "SalesExportFormat",

    # Webhooks
    "WebhookEvent",
    "WebhookCreate",
    "WebhookUpdate",
    "WebhookConfig",
    "WebhookDispatchResult",
    "WebhookSendRequest",
    "WebhookTestResponse",

    # Jobs
    "Job",
    "JobCreate",
    "JobUpdate",
    "JobListResponse",
    "DatabaseConfig",
    "ConnectionTestResult",
    "DatabaseStats",
]
