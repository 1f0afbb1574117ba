"""
Business logic services.

Each service handles one domain area.
"""

from services.item_import_service import ItemImportService, get_item_import_service
from services.item_code_service import ItemCodeService, get_item_code_service
from services.webhook_service import WebhookService, get_webhook_service
from services.business_service import BusinessService, get_business_service
from services.item_service import ItemService, get_item_service
from services.sales_service import SalesService, get_sales_service
from services.job_service import JobService, get_job_service

__all__ = [
    "ItemImportService",
    "get_item_import_service",
    "ItemCodeService",
    "get_item_code_service",
    "WebhookService",
    "get_webhook_service",
    "BusinessService",
    "get_business_service",
    "ItemService",
    "get_item_service",
    "SalesService",
    "get_sales_service",
    "JobService",
    "get_job_service",
]
