"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.businesses import router as businesses_router
from routes.items import router as items_router
from routes.sales import router as sales_router
from routes.dashboard import router as dashboard_router
from routes.webhooks import router as webhooks_router
from routes.jobs import router as jobs_router
from routes.config import router as config_router

__all__ = [
    "businesses_router",
    "items_router",
    "sales_router",
    "dashboard_router",
    "webhooks_router",
    "jobs_router",
    "config_router",
]
