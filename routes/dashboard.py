"""
Dashboard API routes.

Everything the dashboard page shows in one call.
"""

from fastapi import APIRouter
import structlog

from models.sale import DashboardResponse
from services.sales_service import get_sales_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard():
    """Statistics, businesses per category and the five latest businesses."""
    try:
        return get_sales_service().get_dashboard()
    except Exception as e:
        return handle_error(e)
