"""
Sales API routes.

Sales listing, statistics and downloadable exports.
"""

from datetime import date
from fastapi import APIRouter, Query
from fastapi.responses import Response
from typing import Optional
import structlog

from models.sale import SaleListResponse, Statistics, SalesExportFormat
from services.sales_service import get_sales_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=SaleListResponse)
async def list_sales(
    fecha: Optional[date] = Query(None, description="Only sales made on this day (YYYY-MM-DD)"),
):
    """List sales, optionally for a single day."""
    try:
        return get_sales_service().get_sales(fecha)
    except Exception as e:
        return handle_error(e)


@router.get("/statistics", response_model=Statistics)
async def get_statistics():
    """Business and sales counters."""
    try:
        return get_sales_service().get_statistics()
    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_sales(
    format: SalesExportFormat = Query(SalesExportFormat.JSON, description="json, csv or xlsx"),
    fecha: Optional[date] = Query(None, description="Only sales made on this day"),
):
    """Download sales as JSON, CSV or Excel."""
    try:
        content, media_type, filename = get_sales_service().export_sales(format, fecha)
        return Response(
            content=content,
            media_type=media_type,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except Exception as e:
        return handle_error(e)
