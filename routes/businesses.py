"""
Business API routes.

CRUD for businesses (negocios) plus the items of one business.
"""

from fastapi import APIRouter, Query
from typing import Optional
import structlog

from models.business import (
    BusinessCreate,
    BusinessUpdate,
    BusinessResponse,
    BusinessListResponse,
    BusinessType,
    BusinessStatus,
)
from models.item import ItemListResponse
from services.business_service import get_business_service
from services.item_service import get_item_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=BusinessListResponse)
async def list_businesses(
    search: Optional[str] = Query(None, description="Search in name or buyer"),
    tipo: Optional[BusinessType] = Query(None, description="Filter by category"),
    estado: Optional[BusinessStatus] = Query(None, description="Filter by status"),
):
    """List businesses with optional filters."""
    try:
        businesses = get_business_service().get_all(search=search, tipo=tipo, estado=estado)
        return BusinessListResponse(data=businesses, total=len(businesses))

    except Exception as e:
        return handle_error(e)


@router.get("/{business_id}", response_model=BusinessResponse)
async def get_business(business_id: int):
    """
    Get a single business.

    Raises:
        404: Business not found
    """
    try:
        return get_business_service().get_by_id(business_id)
    except Exception as e:
        return handle_error(e)


@router.get("/{business_id}/items", response_model=ItemListResponse)
async def list_business_items(business_id: int):
    """
    Items of one business.

    Raises:
        404: Business not found
    """
    try:
        get_business_service().get_by_id(business_id)
        items = get_item_service().get_by_business(business_id)
        return ItemListResponse(data=items, total=len(items))
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=BusinessResponse, status_code=201)
async def create_business(data: BusinessCreate):
    """
    Create a business.

    Notifies negocio_creado webhooks.
    """
    try:
        return get_business_service().create(data)
    except Exception as e:
        return handle_error(e)


@router.patch("/{business_id}", response_model=BusinessResponse)
async def update_business(business_id: int, data: BusinessUpdate):
    """
    Update a business. Only provided fields are updated.

    Notifies negocio_editado webhooks, and venta_realizada when the
    business is sold.

    Raises:
        404: Business not found
    """
    try:
        return get_business_service().update(business_id, data)
    except Exception as e:
        return handle_error(e)


@router.delete("/{business_id}", status_code=204)
async def delete_business(business_id: int):
    """
    Delete a business.

    Raises:
        404: Business not found
    """
    try:
        get_business_service().delete(business_id)
        return None  # 204 No Content
    except Exception as e:
        return handle_error(e)
