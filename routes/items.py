"""
Item API routes.

CRUD for items plus import of pasted item definitions and export of the
Lua item table.
"""

from fastapi import APIRouter, Query
from typing import Optional
import structlog

from models.item import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemListResponse,
    ItemPreviewRequest,
    ItemCounts,
    ItemImportResponse,
    ItemCodeResponse,
    ImportPreviewResponse,
    ItemType,
)
from models.item_import import ItemImportRequest, ItemImportPreviewRequest
from services.item_service import get_item_service
from services.item_import_service import get_item_import_service
from services.item_code_service import get_item_code_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# LIST / COUNTS
# ===================

@router.get("", response_model=ItemListResponse)
async def list_items(
    search: Optional[str] = Query(None, description="Search in name or label"),
    negocio_id: Optional[int] = Query(None, description="Filter by business"),
    tipo: Optional[ItemType] = Query(None, description="Filter by item kind"),
):
    """List items with optional filters."""
    try:
        items = get_item_service().get_all(search=search, negocio_id=negocio_id, tipo=tipo)
        return ItemListResponse(data=items, total=len(items))
    except Exception as e:
        return handle_error(e)


@router.get("/counts", response_model=ItemCounts)
async def item_counts():
    """Totals by kind and number of imported items."""
    try:
        return get_item_service().get_counts()
    except Exception as e:
        return handle_error(e)


# ===================
# IMPORT / EXPORT
# ===================

@router.post("/import/preview", response_model=ImportPreviewResponse)
async def preview_import(data: ItemImportPreviewRequest):
    """
    Parse pasted content without storing anything.

    Returns the recovered items, diagnostics and the code they export to.
    Parse failures are reported in errors with a 200 status.
    """
    try:
        result = get_item_import_service().process_import(data.content)
        code = None
        if result.success:
            code = get_item_code_service().generate_multiple_items_code(result.items)

        return ImportPreviewResponse(
            success=result.success,
            items=result.items,
            errors=result.errors,
            warnings=result.warnings,
            code=code,
        )
    except Exception as e:
        return handle_error(e)


@router.post("/import", response_model=ItemImportResponse, status_code=201)
async def import_items(data: ItemImportRequest):
    """
    Import pasted JSON, JavaScript object or Lua table content.

    Raises:
        422: Nothing could be parsed, or there is no business to assign to
        404: negocio_id not found
    """
    try:
        return get_item_service().import_items(data.content, negocio_id=data.negocio_id)
    except Exception as e:
        return handle_error(e)


@router.get("/export", response_model=ItemCodeResponse)
async def export_items(
    search: Optional[str] = Query(None, description="Search in name or label"),
    negocio_id: Optional[int] = Query(None, description="Filter by business"),
    tipo: Optional[ItemType] = Query(None, description="Filter by item kind"),
):
    """Lua item table for the items matching the filters."""
    try:
        return get_item_service().export_code(search=search, negocio_id=negocio_id, tipo=tipo)
    except Exception as e:
        return handle_error(e)


@router.post("/preview", response_model=ItemCodeResponse)
async def preview_item_code(
    data: ItemPreviewRequest,
    item_id: Optional[int] = Query(None, description="Item being edited"),
):
    """Code for unsaved form contents."""
    try:
        return get_item_service().preview_code(data, item_id=item_id)
    except Exception as e:
        return handle_error(e)


# ===================
# SINGLE ITEM
# ===================

@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: int):
    """
    Get a single item.

    Raises:
        404: Item not found
    """
    try:
        return get_item_service().get_by_id(item_id)
    except Exception as e:
        return handle_error(e)


@router.get("/{item_id}/code", response_model=ItemCodeResponse)
async def get_item_code(item_id: int):
    """
    Lua table entry for one item.

    Raises:
        404: Item not found
    """
    try:
        return get_item_service().get_item_code(item_id)
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=ItemResponse, status_code=201)
async def create_item(data: ItemCreate):
    """
    Create an item.

    Raises:
        404: Business not found
    """
    try:
        return get_item_service().create(data)
    except Exception as e:
        return handle_error(e)


@router.patch("/{item_id}", response_model=ItemResponse)
async def update_item(item_id: int, data: ItemUpdate):
    """
    Update an item. Only provided fields are updated.

    Raises:
        404: Item or business not found
    """
    try:
        return get_item_service().update(item_id, data)
    except Exception as e:
        return handle_error(e)


@router.delete("/{item_id}", status_code=204)
async def delete_item(item_id: int):
    """
    Delete an item.

    Raises:
        404: Item not found
    """
    try:
        get_item_service().delete(item_id)
        return None  # 204 No Content
    except Exception as e:
        return handle_error(e)
