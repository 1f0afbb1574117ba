"""
Item schemas for validation and serialization.

Items are sellable goods attached to a business. Besides the dashboard
fields (tipo, vencimiento_horas, imagen) they carry the inventory fields
exported to the game server (label, weight, stack, ...), the identifier
they were imported under (original_id) and the original import fields
(metadata).
"""

from pydantic import Field, field_validator
from typing import Any, Optional, Union
from enum import Enum
from datetime import datetime

from models.base import BaseSchema
from models.item_import import ImportedItem

Number = Union[int, float]


class ItemType(str, Enum):
    """Item kinds shown on the dashboard."""
    COMESTIBLE = "comestible"
    OTROS = "otros"


class ItemFields(BaseSchema):
    """Inventory fields editable from the item form."""

    label: Optional[str] = Field(None, max_length=100, description="In-game label")
    weight: Optional[Number] = Field(None, ge=0, description="Weight in grams")
    stack: Optional[bool] = Field(None, description="Item stacks in inventory")
    close: Optional[bool] = Field(None, description="Inventory closes on use")
    degrade: Optional[Number] = Field(None, ge=0, description="Minutes until degraded (0 = never)")
    decay: Optional[bool] = Field(None, description="Item is removed once degraded")
    description: Optional[str] = Field(None, max_length=500)


class ItemCreate(ItemFields):
    """
    Create a new item.

    Required: nombre, negocio_id
    """

    nombre: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name",
        examples=["Hamburguesa Clásica"]
    )
    negocio_id: int = Field(..., description="Owning business")
    tipo: ItemType = Field(ItemType.OTROS, description="Item kind")
    vencimiento_horas: Optional[int] = Field(
        None,
        ge=1,
        description="Expiry in hours (comestible only)"
    )
    imagen: str = Field("", description="Image URL")
    original_id: Optional[str] = Field(
        None,
        description="Identifier used on export (derived from nombre if omitted)"
    )
    metadata: Optional[dict[str, Any]] = Field(
        None,
        description="Original fields from import"
    )


class ItemUpdate(ItemFields):
    """
    Update existing item.

    All fields optional - only provided fields are updated.
    metadata and original_id are never changed by an update.
    """

    nombre: Optional[str] = Field(None, min_length=1, max_length=100)
    negocio_id: Optional[int] = None
    tipo: Optional[ItemType] = None
    vencimiento_horas: Optional[int] = Field(None, ge=1)
    imagen: Optional[str] = None


class ItemResponse(ItemFields):
    """Stored item with all fields."""

    id: int = Field(..., description="Item id")
    nombre: str
    negocio_id: int
    tipo: ItemType
    vencimiento_horas: Optional[int] = None
    imagen: str = ""
    fecha_creacion: datetime
    original_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    @field_validator("imagen", mode="before")
    @classmethod
    def imagen_default(cls, v: Optional[str]) -> str:
        """Stored rows may carry null images."""
        return v or ""


class ItemPreviewRequest(ItemFields):
    """Unsaved form contents to render as exported code."""

    nombre: Optional[str] = None
    imagen: Optional[str] = None
    original_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class ItemListResponse(BaseSchema):
    """List of items."""

    data: list[ItemResponse]
    total: int


class ItemCounts(BaseSchema):
    """Item totals for the items page header."""

    total: int
    comestible: int
    otros: int
    imported: int = Field(..., description="Items created by an import (carrying metadata)")


class ItemImportResponse(BaseSchema):
    """Result of importing pasted content into the store."""

    created: int
    failed: int
    negocio_id: int
    items: list[ItemResponse]
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ItemCodeResponse(BaseSchema):
    """Exported Lua code."""

    code: str
    count: int


class ImportPreviewResponse(BaseSchema):
    """Parsed items and exported code for pasted content, nothing stored."""

    success: bool
    items: list[ImportedItem]
    errors: list[str]
    warnings: list[str]
    code: Optional[str] = None
