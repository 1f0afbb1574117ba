"""
Business (negocio) schemas for validation and serialization.
"""

from pydantic import Field, model_validator
from typing import Any, Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema


class BusinessType(str, Enum):
    """Business categories on the server."""
    MECANICO = "mecanico"
    COMIDA = "comida"
    TELEFONOS = "telefonos"
    ELECTRONICOS = "electronicos"
    FERRETERIA = "ferreteria"
    DECORACION = "decoracion"


class BusinessStatus(str, Enum):
    """Whether a business is still for sale."""
    DISPONIBLE = "disponible"
    VENDIDO = "vendido"


class BusinessCreate(BaseSchema):
    """
    Create a new business.

    Required: nombre, tipo, monto
    Buyer fields only make sense for sold businesses.
    """

    nombre: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Business name",
        examples=["Mecánica Los Hermanos"]
    )
    tipo: BusinessType = Field(..., description="Business category")
    estado: BusinessStatus = Field(BusinessStatus.DISPONIBLE, description="Sale status")
    monto: float = Field(..., ge=0, description="Price in RD$")
    comprador_nombre: Optional[str] = Field(None, max_length=100)
    comprador_id: Optional[int] = Field(None, ge=0)
    fecha_venta: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def clear_buyer_when_available(cls, data: Any) -> Any:
        """Available businesses have no buyer."""
        if isinstance(data, dict) and data.get("estado", "disponible") == "disponible":
            return {
                **data,
                "comprador_nombre": None,
                "comprador_id": None,
                "fecha_venta": None,
            }
        return data


class BusinessUpdate(BaseSchema):
    """
    Update existing business.

    All fields optional - only provided fields are updated.
    """

    nombre: Optional[str] = Field(None, min_length=1, max_length=100)
    tipo: Optional[BusinessType] = None
    estado: Optional[BusinessStatus] = None
    monto: Optional[float] = Field(None, ge=0)
    comprador_nombre: Optional[str] = Field(None, max_length=100)
    comprador_id: Optional[int] = Field(None, ge=0)
    fecha_venta: Optional[datetime] = None


class BusinessResponse(BaseSchema):
    """Business with all fields."""

    id: int = Field(..., description="Business id")
    nombre: str
    tipo: BusinessType
    estado: BusinessStatus
    monto: float
    comprador_nombre: Optional[str] = None
    comprador_id: Optional[int] = None
    fecha_venta: Optional[datetime] = None
    fecha_creacion: datetime


class BusinessListResponse(BaseSchema):
    """List of businesses."""

    data: list[BusinessResponse]
    total: int
