"""
Sales and statistics schemas.

Sales are not stored separately: every sold business with a buyer and a
sale date is one sale.
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema
from models.business import BusinessResponse


class SaleResponse(BaseSchema):
    """One business sale."""

    id: int
    negocio_id: int
    negocio_nombre: str
    comprador_nombre: str
    comprador_id: Optional[int] = None
    monto: float
    fecha_venta: datetime


class SaleListResponse(BaseSchema):
    """Sales with totals for the current filter."""

    data: list[SaleResponse]
    total: int
    monto_total: float = Field(..., description="Sum of monto over returned sales")


class Statistics(BaseSchema):
    """Dashboard counters."""

    total_negocios: int
    negocios_vendidos: int
    negocios_disponibles: int
    monto_total: float = Field(..., description="Sum of monto over all businesses")
    ventas_mes: int = Field(..., description="Sales dated in the current month")
    items_totales: int


class BusinessTypeCount(BaseSchema):
    """Businesses per category for the dashboard chart."""

    tipo: str
    count: int


class DashboardResponse(BaseSchema):
    """Everything the dashboard page shows."""

    statistics: Statistics
    businesses_by_type: list[BusinessTypeCount]
    recent_businesses: list[BusinessResponse]


class SalesExportFormat(str, Enum):
    """Download formats for the sales list."""
    JSON = "json"
    CSV = "csv"
    XLSX = "xlsx"
