"""
Sales service for sales listing, dashboard statistics and exports.

Sales are derived from businesses: a sold business with a buyer and a
sale date is one sale.
"""

import csv
import io
import json
from datetime import date, datetime, timezone
from typing import Optional
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side
import structlog

from models.business import BusinessResponse, BusinessStatus, BusinessType
from models.sale import (
    SaleResponse,
    SaleListResponse,
    Statistics,
    BusinessTypeCount,
    DashboardResponse,
    SalesExportFormat,
)
from repositories import Repository, get_repository, ITEMS_TABLE
from services.business_service import BusinessService, get_business_service

logger = structlog.get_logger(__name__)

RECENT_BUSINESSES = 5

EXPORT_COLUMNS = ("ID", "Negocio", "Comprador", "Monto", "Fecha")

MEDIA_TYPES = {
    SalesExportFormat.JSON: "application/json",
    SalesExportFormat.CSV: "text/csv; charset=utf-8",
    SalesExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def to_sale(business: BusinessResponse) -> Optional[SaleResponse]:
    """Sale for a business, or None if it has not been sold."""
    if (
        business.estado != BusinessStatus.VENDIDO
        or not business.comprador_nombre
        or business.fecha_venta is None
    ):
        return None

    return SaleResponse(
        id=business.id,
        negocio_id=business.id,
        negocio_nombre=business.nombre,
        comprador_nombre=business.comprador_nombre,
        comprador_id=business.comprador_id,
        monto=business.monto,
        fecha_venta=business.fecha_venta,
    )


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class SalesService:
    """
    Sales and statistics.

    Read-only over businesses and items.
    """

    def __init__(
        self,
        businesses: Optional[BusinessService] = None,
        items: Optional[Repository] = None
    ):
        self.businesses = businesses or get_business_service()
        self.items = items or get_repository(ITEMS_TABLE)

    def get_sales(self, fecha: Optional[date] = None) -> SaleListResponse:
        """
        Get sales, optionally only those made on one day (UTC).

        Args:
            fecha: Day to filter on

        Returns:
            Sales in business id order with the summed amount
        """
        sales = [
            sale for sale in map(to_sale, self.businesses.get_all())
            if sale is not None
        ]

        if fecha is not None:
            sales = [s for s in sales if _as_utc(s.fecha_venta).date() == fecha]

        return SaleListResponse(
            data=sales,
            total=len(sales),
            monto_total=sum(s.monto for s in sales),
        )

    def get_statistics(self, today: Optional[date] = None) -> Statistics:
        """
        Dashboard counters.

        ventas_mes counts sales dated in the month of `today`
        (current UTC date by default).
        """
        today = today or datetime.now(timezone.utc).date()
        businesses = self.businesses.get_all()

        sales = [s for s in map(to_sale, businesses) if s is not None]
        ventas_mes = sum(
            1 for s in sales
            if (_as_utc(s.fecha_venta).year, _as_utc(s.fecha_venta).month)
            == (today.year, today.month)
        )

        return Statistics(
            total_negocios=len(businesses),
            negocios_vendidos=sum(1 for b in businesses if b.estado == BusinessStatus.VENDIDO),
            negocios_disponibles=sum(1 for b in businesses if b.estado == BusinessStatus.DISPONIBLE),
            monto_total=sum(b.monto for b in businesses),
            ventas_mes=ventas_mes,
            items_totales=self.items.count(),
        )

    def get_dashboard(self, today: Optional[date] = None) -> DashboardResponse:
        """Statistics, businesses per category and the latest businesses."""
        businesses = self.businesses.get_all()

        by_type = [
            BusinessTypeCount(
                tipo=tipo.value,
                count=sum(1 for b in businesses if b.tipo == tipo),
            )
            for tipo in BusinessType
        ]

        recent = sorted(
            businesses,
            key=lambda b: _as_utc(b.fecha_creacion),
            reverse=True
        )[:RECENT_BUSINESSES]

        return DashboardResponse(
            statistics=self.get_statistics(today),
            businesses_by_type=by_type,
            recent_businesses=recent,
        )

    # ===================
    # EXPORT
    # ===================

    def export_sales(
        self,
        export_format: SalesExportFormat,
        fecha: Optional[date] = None
    ) -> tuple[bytes, str, str]:
        """
        Export sales as a downloadable file.

        Args:
            export_format: json, csv or xlsx
            fecha: Same filter as get_sales

        Returns:
            (content, media type, filename)
        """
        sales = self.get_sales(fecha).data
        rows = [
            {
                "id": s.id,
                "negocio": s.negocio_nombre,
                "comprador": s.comprador_nombre,
                "monto": s.monto,
                "fecha": s.fecha_venta.isoformat(),
            }
            for s in sales
        ]

        if export_format == SalesExportFormat.JSON:
            content = json.dumps(rows, ensure_ascii=False, indent=2).encode("utf-8")
        elif export_format == SalesExportFormat.CSV:
            content = self._to_csv(rows)
        else:
            content = self._to_xlsx(rows)

        filename = f"ventas_{datetime.now(timezone.utc).date().isoformat()}.{export_format.value}"

        logger.info("sales_exported", format=export_format.value, rows=len(rows))
        return content, MEDIA_TYPES[export_format], filename

    def _to_csv(self, rows: list[dict]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS)
        for row in rows:
            writer.writerow([row["id"], row["negocio"], row["comprador"], row["monto"], row["fecha"]])
        return buffer.getvalue().encode("utf-8")

    def _to_xlsx(self, rows: list[dict]) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "Ventas"

        bold_font = Font(bold=True)
        thin_border = Border(bottom=Side(style="thin", color="000000"))

        ws.column_dimensions["A"].width = 8
        ws.column_dimensions["B"].width = 30
        ws.column_dimensions["C"].width = 25
        ws.column_dimensions["D"].width = 15
        ws.column_dimensions["E"].width = 22

        ws.append(EXPORT_COLUMNS)
        for cell in ws[1]:
            cell.font = bold_font
            cell.border = thin_border

        for row in rows:
            ws.append([row["id"], row["negocio"], row["comprador"], row["monto"], row["fecha"]])
            ws.cell(row=ws.max_row, column=4).number_format = "#,##0.00"

        output = io.BytesIO()
        wb.save(output)
        return output.getvalue()


# Singleton instance
_sales_service: Optional[SalesService] = None


def get_sales_service() -> SalesService:
    """Get or create sales service instance."""
    global _sales_service
    if _sales_service is None:
        _sales_service = SalesService()
    return _sales_service
