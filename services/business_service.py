"""
Business service for CRUD operations.

Writes notify the registered webhooks (negocio_creado, negocio_editado,
venta_realizada).
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from models.business import (
    BusinessCreate,
    BusinessUpdate,
    BusinessResponse,
    BusinessStatus,
    BusinessType,
)
from repositories import Repository, get_repository, BUSINESSES_TABLE
from services.webhook_service import WebhookService, get_webhook_service
from exceptions import BusinessNotFoundError
from utils.text_utils import matches_search

logger = structlog.get_logger(__name__)

DEFAULT_USER = "admin"


class BusinessService:
    """
    Business CRUD.

    Webhooks are notified after the write succeeds; a failed notification
    never fails the write.
    """

    def __init__(
        self,
        repository: Optional[Repository] = None,
        webhooks: Optional[WebhookService] = None
    ):
        self.repository = repository or get_repository(BUSINESSES_TABLE)
        self.webhooks = webhooks or get_webhook_service()

    def get_all(
        self,
        search: Optional[str] = None,
        tipo: Optional[BusinessType] = None,
        estado: Optional[BusinessStatus] = None
    ) -> list[BusinessResponse]:
        """
        Get businesses, optionally filtered.

        Args:
            search: Matches nombre or comprador_nombre (accent-insensitive)
            tipo: Business category
            estado: disponible / vendido

        Returns:
            Businesses ordered by id
        """
        businesses = [BusinessResponse.model_validate(row) for row in self.repository.list_all()]

        if search:
            businesses = [
                b for b in businesses
                if matches_search(search, b.nombre, b.comprador_nombre)
            ]
        if tipo:
            businesses = [b for b in businesses if b.tipo == tipo]
        if estado:
            businesses = [b for b in businesses if b.estado == estado]

        return businesses

    def get_by_id(self, business_id: int) -> BusinessResponse:
        """
        Get a single business.

        Raises:
            BusinessNotFoundError: If the id is unknown
        """
        row = self.repository.get(business_id)
        if row is None:
            raise BusinessNotFoundError(business_id)
        return BusinessResponse.model_validate(row)

    def get_first(self) -> Optional[BusinessResponse]:
        """Lowest-id business, or None if there are none."""
        rows = self.repository.list_all()
        return BusinessResponse.model_validate(rows[0]) if rows else None

    def count(self) -> int:
        return self.repository.count()

    def create(self, data: BusinessCreate, usuario: str = DEFAULT_USER) -> BusinessResponse:
        """
        Create a business and notify negocio_creado.

        Args:
            data: Business fields
            usuario: Who made the change (shown in the notification)
        """
        logger.info("creating_business", nombre=data.nombre, tipo=data.tipo.value)

        row = data.model_dump(mode="json")
        row["fecha_creacion"] = datetime.now(timezone.utc).isoformat()
        if data.estado == BusinessStatus.VENDIDO and data.fecha_venta is None:
            row["fecha_venta"] = row["fecha_creacion"]

        business = BusinessResponse.model_validate(self.repository.create(row))
        logger.info("business_created", business_id=business.id)

        self.webhooks.notify("negocio_creado", {
            "negocio": business.model_dump(mode="json"),
            "usuario": usuario,
        })
        return business

    def update(
        self,
        business_id: int,
        data: BusinessUpdate,
        usuario: str = DEFAULT_USER
    ) -> BusinessResponse:
        """
        Update a business. Only provided fields change.

        Notifies negocio_editado, and venta_realizada when the business
        goes from disponible to vendido with a buyer.

        Raises:
            BusinessNotFoundError: If the id is unknown
        """
        current = self.get_by_id(business_id)
        updates = data.model_dump(exclude_unset=True, mode="json")

        if not updates:
            return current

        becomes_available = updates.get("estado") == BusinessStatus.DISPONIBLE.value
        if becomes_available:
            updates.update(comprador_nombre=None, comprador_id=None, fecha_venta=None)

        is_new_sale = (
            updates.get("estado") == BusinessStatus.VENDIDO.value
            and current.estado != BusinessStatus.VENDIDO
        )
        if is_new_sale and not updates.get("fecha_venta") and not current.fecha_venta:
            updates["fecha_venta"] = datetime.now(timezone.utc).isoformat()

        row = self.repository.update(business_id, updates)
        if row is None:
            raise BusinessNotFoundError(business_id)
        business = BusinessResponse.model_validate(row)

        logger.info("business_updated", business_id=business_id, fields=list(updates))

        self.webhooks.notify("negocio_editado", {
            "negocio": business.model_dump(mode="json"),
            "usuario": usuario,
        })
        if is_new_sale and business.comprador_nombre:
            self.webhooks.notify("venta_realizada", {
                "negocio": business.nombre,
                "comprador": business.comprador_nombre,
                "comprador_id": business.comprador_id,
                "monto": business.monto,
                "usuario": usuario,
            })

        return business

    def delete(self, business_id: int) -> None:
        """
        Delete a business.

        Raises:
            BusinessNotFoundError: If the id is unknown
        """
        if not self.repository.delete(business_id):
            raise BusinessNotFoundError(business_id)
        logger.info("business_deleted", business_id=business_id)


# Singleton instance
_business_service: Optional[BusinessService] = None


def get_business_service() -> BusinessService:
    """Get or create business service instance."""
    global _business_service
    if _business_service is None:
        _business_service = BusinessService()
    return _business_service
