"""
Item service for CRUD, bulk import and code export.

Import runs pasted content through ItemImportService and stores one item
per recovered definition, keeping the original fields as metadata so
export reproduces them.
"""

from datetime import datetime, timezone
from typing import Any, Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from models.item import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemType,
    ItemPreviewRequest,
    ItemCounts,
    ItemImportResponse,
    ItemCodeResponse,
)
from models.item_import import ImportedItem
from repositories import Repository, get_repository, ITEMS_TABLE
from services.business_service import BusinessService, get_business_service, DEFAULT_USER
from services.item_import_service import ItemImportService, get_item_import_service
from services.item_code_service import ItemCodeService, get_item_code_service
from services.webhook_service import WebhookService, get_webhook_service
from exceptions import (
    AppError,
    ItemNotFoundError,
    ItemImportError,
    NoBusinessAvailableError,
)
from utils.text_utils import matches_search

logger = structlog.get_logger(__name__)


class ItemService:
    """
    Item management.

    Every item belongs to a business. Items created from the form get an
    original_id derived from their name; imported items keep the key
    they were found under.
    """

    def __init__(
        self,
        repository: Optional[Repository] = None,
        businesses: Optional[BusinessService] = None,
        importer: Optional[ItemImportService] = None,
        code: Optional[ItemCodeService] = None,
        webhooks: Optional[WebhookService] = None
    ):
        self.repository = repository or get_repository(ITEMS_TABLE)
        self.businesses = businesses or get_business_service()
        self.importer = importer or get_item_import_service()
        self.code = code or get_item_code_service()
        self.webhooks = webhooks or get_webhook_service()

    # ===================
    # QUERIES
    # ===================

    def get_all(
        self,
        search: Optional[str] = None,
        negocio_id: Optional[int] = None,
        tipo: Optional[ItemType] = None
    ) -> list[ItemResponse]:
        """
        Get items, optionally filtered.

        Args:
            search: Matches nombre or label (case and accent-insensitive)
            negocio_id: Owning business
            tipo: comestible / otros

        Returns:
            Items ordered by id
        """
        items = [ItemResponse.model_validate(row) for row in self.repository.list_all()]

        if search:
            items = [i for i in items if matches_search(search, i.nombre, i.label)]
        if negocio_id is not None:
            items = [i for i in items if i.negocio_id == negocio_id]
        if tipo:
            items = [i for i in items if i.tipo == tipo]

        return items

    def get_by_business(self, negocio_id: int) -> list[ItemResponse]:
        """Items of one business."""
        return self.get_all(negocio_id=negocio_id)

    def get_by_id(self, item_id: int) -> ItemResponse:
        """
        Get a single item.

        Raises:
            ItemNotFoundError: If the id is unknown
        """
        row = self.repository.get(item_id)
        if row is None:
            raise ItemNotFoundError(item_id)
        return ItemResponse.model_validate(row)

    def get_counts(self) -> ItemCounts:
        """Totals by tipo plus how many items came from an import."""
        items = self.get_all()
        return ItemCounts(
            total=len(items),
            comestible=sum(1 for i in items if i.tipo == ItemType.COMESTIBLE),
            otros=sum(1 for i in items if i.tipo == ItemType.OTROS),
            imported=sum(1 for i in items if i.metadata),
        )

    def count(self) -> int:
        return self.repository.count()

    # ===================
    # WRITES
    # ===================

    def _insert(self, data: ItemCreate) -> ItemResponse:
        row = data.model_dump(mode="json")
        if data.tipo != ItemType.COMESTIBLE:
            row["vencimiento_horas"] = None
        row["original_id"] = data.original_id or self.importer.generate_item_id(data.nombre) or None
        row["fecha_creacion"] = datetime.now(timezone.utc).isoformat()

        return ItemResponse.model_validate(self.repository.create(row))

    def create(self, data: ItemCreate, usuario: str = DEFAULT_USER) -> ItemResponse:
        """
        Create an item and notify item_creado.

        vencimiento_horas only applies to comestible items and is cleared
        otherwise.

        Raises:
            BusinessNotFoundError: If negocio_id is unknown
        """
        business = self.businesses.get_by_id(data.negocio_id)

        logger.info("creating_item", nombre=data.nombre, negocio_id=data.negocio_id)

        item = self._insert(data)
        logger.info("item_created", item_id=item.id, original_id=item.original_id)

        self.webhooks.notify("item_creado", {
            "item": item.model_dump(mode="json"),
            "negocio": business.nombre,
            "usuario": usuario,
        })
        return item

    def update(self, item_id: int, data: ItemUpdate) -> ItemResponse:
        """
        Update an item. Only provided fields change.

        metadata and original_id are kept as they are.

        Raises:
            ItemNotFoundError: If the id is unknown
            BusinessNotFoundError: If a new negocio_id is unknown
        """
        current = self.get_by_id(item_id)
        updates = data.model_dump(exclude_unset=True, mode="json")

        if not updates:
            return current

        if updates.get("negocio_id") is not None:
            self.businesses.get_by_id(updates["negocio_id"])

        tipo = updates.get("tipo") or current.tipo.value
        if tipo != ItemType.COMESTIBLE.value:
            updates["vencimiento_horas"] = None

        row = self.repository.update(item_id, updates)
        if row is None:
            raise ItemNotFoundError(item_id)

        logger.info("item_updated", item_id=item_id, fields=list(updates))
        return ItemResponse.model_validate(row)

    def delete(self, item_id: int) -> None:
        """
        Delete an item.

        Raises:
            ItemNotFoundError: If the id is unknown
        """
        if not self.repository.delete(item_id):
            raise ItemNotFoundError(item_id)
        logger.info("item_deleted", item_id=item_id)

    # ===================
    # IMPORT
    # ===================

    def _to_create(self, imported: ImportedItem, negocio_id: int) -> ItemCreate:
        """Stored form of an imported item; unset flags stay unset."""
        return ItemCreate(
            nombre=imported.nombre,
            negocio_id=negocio_id,
            tipo=ItemType.OTROS,
            imagen=imported.image or "",
            label=imported.label or imported.nombre,
            weight=imported.weight,
            stack=imported.stack,
            close=imported.close,
            degrade=imported.degrade,
            decay=imported.decay,
            description=imported.description,
            original_id=imported.id,
            metadata=imported.source_fields,
        )

    def import_items(
        self,
        content: str,
        negocio_id: Optional[int] = None,
        usuario: str = DEFAULT_USER
    ) -> ItemImportResponse:
        """
        Parse pasted content and store every recovered item.

        Items are assigned to negocio_id, or to the first business if not
        given. Items that fail to store are counted and reported; the
        rest are kept. One summary item_creado notification is sent.

        Raises:
            ItemImportError: If nothing could be parsed
            NoBusinessAvailableError: If there is no business to assign to
            BusinessNotFoundError: If negocio_id is unknown
        """
        result = self.importer.process_import(content)
        if not result.success:
            raise ItemImportError(result.errors, result.warnings)

        if negocio_id is not None:
            business = self.businesses.get_by_id(negocio_id)
        else:
            business = self.businesses.get_first()
            if business is None:
                raise NoBusinessAvailableError()

        created: list[ItemResponse] = []
        errors: list[str] = []

        for imported in result.items:
            try:
                created.append(self._insert(self._to_create(imported, business.id)))
            except (PydanticValidationError, AppError) as e:
                logger.warning("item_import_failed", item_id=imported.id, error=str(e))
                errors.append(f"Item '{imported.id}' could not be imported: {e}")

        logger.info(
            "items_imported",
            negocio_id=business.id,
            created=len(created),
            failed=len(errors)
        )

        if created:
            self.webhooks.notify("item_creado", {
                "item": {"nombre": f"{len(created)} items importados"},
                "negocio": business.nombre,
                "usuario": usuario,
            })

        return ItemImportResponse(
            created=len(created),
            failed=len(errors),
            negocio_id=business.id,
            items=created,
            errors=errors,
            warnings=result.warnings,
        )

    # ===================
    # CODE EXPORT
    # ===================

    def export_code(
        self,
        search: Optional[str] = None,
        negocio_id: Optional[int] = None,
        tipo: Optional[ItemType] = None
    ) -> ItemCodeResponse:
        """Item table for the items matching the filters, in id order."""
        items = self.get_all(search=search, negocio_id=negocio_id, tipo=tipo)
        return ItemCodeResponse(
            code=self.code.generate_multiple_items_code(items),
            count=len(items),
        )

    def get_item_code(self, item_id: int) -> ItemCodeResponse:
        """Table entry for one stored item."""
        item = self.get_by_id(item_id)
        return ItemCodeResponse(code=self.code.generate_item_code(item), count=1)

    def preview_code(
        self,
        data: ItemPreviewRequest,
        item_id: Optional[int] = None
    ) -> ItemCodeResponse:
        """
        Table entry for unsaved form contents.

        When editing (item_id given) the stored metadata and original_id
        are used, as they will be after saving.
        """
        record: dict[str, Any] = data.model_dump(exclude_none=True)

        if item_id is not None:
            current = self.get_by_id(item_id)
            record["metadata"] = current.metadata
            record["original_id"] = current.original_id or record.get("original_id")

        if not record.get("original_id"):
            record["original_id"] = self.importer.generate_item_id(
                record.get("nombre") or "new_item"
            )

        return ItemCodeResponse(code=self.code.generate_item_code(record), count=1)


# Singleton instance
_item_service: Optional[ItemService] = None


def get_item_service() -> ItemService:
    """Get or create item service instance."""
    global _item_service
    if _item_service is None:
        _item_service = ItemService()
    return _item_service
