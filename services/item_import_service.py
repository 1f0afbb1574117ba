"""
Item import service.

Turns operator-pasted item definitions (JSON, JavaScript object or Lua
table) into ImportedItem records:

    normalize → try_parse → to_items → diagnostics

process_import never raises; every failure ends up in ImportResult.errors.
"""

from typing import Any, Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from models.item_import import ImportedItem, ImportResult
from parsers import normalize, try_parse, ACCEPTED_FORMATS
from utils.text_utils import slugify_identifier

logger = structlog.get_logger(__name__)

# Fields the item form can edit; anything else is carried along untouched
MANAGED_FIELDS = frozenset({
    "id", "nombre", "label", "weight", "stack", "close",
    "degrade", "decay", "description", "image",
})

# Source keys tried, in order, for the display name
NAME_FIELDS = ("label", "name", "nombre")


class ItemImportService:
    """
    Item import logic.

    Stateless; safe to share.
    """

    # ===================
    # ORCHESTRATION
    # ===================

    def process_import(self, content: Optional[str]) -> ImportResult:
        """
        Parse pasted content into items with diagnostics.

        Args:
            content: Raw pasted text

        Returns:
            ImportResult; success only if at least one item was recovered
        """
        result = ImportResult()

        try:
            if not content or not content.strip():
                result.errors.append("Content is empty")
                return result

            clean = normalize(content)
            if not clean:
                result.errors.append("Content is empty")
                return result

            parsed = try_parse(clean)
            if parsed is None:
                result.errors.append(
                    "Unrecognized format. Accepted formats: "
                    + ", ".join(ACCEPTED_FORMATS)
                )
                return result

            items = self.to_items(parsed, warnings=result.warnings)
            if not items:
                result.errors.append("No valid items found")
                return result

            result.items = items
            result.success = True
            self._add_field_info(items, result)

            logger.info(
                "import_processed",
                items=len(items),
                warnings=len(result.warnings)
            )

        except Exception as e:
            logger.error(
                "import_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            result.success = False
            result.items = []
            result.errors.append(f"Error processing content: {e}")

        return result

    # ===================
    # CONVERSION
    # ===================

    def to_items(
        self,
        value: Any,
        warnings: Optional[list[str]] = None
    ) -> list[ImportedItem]:
        """
        Convert a parsed value into items.

        Lists use the element index as id, dicts use the key. Elements
        that are not dicts are skipped. Recognized fields with unusable
        values are left unset on the item; the element itself is kept.

        Args:
            value: Output of try_parse
            warnings: Optional list collecting skip notices

        Returns:
            Items in source order
        """
        if isinstance(value, list):
            entries = [(str(index), element) for index, element in enumerate(value)]
        elif isinstance(value, dict):
            entries = [(str(key), element) for key, element in value.items()]
        else:
            return []

        items = []
        for item_id, element in entries:
            try:
                item = self.convert_single_item(element, item_id)
            except PydanticValidationError as e:
                # only a blank key gets here
                logger.warning(
                    "import_item_skipped",
                    item_id=item_id,
                    error_count=e.error_count()
                )
                if warnings is not None:
                    warnings.append(f"Item '{item_id}' skipped: empty key")
                continue

            if item is not None:
                items.append(item)

        return items

    def convert_single_item(self, data: Any, item_id: str) -> Optional[ImportedItem]:
        """
        Convert one parsed element into an item, keeping every field.

        Args:
            data: Parsed element
            item_id: Key or index it was found under

        Returns:
            ImportedItem, or None if data is not a dict

        Raises:
            pydantic.ValidationError: If item_id is blank
        """
        if not isinstance(data, dict):
            return None

        fields = {str(key): value for key, value in data.items()}
        return ImportedItem.from_source(item_id, self._pick_name(fields, item_id), fields)

    def _pick_name(self, fields: dict[str, Any], item_id: str) -> str:
        for key in NAME_FIELDS:
            value = fields.get(key)
            if value is None or isinstance(value, (dict, list)):
                continue
            name = str(value)
            if name.strip():
                return name
        return item_id

    def _add_field_info(self, items: list[ImportedItem], result: ImportResult) -> None:
        all_fields: dict[str, None] = {}
        for item in items:
            all_fields.update(dict.fromkeys(item.to_dict()))

        preserved = [name for name in all_fields if name not in MANAGED_FIELDS]

        if preserved:
            result.warnings.append(
                f"Preserved {len(preserved)} additional fields: {', '.join(preserved)}"
            )
            result.warnings.append(
                "Additional fields will be kept intact; only the fields managed "
                "by the system can be edited"
            )

        result.warnings.append(
            f"Imported {len(items)} items with {len(all_fields)} fields in total"
        )

    # ===================
    # UTILITY METHODS
    # ===================

    def validate_item(self, item: ImportedItem) -> tuple[bool, list[str]]:
        """
        Check an item before it is saved.

        Returns:
            (valid, errors)
        """
        errors = []

        if not item.nombre or not item.nombre.strip():
            errors.append("Item name is required")

        if not item.id or not item.id.strip():
            errors.append("Item id is required")

        return len(errors) == 0, errors

    def generate_item_id(self, nombre: str) -> str:
        """
        Derive an export identifier from a display name.

        "Hamburguesa Clásica" → "hamburguesa_clasica"
        """
        return slugify_identifier(nombre)


# Singleton instance for convenience
_item_import_service: Optional[ItemImportService] = None


def get_item_import_service() -> ItemImportService:
    """Get or create ItemImportService instance."""
    global _item_import_service
    if _item_import_service is None:
        _item_import_service = ItemImportService()
    return _item_import_service
