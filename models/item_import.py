"""
Schemas for item import results.

ImportedItem keeps a fixed set of recognized fields plus every other
source key as pydantic "extra" data, so nothing from the pasted
definition is lost on the way to storage.
"""

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator
from typing import Any, Optional, Union


class ImportedItem(BaseModel):
    """
    One item recovered from pasted content.

    Required: id (key it was found under), nombre (display name)
    Optional: recognized inventory fields; any other key is kept as extra
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Key the item was found under")
    nombre: str = Field(..., description="Display name")
    label: Optional[str] = None
    weight: Optional[Union[int, float]] = None
    stack: Optional[bool] = None
    close: Optional[bool] = None
    degrade: Optional[Union[int, float]] = Field(None, description="Minutes until degraded")
    decay: Optional[bool] = None
    type: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    _source_fields: dict[str, Any] = PrivateAttr(default_factory=dict)

    @field_validator(
        "label", "weight", "stack", "close", "degrade", "decay",
        "type", "description", "image",
        mode="wrap"
    )
    @classmethod
    def off_type_as_unset(cls, v: Any, handler) -> Any:
        """
        A recognized field with an unusable value is left unset.

        The raw value stays in the source fields and is exported as is.
        """
        try:
            return handler(v)
        except ValidationError:
            return None

    @field_validator("id", "nombre")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """id and nombre can never be empty."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @classmethod
    def from_source(cls, item_id: str, nombre: str, fields: dict[str, Any]) -> "ImportedItem":
        """Build an item from the element's own fields plus its id and name."""
        item = cls.model_validate({**fields, "id": item_id, "nombre": nombre})
        item._source_fields = dict(fields)
        return item

    @property
    def source_fields(self) -> dict[str, Any]:
        """The element's fields exactly as parsed, in source order."""
        return dict(self._source_fields)

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Source keys outside the recognized set."""
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        """Source fields in source order, with id and nombre applied."""
        return {**self._source_fields, "id": self.id, "nombre": self.nombre}


class ImportResult(BaseModel):
    """Outcome of processing pasted content."""

    success: bool = False
    items: list[ImportedItem] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ItemImportRequest(BaseModel):
    """Pasted content to import into the store."""

    content: str = Field(..., description="JSON, JavaScript object or Lua table text")
    negocio_id: Optional[int] = Field(
        None,
        description="Business to attach items to (defaults to the first business)"
    )


class ItemImportPreviewRequest(BaseModel):
    """Pasted content to analyze without storing anything."""

    content: str
