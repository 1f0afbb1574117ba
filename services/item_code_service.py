"""
Item code service: Lua item tables for the game server.

Serializes stored or imported items as entries of the server's item
table:

    ['hamburguesa_clasica'] = {
            label = 'Hamburguesa Clásica',
            weight = 115,
            stack = true
        }

Fields preserved from import (metadata) are written back verbatim; the
fields the dashboard manages override them. Output is deterministic and
always produced, even for incomplete records.
"""

import re
from collections.abc import Mapping
from typing import Any, Iterable, Optional
import structlog
from pydantic import BaseModel

from models.item_import import ImportedItem
from utils.text_utils import slugify_identifier

logger = structlog.get_logger(__name__)

DEFAULT_ITEM_ID = "new_item"

# Dashboard bookkeeping that never reaches the game server
BOOKKEEPING_FIELDS = frozenset({
    "id", "nombre", "negocio_id", "tipo", "vencimiento_horas",
    "imagen", "fecha_creacion", "original_id", "metadata",
})

LUA_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
DIGITS_ONLY = re.compile(r"^[0-9]+$")

LUA_RESERVED_WORDS = frozenset({
    "and", "break", "do", "else", "elseif", "end", "false", "for",
    "function", "goto", "if", "in", "local", "nil", "not", "or",
    "repeat", "return", "then", "true", "until", "while",
})


def _as_mapping(record: Any) -> dict[str, Any]:
    if isinstance(record, ImportedItem):
        return record.to_dict()
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", exclude_none=True)
    if isinstance(record, Mapping):
        return dict(record)
    raise TypeError(f"Cannot generate code for {type(record).__name__}")


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


# ===================
# LUA FORMATTING
# ===================

def format_lua_string(value: str) -> str:
    """Single-quoted Lua string with escapes."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def format_lua_key(key: str) -> str:
    """Bare identifier when possible, ['key'] otherwise."""
    if LUA_IDENTIFIER.match(key) and key not in LUA_RESERVED_WORDS:
        return key
    return f"[{format_lua_string(key)}]"


def format_lua_scalar(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return format_lua_string(value)
    return format_lua_string(str(value))


def format_lua_value(value: Any, indent_level: int) -> str:
    """
    Format any value; tables are expanded one field per line.

    Args:
        value: Scalar, dict or list
        indent_level: Tabs before the closing brace of a table
    """
    if isinstance(value, Mapping):
        entries = [(format_lua_key(str(k)), v) for k, v in value.items()]
    elif isinstance(value, (list, tuple)):
        entries = [(None, v) for v in value]
    else:
        return format_lua_scalar(value)

    if not entries:
        return "{}"

    tabs = "\t" * indent_level
    inner_tabs = "\t" * (indent_level + 1)

    lines = []
    for key, item in entries:
        rendered = format_lua_value(item, indent_level + 1)
        lines.append(f"{inner_tabs}{key} = {rendered}" if key else f"{inner_tabs}{rendered}")

    return "{\n" + ",\n".join(lines) + f"\n{tabs}}}"


class ItemCodeService:
    """
    Lua code generation for items.

    Pure: no I/O and no state.
    """

    def resolve_item_id(self, record: Any) -> str:
        """
        Pick the table key for a record.

        original_id wins; then a non-numeric text id; otherwise an
        identifier derived from nombre, label or "new_item".
        """
        data = _as_mapping(record)

        original_id = data.get("original_id")
        if original_id:
            return str(original_id)

        item_id = data.get("id")
        if isinstance(item_id, str) and item_id and not DIGITS_ONLY.match(item_id):
            return item_id

        source = data.get("nombre") or data.get("label") or DEFAULT_ITEM_ID
        return slugify_identifier(str(source)) or DEFAULT_ITEM_ID

    def build_item_fields(self, record: Any) -> dict[str, Any]:
        """
        Assemble the fields written for a record.

        Starts from import metadata (or the record's own non-bookkeeping
        fields) and applies the managed-field rules on top.
        """
        data = _as_mapping(record)

        metadata = data.get("metadata")
        if isinstance(metadata, Mapping):
            fields = dict(metadata)
        else:
            fields = {
                key: value
                for key, value in data.items()
                if key not in BOOKKEEPING_FIELDS and value is not None
            }

        label = data.get("label") or data.get("nombre")
        if label:
            fields["label"] = label

        if data.get("weight") is not None:
            fields["weight"] = data["weight"]

        for flag in ("stack", "close", "decay"):
            if data.get(flag) is True:
                fields[flag] = True
            elif data.get(flag) is False:
                fields.pop(flag, None)

        # zero or missing degrade means the item never degrades
        if _is_positive_number(data.get("degrade")):
            fields["degrade"] = data["degrade"]
        else:
            fields.pop("degrade", None)

        if data.get("description"):
            fields["description"] = data["description"]

        if data.get("imagen"):
            fields["image"] = data["imagen"]

        return fields

    def generate_item_code(self, record: Any) -> str:
        """
        Generate one item table entry.

        Args:
            record: Mapping, ItemResponse (any pydantic model) or ImportedItem

        Returns:
            "['<id>'] = { ... }" text
        """
        item_id = self.resolve_item_id(record)
        fields = self.build_item_fields(record)

        code = f"[{format_lua_string(item_id)}] = {{\n"

        lines = [
            f"\t\t{format_lua_key(str(key))} = {format_lua_value(value, 2)}"
            for key, value in fields.items()
        ]
        if lines:
            code += ",\n".join(lines) + "\n"

        code += "\t}"
        return code

    def generate_multiple_items_code(self, records: Iterable[Any]) -> str:
        """
        Generate a complete `return { ... }` item table.

        Entries keep the order of records.
        """
        entries = [f"\t{self.generate_item_code(record)}" for record in records]

        logger.debug("items_code_generated", count=len(entries))

        if not entries:
            return "return {\n\n}"

        return "return {\n\n" + ",\n\n".join(entries) + "\n\n}"


# Singleton instance for convenience
_item_code_service: Optional[ItemCodeService] = None


def get_item_code_service() -> ItemCodeService:
    """Get or create ItemCodeService instance."""
    global _item_code_service
    if _item_code_service is None:
        _item_code_service = ItemCodeService()
    return _item_code_service
