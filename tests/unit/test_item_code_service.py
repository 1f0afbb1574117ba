"""
Unit tests for ItemCodeService (Lua item table generation).

Run: pytest tests/unit/test_item_code_service.py -v
"""

import pytest

from services.item_code_service import (
    ItemCodeService,
    format_lua_key,
    format_lua_string,
    format_lua_value,
)
from services.item_import_service import ItemImportService
from tests.factories import ItemFactory


@pytest.fixture
def service():
    return ItemCodeService()


# ===================
# FORMATTING HELPERS
# ===================

class TestLuaFormatting:

    def test_string_escapes_quotes_and_newlines(self):
        assert format_lua_string("it's\nnew") == "'it\\'s\\nnew'"

    def test_string_escapes_backslash(self):
        assert format_lua_string("a\\b") == "'a\\\\b'"

    def test_identifier_key_is_bare(self):
        assert format_lua_key("weight") == "weight"

    def test_non_identifier_key_is_bracketed(self):
        assert format_lua_key("my-key") == "['my-key']"
        assert format_lua_key("1") == "['1']"

    @pytest.mark.parametrize("word", ["end", "function", "nil", "true", "and"])
    def test_reserved_word_key_is_bracketed(self, word):
        assert format_lua_key(word) == f"['{word}']"

    def test_scalars(self):
        assert format_lua_value(True, 2) == "true"
        assert format_lua_value(None, 2) == "nil"
        assert format_lua_value(1.0, 2) == "1"
        assert format_lua_value(2.5, 2) == "2.5"

    def test_empty_table(self):
        assert format_lua_value({}, 2) == "{}"
        assert format_lua_value([], 2) == "{}"

    def test_list_is_positional_table(self):
        assert format_lua_value(["a", "b"], 2) == "{\n\t\t\t'a',\n\t\t\t'b'\n\t\t}"


# ===================
# ITEM ID
# ===================

class TestResolveItemId:

    def test_original_id_wins(self, service):
        record = ItemFactory.create(id=7, nombre="Pan", original_id="bread")

        assert service.resolve_item_id(record) == "bread"

    def test_text_id_used(self, service):
        assert service.resolve_item_id({"id": "bandage", "nombre": "Bandage"}) == "bandage"

    def test_numeric_id_uses_name(self, service):
        assert service.resolve_item_id({"id": 5, "nombre": "Pan Dulce"}) == "pan_dulce"

    def test_digit_string_id_uses_name(self, service):
        assert service.resolve_item_id({"id": "0", "nombre": "Hamburguesa Clásica"}) == "hamburguesa_clasica"

    def test_label_when_no_name(self, service):
        assert service.resolve_item_id({"label": "Agua Fría"}) == "agua_fria"

    def test_default_id(self, service):
        assert service.resolve_item_id({}) == "new_item"
        assert service.resolve_item_id({"nombre": "???"}) == "new_item"


# ===================
# SINGLE ITEM CODE
# ===================

class TestGenerateItemCode:

    def test_full_entry_format(self, service):
        record = {
            "original_id": "bandage",
            "label": "Bandage",
            "weight": 115,
            "stack": True,
            "close": False,
            "degrade": 0,
            "description": "Heals",
        }

        code = service.generate_item_code(record)

        assert code == (
            "['bandage'] = {\n"
            "\t\tlabel = 'Bandage',\n"
            "\t\tweight = 115,\n"
            "\t\tstack = true,\n"
            "\t\tdescription = 'Heals'\n"
            "\t}"
        )

    def test_false_flags_omitted_true_flags_written(self, service):
        """stack false is dropped entirely, close true is written."""
        code = service.generate_item_code(
            {"original_id": "phone", "label": "Phone", "stack": False, "close": True}
        )

        assert "stack" not in code
        assert "close = true" in code

    def test_degrade_zero_omitted(self, service):
        code = service.generate_item_code({"original_id": "x", "label": "X", "degrade": 0})

        assert "degrade" not in code

    def test_degrade_positive_written(self, service):
        code = service.generate_item_code({"original_id": "x", "label": "X", "degrade": 30})

        assert "degrade = 30" in code

    def test_nested_fields_expanded(self, service):
        code = service.generate_item_code(
            {"original_id": "x", "client": {"status": ["a", "b"]}}
        )

        assert code == (
            "['x'] = {\n"
            "\t\tclient = {\n"
            "\t\t\tstatus = {\n"
            "\t\t\t\t'a',\n"
            "\t\t\t\t'b'\n"
            "\t\t\t}\n"
            "\t\t}\n"
            "\t}"
        )

    def test_record_without_fields(self, service):
        assert service.generate_item_code({"original_id": "empty"}) == "['empty'] = {\n\t}"

    def test_stored_item_uses_metadata_and_overrides(self, service):
        """Managed fields override metadata; unknown metadata survives."""
        record = ItemFactory.create_imported(
            original_id="water",
            metadata={"label": "Water", "rarity": 2, "degrade": 30},
            label="Agua",
            weight=600,
            degrade=0,
            stack=False,
        )

        code = service.generate_item_code(record)

        assert code == (
            "['water'] = {\n"
            "\t\tlabel = 'Agua',\n"
            "\t\trarity = 2,\n"
            "\t\tweight = 600\n"
            "\t}"
        )

    def test_bookkeeping_fields_not_written(self, service):
        record = ItemFactory.create(
            nombre="Hamburguesa Clásica",
            tipo="comestible",
            vencimiento_horas=24,
            weight=115,
        )

        code = service.generate_item_code(record)

        assert code.startswith("['hamburguesa_clasica'] = {")
        for field in ("negocio_id", "tipo", "vencimiento_horas", "fecha_creacion", "nombre"):
            assert field not in code
        assert "label = 'Hamburguesa Clásica'" in code

    def test_imagen_written_as_image(self, service):
        code = service.generate_item_code(
            {"original_id": "x", "label": "X", "imagen": "https://cdn.example.com/x.png"}
        )

        assert "image = 'https://cdn.example.com/x.png'" in code

    def test_unsupported_record_type(self, service):
        with pytest.raises(TypeError):
            service.generate_item_code(42)


# ===================
# ITEM TABLE
# ===================

class TestGenerateMultipleItemsCode:

    def test_empty_table(self, service):
        assert service.generate_multiple_items_code([]) == "return {\n\n}"

    def test_entries_keep_order(self, service):
        code = service.generate_multiple_items_code([
            {"original_id": "b", "label": "B"},
            {"original_id": "a", "label": "A"},
        ])

        assert code == (
            "return {\n\n"
            "\t['b'] = {\n\t\tlabel = 'B'\n\t},\n\n"
            "\t['a'] = {\n\t\tlabel = 'A'\n\t}\n\n"
            "}"
        )

    def test_import_round_trip_keeps_fields(self, service):
        """Generated code imports back to the same item."""
        # Arrange
        importer = ItemImportService()
        content = (
            "{ water = { label = 'Water', weight = 500, rarity = 2, "
            "client = { status = { thirst = 20 } } } }"
        )
        first = importer.process_import(content)

        # Act
        code = service.generate_multiple_items_code(first.items)
        second = importer.process_import(code)

        # Assert
        assert code == (
            "return {\n\n"
            "\t['water'] = {\n"
            "\t\tlabel = 'Water',\n"
            "\t\tweight = 500,\n"
            "\t\trarity = 2,\n"
            "\t\tclient = {\n"
            "\t\t\tstatus = {\n"
            "\t\t\t\tthirst = 20\n"
            "\t\t\t}\n"
            "\t\t}\n"
            "\t}\n\n"
            "}"
        )
        assert second.success is True
        assert second.items[0].to_dict() == first.items[0].to_dict()
