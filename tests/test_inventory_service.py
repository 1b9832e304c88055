import json

import pytest

from catalog.extensions import db
from catalog.models import Inventory
from catalog.services.custom_id import DEFAULT_TEMPLATE_DOCUMENT, CorruptTemplate, InventoryNotFound
from catalog.services.inventory_service import InventoryService


SKU_FORMAT = {
    "Elements": [
        {"Type": "FixedText", "Value": "SKU-"},
        {"Type": "Sequence", "Format": "D3"},
    ]
}


def test_create_inventory_defaults_to_uuid_format(app):
    with app.app_context():
        inventory = InventoryService.create_inventory("Tools")

        stored = db.session.get(Inventory, inventory.id)
        assert stored.title == "Tools"
        assert stored.custom_id_format == DEFAULT_TEMPLATE_DOCUMENT


def test_create_inventory_stores_normalized_format(app):
    with app.app_context():
        inventory = InventoryService.create_inventory("Parts", custom_id_format=SKU_FORMAT)

        assert inventory.custom_id_format == (
            '{"Elements":[{"Type":"FixedText","Value":"SKU-"},{"Type":"Sequence","Format":"D3"}]}'
        )


def test_create_inventory_accepts_json_text_with_loose_casing(app):
    with app.app_context():
        inventory = InventoryService.create_inventory(
            "Parts", custom_id_format='{"elements":[{"type":"guid"}]}'
        )

        assert inventory.custom_id_format == DEFAULT_TEMPLATE_DOCUMENT


def test_create_inventory_requires_title(app):
    with app.app_context():
        with pytest.raises(ValueError):
            InventoryService.create_inventory("   ")


def test_create_inventory_rejects_corrupt_format(app):
    with app.app_context():
        with pytest.raises(CorruptTemplate):
            InventoryService.create_inventory("Parts", custom_id_format={"Elements": []})
        assert Inventory.query.count() == 0


def test_update_custom_id_format_replaces_and_clears(app):
    with app.app_context():
        inventory = InventoryService.create_inventory("Parts")

        updated = InventoryService.update_custom_id_format(inventory.id, json.dumps(SKU_FORMAT))
        assert json.loads(updated.custom_id_format) == SKU_FORMAT

        cleared = InventoryService.update_custom_id_format(inventory.id, None)
        assert cleared.custom_id_format is None


def test_update_custom_id_format_rejects_bad_widths_and_keeps_old_value(app):
    with app.app_context():
        inventory = InventoryService.create_inventory("Parts", custom_id_format=SKU_FORMAT)
        before = inventory.custom_id_format

        with pytest.raises(CorruptTemplate):
            InventoryService.update_custom_id_format(
                inventory.id, {"Elements": [{"Type": "Random", "Format": "D0"}]}
            )
        assert db.session.get(Inventory, inventory.id).custom_id_format == before


def test_update_custom_id_format_respects_configured_max_width(app):
    app.config["CUSTOM_ID_MAX_WIDTH"] = 4
    with app.app_context():
        inventory = InventoryService.create_inventory("Parts")

        with pytest.raises(CorruptTemplate):
            InventoryService.update_custom_id_format(
                inventory.id, {"Elements": [{"Type": "Random", "Format": "X5"}]}
            )


def test_get_inventory_missing_raises(app):
    with app.app_context():
        with pytest.raises(InventoryNotFound):
            InventoryService.get_inventory("does-not-exist")
