from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from flask import current_app

from ..extensions import db
from ..models import Inventory
from .custom_id import (
    DEFAULT_TEMPLATE_DOCUMENT,
    CorruptTemplate,
    InventoryNotFound,
    check_template,
    parse_template,
    serialize_template,
)
from .custom_id.template import DEFAULT_MAX_WIDTH

logger = logging.getLogger(__name__)

FormatInput = str | Mapping[str, Any] | None


class InventoryService:
    """Inventory lookups and custom ID format management."""

    @staticmethod
    def get_inventory(inventory_id: str) -> Inventory:
        inventory = db.session.get(Inventory, inventory_id)
        if inventory is None:
            logger.warning("Inventory with ID %s not found.", inventory_id)
            raise InventoryNotFound(inventory_id)
        return inventory

    @staticmethod
    def normalize_custom_id_format(document: FormatInput) -> str | None:
        """
        Check a submitted format and return its canonical stored form.

        ``None`` (or a blank string) means "no format configured". Anything else
        must parse, hold at least one element and pass the write-time checks.
        """
        if isinstance(document, Mapping):
            document = json.dumps(document)
        template = parse_template(document)
        if template is None:
            return None
        check_template(template, max_width=_max_width())
        return serialize_template(template)

    @staticmethod
    def process_custom_id_format(document: FormatInput) -> str:
        """Format stored for a new inventory; falls back to a single UUID element."""
        normalized = InventoryService.normalize_custom_id_format(document)
        return normalized if normalized is not None else DEFAULT_TEMPLATE_DOCUMENT

    @staticmethod
    def create_inventory(title: str, *, description: str | None = None, custom_id_format: FormatInput = None) -> Inventory:
        if not title or not title.strip():
            raise ValueError("Inventory title is required.")

        inventory = Inventory(
            title=title.strip(),
            description=description,
            custom_id_format=InventoryService.process_custom_id_format(custom_id_format),
        )
        db.session.add(inventory)
        db.session.commit()
        logger.info("Inventory %s created with custom ID format %s.", inventory.id, inventory.custom_id_format)
        return inventory

    @staticmethod
    def update_custom_id_format(inventory_id: str, document: FormatInput) -> Inventory:
        inventory = InventoryService.get_inventory(inventory_id)
        try:
            normalized = InventoryService.normalize_custom_id_format(document)
        except CorruptTemplate as exc:
            logger.warning("Rejected custom ID format for inventory %s: %s", inventory_id, exc)
            raise

        inventory.custom_id_format = normalized
        db.session.commit()
        if normalized is None:
            logger.info("Custom ID format cleared for inventory %s.", inventory_id)
        else:
            logger.info("Custom ID format for inventory %s updated to %s.", inventory_id, normalized)
        return inventory


def _max_width() -> int:
    return current_app.config.get("CUSTOM_ID_MAX_WIDTH", DEFAULT_MAX_WIDTH)
