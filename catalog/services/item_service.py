"""Item create/update workflows that assign custom IDs.

Synopsis:
Create items with a freshly generated custom ID and update items with either
a regenerated or a user-supplied, validated custom ID.

Glossary:
- Conflict: The storage unique index on (inventory_id, custom_id) rejected the
  write. Surfaced to the caller, never retried here.
- Version: Optimistic concurrency token compared against the submitted value.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Item
from .custom_id import CustomIdConflict, CustomIdGenerator
from .inventory_service import InventoryService

__all__ = [
    "ItemServiceError",
    "ItemNotFound",
    "ItemVersionConflict",
    "InvalidCustomId",
    "create_item",
    "update_item",
]

logger = logging.getLogger(__name__)


class ItemServiceError(RuntimeError):
    """Base exception for item workflow errors."""


class ItemNotFound(ItemServiceError, LookupError):
    def __init__(self, item_id):
        super().__init__(f"Item with ID {item_id} not found.")
        self.item_id = item_id


class ItemVersionConflict(ItemServiceError):
    """The item was modified by someone else since it was loaded."""


class InvalidCustomId(ItemServiceError, ValueError):
    def __init__(self, custom_id: str):
        super().__init__(f"The custom ID {custom_id!r} is invalid for this inventory.")
        self.custom_id = custom_id


async def create_item(
    inventory_id: str,
    *,
    name: str | None = None,
    generator: CustomIdGenerator | None = None,
) -> Item:
    logger.info("Creating new item for inventory %s.", inventory_id)
    InventoryService.get_inventory(inventory_id)
    generator = generator or CustomIdGenerator.from_app()

    custom_id = await generator.generate(inventory_id)
    item = Item(inventory_id=inventory_id, custom_id=custom_id, name=name, version=0)
    db.session.add(item)
    _commit_or_conflict(inventory_id, custom_id)

    logger.info("New item %s with custom ID %r created in inventory %s.", item.id, custom_id, inventory_id)
    return item


async def update_item(
    item_id: str,
    *,
    version: int,
    custom_id: str | None = None,
    name: str | None = None,
    generator: CustomIdGenerator | None = None,
) -> Item:
    logger.info("Updating item with ID %s.", item_id)
    item = db.session.get(Item, item_id)
    if item is None:
        logger.warning("Update failed: Item %s not found.", item_id)
        raise ItemNotFound(item_id)
    if item.version != version:
        logger.warning("Concurrency conflict occurred for item %s. Version mismatch.", item_id)
        raise ItemVersionConflict(
            "The item has been modified by another user. Please refresh and try again."
        )

    generator = generator or CustomIdGenerator.from_app()
    if custom_id is None or not custom_id.strip():
        new_custom_id = await generator.generate(item.inventory_id)
    elif await generator.validate(custom_id, item.inventory_id, excluded_item_id=item.id):
        new_custom_id = custom_id
    else:
        logger.warning("Update failed for item %s: Invalid custom ID %r.", item_id, custom_id)
        raise InvalidCustomId(custom_id)

    item.custom_id = new_custom_id
    if name is not None:
        item.name = name
    item.version = item.version + 1
    _commit_or_conflict(item.inventory_id, new_custom_id)

    logger.info("Item %s updated with custom ID %r.", item_id, new_custom_id)
    return item


def _commit_or_conflict(inventory_id: str, custom_id: str) -> None:
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning(
            "Custom ID %r was rejected by the unique index for inventory %s.",
            custom_id,
            inventory_id,
        )
        raise CustomIdConflict(inventory_id, custom_id) from exc
