from __future__ import annotations

from ...extensions import db
from ...models import Inventory, Item
from .errors import InventoryNotFound

__all__ = ["SQLAlchemyCustomIdStore"]


class SQLAlchemyCustomIdStore:
    """
    Custom ID store backed by the Flask-SQLAlchemy session of the current app context.

    The coroutines run synchronous queries and block the event loop while they do.
    """

    async def get_item_count(self, inventory_id: str) -> int:
        return Item.query.filter(Item.inventory_id == inventory_id).count() or 0

    async def item_identifier_exists(
        self,
        inventory_id: str,
        candidate: str,
        excluded_item_id: str | None = None,
    ) -> bool:
        query = Item.query.filter(Item.inventory_id == inventory_id, Item.custom_id == candidate)
        if excluded_item_id is not None:
            query = query.filter(Item.id != excluded_item_id)
        return db.session.query(query.exists()).scalar()

    async def get_template_document(self, inventory_id: str) -> str | None:
        inventory = db.session.get(Inventory, inventory_id)
        if inventory is None:
            raise InventoryNotFound(inventory_id)
        return inventory.custom_id_format
