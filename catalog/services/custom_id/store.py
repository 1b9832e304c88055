from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["CustomIdStore"]


@runtime_checkable
class CustomIdStore(Protocol):
    """Storage lookups the custom ID engine depends on."""

    async def get_item_count(self, inventory_id: str) -> int:
        """Current number of items in the inventory."""
        ...

    async def item_identifier_exists(
        self,
        inventory_id: str,
        candidate: str,
        excluded_item_id: str | None = None,
    ) -> bool:
        """Whether another item in the inventory already uses ``candidate``."""
        ...

    async def get_template_document(self, inventory_id: str) -> str | None:
        """Raw stored format document; raises ``InventoryNotFound`` for unknown inventories."""
        ...
