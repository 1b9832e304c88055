from __future__ import annotations

__all__ = [
    "CustomIdError",
    "InventoryNotFound",
    "CorruptTemplate",
    "UnknownElementKind",
    "CustomIdConflict",
]


class CustomIdError(RuntimeError):
    """Base exception for custom identifier generation and validation."""


class InventoryNotFound(CustomIdError, LookupError):
    def __init__(self, inventory_id):
        super().__init__(f"Inventory {inventory_id} not found.")
        self.inventory_id = inventory_id


class CorruptTemplate(CustomIdError, ValueError):
    """Stored custom ID format could not be turned into a usable template."""


class UnknownElementKind(CustomIdError):
    def __init__(self, kind):
        super().__init__(f"Unknown ID element type: {kind!r}")
        self.kind = kind


class CustomIdConflict(CustomIdError):
    """Storage rejected an identifier that already exists in the inventory."""

    def __init__(self, inventory_id, custom_id: str):
        super().__init__(
            f"Custom ID {custom_id!r} already exists in inventory {inventory_id}."
        )
        self.inventory_id = inventory_id
        self.custom_id = custom_id
