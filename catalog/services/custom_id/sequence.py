from __future__ import annotations

import logging

from .store import CustomIdStore

__all__ = ["SequenceResolver"]

logger = logging.getLogger(__name__)


class SequenceResolver:
    """
    Next ordinal for Sequence elements: current item count plus one.

    The count read and the eventual insert are not atomic, so concurrent
    creations in one inventory can compute the same ordinal. The unique index
    on (inventory_id, custom_id) rejects the second insert.
    """

    def __init__(self, store: CustomIdStore):
        self.store = store

    async def next_ordinal(self, inventory_id: str) -> int:
        count = await self.store.get_item_count(inventory_id)
        ordinal = (count or 0) + 1
        logger.debug("Resolved sequence ordinal %s for inventory %s", ordinal, inventory_id)
        return ordinal
