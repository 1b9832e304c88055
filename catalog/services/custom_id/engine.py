from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Callable

from ...utils.timezone_utils import TimezoneUtils
from .elements import RandomSource, RenderContext, render
from .errors import CorruptTemplate
from .patterns import build_pattern, matches_pattern
from .sequence import SequenceResolver
from .store import CustomIdStore
from .template import DEFAULT_MAX_WIDTH, DEFAULT_TEMPLATE, CustomIdTemplate, parse_template

__all__ = ["CustomIdGenerator"]

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CustomIdGenerator:
    """Generates and validates per-inventory custom item identifiers."""

    def __init__(
        self,
        store: CustomIdStore,
        *,
        rng: RandomSource | None = None,
        clock: Clock | None = None,
        max_width: int = DEFAULT_MAX_WIDTH,
    ):
        self.store = store
        self.rng = rng if rng is not None else random.SystemRandom()
        self.clock = clock or TimezoneUtils.utc_now
        self.max_width = max_width
        self.sequence = SequenceResolver(store)

    @classmethod
    def from_app(cls, store: CustomIdStore | None = None, app=None) -> "CustomIdGenerator":
        """Build a generator configured from the Flask app config."""
        from flask import current_app

        from .sqlalchemy_store import SQLAlchemyCustomIdStore

        config = (app or current_app).config
        return cls(
            store or SQLAlchemyCustomIdStore(),
            max_width=config.get("CUSTOM_ID_MAX_WIDTH", DEFAULT_MAX_WIDTH),
        )

    async def load_template(self, inventory_id: str) -> CustomIdTemplate | None:
        """Stored template for the inventory, or ``None`` when none is configured."""
        document = await self.store.get_template_document(inventory_id)
        return parse_template(document)

    async def generate(self, inventory_id: str) -> str:
        logger.debug("Generating custom ID for inventory %s.", inventory_id)
        try:
            template = await self.load_template(inventory_id)
        except CorruptTemplate:
            logger.error("Invalid custom ID format stored for inventory %s.", inventory_id, exc_info=True)
            raise
        if template is None:
            template = DEFAULT_TEMPLATE

        ordinal = None
        if template.uses_sequence:
            ordinal = await self.sequence.next_ordinal(inventory_id)

        ctx = RenderContext(rng=self.rng, now=self.clock(), ordinal=ordinal, max_width=self.max_width)
        try:
            custom_id = "".join(render(element, ctx) for element in template.elements)
        except CorruptTemplate:
            logger.error(
                "Custom ID format for inventory %s could not be rendered.", inventory_id, exc_info=True
            )
            raise
        logger.info(
            "Generated custom ID %r for inventory %s from %s element(s).",
            custom_id,
            inventory_id,
            len(template),
        )
        return custom_id

    def build_pattern(self, template: CustomIdTemplate) -> str:
        return build_pattern(template, max_width=self.max_width)

    async def validate(
        self,
        candidate: str | None,
        inventory_id: str,
        excluded_item_id: str | None = None,
    ) -> bool:
        if candidate is None or not candidate.strip():
            logger.warning("Validation failed: Custom ID is empty for inventory %s.", inventory_id)
            return False

        if await self.store.item_identifier_exists(inventory_id, candidate, excluded_item_id):
            logger.warning(
                "Validation failed: Custom ID %r is a duplicate for inventory %s.",
                candidate,
                inventory_id,
            )
            return False

        try:
            template = await self.load_template(inventory_id)
            if template is None:
                return True
            pattern = self.build_pattern(template)
        except CorruptTemplate:
            logger.error(
                "Failed to read custom ID format for inventory %s. Data is likely corrupted.",
                inventory_id,
                exc_info=True,
            )
            return False

        if not matches_pattern(pattern, candidate):
            logger.warning(
                "Validation failed: Custom ID %r does not match the required format %s.",
                candidate,
                pattern,
            )
            return False
        return True
