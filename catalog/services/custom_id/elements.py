from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .date_format import format_datetime
from .errors import UnknownElementKind
from .template import DEFAULT_MAX_WIDTH, ElementKind, IdElement, parse_length_spec

__all__ = [
    "RandomSource",
    "RenderContext",
    "render",
    "random_value",
    "sequence_value",
    "random_uuid",
]


class RandomSource(Protocol):
    """Subset of ``random.Random`` the generator draws from."""

    def randrange(self, stop: int) -> int: ...

    def randbytes(self, n: int) -> bytes: ...

    def getrandbits(self, k: int) -> int: ...


@dataclass(frozen=True)
class RenderContext:
    rng: RandomSource
    now: datetime
    ordinal: int | None = None
    max_width: int = DEFAULT_MAX_WIDTH


def render(element: IdElement, ctx: RenderContext) -> str:
    """Render a single template element."""
    kind = element.kind
    if kind is ElementKind.FIXED_TEXT:
        return element.value or ""
    if kind is ElementKind.RANDOM:
        return random_value(element.format, ctx.rng, max_width=ctx.max_width)
    if kind is ElementKind.SEQUENCE:
        if ctx.ordinal is None:
            raise ValueError("Sequence elements require a resolved ordinal.")
        return sequence_value(ctx.ordinal, element.format)
    if kind is ElementKind.DATE_TIME:
        return format_datetime(ctx.now, element.format)
    if kind is ElementKind.UUID:
        return str(random_uuid(ctx.rng))
    raise UnknownElementKind(kind)


def random_value(format: str | None, rng: RandomSource, *, max_width: int = DEFAULT_MAX_WIDTH) -> str:
    spec = parse_length_spec(format, max_width=max_width)
    if spec is None:
        return ""
    prefix, width = spec
    if prefix == "D":
        return str(rng.randrange(10**width)).zfill(width)
    # n bytes -> 2n hex chars, keep the first n.
    return rng.randbytes(width).hex().upper()[:width]


def sequence_value(ordinal: int, format: str | None) -> str:
    if format is None or format == "D":
        return str(ordinal)
    # Only the single character after D is read as the width.
    if format.startswith("D") and len(format) > 1 and format[1] in "0123456789":
        return str(ordinal).zfill(int(format[1]))
    return str(ordinal)


def random_uuid(rng: RandomSource) -> uuid.UUID:
    return uuid.UUID(int=rng.getrandbits(128), version=4)
