from __future__ import annotations

import re

from .errors import UnknownElementKind
from .template import DEFAULT_MAX_WIDTH, CustomIdTemplate, ElementKind, IdElement, parse_length_spec

__all__ = ["build_pattern", "element_pattern", "matches_pattern", "UUID_PATTERN", "MATCH_FLAGS"]

DIGITS_PATTERN = r"\d+"
UUID_PATTERN = (
    "[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
ANY_PATTERN = ".+"
MATCH_FLAGS = re.IGNORECASE | re.ASCII


def build_pattern(template: CustomIdTemplate, *, max_width: int = DEFAULT_MAX_WIDTH) -> str:
    """
    Derive the anchored validation regex for a template.

    Each element contributes the shape the generator can emit for it, in
    element order.
    """
    body = "".join(element_pattern(element, max_width=max_width) for element in template.elements)
    return f"^{body}$"


def element_pattern(element: IdElement, *, max_width: int = DEFAULT_MAX_WIDTH) -> str:
    kind = element.kind
    if kind is ElementKind.FIXED_TEXT:
        return re.escape(element.value) if element.value else ""
    if kind in (ElementKind.RANDOM, ElementKind.SEQUENCE):
        return _length_pattern(kind, element.format, max_width)
    if kind is ElementKind.DATE_TIME:
        return ANY_PATTERN
    if kind is ElementKind.UUID:
        return UUID_PATTERN
    raise UnknownElementKind(kind)


def _length_pattern(kind: ElementKind, format: str | None, max_width: int) -> str:
    # Looser than the Random generator, which emits "" without a spec.
    if not format:
        return DIGITS_PATTERN
    if kind is ElementKind.SEQUENCE and format == "D":
        return DIGITS_PATTERN

    spec = parse_length_spec(format, max_width=max_width)
    if spec is None:
        # Unrecognized prefix: Random renders "", Sequence renders the bare ordinal.
        return DIGITS_PATTERN if kind is ElementKind.SEQUENCE else ""

    prefix, width = spec
    if prefix == "D":
        return rf"\d{{{width}}}"
    return f"[0-9a-fA-F]{{{width}}}"


def matches_pattern(pattern: str, candidate: str) -> bool:
    return re.fullmatch(pattern, candidate, MATCH_FLAGS) is not None
