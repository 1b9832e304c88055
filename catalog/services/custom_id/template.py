"""Custom ID template model.

Synopsis:
Parse, serialize and check the per-inventory document that describes how item
identifiers are assembled.

Glossary:
- Template: Ordered, immutable tuple of elements.
- Element: One typed piece of an identifier (fixed text, random token,
  sequence ordinal, timestamp, UUID).
- Length spec: ``D<n>`` (decimal digits) or ``X<n>`` (hex characters) of
  fixed width ``n``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from .date_format import format_datetime
from .errors import CorruptTemplate

__all__ = [
    "ElementKind",
    "IdElement",
    "CustomIdTemplate",
    "DEFAULT_TEMPLATE",
    "DEFAULT_TEMPLATE_DOCUMENT",
    "DEFAULT_MAX_WIDTH",
    "parse_template",
    "serialize_template",
    "parse_length_spec",
    "check_template",
]

DEFAULT_MAX_WIDTH = 64
_WIDTH_DIGITS = re.compile(r"[0-9]+")
_LENGTH_PREFIXES = ("D", "X")
_PROBE_MOMENT = datetime(2000, 1, 1, tzinfo=timezone.utc)


class ElementKind(str, Enum):
    """Element type tags exactly as they appear in stored documents."""

    FIXED_TEXT = "FixedText"
    RANDOM = "Random"
    SEQUENCE = "Sequence"
    DATE_TIME = "DateTime"
    UUID = "Guid"

    @classmethod
    def from_tag(cls, tag: str) -> "ElementKind":
        lowered = tag.strip().lower()
        for kind in cls:
            if kind.value.lower() == lowered:
                return kind
        raise CorruptTemplate(f"Unknown element type {tag!r} in custom ID format.")


@dataclass(frozen=True)
class IdElement:
    kind: ElementKind
    value: str | None = None
    format: str | None = None

    @classmethod
    def fixed_text(cls, value: str) -> "IdElement":
        if not value:
            raise CorruptTemplate("FixedText elements require a literal value.")
        return cls(ElementKind.FIXED_TEXT, value=value)

    @classmethod
    def random(cls, format: str | None = None) -> "IdElement":
        return cls(ElementKind.RANDOM, format=format)

    @classmethod
    def sequence(cls, format: str | None = None) -> "IdElement":
        return cls(ElementKind.SEQUENCE, format=format)

    @classmethod
    def date_time(cls, format: str | None = None) -> "IdElement":
        return cls(ElementKind.DATE_TIME, format=format)

    @classmethod
    def uuid(cls) -> "IdElement":
        return cls(ElementKind.UUID)

    def to_document(self) -> dict[str, str]:
        kind = self.kind.value if isinstance(self.kind, ElementKind) else str(self.kind)
        payload = {"Type": kind}
        # Only FixedText carries a literal; other kinds ignore it.
        if self.kind is ElementKind.FIXED_TEXT and self.value is not None:
            payload["Value"] = self.value
        if self.format is not None:
            payload["Format"] = self.format
        return payload


@dataclass(frozen=True)
class CustomIdTemplate:
    elements: tuple[IdElement, ...]

    def __post_init__(self):
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    @classmethod
    def of(cls, *elements: IdElement) -> "CustomIdTemplate":
        return cls(tuple(elements))

    def __iter__(self):
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def uses_sequence(self) -> bool:
        return any(element.kind is ElementKind.SEQUENCE for element in self.elements)

    def to_document(self) -> dict[str, list[dict[str, str]]]:
        return {"Elements": [element.to_document() for element in self.elements]}


DEFAULT_TEMPLATE = CustomIdTemplate.of(IdElement.uuid())
DEFAULT_TEMPLATE_DOCUMENT = '{"Elements":[{"Type":"Guid"}]}'


def serialize_template(template: CustomIdTemplate) -> str:
    return json.dumps(template.to_document(), separators=(",", ":"))


def parse_template(document: str | None) -> CustomIdTemplate | None:
    """
    Parse a stored custom ID format document.

    Returns ``None`` when no format is configured (missing or blank document);
    the caller decides what the default is. Raises ``CorruptTemplate`` when the
    document is present but unparsable or holds no elements.
    """
    if document is None:
        return None
    if not isinstance(document, str):
        raise CorruptTemplate("Custom ID format must be a JSON object or JSON text.")
    if not document.strip():
        return None

    try:
        payload = json.loads(document)
    except (TypeError, ValueError) as exc:
        raise CorruptTemplate(f"Custom ID format is not valid JSON: {exc}") from exc

    if not isinstance(payload, Mapping):
        raise CorruptTemplate("Custom ID format must be a JSON object.")

    raw_elements = _get_ci(payload, "Elements")
    if not isinstance(raw_elements, list):
        raise CorruptTemplate("Custom ID format must contain an 'Elements' list.")

    elements = tuple(_parse_element(index, raw) for index, raw in enumerate(raw_elements))
    if not elements:
        raise CorruptTemplate("Custom ID format contains no elements.")
    return CustomIdTemplate(elements)


def _parse_element(index: int, raw: Any) -> IdElement:
    if not isinstance(raw, Mapping):
        raise CorruptTemplate(f"Element {index} must be a JSON object.")

    tag = _get_ci(raw, "Type")
    if not isinstance(tag, str) or not tag.strip():
        raise CorruptTemplate(f"Element {index} is missing its 'Type'.")
    kind = ElementKind.from_tag(tag)

    value = _optional_text(raw, "Value", index)
    format_spec = _optional_text(raw, "Format", index)
    return IdElement(kind, value=value, format=format_spec)


def _optional_text(raw: Mapping, key: str, index: int) -> str | None:
    value = _get_ci(raw, key)
    if value is None or isinstance(value, str):
        return value
    raise CorruptTemplate(f"Element {index} field '{key}' must be a string.")


def _get_ci(payload: Mapping, key: str) -> Any:
    if key in payload:
        return payload[key]
    lowered = key.lower()
    for candidate, value in payload.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return value
    return None


def parse_length_spec(spec: str | None, *, max_width: int = DEFAULT_MAX_WIDTH) -> tuple[str, int] | None:
    """
    Split a ``D<n>``/``X<n>`` spec into its charset prefix and width.

    Returns ``None`` for an absent spec or an unrecognized prefix. A recognized
    prefix whose width is not an integer in ``1..max_width`` is corrupt.
    """
    if not spec:
        return None
    prefix, digits = spec[0], spec[1:]
    if prefix not in _LENGTH_PREFIXES:
        return None
    if not _WIDTH_DIGITS.fullmatch(digits):
        raise CorruptTemplate(f"Length spec {spec!r} must be {prefix} followed by a width.")
    width = int(digits)
    if not 1 <= width <= max_width:
        raise CorruptTemplate(
            f"Length spec {spec!r} width must be between 1 and {max_width}."
        )
    return prefix, width


def check_template(template: CustomIdTemplate, *, max_width: int = DEFAULT_MAX_WIDTH) -> None:
    """Reject templates an administrator should not be able to save."""
    if not template.elements:
        raise CorruptTemplate("Custom ID format must contain at least one element.")

    for index, element in enumerate(template.elements):
        kind = element.kind
        if kind is ElementKind.FIXED_TEXT:
            if not element.value:
                raise CorruptTemplate(f"Element {index}: FixedText requires a value.")
        elif kind is ElementKind.RANDOM:
            parse_length_spec(element.format, max_width=max_width)
        elif kind is ElementKind.SEQUENCE:
            _check_sequence_spec(index, element.format, max_width)
        elif kind is ElementKind.DATE_TIME:
            format_datetime(_PROBE_MOMENT, element.format)
        elif kind is not ElementKind.UUID:
            raise CorruptTemplate(f"Element {index}: unsupported type {kind!r}.")


def _check_sequence_spec(index: int, spec: str | None, max_width: int) -> None:
    if not spec or spec == "D":
        return
    parsed = parse_length_spec(spec, max_width=max_width)
    if parsed is None:
        raise CorruptTemplate(f"Element {index}: Sequence format must be D or D<n>.")
    prefix, width = parsed
    if prefix != "D":
        raise CorruptTemplate(f"Element {index}: Sequence format must be D or D<n>.")
    # Generation only reads the single character after D.
    if width > 9:
        raise CorruptTemplate(f"Element {index}: Sequence width must be a single digit.")


