"""Custom item identifier generation and validation."""

from .engine import CustomIdGenerator
from .errors import (
    CorruptTemplate,
    CustomIdConflict,
    CustomIdError,
    InventoryNotFound,
    UnknownElementKind,
)
from .patterns import build_pattern
from .store import CustomIdStore
from .template import (
    DEFAULT_TEMPLATE,
    DEFAULT_TEMPLATE_DOCUMENT,
    CustomIdTemplate,
    ElementKind,
    IdElement,
    check_template,
    parse_template,
    serialize_template,
)

__all__ = [
    "CustomIdGenerator",
    "CustomIdStore",
    "CustomIdTemplate",
    "ElementKind",
    "IdElement",
    "DEFAULT_TEMPLATE",
    "DEFAULT_TEMPLATE_DOCUMENT",
    "build_pattern",
    "check_template",
    "parse_template",
    "serialize_template",
    "CustomIdError",
    "InventoryNotFound",
    "CorruptTemplate",
    "UnknownElementKind",
    "CustomIdConflict",
]
