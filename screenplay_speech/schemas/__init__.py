"""Versioned schema loaders and serializers."""

from screenplay_speech.schemas.elements_v1 import (
    dump_element_document,
    load_element_document,
    validate_element_document,
)
from screenplay_speech.schemas.items_v1 import canonical_json_bytes, dump_items, load_items

__all__ = [
    "load_element_document",
    "dump_element_document",
    "validate_element_document",
    "canonical_json_bytes",
    "dump_items",
    "load_items",
]
