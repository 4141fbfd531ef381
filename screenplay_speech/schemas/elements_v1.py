"""ElementDocument schema v1.0.0: load, dump, validate.

Canonical JSON (sort_keys=True) ensures byte-identical serialization of
identical documents regardless of Python dict insertion order.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from screenplay_speech.speech.models import ElementDocument

SCHEMA_VERSION = "1.0.0"


def load_element_document(source: Union[str, bytes, dict, Path]) -> ElementDocument:
    """Parse an ElementDocument from JSON string, bytes, dict, or file Path.

    Raises:
        ValidationError: data does not conform to the ElementDocument schema.
        FileNotFoundError: Path does not exist.
    """
    if isinstance(source, Path):
        data = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, (str, bytes)):
        data = json.loads(source)
    else:
        data = source
    return ElementDocument.model_validate(data)


def dump_element_document(document: ElementDocument, *, indent: int = 2) -> str:
    """Serialize an ElementDocument to canonical JSON (sort_keys=True, indent=2)."""
    raw = json.loads(document.model_dump_json())
    return json.dumps(raw, sort_keys=True, indent=indent, ensure_ascii=False)


def validate_element_document(data: dict) -> List[str]:
    """Validate a raw dict against the ElementDocument model.

    Returns a list of human-readable error strings (empty list = valid).
    Does not raise.
    """
    try:
        ElementDocument.model_validate(data)
        return []
    except ValidationError as exc:
        return [f"{e['loc']}: {e['msg']}" for e in exc.errors()]
