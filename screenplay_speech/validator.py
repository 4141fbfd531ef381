"""Element document rule validator (validate-elements command)."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List

from screenplay_speech.speech.models import ElementType

_VALID_ELEMENT_TYPES = frozenset(t.value for t in ElementType)
_HEADING_FIELDS = ("lighting", "location", "time_of_day")


def validate_element_document_rules(data: dict) -> List[str]:
    """Validate *data* against ElementDocument rules.

    Returns a list of human-readable error strings; empty list means valid.
    Does NOT raise.
    """
    errors: List[str] = []

    if data.get("schema_id") != "ElementDocument":
        errors.append(f"schema_id must be 'ElementDocument', got {data.get('schema_id')!r}")

    if not data.get("schema_version"):
        errors.append("schema_version is required")

    document_id = data.get("document_id")
    if not isinstance(document_id, str) or not document_id.strip():
        errors.append("document_id is required")

    elements = data.get("elements")
    if not isinstance(elements, list):
        errors.append("elements must be a list")
        return errors

    for i, element in enumerate(elements):
        if not isinstance(element, dict):
            errors.append(f"elements[{i}] must be an object")
            continue
        element_type = element.get("element_type")
        if element_type not in _VALID_ELEMENT_TYPES:
            errors.append(
                f"elements[{i}].element_type must be one of "
                f"{sorted(_VALID_ELEMENT_TYPES)}, got {element_type!r}"
            )
            continue
        if not isinstance(element.get("text", ""), str):
            errors.append(f"elements[{i}].text must be a string")
        if element_type != ElementType.SCENE_HEADING.value:
            present = [f for f in _HEADING_FIELDS if element.get(f) is not None]
            if present:
                errors.append(
                    f"elements[{i}] {element_type!r} element has scene-heading fields {present}"
                )

    return errors


def validate_element_document_file(path: Path) -> List[str]:
    """Load JSON from *path* and run validate_element_document_rules().

    Raises:
        ValueError: if the file is missing or contains invalid JSON.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"Element document not found: {path}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("Element document must be a JSON object")

    return validate_element_document_rules(data)
