"""SpeakableItems export schema v1.0.0: dump, load, canonical bytes."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from screenplay_speech.speech.models import SpeakableItem

SCHEMA_ID = "SpeakableItems"
SCHEMA_VERSION = "1.0.0"


def items_document(document_id: str, items: Sequence[SpeakableItem]) -> Dict[str, Any]:
    """Wrap *items* in the exported SpeakableItems envelope, ordered by order_index."""
    ordered = sorted(items, key=lambda item: item.order_index)
    return {
        "schema_id": SCHEMA_ID,
        "schema_version": SCHEMA_VERSION,
        "document_id": document_id,
        "items": [item.model_dump(mode="json") for item in ordered],
    }


def dump_items(document_id: str, items: Sequence[SpeakableItem], *, indent: int = 2) -> str:
    """Serialize items to canonical JSON (sort_keys=True, indent=2)."""
    return json.dumps(
        items_document(document_id, items), sort_keys=True, indent=indent, ensure_ascii=False
    )


def canonical_json_bytes(document_id: str, items: Sequence[SpeakableItem]) -> bytes:
    """Return canonical UTF-8 bytes for an items export.

    Identical algorithm to dump_items() but returns bytes, not str.
    """
    return dump_items(document_id, items).encode("utf-8")


def load_items(source: Union[str, bytes, dict, Path]) -> List[SpeakableItem]:
    """Parse the items of an export from JSON string, bytes, dict, or file Path.

    Raises:
        ValidationError: an entry does not conform to the SpeakableItem model.
        FileNotFoundError: Path does not exist.
    """
    if isinstance(source, Path):
        data = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, (str, bytes)):
        data = json.loads(source)
    else:
        data = source
    return [SpeakableItem.model_validate(entry) for entry in data.get("items", [])]
