"""
item_io.py: Load and save SpeakableItem batches as JSON.

Batches are written with sorted keys and fixed indentation so that identical
batches always produce byte-identical files (deterministic).
"""

import json
import os
from pathlib import Path
from typing import List, Sequence, Union

from screenplay_speech.speech.models import SpeakableItem


def batch_to_json(batch: Sequence[SpeakableItem]) -> str:
    """Serialize *batch* to canonical JSON text (with trailing newline)."""
    payload = [item.model_dump(mode="json") for item in batch]
    return json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False) + "\n"


def load_batch(path: Union[str, Path]) -> List[SpeakableItem]:
    """Load a batch of SpeakableItems from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        pydantic.ValidationError: If an entry is not a SpeakableItem.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [SpeakableItem.model_validate(entry) for entry in data]


def save_batch(path: Union[str, Path], batch: Sequence[SpeakableItem]) -> None:
    """Atomically write *batch* to *path*.

    The JSON is written to a sibling temporary file and moved into place with
    os.replace, so readers see either no file or the complete batch.
    """
    target = Path(path)
    tmp = target.with_name(target.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(batch_to_json(batch))
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, target)
