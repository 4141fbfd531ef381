"""
file_store.py: Filesystem item repository (one file per checkpoint).

Layout under <base_dir>/<document_id>/:

    checkpoints/
        0001.items.json   ← immutable once written; one per committed batch
        0002.items.json
        ...

Each commit writes exactly one checkpoint file via item_io.save_batch, which
moves a fully written temporary file into place, so a batch is either
entirely on disk or absent.  Loading a document replays its checkpoints in
sequence order.
"""

from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import List, Sequence

from screenplay_speech.speech.models import SpeakableItem

from .item_io import load_batch, save_batch

_CHECKPOINT_SUFFIX = ".items.json"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_document_id(document_id: str) -> None:
    if (
        not document_id
        or document_id == "."
        or ".." in document_id
        or "/" in document_id
        or "\\" in document_id
    ):
        raise ValueError(f"Invalid document_id for the item store: {document_id!r}")


def _document_dir(base_dir: Path, document_id: str) -> Path:
    _check_document_id(document_id)
    return base_dir / document_id


def _checkpoints_dir(base_dir: Path, document_id: str) -> Path:
    return _document_dir(base_dir, document_id) / "checkpoints"


def _checkpoint_filename(seq: int) -> str:
    return f"{seq:04d}{_CHECKPOINT_SUFFIX}"


def _checkpoint_seq(path: Path) -> int:
    return int(path.name[: -len(_CHECKPOINT_SUFFIX)])


def _checkpoint_files(checkpoints_dir: Path) -> List[Path]:
    if not checkpoints_dir.exists():
        return []
    return sorted(checkpoints_dir.glob(f"*{_CHECKPOINT_SUFFIX}"), key=_checkpoint_seq)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class FileItemRepository:
    """ItemRepository that persists each committed batch as a JSON file.

    Args:
        base_dir: Root directory that contains per-document subdirectories.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)
        self._lock = threading.Lock()

    def commit(self, batch: Sequence[SpeakableItem]) -> None:
        """Write *batch* as the next checkpoint of its document.

        Raises:
            ValueError: The batch mixes items from several documents, or its
                        document_id is not a plain directory name.
            FileExistsError: The next checkpoint file already exists
                             (guards against concurrent writers).
            OSError: The checkpoint could not be written.
        """
        items = list(batch)
        if not items:
            return
        document_ids = {item.document_id for item in items}
        if len(document_ids) != 1:
            raise ValueError(
                f"A checkpoint batch must belong to one document, got {sorted(document_ids)}"
            )
        document_id = document_ids.pop()

        with self._lock:
            checkpoints_dir = _checkpoints_dir(self.base_dir, document_id)
            checkpoints_dir.mkdir(parents=True, exist_ok=True)
            existing = _checkpoint_files(checkpoints_dir)
            seq = _checkpoint_seq(existing[-1]) + 1 if existing else 1

            path = checkpoints_dir / _checkpoint_filename(seq)
            if path.exists():
                raise FileExistsError(
                    f"Checkpoint already exists for seq={seq} "
                    f"in document '{document_id}': {path}"
                )
            save_batch(path, items)

    def checkpoint_paths(self, document_id: str) -> List[Path]:
        """Committed checkpoint files of *document_id*, in sequence order."""
        return _checkpoint_files(_checkpoints_dir(self.base_dir, document_id))

    def load_document_items(self, document_id: str) -> List[SpeakableItem]:
        """Replay every checkpoint of *document_id* in sequence order.

        Returns an empty list when nothing has been committed.
        """
        items: List[SpeakableItem] = []
        for path in self.checkpoint_paths(document_id):
            items.extend(load_batch(path))
        return items

    def clear_document(self, document_id: str) -> None:
        """Delete every stored checkpoint of *document_id*."""
        doc_dir = _document_dir(self.base_dir, document_id)
        if doc_dir.exists():
            shutil.rmtree(doc_dir)
