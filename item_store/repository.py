"""Item repository interface and the in-memory implementation."""
from __future__ import annotations

import threading
from typing import List, Protocol, Sequence, runtime_checkable

from screenplay_speech.speech.models import SpeakableItem


@runtime_checkable
class ItemRepository(Protocol):
    """Destination for checkpoint batches.

    commit() is an atomic bulk insert: either every item in *batch* is
    stored or none is, and a failure is signalled by raising.
    """

    def commit(self, batch: Sequence[SpeakableItem]) -> None:
        ...


class InMemoryItemRepository:
    """Thread-safe list-backed repository, shared across jobs if needed."""

    def __init__(self) -> None:
        self._items: List[SpeakableItem] = []
        self._lock = threading.Lock()
        self.commit_count = 0

    def commit(self, batch: Sequence[SpeakableItem]) -> None:
        staged = list(batch)
        with self._lock:
            self._items.extend(staged)
            self.commit_count += 1

    def items(self) -> List[SpeakableItem]:
        with self._lock:
            return list(self._items)

    def items_for(self, document_id: str) -> List[SpeakableItem]:
        """Items of one document, in order_index order."""
        with self._lock:
            selected = [item for item in self._items if item.document_id == document_id]
        return sorted(selected, key=lambda item: item.order_index)

    def clear_document(self, document_id: str) -> int:
        """Remove a document's items; returns how many were removed."""
        with self._lock:
            kept = [item for item in self._items if item.document_id != document_id]
            removed = len(self._items) - len(kept)
            self._items = kept
        return removed
