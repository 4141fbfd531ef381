"""Tests for item_store/repository.py — InMemoryItemRepository."""
from __future__ import annotations

import threading

from item_store.repository import InMemoryItemRepository, ItemRepository
from screenplay_speech.speech.models import SpeakableItem, ToneHint


def _item(order_index: int, document_id: str = "doc_001") -> SpeakableItem:
    return SpeakableItem(
        order_index=order_index,
        document_id=document_id,
        source_element_id=f"e{order_index}",
        source_element_type="Action",
        text="x",
        rule_version="1.0",
        tone_hint=ToneHint.narrative,
    )


class TestInMemoryItemRepository:

    def test_satisfies_repository_protocol(self):
        assert isinstance(InMemoryItemRepository(), ItemRepository)

    def test_commit_appends_batch(self):
        repo = InMemoryItemRepository()
        repo.commit([_item(0), _item(1)])
        repo.commit([_item(2)])
        assert [item.order_index for item in repo.items()] == [0, 1, 2]
        assert repo.commit_count == 2

    def test_items_returns_copy(self):
        repo = InMemoryItemRepository()
        repo.commit([_item(0)])
        repo.items().clear()
        assert len(repo.items()) == 1

    def test_items_for_sorts_by_order_index(self):
        repo = InMemoryItemRepository()
        repo.commit([_item(5), _item(1, document_id="doc_002")])
        repo.commit([_item(2)])
        assert [item.order_index for item in repo.items_for("doc_001")] == [2, 5]

    def test_clear_document_counts_removed(self):
        repo = InMemoryItemRepository()
        repo.commit([_item(0), _item(1), _item(0, document_id="doc_002")])
        assert repo.clear_document("doc_001") == 2
        assert [item.document_id for item in repo.items()] == ["doc_002"]

    def test_concurrent_commits_keep_every_item(self):
        repo = InMemoryItemRepository()

        def worker(offset: int) -> None:
            for i in range(50):
                repo.commit([_item(offset + i)])

        threads = [threading.Thread(target=worker, args=(n * 100,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(repo.items()) == 200
        assert repo.commit_count == 200
