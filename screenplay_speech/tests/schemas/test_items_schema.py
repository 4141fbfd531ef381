"""Schema-level tests for items_v1: export envelope, canonical bytes, contract."""
from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from screenplay_speech.contract_validate import validate_items_document
from screenplay_speech.schemas.items_v1 import (
    canonical_json_bytes,
    dump_items,
    items_document,
    load_items,
)
from screenplay_speech.speech.models import SpeakableItem, ToneHint


def _item(order_index: int, **overrides) -> SpeakableItem:
    fields = dict(
        order_index=order_index,
        document_id="doc_001",
        source_element_id=f"e{order_index}",
        source_element_type="Action",
        scene_id="s1",
        text=f"Line {order_index}.",
        rule_version="1.0",
        tone_hint=ToneHint.narrative,
    )
    fields.update(overrides)
    return SpeakableItem(**fields)


class TestItemsDocument:
    def test_envelope_fields(self):
        doc = items_document("doc_001", [_item(0)])
        assert doc["schema_id"] == "SpeakableItems"
        assert doc["schema_version"] == "1.0.0"
        assert doc["document_id"] == "doc_001"

    def test_items_sorted_by_order_index(self):
        doc = items_document("doc_001", [_item(4), _item(1), _item(2)])
        assert [entry["order_index"] for entry in doc["items"]] == [1, 2, 4]

    def test_enums_dumped_as_values(self):
        entry = items_document("doc_001", [_item(0)])["items"][0]
        assert entry["tone_hint"] == "narrative"
        assert entry["status"] == "text_generated"


class TestDumpItems:
    def test_sorted_keys(self):
        parsed = json.loads(dump_items("doc_001", [_item(0)]))
        assert list(parsed) == sorted(parsed)
        assert list(parsed["items"][0]) == sorted(parsed["items"][0])

    def test_input_order_does_not_change_bytes(self):
        a = canonical_json_bytes("doc_001", [_item(0), _item(3)])
        b = canonical_json_bytes("doc_001", [_item(3), _item(0)])
        assert a == b

    def test_canonical_bytes_match_dump(self):
        items = [_item(0), _item(1)]
        assert canonical_json_bytes("doc_001", items) == dump_items("doc_001", items).encode("utf-8")


class TestLoadItems:
    def test_load_from_path(self, tmp_path: Path):
        items = [
            _item(0),
            _item(
                2,
                source_element_type="Dialogue",
                text="John says: Hi.",
                speaker_canonical="john",
                speaker_raw="JOHN",
                includes_speaker_announcement=True,
                tone_hint=ToneHint.character,
            ),
        ]
        p = tmp_path / "items.json"
        p.write_text(dump_items("doc_001", items), encoding="utf-8")
        assert load_items(p) == items

    def test_load_empty_export(self):
        assert load_items({"schema_id": "SpeakableItems", "items": []}) == []


class TestItemsContract:
    def test_export_conforms(self):
        validate_items_document(items_document("doc_001", [_item(0), _item(1)]))

    def test_empty_export_conforms(self):
        validate_items_document(items_document("doc_001", []))

    def test_unknown_item_field_rejected(self):
        doc = items_document("doc_001", [_item(0)])
        doc["items"][0]["voice"] = "alloy"
        with pytest.raises(jsonschema.ValidationError):
            validate_items_document(doc)

    def test_negative_order_index_rejected(self):
        doc = items_document("doc_001", [_item(0)])
        doc["items"][0]["order_index"] = -1
        with pytest.raises(jsonschema.ValidationError):
            validate_items_document(doc)
