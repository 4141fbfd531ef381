"""Tests for the validate-elements command (rules validator + CLI)."""
from __future__ import annotations

import copy
import json
import subprocess
import sys
from pathlib import Path

import pytest

from screenplay_speech.validator import (
    validate_element_document_file,
    validate_element_document_rules,
)

_VALID = {
    "schema_id": "ElementDocument",
    "schema_version": "1.0.0",
    "document_id": "doc_001",
    "elements": [
        {
            "element_type": "Scene Heading",
            "text": "INT. COFFEE SHOP - DAY",
            "lighting": "INT",
            "location": "COFFEE SHOP",
            "time_of_day": "DAY",
        },
        {"element_type": "Character", "text": "JOHN"},
        {"element_type": "Dialogue", "text": "Hi."},
    ],
}


def _cli_cmd():
    return [sys.executable, "-c", "from screenplay_speech.cli import main; main()"]


@pytest.fixture
def valid_document_path(tmp_path: Path) -> Path:
    p = tmp_path / "elements.json"
    p.write_text(json.dumps(_VALID), encoding="utf-8")
    return p


class TestValidateElementRules:

    def test_valid_document_passes(self):
        assert validate_element_document_rules(_VALID) == []

    def test_empty_element_list_passes(self):
        assert validate_element_document_rules({**_VALID, "elements": []}) == []

    def test_wrong_schema_id_fails(self):
        assert validate_element_document_rules({**_VALID, "schema_id": "Script"})

    def test_missing_schema_version_fails(self):
        bad = {**_VALID}
        del bad["schema_version"]
        assert validate_element_document_rules(bad)

    def test_blank_document_id_fails(self):
        assert validate_element_document_rules({**_VALID, "document_id": "  "})

    def test_elements_not_a_list_fails(self):
        errors = validate_element_document_rules({**_VALID, "elements": {}})
        assert errors == ["elements must be a list"]

    def test_unknown_element_type_fails(self):
        bad = copy.deepcopy(_VALID)
        bad["elements"][1]["element_type"] = "Lyrics"
        errors = validate_element_document_rules(bad)
        assert len(errors) == 1
        assert errors[0].startswith("elements[1].element_type")

    def test_heading_fields_on_action_fail(self):
        bad = copy.deepcopy(_VALID)
        bad["elements"].append({"element_type": "Action", "text": "x", "lighting": "INT"})
        assert validate_element_document_rules(bad)

    def test_non_string_text_fails(self):
        bad = copy.deepcopy(_VALID)
        bad["elements"][2]["text"] = 42
        assert validate_element_document_rules(bad)

    def test_non_object_element_fails(self):
        bad = copy.deepcopy(_VALID)
        bad["elements"].append("Action")
        assert validate_element_document_rules(bad) == ["elements[3] must be an object"]

    def test_deterministic(self):
        bad = {**_VALID, "schema_id": "Wrong"}
        assert validate_element_document_rules(bad) == validate_element_document_rules(bad)


class TestValidateElementFile:

    def test_valid_file_returns_empty(self, valid_document_path: Path):
        assert validate_element_document_file(valid_document_path) == []

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ValueError):
            validate_element_document_file(tmp_path / "no_such.json")

    def test_invalid_json_raises(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json}", encoding="utf-8")
        with pytest.raises(ValueError):
            validate_element_document_file(bad)

    def test_non_object_raises(self, tmp_path: Path):
        bad = tmp_path / "list.json"
        bad.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            validate_element_document_file(bad)


class TestCLIValidateElements:
    """End-to-end CLI tests — verify output and exit codes."""

    def _run(self, *args: str):
        return subprocess.run([*_cli_cmd(), *args], capture_output=True, text=True)

    def test_cli_valid_document_exits_0(self, valid_document_path: Path):
        r = self._run("validate-elements", "--elements", str(valid_document_path))
        assert r.returncode == 0
        assert r.stdout.strip() == "OK: ElementDocument is valid"

    def test_cli_invalid_document_exits_1(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({**_VALID, "schema_id": "WRONG"}), encoding="utf-8")
        r = self._run("validate-elements", "--elements", str(bad))
        assert r.returncode == 1
        assert r.stdout.splitlines()[0] == "ERROR: invalid ElementDocument"

    def test_cli_missing_file_exits_1(self, tmp_path: Path):
        r = self._run("validate-elements", "--elements", str(tmp_path / "ghost.json"))
        assert r.returncode == 1
        assert r.stdout.startswith("ERROR: Element document not found")
