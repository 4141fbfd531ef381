"""Tests for character cue normalization."""
from __future__ import annotations

import pytest

from screenplay_speech.speech.normalizer import CharacterNormalizer, normalize_character

_CUES = [
    "JOHN",
    "John",
    "JOHN (V.O.)",
    "JOHN (O.S.)",
    "JOHN (CONT'D)",
    "JOHN (V.O.) (CONT'D)",
    "  MARY  ",
    "DR. SMITH (V.O.)",
    "",
    "   ",
    "(V.O.)",
    "ANNA ()",
    "Ünïcode Name (O.C.)",
]


# ── Modifier stripping ─────────────────────────────────────────────────────────


class TestModifierStripping:
    def test_plain_cue_is_lowercased(self):
        assert normalize_character("JOHN") == "john"

    def test_voice_over_and_off_screen_share_key(self):
        keys = {
            normalize_character("JOHN"),
            normalize_character("JOHN (V.O.)"),
            normalize_character("JOHN (O.S.)"),
            normalize_character("John"),
        }
        assert keys == {"john"}

    def test_multiple_modifiers_are_all_stripped(self):
        assert normalize_character("JOHN (V.O.) (CONT'D)") == "john"

    def test_surrounding_whitespace_is_trimmed(self):
        assert normalize_character("  MARY  ") == "mary"

    def test_periods_inside_name_are_kept(self):
        assert normalize_character("DR. SMITH (V.O.)") == "dr. smith"

    def test_empty_input_stays_empty(self):
        assert normalize_character("") == ""
        assert normalize_character("   ") == ""

    def test_modifier_only_cue_becomes_empty(self):
        assert normalize_character("(V.O.)") == ""


# ── Aliases ────────────────────────────────────────────────────────────────────


class TestAliases:
    def test_alias_takes_precedence(self):
        normalizer = CharacterNormalizer({"YOUNG JOHN": "john"})
        assert normalizer.normalize("YOUNG JOHN") == "john"

    def test_alias_value_returned_verbatim(self):
        normalizer = CharacterNormalizer({"BOB": "Robert"})
        assert normalizer.normalize("BOB") == "Robert"

    def test_alias_requires_exact_raw_match(self):
        normalizer = CharacterNormalizer({"YOUNG JOHN": "john"})
        assert normalizer.normalize("Young John") == "young john"
        assert normalizer.normalize("YOUNG JOHN (V.O.)") == "young john"

    def test_alias_table_is_copied(self):
        table = {"A": "x"}
        normalizer = CharacterNormalizer(table)
        table["B"] = "y"
        assert normalizer.normalize("B") == "b"


# ── Idempotence ────────────────────────────────────────────────────────────────


class TestIdempotence:
    @pytest.mark.parametrize("cue", _CUES)
    def test_normalize_twice_equals_once(self, cue: str):
        once = normalize_character(cue)
        assert normalize_character(once) == once

    @pytest.mark.parametrize("cue", _CUES)
    def test_idempotent_with_canonical_aliases(self, cue: str):
        normalizer = CharacterNormalizer({"YOUNG JOHN": "john", "JOHN": "john"})
        once = normalizer.normalize(cue)
        assert normalizer.normalize(once) == once
