"""Character cue normalization.

Maps a raw speaker cue such as "JOHN (V.O.)" to the canonical key "john" used
for announcement tracking.  Pure functions with no I/O.
"""
from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

# Matches screenplay modifiers like (V.O.), (O.S.), (CONT'D) with any
# surrounding whitespace; repeated modifiers are each matched.
_MODIFIER_RE = re.compile(r"\s*\([^)]+\)\s*")


class CharacterNormalizer:
    """Normalize speaker cues, consulting a user alias table first.

    Alias values are returned verbatim, so they should already be canonical
    (lower-case, modifier-free) for normalization to stay idempotent.
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None) -> None:
        self.aliases: Dict[str, str] = dict(aliases or {})

    def normalize(self, raw_name: str) -> str:
        alias = self.aliases.get(raw_name)
        if alias is not None:
            return alias
        without_modifiers = _MODIFIER_RE.sub("", raw_name)
        return without_modifiers.strip().lower()


def normalize_character(
    raw_name: str,
    aliases: Optional[Mapping[str, str]] = None,
) -> str:
    """Module-level convenience wrapper around CharacterNormalizer."""
    return CharacterNormalizer(aliases).normalize(raw_name)
