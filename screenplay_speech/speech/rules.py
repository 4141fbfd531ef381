"""Versioned speech logic rules.

A rule set turns one element, or one Character/Parenthetical/Dialogue run,
into zero or more SpeakableItems.  Every emitted item carries the rule set's
version tag so stored output can be audited against the rules that produced
it.

Rule sets are looked up by version string in RULE_SETS rather than chosen by
subclassing; add a new version by registering another SpeechRules
implementation.  All entry points are pure apart from the SceneContext
passed to process_dialogue_block.
"""
from __future__ import annotations

from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Protocol, Sequence, Tuple

from screenplay_speech.speech.models import Element, ElementType, SpeakableItem, ToneHint
from screenplay_speech.speech.normalizer import CharacterNormalizer
from screenplay_speech.speech.scene_context import SceneContext

_UNKNOWN_SOURCE = "unknown"

_LIGHTING_NAMES: Dict[str, str] = {
    "INT": "Interior",
    "EXT": "Exterior",
}

_HEADING_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("INT.", "Interior."),
    ("EXT.", "Exterior."),
)

NON_SPEAKABLE_TYPES: FrozenSet[ElementType] = frozenset({
    ElementType.PARENTHETICAL,
    ElementType.TRANSITION,
    ElementType.NOTE,
    ElementType.BONEYARD,
    ElementType.SYNOPSIS,
    ElementType.SECTION_HEADING,
    ElementType.PAGE_BREAK,
})


class SpeechRules(Protocol):
    """Interface every rule version implements."""

    version: str

    def process_scene_heading(
        self, element: Element, order_index: int, document_id: str
    ) -> Optional[SpeakableItem]:
        ...

    def process_dialogue_block(
        self,
        start_index: int,
        elements: Sequence[Element],
        scene_context: SceneContext,
        document_id: str,
    ) -> Tuple[List[SpeakableItem], int]:
        ...

    def process_single_element(
        self, element: Element, order_index: int, document_id: str
    ) -> Optional[SpeakableItem]:
        ...


def _source_id(element: Element) -> str:
    return element.element_id or element.scene_id or _UNKNOWN_SOURCE


class SpeechRulesV1_0:
    """Speech logic rules, version 1.0.

    - Scene headings are spoken with INT/EXT expanded.
    - A dialogue block becomes one utterance; the speaker is announced
      ("JOHN says: ...") only on their first block in the scene.
    - Action lines are spoken verbatim.
    - Parentheticals, transitions and other structural markers are silent.
    """

    version = "1.0"
    announcement_format = "{speaker} says:"

    def __init__(self, aliases: Optional[Mapping[str, str]] = None) -> None:
        self.normalizer = CharacterNormalizer(aliases)

    # ── Scene headings ────────────────────────────────────────────────────

    def process_scene_heading(
        self, element: Element, order_index: int, document_id: str
    ) -> Optional[SpeakableItem]:
        if element.lighting is not None and element.location is not None:
            lighting = _LIGHTING_NAMES.get(element.lighting, element.lighting)
            time_of_day = element.time_of_day or ""
            text = f"{lighting}. {element.location}. {time_of_day}."
        else:
            text = element.text
            for old, new in _HEADING_REPLACEMENTS:
                text = text.replace(old, new)

        return SpeakableItem(
            order_index=order_index,
            document_id=document_id,
            source_element_id=_source_id(element),
            source_element_type=ElementType.SCENE_HEADING.value,
            scene_id=element.scene_id,
            text=text,
            rule_version=self.version,
            includes_speaker_announcement=False,
            tone_hint=ToneHint.narrative,
        )

    # ── Dialogue blocks ───────────────────────────────────────────────────

    def process_dialogue_block(
        self,
        start_index: int,
        elements: Sequence[Element],
        scene_context: SceneContext,
        document_id: str,
    ) -> Tuple[List[SpeakableItem], int]:
        """Group Character + optional Parenthetical + Dialogue lines.

        Returns (items, consumed) where consumed counts the character cue,
        the skipped parenthetical (if any) and every dialogue line read.
        A block without dialogue lines yields no item and leaves the scene
        context untouched.
        """
        index = start_index
        if index >= len(elements) or elements[index].element_type != ElementType.CHARACTER:
            return [], 1

        character = elements[index]
        raw_name = character.text
        canonical = self.normalizer.normalize(raw_name)
        index += 1

        # At most one parenthetical is skipped; it is never spoken.
        if index < len(elements) and elements[index].element_type == ElementType.PARENTHETICAL:
            index += 1

        lines: List[str] = []
        while index < len(elements) and elements[index].element_type == ElementType.DIALOGUE:
            lines.append(elements[index].text)
            index += 1

        if not lines:
            return [], index - start_index

        utterance = " ".join(lines)
        is_first = not scene_context.has_spoken(canonical)
        if is_first:
            announcement = self.announcement_format.format(speaker=raw_name)
            text = f"{announcement} {utterance}"
        else:
            text = utterance

        item = SpeakableItem(
            order_index=start_index,
            document_id=document_id,
            source_element_id=_source_id(character),
            source_element_type=ElementType.DIALOGUE.value,
            scene_id=scene_context.scene_id,
            text=text,
            speaker_canonical=canonical,
            speaker_raw=raw_name,
            rule_version=self.version,
            includes_speaker_announcement=is_first,
            tone_hint=ToneHint.character,
        )
        scene_context.mark_spoken(canonical)
        return [item], index - start_index

    # ── Everything else ───────────────────────────────────────────────────

    def process_single_element(
        self, element: Element, order_index: int, document_id: str
    ) -> Optional[SpeakableItem]:
        if element.element_type in NON_SPEAKABLE_TYPES:
            return None
        # Only action lines are spoken in v1.0.
        if element.element_type != ElementType.ACTION:
            return None

        return SpeakableItem(
            order_index=order_index,
            document_id=document_id,
            source_element_id=_source_id(element),
            source_element_type=element.element_type.value,
            scene_id=element.scene_id,
            text=element.text,
            rule_version=self.version,
            includes_speaker_announcement=False,
            tone_hint=ToneHint.narrative,
        )


# ── Registry ──────────────────────────────────────────────────────────────────


RULE_SETS: Dict[str, Callable[..., SpeechRules]] = {
    SpeechRulesV1_0.version: SpeechRulesV1_0,
}

DEFAULT_RULE_VERSION: str = SpeechRulesV1_0.version


def get_rule_set(
    version: str = DEFAULT_RULE_VERSION,
    aliases: Optional[Mapping[str, str]] = None,
) -> SpeechRules:
    """Instantiate the rule set registered under *version*.

    Raises:
        ValueError: no rule set is registered for *version*.
    """
    try:
        factory = RULE_SETS[version]
    except KeyError:
        raise ValueError(
            f"Unknown rule version {version!r}; known versions: {sorted(RULE_SETS)}"
        ) from None
    return factory(aliases=aliases)
