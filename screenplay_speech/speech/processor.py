"""Element sequence → SpeakableItems.

Public entry points
-------------------
    scan_step(elements, index, scene_context, rules, document_id) -> ScanStep
    process_elements(elements, document_id, rules=...) -> List[SpeakableItem]

scan_step is the single dispatch used both by the one-shot processor below
and by GenerationJob, so a checkpointed job and an in-memory run over the
same elements produce identical items.
"""
from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional, Sequence

from screenplay_speech.speech.models import Element, ElementType, SpeakableItem
from screenplay_speech.speech.rules import SpeechRules, get_rule_set
from screenplay_speech.speech.scene_context import SceneContext


class ScanStep(NamedTuple):
    items: List[SpeakableItem]
    advance: int
    scene_context: SceneContext


def _scene_id_for(element: Element, index: int) -> str:
    return element.scene_id if element.scene_id is not None else f"unknown-{index}"


def scan_step(
    elements: Sequence[Element],
    index: int,
    scene_context: SceneContext,
    rules: SpeechRules,
    document_id: str,
) -> ScanStep:
    """Process the element at *index* and report how far to advance.

    A scene heading returns a fresh SceneContext; callers must use the
    returned context for the next step.  advance is always >= 1.
    """
    element = elements[index]

    if element.element_type == ElementType.SCENE_HEADING:
        context = SceneContext(scene_id=_scene_id_for(element, index))
        item = rules.process_scene_heading(element, index, document_id)
        return ScanStep([item] if item is not None else [], 1, context)

    if element.element_type == ElementType.CHARACTER:
        items, consumed = rules.process_dialogue_block(
            index, elements, scene_context, document_id
        )
        return ScanStep(items, max(consumed, 1), scene_context)

    item = rules.process_single_element(element, index, document_id)
    return ScanStep([item] if item is not None else [], 1, scene_context)


def process_elements(
    elements: Iterable[Element],
    document_id: str,
    rules: Optional[SpeechRules] = None,
) -> List[SpeakableItem]:
    """Run the full scan in memory: no checkpoints, no cancellation."""
    sequence = list(elements)
    active_rules = rules if rules is not None else get_rule_set()
    items: List[SpeakableItem] = []
    context = SceneContext()
    index = 0
    while index < len(sequence):
        step = scan_step(sequence, index, context, active_rules, document_id)
        items.extend(step.items)
        context = step.scene_context
        index += step.advance
    return items
