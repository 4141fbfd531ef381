"""Screenplay elements → speakable items (speech logic package)."""

from screenplay_speech.speech.models import (
    Element,
    ElementDocument,
    ElementType,
    ProcessingStatus,
    SpeakableItem,
    ToneHint,
)
from screenplay_speech.speech.normalizer import CharacterNormalizer, normalize_character
from screenplay_speech.speech.processor import process_elements, scan_step
from screenplay_speech.speech.rules import (
    DEFAULT_RULE_VERSION,
    RULE_SETS,
    SpeechRules,
    SpeechRulesV1_0,
    get_rule_set,
)
from screenplay_speech.speech.scene_context import SceneContext

__all__ = [
    "CharacterNormalizer",
    "DEFAULT_RULE_VERSION",
    "Element",
    "ElementDocument",
    "ElementType",
    "ProcessingStatus",
    "RULE_SETS",
    "SceneContext",
    "SpeakableItem",
    "SpeechRules",
    "SpeechRulesV1_0",
    "ToneHint",
    "get_rule_set",
    "normalize_character",
    "process_elements",
    "scan_step",
]
