"""Element and SpeakableItem data models: the input and output contracts.

Elements are produced by an external screenplay parser and are never mutated
here.  SpeakableItems are created only by a speech rule set and are
append-only: frozen=True makes any attempt at mutation raise.

extra="ignore" gives forward-compatibility for element sources that attach
additional parser metadata.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Enumerations ──────────────────────────────────────────────────────────────


class ElementType(str, Enum):
    """Screenplay element types (Fountain names)."""

    SCENE_HEADING = "Scene Heading"
    CHARACTER = "Character"
    PARENTHETICAL = "Parenthetical"
    DIALOGUE = "Dialogue"
    ACTION = "Action"
    TRANSITION = "Transition"
    NOTE = "Note"
    BONEYARD = "Boneyard"
    SYNOPSIS = "Synopsis"
    SECTION_HEADING = "Section Heading"
    PAGE_BREAK = "Page Break"


class ToneHint(str, Enum):
    """Delivery hint for narration."""

    narrative = "narrative"  # scene headings, action lines
    character = "character"  # dialogue
    emphasis = "emphasis"
    parenthetical = "parenthetical"


class ProcessingStatus(str, Enum):
    """Downstream narration status of an item."""

    text_generated = "text_generated"
    audio_queued = "audio_queued"
    audio_generating = "audio_generating"
    audio_complete = "audio_complete"
    audio_failed = "audio_failed"


# ── Input ─────────────────────────────────────────────────────────────────────


class Element(BaseModel):
    """One typed unit of a screenplay document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    element_type: ElementType
    text: str = ""
    scene_id: Optional[str] = None
    element_id: Optional[str] = None
    # Structured scene-heading fields, filled by parsers that split
    # "INT. COFFEE SHOP - DAY" into its parts.
    lighting: Optional[str] = None
    location: Optional[str] = None
    time_of_day: Optional[str] = None


class ElementDocument(BaseModel):
    """A parsed screenplay: document identity plus its ordered elements."""

    model_config = ConfigDict(extra="ignore")

    schema_id: str = "ElementDocument"
    schema_version: str = "1.0.0"
    document_id: str
    title: Optional[str] = None
    elements: List[Element] = []


# ── Output ────────────────────────────────────────────────────────────────────


def make_item_id(document_id: str, order_index: int) -> str:
    """Deterministic item ID: "{document_id}_item_{order_index:05d}"."""
    return f"{document_id}_item_{order_index:05d}"


class SpeakableItem(BaseModel):
    """One unit of narration-ready text with provenance and speaker metadata.

    order_index is the index of the source element in the original sequence
    (for dialogue blocks, the index of the Character element), so it is
    strictly increasing in emission order and never reused.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    order_index: int = Field(ge=0)
    document_id: str
    source_element_id: str
    source_element_type: str
    scene_id: Optional[str] = None
    text: str
    speaker_canonical: Optional[str] = None
    speaker_raw: Optional[str] = None
    rule_version: str
    includes_speaker_announcement: bool = False
    tone_hint: ToneHint
    status: ProcessingStatus = ProcessingStatus.text_generated

    @property
    def item_id(self) -> str:
        return make_item_id(self.document_id, self.order_index)
