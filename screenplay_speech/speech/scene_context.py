"""Per-scene speaker tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Set


@dataclass
class SceneContext:
    """Which canonical speakers have been announced in the current scene.

    A scene boundary constructs a new instance; contexts are never reset
    or shared between scenes.
    """

    scene_id: str = ""
    spoken: Set[str] = field(default_factory=set)
    last_speaker: Optional[str] = None

    def mark_spoken(self, canonical_key: str) -> None:
        self.spoken.add(canonical_key)
        self.last_speaker = canonical_key

    def has_spoken(self, canonical_key: str) -> bool:
        return canonical_key in self.spoken
