"""Job state machine and the progress snapshot published to observers."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class JobState(str, Enum):
    queued = "queued"
    running = "running"
    completed = "completed"
    failed = "failed"
    cancelled = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({JobState.completed, JobState.failed, JobState.cancelled})


@dataclass(frozen=True)
class JobSnapshot:
    """Read-consistent view of a job's progress.

    A job publishes a whole new snapshot on every update, so an observer
    never sees a new state paired with an old step count.
    """

    job_id: str
    name: str
    state: JobState = JobState.queued
    current_step: int = 0
    total_steps: int = 0
    message: str = ""
    error: Optional[BaseException] = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def progress_fraction(self) -> float:
        """Progress in 0.0–1.0; 0.0 until total_steps is known."""
        if self.total_steps <= 0:
            return 0.0
        return min(self.current_step / self.total_steps, 1.0)

    @property
    def progress_percentage(self) -> int:
        return int(self.progress_fraction * 100)

    def evolve(self, **changes) -> "JobSnapshot":
        return replace(self, **changes)
