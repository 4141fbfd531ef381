"""Background generation jobs: state machine, checkpoints, cancellation."""

from screenplay_speech.tasks.cancellation import CancellationToken
from screenplay_speech.tasks.job import GenerationJob
from screenplay_speech.tasks.manager import TaskManager
from screenplay_speech.tasks.state import JobSnapshot, JobState, TERMINAL_STATES

__all__ = [
    "CancellationToken",
    "GenerationJob",
    "JobSnapshot",
    "JobState",
    "TERMINAL_STATES",
    "TaskManager",
]
