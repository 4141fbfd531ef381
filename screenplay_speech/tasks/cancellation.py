"""Cooperative cancellation."""
from __future__ import annotations

import threading


class CancellationToken:
    """Thread-safe flag set by an observer and polled by the job.

    cancel() never blocks; the job notices at its next element boundary.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
