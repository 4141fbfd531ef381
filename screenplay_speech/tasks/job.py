"""Checkpointed, cancellable speakable-item generation job.

Public entry point
------------------
    GenerationJob(elements, repository, document_id, config).run() -> JobSnapshot

State machine::

    queued ──► running ──► completed
       │          ├──────► failed      (the element source or a repository commit raised)
       └──────────┴──────► cancelled   (cancellation token set)

All three end states are terminal.  The job owns its state exclusively;
observers read ``job.snapshot`` (or the convenience properties) from any
thread and call ``job.cancel()`` to request a stop.

Checkpoint semantics
--------------------
- Every ``checkpoint_interval`` processed elements the buffered items are
  committed as one atomic batch, then the buffer is cleared.
- On normal completion the remaining buffer is committed.
- A failed commit ends the job in ``failed``; items buffered since the last
  successful checkpoint are dropped.
- Cancellation ends the job in ``cancelled`` without a final commit; only
  items from earlier checkpoints are persisted.
"""
from __future__ import annotations

import threading
import uuid
from typing import Iterable, List, Optional

from loguru import logger

from item_store.repository import ItemRepository
from screenplay_speech.config import JobConfig
from screenplay_speech.speech.models import Element, SpeakableItem
from screenplay_speech.speech.processor import scan_step
from screenplay_speech.speech.rules import SpeechRules, get_rule_set
from screenplay_speech.speech.scene_context import SceneContext
from screenplay_speech.tasks.cancellation import CancellationToken
from screenplay_speech.tasks.state import JobSnapshot, JobState

DEFAULT_JOB_NAME = "Generate Speakable Items"


class GenerationJob:
    """One linear pass over a document's elements.

    Args:
        elements:     Ordered element source; materialised once when run.
        repository:   Destination for checkpoint batches.
        document_id:  Stamped on every emitted item.
        config:       Rule version, checkpoint interval and aliases.
        rules:        Explicit rule set; overrides ``config.rule_version``.
        cancellation: Shared token; a private one is created when omitted.
    """

    def __init__(
        self,
        elements: Iterable[Element],
        repository: ItemRepository,
        document_id: str,
        config: Optional[JobConfig] = None,
        *,
        name: str = DEFAULT_JOB_NAME,
        job_id: Optional[str] = None,
        rules: Optional[SpeechRules] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self.config = config if config is not None else JobConfig()
        self.document_id = document_id
        self.repository = repository
        self.rules = (
            rules
            if rules is not None
            else get_rule_set(self.config.rule_version, aliases=self.config.aliases)
        )
        self.cancellation = cancellation if cancellation is not None else CancellationToken()
        self._elements = elements
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._snapshot = JobSnapshot(job_id=job_id or uuid.uuid4().hex, name=name)

    # ── Observation ───────────────────────────────────────────────────────

    @property
    def snapshot(self) -> JobSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def job_id(self) -> str:
        return self._snapshot.job_id

    @property
    def name(self) -> str:
        return self._snapshot.name

    @property
    def state(self) -> JobState:
        return self.snapshot.state

    @property
    def current_step(self) -> int:
        return self.snapshot.current_step

    @property
    def total_steps(self) -> int:
        return self.snapshot.total_steps

    @property
    def message(self) -> str:
        return self.snapshot.message

    @property
    def error(self) -> Optional[BaseException]:
        return self.snapshot.error

    def cancel(self) -> None:
        """Request cancellation; ignored once the job is terminal."""
        if self.snapshot.is_terminal:
            return
        self.cancellation.cancel()

    def _publish(self, **changes) -> JobSnapshot:
        with self._lock:
            self._snapshot = self._snapshot.evolve(**changes)
            return self._snapshot

    # ── Execution ─────────────────────────────────────────────────────────

    def start(self) -> threading.Thread:
        """Run the scan on a background thread and return that thread."""
        thread = threading.Thread(
            target=self.run, name=f"generation-job-{self.job_id}", daemon=True
        )
        self._thread = thread
        thread.start()
        return thread

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join the background thread; True once the job is terminal."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.snapshot.is_terminal

    def run(self) -> JobSnapshot:
        """Execute the scan and return the terminal snapshot.

        Element-source errors, commit failures and cancellation are reported
        through the snapshot, never raised.

        Raises:
            RuntimeError: the job has already been run.
        """
        with self._lock:
            if self._snapshot.state != JobState.queued:
                raise RuntimeError(
                    f"job {self._snapshot.job_id} already {self._snapshot.state.value}"
                )
            if self.cancellation.cancelled:
                self._snapshot = self._snapshot.evolve(
                    state=JobState.cancelled, message="Cancelled before start"
                )
                logger.info("job.cancelled job_id={job_id} before start", job_id=self.job_id)
                return self._snapshot
            self._snapshot = self._snapshot.evolve(
                state=JobState.running, message="Loading elements..."
            )

        try:
            elements: List[Element] = list(self._elements)
        except Exception as exc:
            logger.error(
                "job.failed job_id={job_id} while loading elements error={error}",
                job_id=self.job_id,
                error=repr(exc),
            )
            return self._publish(
                state=JobState.failed,
                error=exc,
                message=f"Failed to load elements: {exc}",
            )
        total = len(elements)
        interval = self.config.checkpoint_interval
        self._publish(total_steps=total, current_step=0, message=f"Processing {total} elements...")
        logger.info(
            "job.start job_id={job_id} document_id={document_id} elements={total} "
            "rule_version={version} checkpoint_interval={interval}",
            job_id=self.job_id,
            document_id=self.document_id,
            total=total,
            version=self.rules.version,
            interval=interval,
        )

        buffer: List[SpeakableItem] = []
        context = SceneContext()
        index = 0
        since_checkpoint = 0
        generated = 0

        while index < total:
            if self.cancellation.cancelled:
                return self._cancelled(index, total, len(buffer))

            self._publish(
                current_step=index + 1,
                message=f"Processing element {index + 1} of {total}",
            )
            step = scan_step(elements, index, context, self.rules, self.document_id)
            buffer.extend(step.items)
            generated += len(step.items)
            context = step.scene_context
            index += step.advance
            since_checkpoint += step.advance
            logger.debug(
                "job.step job_id={job_id} index={index} items={count}",
                job_id=self.job_id,
                index=index,
                count=len(step.items),
            )

            if since_checkpoint >= interval:
                if not self._checkpoint(buffer, index, total):
                    return self.snapshot
                buffer = []
                since_checkpoint = 0
                self._publish(message=f"Saved checkpoint at element {index} of {total}")

        if not self._checkpoint(buffer, index, total):
            return self.snapshot

        logger.info(
            "job.completed job_id={job_id} items={generated} elements={total}",
            job_id=self.job_id,
            generated=generated,
            total=total,
        )
        return self._publish(
            state=JobState.completed,
            message=f"Completed: {generated} items generated from {total} elements",
        )

    def _checkpoint(self, batch: List[SpeakableItem], index: int, total: int) -> bool:
        """Commit *batch*; on failure move to ``failed`` and return False."""
        if not batch:
            return True
        try:
            self.repository.commit(list(batch))
        except Exception as exc:
            logger.error(
                "job.checkpoint_failed job_id={job_id} element={index}/{total} error={error}",
                job_id=self.job_id,
                index=index,
                total=total,
                error=repr(exc),
            )
            self._publish(
                state=JobState.failed,
                error=exc,
                message=f"Checkpoint failed at element {index} of {total}: {exc}",
            )
            return False
        logger.info(
            "job.checkpoint job_id={job_id} element={index}/{total} items={count}",
            job_id=self.job_id,
            index=index,
            total=total,
            count=len(batch),
        )
        return True

    def _cancelled(self, index: int, total: int, discarded: int) -> JobSnapshot:
        logger.info(
            "job.cancelled job_id={job_id} element={index}/{total} discarded={discarded}",
            job_id=self.job_id,
            index=index,
            total=total,
            discarded=discarded,
        )
        return self._publish(
            state=JobState.cancelled,
            message=f"Cancelled after processing {index} of {total} elements",
        )
