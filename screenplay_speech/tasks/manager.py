"""Caller-owned queue of generation jobs.

A TaskManager is an ordinary object: create one per UI session or service and
pass it around.  Queued jobs run one at a time, in enqueue order.
"""
from __future__ import annotations

import threading
from typing import List, Optional

from loguru import logger

from screenplay_speech.tasks.job import GenerationJob
from screenplay_speech.tasks.state import JobState


class TaskManager:
    def __init__(self) -> None:
        self._jobs: List[GenerationJob] = []
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None
        self._draining = False
        self.running_job: Optional[GenerationJob] = None

    @property
    def jobs(self) -> List[GenerationJob]:
        with self._lock:
            return list(self._jobs)

    def enqueue(self, job: GenerationJob) -> None:
        with self._lock:
            self._jobs.append(job)
        logger.debug("manager.enqueue job_id={job_id}", job_id=job.job_id)

    def get(self, job_id: str) -> Optional[GenerationJob]:
        for job in self.jobs:
            if job.job_id == job_id:
                return job
        return None

    def _first_queued(self) -> Optional[GenerationJob]:
        for job in self._jobs:
            if job.state == JobState.queued:
                return job
        return None

    def _claim_next(self, *, background: bool = False) -> Optional[GenerationJob]:
        """Pick the next queued job and mark it as running_job.

        For the background worker, finding the queue empty also releases the
        worker slot under the same lock, so a job enqueued afterwards starts a
        new worker through run_next().
        """
        with self._lock:
            job = self._first_queued()
            self.running_job = job
            if job is None and background:
                self._draining = False
            return job

    def run_pending(self) -> None:
        """Run every queued job on the calling thread, in order.

        Jobs enqueued while the loop is running are picked up too.
        """
        while True:
            job = self._claim_next()
            if job is None:
                return
            job.run()

    def _drain(self) -> None:
        current = threading.current_thread()
        try:
            while True:
                job = self._claim_next(background=True)
                if job is None:
                    return
                job.run()
        finally:
            with self._lock:
                if self._worker is current:
                    self._draining = False
                    self.running_job = None

    def run_next(self) -> threading.Thread:
        """Process the queue on a background thread.

        If a worker is already draining the queue, that worker is returned
        instead of starting a second one.
        """
        with self._lock:
            if self._draining and self._worker is not None:
                return self._worker
            worker = threading.Thread(
                target=self._drain, name="screenplay-speech-tasks", daemon=True
            )
            self._worker = worker
            self._draining = True
        worker.start()
        return worker

    def wait(self, timeout: Optional[float] = None) -> None:
        worker = self._worker
        if worker is not None:
            worker.join(timeout)

    def cancel(self, job_id: str) -> bool:
        """Cancel the job with *job_id*; False when no such job exists."""
        job = self.get(job_id)
        if job is None:
            return False
        job.cancel()
        return True

    def clear_completed(self) -> None:
        with self._lock:
            self._jobs = [job for job in self._jobs if job.state != JobState.completed]
