"""Analysis job records and the per-engine job registry."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import JobStateError


class JobStatus(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


_TRANSITIONS = {
    JobStatus.QUEUED: {JobStatus.RUNNING, JobStatus.FAILED, JobStatus.CANCELLED},
    JobStatus.RUNNING: {JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
    JobStatus.CANCELLED: set(),
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class AnalysisJob:
    """Progress record for one analysis run.

    ``progress`` is a percentage that never decreases.
    """

    kind: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: JobStatus = JobStatus.QUEUED
    progress: float = 0.0
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    error: Optional[str] = None
    result: Any = None

    @property
    def is_finished(self) -> bool:
        return not _TRANSITIONS[self.status]

    def _transition(self, new: JobStatus) -> None:
        if new not in _TRANSITIONS[self.status]:
            raise JobStateError(f"Job {self.id}: cannot go from {self.status.value} to {new.value}")
        self.status = new

    def start(self) -> None:
        self._transition(JobStatus.RUNNING)
        self.started_at = _now()

    def advance(self, progress: float) -> None:
        self.progress = max(self.progress, min(100.0, progress))

    def complete(self, result: Any = None) -> None:
        """Mark done. A job cancelled mid-run stays cancelled."""
        if self.status is JobStatus.CANCELLED:
            return
        self._transition(JobStatus.COMPLETED)
        self.advance(100.0)
        self.result = result
        self.completed_at = _now()

    def fail(self, error: str) -> None:
        if self.status is JobStatus.CANCELLED:
            return
        self._transition(JobStatus.FAILED)
        self.error = error
        self.completed_at = _now()

    def cancel(self) -> bool:
        if self.is_finished:
            return False
        self._transition(JobStatus.CANCELLED)
        self.completed_at = _now()
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "status": self.status.value,
            "progress": round(self.progress, 2),
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "error": self.error,
        }


class JobRegistry:
    """Job records owned by one engine.

    Cancelling a job only marks it and drops the record; a rasterization
    loop already in flight keeps running to the end. At most
    ``keep_finished`` completed or failed jobs are kept; the oldest are
    dropped whenever a new job is created.
    """

    def __init__(self, keep_finished: int = 100) -> None:
        self._jobs: Dict[str, AnalysisJob] = {}
        self._lock = threading.Lock()
        self.keep_finished = keep_finished

    def create(self, kind: str) -> AnalysisJob:
        job = AnalysisJob(kind=kind)
        with self._lock:
            self._prune()
            self._jobs[job.id] = job
        return job

    def _prune(self) -> None:
        # Dicts keep insertion order, so the first finished ids are the oldest.
        finished = [job_id for job_id, job in self._jobs.items() if job.is_finished]
        for job_id in finished[: max(len(finished) - self.keep_finished, 0)]:
            del self._jobs[job_id]

    def get(self, job_id: str) -> Optional[AnalysisJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def all(self) -> List[AnalysisJob]:
        with self._lock:
            return list(self._jobs.values())

    def active(self) -> List[AnalysisJob]:
        return [job for job in self.all() if not job.is_finished]

    def cancel(self, job_id: str) -> bool:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None or not job.cancel():
                return False
            del self._jobs[job_id]
        return True

    def clear_finished(self) -> int:
        """Forget completed and failed jobs; returns how many were dropped."""
        with self._lock:
            done = [job_id for job_id, job in self._jobs.items() if job.is_finished]
            for job_id in done:
                del self._jobs[job_id]
        return len(done)
