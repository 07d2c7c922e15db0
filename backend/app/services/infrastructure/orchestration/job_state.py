"""
Job State Machine - the single generation job and its legal phase changes.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Any, Dict, Optional

from app.core import get_logger
from app.core.exceptions import InvalidTransitionError, JobConflictError
from app.models.generation import GenerationResult
from app.models.status import ErrorKind, JobPhase

logger = get_logger(__name__, component="job_state")

SCRIPTING_PROGRESS = 5

# Forward edges driven by the orchestrator. Failure and reset are handled separately.
TRANSITIONS = {
    JobPhase.SCRIPTING: {JobPhase.MEDIA_SYNTHESIS},
    JobPhase.MEDIA_SYNTHESIS: {JobPhase.ASSEMBLING},
    JobPhase.ASSEMBLING: {JobPhase.COMPLETED, JobPhase.NEEDS_REVIEW},
}


@dataclass
class Job:
    topic: Optional[str] = None
    phase: JobPhase = JobPhase.IDLE
    progress: int = 0
    result: Optional[GenerationResult] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "phase": self.phase.value,
            "progress": self.progress,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "updated_at": self.updated_at,
        }


class JobStateMachine:
    """Owns the one live Job and enforces the phase graph."""

    def __init__(self):
        self._job = Job()
        self._lock = RLock()
        self._claimed = False

    @property
    def phase(self) -> JobPhase:
        return self._job.phase

    def snapshot(self) -> Job:
        """Return a copy of the job that callers may keep."""
        with self._lock:
            return deepcopy(self._job)

    def begin(self, topic: str) -> Job:
        """Start a new job; legal only when idle or terminal."""
        with self._lock:
            if not self._job.phase.accepts_new_job():
                raise JobConflictError(
                    f"A job is already in flight (phase={self._job.phase.value})"
                )
            self._job = Job(topic=topic, phase=JobPhase.SCRIPTING, progress=SCRIPTING_PROGRESS)
            self._claimed = False
            logger.info("Job started", extra={"topic": topic})
            return deepcopy(self._job)

    def claim(self) -> Job:
        """Hand the admitted job to exactly one executor.

        Raises:
            JobConflictError: If there is no admitted job or it was already claimed
        """
        with self._lock:
            if self._job.phase is not JobPhase.SCRIPTING or self._claimed:
                raise JobConflictError(
                    f"No unclaimed admitted job to execute (phase={self._job.phase.value})"
                )
            self._claimed = True
            return deepcopy(self._job)

    def advance(self, phase: JobPhase, progress: int) -> None:
        with self._lock:
            current = self._job.phase
            if phase not in TRANSITIONS.get(current, set()):
                raise InvalidTransitionError(f"Illegal transition {current.value} -> {phase.value}")
            self._job.phase = phase
            self._job.progress = max(self._job.progress, progress)
            self._touch()
            logger.info("Phase changed", extra={"phase": phase.value, "progress": self._job.progress})

    def finish(self, result: GenerationResult, phase: JobPhase) -> None:
        """Attach the assembled result and enter a successful terminal phase."""
        if phase not in (JobPhase.COMPLETED, JobPhase.NEEDS_REVIEW):
            raise InvalidTransitionError(f"{phase.value} is not a successful terminal phase")
        with self._lock:
            self.advance(phase, 100)
            self._job.result = result

    def fail(self, message: str, kind: ErrorKind) -> None:
        """Abort the in-flight job; progress stays at its last value."""
        with self._lock:
            if not self._job.phase.is_in_flight():
                raise InvalidTransitionError(f"Cannot fail a job in phase {self._job.phase.value}")
            self._job.phase = JobPhase.FAILED
            self._job.result = None
            self._job.error = message
            self._job.error_kind = kind
            self._touch()
            logger.warning("Job failed", extra={"error_kind": kind.value, "error": message})

    def reset(self) -> Job:
        """Return to idle, discarding result, error and progress."""
        with self._lock:
            if self._job.phase.is_in_flight():
                raise JobConflictError(
                    f"Cannot reset while a job is in flight (phase={self._job.phase.value})"
                )
            self._job = Job()
            logger.info("Job reset")
            return deepcopy(self._job)

    def _touch(self) -> None:
        self._job.updated_at = datetime.now().isoformat()


_job_state_instance: Optional[JobStateMachine] = None


def get_job_state() -> JobStateMachine:
    """Get the shared JobStateMachine instance (singleton pattern)."""
    global _job_state_instance
    if _job_state_instance is None:
        _job_state_instance = JobStateMachine()
    return _job_state_instance
