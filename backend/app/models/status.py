"""
Job phase and error-kind enumerations.

Centralized definitions of the phases a generation job moves through and the
classification attached to a failed job.
"""

from enum import Enum


class JobPhase(Enum):
    """Enumeration of all possible job phases."""

    IDLE = "idle"
    SCRIPTING = "scripting"
    MEDIA_SYNTHESIS = "media_synthesis"
    ASSEMBLING = "assembling"
    COMPLETED = "completed"
    NEEDS_REVIEW = "needs_review"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if this phase is a terminal state (no further progress)."""
        return self in (JobPhase.COMPLETED, JobPhase.NEEDS_REVIEW, JobPhase.FAILED)

    def is_in_flight(self) -> bool:
        """Check if this phase indicates active processing."""
        return self in (JobPhase.SCRIPTING, JobPhase.MEDIA_SYNTHESIS, JobPhase.ASSEMBLING)

    def accepts_new_job(self) -> bool:
        return self is JobPhase.IDLE or self.is_terminal()


class ErrorKind(Enum):
    """Classification of a failed job."""

    CREDENTIAL = "credential"
    PARSE = "parse"
    PROVIDER = "provider"


# Stage names used by the review UI
PHASE_TO_STAGE_MAP = {
    "idle": "idle",
    "scripting": "scripting",
    "media_synthesis": "media",
    "assembling": "assembling",
    "completed": "completed",
    "needs_review": "review",
    "failed": "error",
}


def get_stage_from_phase(phase: str) -> str:
    """
    Convert a job phase to its UI stage name.

    Args:
        phase: The job phase string

    Returns:
        The corresponding stage name, or "unknown"
    """
    return PHASE_TO_STAGE_MAP.get(phase, "unknown")


__all__ = [
    "JobPhase",
    "ErrorKind",
    "PHASE_TO_STAGE_MAP",
    "get_stage_from_phase",
]
