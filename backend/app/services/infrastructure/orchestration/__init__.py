"""Job orchestration - the single job record and its state machine."""

from .job_state import Job, JobStateMachine, TRANSITIONS, get_job_state

__all__ = ["Job", "JobStateMachine", "TRANSITIONS", "get_job_state"]
