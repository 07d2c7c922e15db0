"""
GenerationUseCase - admits a job, schedules its execution and reports on it.

Keeps HTTP routes thin: admission and conflict checks happen synchronously
here, the pipeline runs as a background task, and job snapshots are turned
into API responses.
"""

from typing import Optional

from fastapi import BackgroundTasks, HTTPException

from app.core import CredentialError, JobConflictError, get_credential_state, get_logger
from app.models import GenerationRequest, JobResponse, get_stage_from_phase
from app.services.gateway import GeminiGateway
from app.services.infrastructure.orchestration import Job, get_job_state
from app.services.pipeline import GenerationOrchestrator

logger = get_logger(__name__, component="generation_use_case")


_orchestrator_instance: Optional[GenerationOrchestrator] = None


def get_orchestrator() -> GenerationOrchestrator:
    """Get the shared GenerationOrchestrator instance (singleton pattern)."""
    global _orchestrator_instance
    if _orchestrator_instance is None:
        credentials = get_credential_state()
        _orchestrator_instance = GenerationOrchestrator(
            GeminiGateway(credentials=credentials),
            state=get_job_state(),
            credentials=credentials,
        )
    return _orchestrator_instance


class GenerationUseCase:
    """Handle the generation job lifecycle and background execution."""

    def __init__(self, orchestrator: Optional[GenerationOrchestrator] = None):
        self.orchestrator = orchestrator or get_orchestrator()

    @property
    def state(self):
        return self.orchestrator.state

    def start_generation(self, request: GenerationRequest, background_tasks: BackgroundTasks) -> JobResponse:
        """Admit the job, enqueue pipeline execution and return the initial snapshot."""
        try:
            job = self.orchestrator.start(request.topic)
        except CredentialError as exc:
            raise HTTPException(status_code=403, detail=str(exc))
        except JobConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc))

        logger.info("Generation queued", extra={"topic": job.topic, "upload_time": request.upload_time})
        background_tasks.add_task(self.orchestrator.execute, request.upload_time)
        return self.to_response(job)

    def get_job(self) -> JobResponse:
        return self.to_response(self.state.snapshot())

    def reset_job(self) -> JobResponse:
        try:
            job = self.state.reset()
        except JobConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return self.to_response(job)

    @staticmethod
    def to_response(job: Job) -> JobResponse:
        return JobResponse(
            phase=job.phase.value,
            stage=get_stage_from_phase(job.phase.value),
            progress=job.progress,
            topic=job.topic,
            result=job.result.to_dict() if job.result else None,
            error=job.error,
            error_kind=job.error_kind.value if job.error_kind else None,
        )
