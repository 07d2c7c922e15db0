"""
Job management routes.

There is a single live job; these routes read it and return it to idle.
"""

from fastapi import APIRouter

from ..models import JobResponse
from ..services.use_cases import GenerationUseCase

router = APIRouter(tags=["jobs"])


@router.get("/job", response_model=JobResponse)
async def get_job():
    """Current phase, progress and, once terminal, the result or error"""
    return GenerationUseCase().get_job()


@router.post("/job/reset", response_model=JobResponse)
async def reset_job():
    """Discard a terminal job's result or error and return to idle"""
    return GenerationUseCase().reset_job()
