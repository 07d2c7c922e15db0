"""
Generation routes
"""

from fastapi import APIRouter, BackgroundTasks

from ..config import THEME_OPTIONS
from ..models import GenerationRequest, JobResponse, ThemesResponse
from ..services.use_cases import GenerationUseCase

router = APIRouter(tags=["generation"])


@router.post("/generate", response_model=JobResponse, status_code=202)
async def generate_short(request: GenerationRequest, background_tasks: BackgroundTasks):
    """Start a generation job; a blank topic picks a random theme"""
    use_case = GenerationUseCase()
    return use_case.start_generation(request, background_tasks)


@router.get("/themes", response_model=ThemesResponse)
async def list_themes():
    """Themes used when no topic is given"""
    return ThemesResponse(themes=list(THEME_OPTIONS))
