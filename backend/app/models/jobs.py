"""
API schemas for job management endpoints
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from app.config import DEFAULT_UPLOAD_TIME


class GenerationRequest(BaseModel):
    """Request to start a generation job"""
    topic: str = ""  # Empty picks a theme at random
    upload_time: str = DEFAULT_UPLOAD_TIME  # Passed through to the report unmodified


class JobResponse(BaseModel):
    """Current state of the single generation job"""
    phase: str
    stage: str  # UI stage name, see get_stage_from_phase
    progress: int
    topic: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None


class CredentialRequest(BaseModel):
    api_key: str


class CredentialResponse(BaseModel):
    configured: bool


class ThemesResponse(BaseModel):
    themes: List[str]
