"""
Domain records and API schemas
"""

from .status import JobPhase, ErrorKind, PHASE_TO_STAGE_MAP, get_stage_from_phase
from .generation import (
    CitationKind,
    Citation,
    EndScreenConfig,
    ScriptPackage,
    MediaHandle,
    Thumbnail,
    MediaBundle,
    VideoMetadata,
    Report,
    GenerationResult,
)
from .jobs import (
    GenerationRequest,
    JobResponse,
    CredentialRequest,
    CredentialResponse,
    ThemesResponse,
)

__all__ = [
    "JobPhase",
    "ErrorKind",
    "PHASE_TO_STAGE_MAP",
    "get_stage_from_phase",
    "CitationKind",
    "Citation",
    "EndScreenConfig",
    "ScriptPackage",
    "MediaHandle",
    "Thumbnail",
    "MediaBundle",
    "VideoMetadata",
    "Report",
    "GenerationResult",
    "GenerationRequest",
    "JobResponse",
    "CredentialRequest",
    "CredentialResponse",
    "ThemesResponse",
]
