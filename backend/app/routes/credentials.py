"""
Credential routes - select the Gemini API key used by the pipeline.
"""

from fastapi import APIRouter, HTTPException

from ..core import get_credential_state, get_logger
from ..models import CredentialRequest, CredentialResponse

router = APIRouter(tags=["credentials"])
logger = get_logger(__name__, component="credentials_route")


@router.get("/credentials", response_model=CredentialResponse)
async def get_credentials():
    """Whether a key is selected and not known to be rejected"""
    return CredentialResponse(configured=get_credential_state().configured)


@router.post("/credentials", response_model=CredentialResponse)
async def select_credentials(request: CredentialRequest):
    """Select a new API key; clears a previous rejection"""
    state = get_credential_state()
    try:
        state.select(request.api_key)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return CredentialResponse(configured=state.configured)
