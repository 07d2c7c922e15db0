"""
Provider error classification.

Maps SDK and HTTP failures onto the stable GenerationError kinds so the
orchestrator never inspects provider wording itself.
"""

from typing import Any, Optional

import httpx
from google.genai import errors as genai_errors

from app.core.exceptions import CredentialError, GenerationError, ProviderError

_CREDENTIAL_CODES = {401, 403}
_CREDENTIAL_STATUSES = {"UNAUTHENTICATED", "PERMISSION_DENIED"}
_CREDENTIAL_MARKERS = (
    "requested entity was not found",
    "api key not valid",
    "api_key_invalid",
)


def _is_credential_failure(code: Any, status: Any, message: str) -> bool:
    if code in _CREDENTIAL_CODES:
        return True
    if status and str(status).upper() in _CREDENTIAL_STATUSES:
        return True
    lowered = (message or "").lower()
    return any(marker in lowered for marker in _CREDENTIAL_MARKERS)


def error_from_message(message: Optional[str]) -> GenerationError:
    """Classify a bare provider message, e.g. the error of a failed operation."""
    if _is_credential_failure(None, None, message or ""):
        return CredentialError()
    return ProviderError(message or None)


def classify_provider_error(exc: BaseException) -> GenerationError:
    """Return the GenerationError that represents exc."""
    if isinstance(exc, GenerationError):
        return exc

    if isinstance(exc, genai_errors.APIError):
        message = getattr(exc, "message", None) or ""
        if _is_credential_failure(getattr(exc, "code", None), getattr(exc, "status", None), message or str(exc)):
            return CredentialError()
        return ProviderError(message or None)

    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        if code in _CREDENTIAL_CODES:
            return CredentialError()
        return ProviderError(f"Media download failed with HTTP {code}.")

    if isinstance(exc, httpx.HTTPError):
        return ProviderError(f"Media download failed: {exc}")

    return error_from_message(str(exc))
