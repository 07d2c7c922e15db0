"""
Provider credential state.

Tracks the Gemini API key the gateway should use and whether it is currently
known to be valid. The orchestrator clears the flag when the provider rejects
the key; selecting a new key sets it again.
"""

from threading import RLock
from typing import Optional

from .logging import get_logger

logger = get_logger(__name__, component="credentials")


class CredentialState:
    """Holds the configured API key and its known-valid flag."""

    def __init__(self, api_key: Optional[str] = None):
        self._lock = RLock()
        self._api_key = (api_key or "").strip() or None
        self._configured = self._api_key is not None

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def configured(self) -> bool:
        with self._lock:
            return self._configured and self._api_key is not None

    def select(self, api_key: str) -> None:
        """Install a new key and mark it as known-valid."""
        key = (api_key or "").strip()
        if not key:
            raise ValueError("API key must not be empty")
        with self._lock:
            self._api_key = key
            self._configured = True
        logger.info("Credential selected")

    def invalidate(self) -> None:
        """Forget that the current key is valid; a new selection is required."""
        with self._lock:
            was_configured = self._configured
            self._configured = False
        if was_configured:
            logger.warning("Credential invalidated after provider rejection")


_credential_state: Optional[CredentialState] = None


def get_credential_state() -> CredentialState:
    """Get the shared CredentialState instance (singleton pattern)."""
    global _credential_state
    if _credential_state is None:
        from app.config import GEMINI_API_KEY

        _credential_state = CredentialState(GEMINI_API_KEY)
    return _credential_state
