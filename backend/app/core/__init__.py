"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Error taxonomy for generation and job state
    - credentials.py: Provider credential state
    - runtime.py: Environment parsing helpers

Usage:
    from app.core import get_logger, CredentialError
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_job_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    ShortsStudioError,
    GenerationError,
    CredentialError,
    ParseError,
    ProviderError,
    EmptyResponseError,
    JobStateError,
    JobConflictError,
    InvalidTransitionError,
)

# Credentials
from .credentials import CredentialState, get_credential_state

# Runtime helpers
from .runtime import parse_bool_env, env_int, env_float

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "clear_context",
    "LogTimer",
    "ShortsStudioError",
    "GenerationError",
    "CredentialError",
    "ParseError",
    "ProviderError",
    "EmptyResponseError",
    "JobStateError",
    "JobConflictError",
    "InvalidTransitionError",
    "CredentialState",
    "get_credential_state",
    "parse_bool_env",
    "env_int",
    "env_float",
]
