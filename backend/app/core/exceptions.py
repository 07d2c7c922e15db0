"""
Core Exceptions
Standardized exception taxonomy for the generation workflow.
"""

from typing import Optional


class ShortsStudioError(Exception):
    """Base exception for all application errors."""
    pass


class GenerationError(ShortsStudioError):
    """Base exception for failures raised while a job is being generated."""

    default_message = "Generation failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class CredentialError(GenerationError):
    """The provider rejected or could not find the configured credential."""

    default_message = "Requested entity was not found. Please re-select your API key."


class ParseError(GenerationError):
    """Script generation returned data that does not match the expected shape."""

    default_message = "Failed to parse script generation response."


class ProviderError(GenerationError):
    """Any other provider failure (rate limit, billing, transient fault)."""

    default_message = "Failed to generate video. Please verify your billing and API limits."


class EmptyResponseError(ProviderError):
    """The provider call succeeded but carried no usable payload."""

    default_message = "The provider returned an empty response."


class JobStateError(ShortsStudioError):
    """Base exception for job state machine violations."""
    pass


class JobConflictError(JobStateError):
    """A job is already in flight."""
    pass


class InvalidTransitionError(JobStateError):
    """The requested phase change is not an edge of the state machine."""
    pass
