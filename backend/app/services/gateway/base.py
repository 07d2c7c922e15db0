"""
Base classes for the provider gateway

Defines the four generative operations the orchestrator depends on. Any
backend offering equivalents can implement this interface; failures must be
raised as the GenerationError taxonomy from app.core.exceptions so callers
never depend on provider wording.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from app.models.generation import MediaHandle, ScriptPackage


@dataclass
class PollPolicy:
    """How a long-running provider operation is polled"""
    interval_seconds: float = 10.0
    max_attempts: int = 60


class ProviderGateway(ABC):
    """Abstract base class for generative content providers"""

    @abstractmethod
    async def generate_script(self, topic: str) -> ScriptPackage:
        """Generate the script, SEO metadata, confidence and citations.

        Raises:
            ParseError: If the response is not the expected structured shape
        """
        pass

    @abstractmethod
    async def generate_thumbnails(self, title: str, variant_prompts: List[str]) -> List[MediaHandle]:
        """Generate one thumbnail image per variant prompt, in prompt order."""
        pass

    @abstractmethod
    async def generate_video(self, script: str) -> MediaHandle:
        """Submit, poll until done, then fetch the video as a local handle.

        Raises:
            CredentialError: If the credential was not found or is invalid
            ProviderError: For any other failure, including poll exhaustion
        """
        pass

    @abstractmethod
    async def generate_voiceover(self, script: str) -> MediaHandle:
        """Synthesize the voice-over.

        Raises:
            EmptyResponseError: If no audio payload is returned
        """
        pass
