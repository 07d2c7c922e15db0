"""
Provider gateway - the generative content service boundary.

Usage:
    from app.services.gateway import GeminiGateway, ProviderGateway
"""

from .base import PollPolicy, ProviderGateway
from .errors import classify_provider_error, error_from_message
from .gemini import GeminiGateway
from .prompts import build_thumbnail_prompts

__all__ = [
    "PollPolicy",
    "ProviderGateway",
    "GeminiGateway",
    "classify_provider_error",
    "error_from_message",
    "build_thumbnail_prompts",
]
