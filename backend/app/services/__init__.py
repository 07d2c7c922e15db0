"""
Services package - Core business logic and integrations

Organized by domain responsibility:

Pipeline (Core Generation Flow):
    - pipeline/orchestrator: Script, concurrent media fan-out, assembly, gate

Gateway (Provider Integration):
    - gateway/base: ProviderGateway contract and poll policy
    - gateway/gemini: google-genai backed implementation
    - gateway/errors: Provider failure classification

Infrastructure (Technical Concerns):
    - infrastructure/orchestration: Job state machine
    - infrastructure/storage: Generated media on disk
    - infrastructure/parsing: JSON recovery from model output

Use Cases (Application Layer):
    - use_cases: Job admission, inspection and reset for the HTTP routes
"""

# Main entry points
from .pipeline import GenerationOrchestrator
from .gateway import GeminiGateway, ProviderGateway
from .infrastructure.orchestration import JobStateMachine

__all__ = [
    "GenerationOrchestrator",
    "GeminiGateway",
    "ProviderGateway",
    "JobStateMachine",
]
