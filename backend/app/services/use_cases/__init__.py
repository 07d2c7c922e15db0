"""
Use Cases package - Business logic layer.

- Each use case is ONE business operation
- Use cases keep HTTP routes thin
- Use cases are fully testable with an injected orchestrator

Modules:
- generation_use_case: Start, inspect and reset the generation job
"""

from .generation_use_case import GenerationUseCase, get_orchestrator

__all__ = [
    "GenerationUseCase",
    "get_orchestrator",
]
