"""
Routes module - contains all API route handlers
"""

from .generation import router as generation_router
from .jobs import router as jobs_router
from .credentials import router as credentials_router

__all__ = [
    "generation_router",
    "jobs_router",
    "credentials_router",
]
