"""
Pipeline services - the short-form generation flow.

Pipeline Stages:
1. Scripting - Grounded script plus SEO metadata and confidence
2. Media Synthesis - Thumbnails, video and voice-over, concurrently
3. Assembly - Bundle media, metadata and report
4. Gate - Completed or needs_review by confidence
"""

from .orchestrator import (
    GenerationOrchestrator,
    build_summary,
    generate_job_id,
    JOB_ID_PREFIX,
)

__all__ = [
    "GenerationOrchestrator",
    "build_summary",
    "generate_job_id",
    "JOB_ID_PREFIX",
]
