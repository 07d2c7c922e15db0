"""
ShortsStudio Backend API
FastAPI application that turns a topic into a review-ready YouTube Short

This is the main entry point that wires together all routes and services.
"""

import uuid
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    OUTPUT_DIR,
    LOG_LEVEL,
    LOG_FILE,
    JSON_LOGS,
)
from .routes import (
    generation_router,
    jobs_router,
    credentials_router,
)
from .core import (
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    get_credential_state,
)
from .services.infrastructure.orchestration import get_job_state

# Initialize logging
setup_logging(
    level=LOG_LEVEL,
    log_file=Path(LOG_FILE) if LOG_FILE else None,
    use_json=JSON_LOGS,
)

logger = get_logger(__name__, service="api")
logger.info("Starting ShortsStudio Backend API", extra={
    "log_level": LOG_LEVEL,
    "json_logs": JSON_LOGS,
})

# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Add a correlation ID to every request and its log lines."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
    })

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        response.headers.setdefault("X-Content-Type-Options", "nosniff")

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })
        return response
    finally:
        clear_context()

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Generated thumbnails, video and voice-over are served from here
app.mount("/outputs", StaticFiles(directory=str(OUTPUT_DIR)), name="outputs")

# Include routers
app.include_router(generation_router)
app.include_router(jobs_router)
app.include_router(credentials_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "ShortsStudio API - Generate review-ready YouTube Shorts",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Reports whether an API key is selected and the phase of the live job.
    Always returns 200; a missing key is surfaced to the UI, not treated as
    an outage.
    """
    credentials_ok = get_credential_state().configured
    if not credentials_ok:
        logger.warning("Health check: no valid Gemini API key selected")
    return {
        "status": "healthy",
        "checks": {
            "gemini_api_key": {"configured": credentials_ok},
            "job": {"phase": get_job_state().phase.value},
            "output_dir": {"path": str(OUTPUT_DIR), "exists": OUTPUT_DIR.exists()},
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
    )
