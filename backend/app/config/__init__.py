"""
Application configuration and settings
"""

import os

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from app.core.runtime import env_float, env_int, parse_bool_env

from .paths import APP_DIR, BACKEND_DIR, OUTPUT_DIR, MEDIA_DIR
from .constants import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    THEME_OPTIONS,
    THUMBNAIL_VARIANTS,
    CONFIDENCE_THRESHOLD as DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_UPLOAD_TIME,
)
from .models import (
    ModelConfig,
    PipelineModels,
    DEFAULT_PIPELINE_MODELS,
)

# Gemini API
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Video generation polling. Veo operations are polled on a fixed interval;
# the attempt bound keeps a stuck operation from blocking the job forever.
VIDEO_POLL_INTERVAL_SECONDS = env_float("VIDEO_POLL_INTERVAL_SECONDS", 10.0, minimum=0.0)
VIDEO_POLL_MAX_ATTEMPTS = env_int("VIDEO_POLL_MAX_ATTEMPTS", 60, 1)
VIDEO_DOWNLOAD_TIMEOUT_SECONDS = env_float("VIDEO_DOWNLOAD_TIMEOUT_SECONDS", 600.0, minimum=1.0)

CONFIDENCE_THRESHOLD = env_float("CONFIDENCE_THRESHOLD", DEFAULT_CONFIDENCE_THRESHOLD, minimum=0.0)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
JSON_LOGS = parse_bool_env(os.getenv("JSON_LOGS"), default=False)

__all__ = [
    "APP_DIR",
    "BACKEND_DIR",
    "OUTPUT_DIR",
    "MEDIA_DIR",
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "THEME_OPTIONS",
    "THUMBNAIL_VARIANTS",
    "DEFAULT_UPLOAD_TIME",
    "ModelConfig",
    "PipelineModels",
    "DEFAULT_PIPELINE_MODELS",
    "GEMINI_API_KEY",
    "VIDEO_POLL_INTERVAL_SECONDS",
    "VIDEO_POLL_MAX_ATTEMPTS",
    "VIDEO_DOWNLOAD_TIMEOUT_SECONDS",
    "CONFIDENCE_THRESHOLD",
    "LOG_LEVEL",
    "LOG_FILE",
    "JSON_LOGS",
]
