"""
Paths configuration

Centralized directory paths for the application.
"""

from pathlib import Path

# Base directories
APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent
OUTPUT_DIR = BACKEND_DIR / "outputs"
MEDIA_DIR = OUTPUT_DIR / "media"

# Ensure directories exist
MEDIA_DIR.mkdir(parents=True, exist_ok=True)

__all__ = ["APP_DIR", "BACKEND_DIR", "OUTPUT_DIR", "MEDIA_DIR"]
