"""
Constants configuration

API settings, CORS configuration and the fixed content option lists.
"""

# API settings
API_TITLE = "ShortsStudio API"
API_DESCRIPTION = "Generate a daily human-first YouTube Short: script, SEO metadata, video, voice-over and thumbnails"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]

# Themes picked from uniformly at random when no topic is given
THEME_OPTIONS = [
    "Quick Tips",
    "Micro-Stories",
    "Product Hacks",
    "60-Second Explainers",
    "Daily Motivation",
    "Micro-Reviews",
    "Trending Reactions",
]

# Thumbnail variants: (label, stylistic direction). One image is requested per entry.
THUMBNAIL_VARIANTS = [
    ("A", "Action-oriented"),
    ("B", "Emotive-oriented"),
]

# Results below this self-reported confidence are held for manual review
CONFIDENCE_THRESHOLD = 0.8

DEFAULT_UPLOAD_TIME = "09:00"

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "THEME_OPTIONS",
    "THUMBNAIL_VARIANTS",
    "CONFIDENCE_THRESHOLD",
    "DEFAULT_UPLOAD_TIME",
]
