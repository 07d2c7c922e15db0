"""
Prompt templates and response schema for the generation pipeline.
"""

from typing import Any, Dict, List

SCRIPT_PROMPT = """Perform an SEO analysis and generate a 30-60 second conversational YouTube Shorts script and full metadata for the theme: {topic}.
The script should feel human, natural, and engaging.
Use Google Search to find trending keywords for this theme.
Include:
1. A conversational script.
2. SEO-optimized Title (max 60 chars).
3. Description with keywords and hashtags.
4. 8-12 Tags.
5. Hashtags.
6. A pinned comment text.
7. SEO keywords found through the search.
8. End screen config.
9. A self-assessment confidence score (0.0 to 1.0) for the creative quality."""

SCRIPT_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "script": {"type": "STRING"},
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
        "hashtags": {"type": "ARRAY", "items": {"type": "STRING"}},
        "pinnedComment": {"type": "STRING"},
        "seoKeywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        "confidence": {"type": "NUMBER"},
        "endScreenConfig": {
            "type": "OBJECT",
            "properties": {
                "subscribe": {"type": "BOOLEAN"},
                "recommendedVideos": {"type": "NUMBER"},
            },
            "required": ["subscribe", "recommendedVideos"],
        },
    },
    "required": [
        "script",
        "title",
        "description",
        "tags",
        "hashtags",
        "pinnedComment",
        "seoKeywords",
        "confidence",
        "endScreenConfig",
    ],
}

THUMBNAIL_PROMPT = (
    'A high-contrast vertical 9:16 YouTube thumbnail for a video titled: "{title}". '
    "Use bold text, a clear human subject, and professional lighting. "
    "Variant {label}: {direction}."
)

VIDEO_PROMPT_SUFFIX = (
    ", cinematic vertical 9:16, handheld human-like camera motion, "
    "realistic lighting, high detail, no watermarks"
)

VOICEOVER_PROMPT = "Say this naturally, like a friendly human YouTuber: {script}"


def build_script_prompt(topic: str) -> str:
    return SCRIPT_PROMPT.format(topic=topic or "trending topics")


def build_thumbnail_prompts(title: str, variants: List[tuple[str, str]]) -> List[str]:
    """One prompt per (label, direction) variant, in variant order."""
    return [
        THUMBNAIL_PROMPT.format(title=title, label=label, direction=direction)
        for label, direction in variants
    ]


def build_video_prompt(script: str) -> str:
    return f"{script}{VIDEO_PROMPT_SUFFIX}"


def build_voiceover_prompt(script: str) -> str:
    return VOICEOVER_PROMPT.format(script=script)
