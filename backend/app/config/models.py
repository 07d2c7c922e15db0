"""
Model Configuration for Pipeline Steps

Each provider operation has its own model configuration so models can be
swapped per step through environment variables:

    SCRIPT_MODEL  - script, SEO metadata and confidence (Search grounded)
    IMAGE_MODEL   - thumbnail variants
    VIDEO_MODEL   - long-running vertical video generation
    TTS_MODEL     - voice-over synthesis (voice from TTS_VOICE)
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ModelConfig:
    """Configuration for a single model"""
    model_name: str
    description: str = ""
    voice_name: Optional[str] = None
    aspect_ratio: Optional[str] = None
    resolution: Optional[str] = None


@dataclass
class PipelineModels:
    """Model table for the generation pipeline"""
    script: ModelConfig
    thumbnails: ModelConfig
    video: ModelConfig
    voiceover: ModelConfig


DEFAULT_PIPELINE_MODELS = PipelineModels(
    script=ModelConfig(
        model_name=os.getenv("SCRIPT_MODEL", "gemini-3-pro-preview"),
        description="Script, SEO metadata and confidence self-assessment",
    ),
    thumbnails=ModelConfig(
        model_name=os.getenv("IMAGE_MODEL", "gemini-3-pro-image-preview"),
        description="Vertical thumbnail variants",
        aspect_ratio="9:16",
        resolution="1K",
    ),
    video=ModelConfig(
        model_name=os.getenv("VIDEO_MODEL", "veo-3.1-fast-generate-preview"),
        description="Vertical short video",
        aspect_ratio="9:16",
        resolution="720p",
    ),
    voiceover=ModelConfig(
        model_name=os.getenv("TTS_MODEL", "gemini-2.5-flash-preview-tts"),
        description="Natural voice-over",
        voice_name=os.getenv("TTS_VOICE", "Kore"),
    ),
)
