"""
Media store.

Materializes generated media bytes as files under the outputs directory and
hands back handles the review UI can load directly.
"""

import io
import uuid
import wave
from pathlib import Path
from typing import Dict, Optional, Tuple

from app.config import MEDIA_DIR
from app.core import get_logger
from app.models.generation import MediaHandle

logger = get_logger(__name__, component="media_store")

MEDIA_URL_PREFIX = "/outputs/media"

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/ogg": "ogg",
}

_PCM_MIME_TYPES = {"audio/l16", "audio/pcm"}


def parse_mime(mime_type: Optional[str]) -> Tuple[Optional[str], Dict[str, str]]:
    """Split "audio/L16;codec=pcm;rate=24000" into its base type and parameters."""
    if not mime_type:
        return None, {}
    parts = [part.strip() for part in mime_type.split(";") if part.strip()]
    mime_base = parts[0].lower() if parts else None
    params: Dict[str, str] = {}
    for part in parts[1:]:
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        params[key.strip().lower()] = value.strip()
    return mime_base, params


def pcm_to_wav_bytes(pcm: bytes, params: Dict[str, str]) -> bytes:
    """Wrap raw 16-bit little-endian PCM in a WAV container."""
    rate = int(params.get("rate", "24000"))
    channels = max(1, int(params.get("channels", "1")))
    frame_size = 2 * channels
    usable = len(pcm) - (len(pcm) % frame_size)
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wavf:
        wavf.setnchannels(channels)
        wavf.setsampwidth(2)
        wavf.setframerate(rate)
        wavf.writeframes(pcm[:usable])
    return buffer.getvalue()


class MediaStore:
    """Writes media files and returns handles served under /outputs/media."""

    def __init__(self, base_dir: Optional[Path] = None, url_prefix: str = MEDIA_URL_PREFIX):
        self.base_dir = Path(base_dir) if base_dir else MEDIA_DIR
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, data: bytes, mime_type: str) -> MediaHandle:
        mime_base, _ = parse_mime(mime_type)
        mime_base = mime_base or "application/octet-stream"
        extension = _EXTENSIONS.get(mime_base, "bin")
        filename = f"{uuid.uuid4().hex}.{extension}"
        path = self.base_dir / filename
        path.write_bytes(data)
        logger.info("Stored media", extra={"file": filename, "mime_type": mime_base, "bytes": len(data)})
        return MediaHandle(uri=f"{self.url_prefix}/{filename}", mime_type=mime_base, path=str(path))

    def save_audio(self, data: bytes, mime_type: Optional[str]) -> MediaHandle:
        """Store audio, converting raw PCM (the TTS default) to WAV first."""
        mime_base, params = parse_mime(mime_type)
        if mime_base is None or mime_base in _PCM_MIME_TYPES:
            return self.save(pcm_to_wav_bytes(data, params), "audio/wav")
        return self.save(data, mime_base)


_media_store: Optional[MediaStore] = None


def get_media_store() -> MediaStore:
    global _media_store
    if _media_store is None:
        _media_store = MediaStore()
    return _media_store
