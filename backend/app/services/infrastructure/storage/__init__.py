"""Storage layer - generated media files."""

from .media_store import MediaStore, get_media_store, parse_mime, pcm_to_wav_bytes

__all__ = ["MediaStore", "get_media_store", "parse_mime", "pcm_to_wav_bytes"]
