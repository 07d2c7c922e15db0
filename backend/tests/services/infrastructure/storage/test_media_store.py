"""
Tests for app.services.infrastructure.storage.media_store
"""

import io
import wave

import pytest

from app.services.infrastructure.storage import MediaStore, parse_mime, pcm_to_wav_bytes


@pytest.fixture
def store(tmp_path):
    return MediaStore(base_dir=tmp_path)


def test_parse_mime():
    base, params = parse_mime("audio/L16;codec=pcm;rate=24000")
    assert base == "audio/l16"
    assert params == {"codec": "pcm", "rate": "24000"}


def test_parse_mime_empty():
    assert parse_mime(None) == (None, {})


def test_pcm_to_wav_header():
    wav = pcm_to_wav_bytes(b"\x01\x00" * 240, {"rate": "16000"})
    with wave.open(io.BytesIO(wav), "rb") as wavf:
        assert wavf.getframerate() == 16000
        assert wavf.getnchannels() == 1
        assert wavf.getsampwidth() == 2
        assert wavf.getnframes() == 240


def test_pcm_odd_length_is_truncated_to_frames():
    wav = pcm_to_wav_bytes(b"\x01\x00\x02", {})
    with wave.open(io.BytesIO(wav), "rb") as wavf:
        assert wavf.getnframes() == 1


def test_save_writes_file_and_returns_handle(store, tmp_path):
    handle = store.save(b"png-bytes", "image/png")

    assert handle.uri.startswith("/outputs/media/")
    assert handle.uri.endswith(".png")
    assert handle.mime_type == "image/png"
    assert (tmp_path / handle.uri.rsplit("/", 1)[1]).read_bytes() == b"png-bytes"


def test_unknown_mime_type_gets_bin_extension(store):
    assert store.save(b"x", "application/x-custom").uri.endswith(".bin")


def test_saved_files_do_not_collide(store):
    assert store.save(b"a", "video/mp4").uri != store.save(b"b", "video/mp4").uri


def test_save_audio_keeps_encoded_audio(store):
    handle = store.save_audio(b"ID3mp3", "audio/mpeg")
    assert handle.mime_type == "audio/mpeg"
    assert handle.uri.endswith(".mp3")


@pytest.mark.parametrize("mime_type", [None, "audio/pcm", "audio/L16;rate=24000"])
def test_save_audio_wraps_pcm(store, tmp_path, mime_type):
    handle = store.save_audio(b"\x00\x00" * 10, mime_type)
    assert handle.mime_type == "audio/wav"
    assert (tmp_path / handle.uri.rsplit("/", 1)[1]).read_bytes()[:4] == b"RIFF"
