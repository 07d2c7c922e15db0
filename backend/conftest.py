import asyncio
import pytest

import app.config

from app.core import credentials as credentials_module
from app.models.generation import Citation, CitationKind, MediaHandle, ScriptPackage
from app.services.gateway.base import ProviderGateway
from app.services.infrastructure.orchestration import job_state as job_state_module
from app.services.use_cases import generation_use_case as use_case_module


@pytest.fixture(autouse=True)
def mock_cloud_env(monkeypatch):
    """Automatically mock cloud environment variables for all tests"""
    monkeypatch.setenv("GEMINI_API_KEY", "mock-key")
    monkeypatch.setattr(app.config, "GEMINI_API_KEY", "mock-key")


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Each test gets fresh credential, job state and orchestrator singletons"""
    monkeypatch.setattr(credentials_module, "_credential_state", None)
    monkeypatch.setattr(job_state_module, "_job_state_instance", None)
    monkeypatch.setattr(use_case_module, "_orchestrator_instance", None)


def make_script_payload(**overrides):
    """A valid structured script response, camelCase as the model returns it"""
    payload = {
        "script": "Did you know you can peel garlic in ten seconds?",
        "title": "Peel Garlic in 10 Seconds",
        "description": "A quick kitchen hack.",
        "tags": ["cooking", "hacks"],
        "hashtags": ["#shorts", "#kitchenhack"],
        "pinnedComment": "What hack should I try next?",
        "seoKeywords": ["garlic hack", "kitchen tips", "peel garlic"],
        "endScreenConfig": {
            "subscribe": True,
            "recommendedVideos": 2,
            "playlistLink": "https://youtube.com/playlist?list=abc",
        },
        "confidence": 0.92,
    }
    payload.update(overrides)
    return payload


def make_script_package(confidence=0.92, citations=None):
    return ScriptPackage.from_payload(
        make_script_payload(confidence=confidence),
        citations if citations is not None else [
            Citation(kind=CitationKind.WEB, title="Kitchen Tips", uri="https://example.com/tips"),
        ],
    )


class FakeGateway(ProviderGateway):
    """In-memory gateway; records call order and can be told to fail a step"""

    def __init__(self, confidence=0.92, delay=0.0, thumbnail_count=None, errors=None, clock=None):
        self.confidence = confidence
        self.delay = delay
        self.thumbnail_count = thumbnail_count
        self.errors = dict(errors or {})
        self.clock = clock
        self.calls = []
        self.spans = {}
        self.cancelled = set()

    async def _step(self, name):
        self.calls.append(name)
        start = self.clock() if self.clock else None
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if name in self.errors:
                raise self.errors[name]
        except asyncio.CancelledError:
            self.cancelled.add(name)
            raise
        finally:
            if self.clock:
                self.spans[name] = (start, self.clock())

    async def generate_script(self, topic):
        self.calls.append(("topic", topic))
        if "script" in self.errors:
            raise self.errors["script"]
        return make_script_package(confidence=self.confidence)

    async def generate_thumbnails(self, title, variant_prompts):
        await self._step("thumbnails")
        count = len(variant_prompts) if self.thumbnail_count is None else self.thumbnail_count
        return [MediaHandle(uri=f"/outputs/media/thumb_{i}.png", mime_type="image/png") for i in range(count)]

    async def generate_video(self, script):
        await self._step("video")
        return MediaHandle(uri="/outputs/media/video.mp4", mime_type="video/mp4")

    async def generate_voiceover(self, script):
        await self._step("voiceover")
        return MediaHandle(uri="/outputs/media/voice.wav", mime_type="audio/wav")


@pytest.fixture
def script_payload():
    return make_script_payload()
