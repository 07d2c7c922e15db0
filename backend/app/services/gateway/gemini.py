"""
Gemini gateway - script, thumbnails, video and voice-over through google-genai.

Blocking SDK calls run in worker threads so the orchestrator's fan-out stays
concurrent on the event loop. The Veo operation is polled on a fixed interval
with an attempt bound, then the finished video is downloaded with the same
API key used to request it.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional

import httpx
from google import genai
from google.genai import types

from app.config import (
    DEFAULT_PIPELINE_MODELS,
    PipelineModels,
    VIDEO_DOWNLOAD_TIMEOUT_SECONDS,
    VIDEO_POLL_INTERVAL_SECONDS,
    VIDEO_POLL_MAX_ATTEMPTS,
)
from app.core import get_logger
from app.core.credentials import CredentialState
from app.core.exceptions import CredentialError, EmptyResponseError, GenerationError, ProviderError
from app.models.generation import Citation, MediaHandle, ScriptPackage
from app.services.infrastructure.parsing import parse_json_object
from app.services.infrastructure.storage.media_store import MediaStore, get_media_store

from .base import PollPolicy, ProviderGateway
from .errors import classify_provider_error, error_from_message
from .payloads import extract_grounding_chunks, first_inline_payload
from .prompts import (
    SCRIPT_RESPONSE_SCHEMA,
    build_script_prompt,
    build_video_prompt,
    build_voiceover_prompt,
)

logger = get_logger(__name__, component="gemini_gateway")

Sleep = Callable[[float], Awaitable[Any]]


class GeminiGateway(ProviderGateway):
    """
    ProviderGateway backed by the Gemini API.

    The API key comes from a CredentialState (read at call time, so a key
    selected at runtime is picked up) or from an explicit api_key. Tests pass
    a ready-made client instead.
    """

    def __init__(
        self,
        credentials: Optional[CredentialState] = None,
        *,
        api_key: Optional[str] = None,
        client: Any = None,
        models: Optional[PipelineModels] = None,
        media_store: Optional[MediaStore] = None,
        poll_policy: Optional[PollPolicy] = None,
        sleep: Sleep = asyncio.sleep,
        http_client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
    ):
        self.credentials = credentials
        self._api_key = api_key
        self._client = client
        self._client_key: Optional[str] = None
        self._fixed_client = client is not None
        self.models = models or DEFAULT_PIPELINE_MODELS
        self.media_store = media_store or get_media_store()
        self.poll_policy = poll_policy or PollPolicy(
            interval_seconds=VIDEO_POLL_INTERVAL_SECONDS,
            max_attempts=VIDEO_POLL_MAX_ATTEMPTS,
        )
        self._sleep = sleep
        self._http_client_factory = http_client_factory or (
            lambda: httpx.AsyncClient(timeout=VIDEO_DOWNLOAD_TIMEOUT_SECONDS, follow_redirects=True)
        )

    @property
    def api_key(self) -> Optional[str]:
        if self.credentials is not None and self.credentials.api_key:
            return self.credentials.api_key
        return self._api_key

    @property
    def client(self) -> Any:
        if self._fixed_client:
            return self._client
        key = self.api_key
        if not key:
            raise CredentialError("No Gemini API key is configured. Please select your API key.")
        if self._client is None or key != self._client_key:
            self._client = genai.Client(api_key=key)
            self._client_key = key
        return self._client

    async def _call(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a blocking SDK call in a thread and classify its failure."""
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except GenerationError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise classify_provider_error(exc) from exc

    # ------------------------------------------------------------------
    # Script
    # ------------------------------------------------------------------

    async def generate_script(self, topic: str) -> ScriptPackage:
        model = self.models.script.model_name
        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            response_mime_type="application/json",
            response_schema=SCRIPT_RESPONSE_SCHEMA,
        )
        response = await self._call(
            self.client.models.generate_content,
            model=model,
            contents=build_script_prompt(topic),
            config=config,
        )

        data = parse_json_object(getattr(response, "text", None))
        citations = [Citation.from_grounding_chunk(chunk) for chunk in extract_grounding_chunks(response)]
        package = ScriptPackage.from_payload(data, citations)
        logger.info(
            "Script generated",
            extra={"model": model, "confidence": package.confidence, "citations": len(citations)},
        )
        return package

    # ------------------------------------------------------------------
    # Thumbnails
    # ------------------------------------------------------------------

    async def generate_thumbnails(self, title: str, variant_prompts: List[str]) -> List[MediaHandle]:
        config = types.GenerateContentConfig(
            image_config=types.ImageConfig(
                aspect_ratio=self.models.thumbnails.aspect_ratio,
                image_size=self.models.thumbnails.resolution,
            ),
        )
        handles = await asyncio.gather(
            *(self._generate_image(prompt, config) for prompt in variant_prompts)
        )
        logger.info("Thumbnails generated", extra={"count": len(handles)})
        return list(handles)

    async def _generate_image(self, prompt: str, config: Any) -> MediaHandle:
        response = await self._call(
            self.client.models.generate_content,
            model=self.models.thumbnails.model_name,
            contents=prompt,
            config=config,
        )
        payload = first_inline_payload(response)
        if payload is None:
            raise EmptyResponseError("Thumbnail generation returned no image.")
        data, mime_type = payload
        return await asyncio.to_thread(self.media_store.save, data, mime_type or "image/png")

    # ------------------------------------------------------------------
    # Video
    # ------------------------------------------------------------------

    async def generate_video(self, script: str) -> MediaHandle:
        video_model = self.models.video
        operation = await self._call(
            self.client.models.generate_videos,
            model=video_model.model_name,
            prompt=build_video_prompt(script),
            config=types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=video_model.resolution,
                aspect_ratio=video_model.aspect_ratio,
            ),
        )
        operation = await self._wait_for_operation(operation)

        error = getattr(operation, "error", None)
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise error_from_message(message)

        video = self._first_generated_video(operation)
        if video is None:
            raise EmptyResponseError("Video generation finished without a video.")

        video_bytes = getattr(video, "video_bytes", None)
        if video_bytes:
            return await asyncio.to_thread(
                self.media_store.save, video_bytes, getattr(video, "mime_type", None) or "video/mp4"
            )

        uri = getattr(video, "uri", None)
        if not uri:
            raise EmptyResponseError("Video generation finished without a download location.")
        return await self._download_video(uri)

    async def _wait_for_operation(self, operation: Any) -> Any:
        """Poll until the operation reports done or the attempt bound is hit."""
        policy = self.poll_policy
        attempts = 0
        while not getattr(operation, "done", False):
            if attempts >= policy.max_attempts:
                raise ProviderError(
                    f"Video generation did not finish after {attempts} status checks."
                )
            await self._sleep(policy.interval_seconds)
            operation = await self._call(self.client.operations.get, operation)
            attempts += 1
            logger.debug("Video operation polled", extra={"attempt": attempts})
        logger.info("Video operation finished", extra={"status_checks": attempts})
        return operation

    @staticmethod
    def _first_generated_video(operation: Any) -> Any:
        response = getattr(operation, "response", None) or getattr(operation, "result", None)
        generated = getattr(response, "generated_videos", None) or []
        if not generated:
            return None
        return getattr(generated[0], "video", None)

    async def _download_video(self, uri: str) -> MediaHandle:
        headers = {"x-goog-api-key": self.api_key or ""}
        try:
            async with self._http_client_factory() as http:
                response = await http.get(uri, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise classify_provider_error(exc) from exc

        if not response.content:
            raise EmptyResponseError("Video download returned no data.")
        mime_type = response.headers.get("content-type", "video/mp4")
        return await asyncio.to_thread(self.media_store.save, response.content, mime_type)

    # ------------------------------------------------------------------
    # Voice-over
    # ------------------------------------------------------------------

    async def generate_voiceover(self, script: str) -> MediaHandle:
        voice_model = self.models.voiceover
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(
                        voice_name=voice_model.voice_name,
                    )
                )
            ),
        )
        response = await self._call(
            self.client.models.generate_content,
            model=voice_model.model_name,
            contents=build_voiceover_prompt(script),
            config=config,
        )
        payload = first_inline_payload(response)
        if payload is None:
            raise EmptyResponseError("Voiceover failed: no audio returned.")
        data, mime_type = payload
        handle = await asyncio.to_thread(self.media_store.save_audio, data, mime_type)
        logger.info("Voice-over generated", extra={"voice": voice_model.voice_name, "bytes": len(data)})
        return handle
