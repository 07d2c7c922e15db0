"""
Generation Orchestrator
Drives one job through script generation, the concurrent media fan-out,
result assembly and the confidence gate.

Ordering:
    script -> {thumbnails, video, voice-over} (concurrent, fail-fast join)
           -> assemble -> gate (completed / needs_review)

Any failure aborts the job: nothing produced by the other branches is kept,
the job moves to FAILED with a classified error and progress stays where it
was. There are no retries; the caller resets the job before trying again.
"""

import asyncio
import random
import secrets
import string
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from app.config import CONFIDENCE_THRESHOLD, THEME_OPTIONS, THUMBNAIL_VARIANTS
from app.core import LogTimer, get_logger, set_job_id
from app.core.credentials import CredentialState
from app.core.exceptions import (
    CredentialError,
    GenerationError,
    ParseError,
    ProviderError,
)
from app.models.generation import (
    GenerationResult,
    MediaBundle,
    MediaHandle,
    Report,
    ScriptPackage,
    Thumbnail,
    VideoMetadata,
)
from app.models.status import ErrorKind, JobPhase
from app.services.gateway.base import ProviderGateway
from app.services.gateway.prompts import build_thumbnail_prompts
from app.services.infrastructure.orchestration import Job, JobStateMachine

logger = get_logger(__name__, component="orchestrator")

MEDIA_PROGRESS = 25
ASSEMBLING_PROGRESS = 85

JOB_ID_PREFIX = "SH-AI-"
_JOB_ID_ALPHABET = string.digits + string.ascii_uppercase


def generate_job_id() -> str:
    """Short, human-scannable report id such as SH-AI-7K2QXD."""
    return JOB_ID_PREFIX + "".join(secrets.choice(_JOB_ID_ALPHABET) for _ in range(6))


def build_summary(topic: str, keyword_count: int) -> str:
    return (
        f'Generated high-quality human-first short for "{topic}". '
        f"Script analysis complete with {keyword_count} keywords found via Search."
    )


class GenerationOrchestrator:
    """
    Orchestrates a single generation job.

    Responsibilities:
    - Resolve the topic (random theme when blank)
    - Call the gateway in order, fanning out the three media calls
    - Assemble the GenerationResult and apply the confidence gate
    - Map failures onto the job's error kinds and the credential flag
    """

    def __init__(
        self,
        gateway: ProviderGateway,
        state: Optional[JobStateMachine] = None,
        credentials: Optional[CredentialState] = None,
        *,
        rng: Optional[random.Random] = None,
        themes: Optional[Sequence[str]] = None,
        thumbnail_variants: Optional[Sequence[Tuple[str, str]]] = None,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
        id_factory: Callable[[], str] = generate_job_id,
    ):
        self.gateway = gateway
        self.state = state or JobStateMachine()
        self.credentials = credentials
        self.rng = rng or random.Random()
        self.themes = list(themes or THEME_OPTIONS)
        self.thumbnail_variants = list(thumbnail_variants or THUMBNAIL_VARIANTS)
        self.confidence_threshold = confidence_threshold
        self._id_factory = id_factory
        self._issued_job_ids: set[str] = set()

        if not self.themes:
            raise ValueError("At least one theme is required")
        if not self.thumbnail_variants:
            raise ValueError("At least one thumbnail variant is required")

    def resolve_topic(self, topic: Optional[str]) -> str:
        topic = (topic or "").strip()
        return topic or self.rng.choice(self.themes)

    def start(self, topic: Optional[str]) -> Job:
        """Admit a new job.

        Raises:
            CredentialError: If no credential is known to be valid
            JobConflictError: If a job is already in flight; the live job is untouched
        """
        if self.credentials is not None and not self.credentials.configured:
            raise CredentialError("No valid API key is selected. Please select your API key.")
        return self.state.begin(self.resolve_topic(topic))

    async def run(self, topic: Optional[str], scheduled_upload_time: str) -> Job:
        """Start and execute a job; returns the final job snapshot."""
        self.start(topic)
        return await self.execute(scheduled_upload_time)

    async def execute(self, scheduled_upload_time: str) -> Job:
        """Drive an admitted job to a terminal phase.

        Raises:
            JobConflictError: If the admitted job is already being executed
        """
        topic = self.state.claim().topic

        try:
            with LogTimer(logger, f"script generation for '{topic}'"):
                package = await self.gateway.generate_script(topic)
            self.state.advance(JobPhase.MEDIA_SYNTHESIS, MEDIA_PROGRESS)

            with LogTimer(logger, "media synthesis"):
                media = await self._synthesize_media(package)
            self.state.advance(JobPhase.ASSEMBLING, ASSEMBLING_PROGRESS)

            result = self._assemble(topic, scheduled_upload_time, package, media)
            phase = self._gate(package.confidence)
            self.state.finish(result, phase)
            logger.info(
                "Job finished",
                extra={"phase": phase.value, "confidence": package.confidence},
            )
        except GenerationError as exc:
            self._record_failure(exc)
        except asyncio.CancelledError:
            self._record_failure(ProviderError("Generation was cancelled."))
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Unexpected generation failure", extra={"error": str(exc)}, exc_info=True)
            self._record_failure(ProviderError(str(exc) or None))
        finally:
            set_job_id(None)

        return self.state.snapshot()

    async def _synthesize_media(self, package: ScriptPackage) -> MediaBundle:
        """Run the three media calls concurrently; the first failure cancels the rest."""
        prompts = build_thumbnail_prompts(package.title, self.thumbnail_variants)
        tasks: Dict[str, asyncio.Task] = {
            "thumbnails": asyncio.create_task(self.gateway.generate_thumbnails(package.title, prompts)),
            "video": asyncio.create_task(self.gateway.generate_video(package.script)),
            "voiceover": asyncio.create_task(self.gateway.generate_voiceover(package.script)),
        }
        try:
            done, _ = await asyncio.wait(tasks.values(), return_when=asyncio.FIRST_EXCEPTION)
            for name, task in tasks.items():
                if task in done and task.exception() is not None:
                    logger.warning(
                        "Media branch failed",
                        extra={"branch": name, "error": str(task.exception())},
                    )
                    raise task.exception()
        finally:
            pending = [task for task in tasks.values() if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        thumbnails = self._label_thumbnails(tasks["thumbnails"].result(), len(prompts))
        return MediaBundle(
            video=tasks["video"].result(),
            voiceover=tasks["voiceover"].result(),
            thumbnails=thumbnails,
        )

    def _label_thumbnails(self, handles: List[MediaHandle], expected: int) -> List[Thumbnail]:
        if len(handles) != expected:
            raise ProviderError(f"Expected {expected} thumbnails, received {len(handles)}.")
        return [
            Thumbnail(variant=label, handle=handle)
            for (label, _direction), handle in zip(self.thumbnail_variants, handles)
        ]

    def _assemble(
        self,
        topic: str,
        scheduled_upload_time: str,
        package: ScriptPackage,
        media: MediaBundle,
    ) -> GenerationResult:
        job_id = self._new_job_id()
        set_job_id(job_id)
        report = Report(
            job_id=job_id,
            upload_time=scheduled_upload_time,
            confidence=package.confidence,
            summary=build_summary(topic, len(package.seo_keywords)),
            grounding_sources=list(package.citations),
        )
        return GenerationResult(
            metadata=VideoMetadata.from_script(package),
            media=media,
            report=report,
        )

    def _new_job_id(self) -> str:
        while True:
            candidate = self._id_factory()
            if candidate not in self._issued_job_ids:
                self._issued_job_ids.add(candidate)
                return candidate

    def _gate(self, confidence: float) -> JobPhase:
        if confidence < self.confidence_threshold:
            return JobPhase.NEEDS_REVIEW
        return JobPhase.COMPLETED

    def _record_failure(self, exc: GenerationError) -> None:
        if not self.state.phase.is_in_flight():
            logger.warning(
                "Failure after the job left flight; ignored",
                extra={"phase": self.state.phase.value, "error": str(exc)},
            )
            return
        if isinstance(exc, CredentialError):
            kind = ErrorKind.CREDENTIAL
            message = CredentialError.default_message
            if self.credentials is not None:
                self.credentials.invalidate()
        elif isinstance(exc, ParseError):
            kind = ErrorKind.PARSE
            message = str(exc) or ParseError.default_message
        else:
            kind = ErrorKind.PROVIDER
            message = str(exc) or ProviderError.default_message
        self.state.fail(message, kind)
