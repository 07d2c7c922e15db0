"""
Generation records

Script package returned by the script step, media produced by the fan-out,
and the assembled result handed to the review UI.
"""

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from app.core.exceptions import ParseError


class CitationKind(str, Enum):
    """Source type of a grounding citation"""
    WEB = "web"
    MAPS = "maps"
    UNKNOWN = "unknown"


def _field(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


@dataclass
class Citation:
    """A web or maps result the provider used to ground the script"""
    kind: CitationKind
    title: Optional[str] = None
    uri: Optional[str] = None

    @classmethod
    def from_grounding_chunk(cls, chunk: Any) -> "Citation":
        """Resolve a provider grounding chunk (SDK object or dict) once, at ingestion."""
        for kind in (CitationKind.WEB, CitationKind.MAPS):
            source = _field(chunk, kind.value)
            if source is not None:
                return cls(kind=kind, title=_field(source, "title"), uri=_field(source, "uri"))
        return cls(kind=CitationKind.UNKNOWN, title=_field(chunk, "title"), uri=_field(chunk, "uri"))

    @property
    def display_title(self) -> str:
        return self.title or self.uri or "Source"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "title": self.title, "uri": self.uri}


@dataclass
class EndScreenConfig:
    subscribe: bool
    recommended_videos: int
    playlist_link: Optional[str] = None


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ParseError(f"Failed to parse script generation response: '{key}' must be a string.")
    return value


def _require_str_list(data: Mapping[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ParseError(f"Failed to parse script generation response: '{key}' must be a list of strings.")
    return list(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_count(value: Any) -> bool:
    """A non-negative whole number; JSON allows Infinity, NaN and 2.5 here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, float) and math.isfinite(value) and value.is_integer() and value >= 0


@dataclass
class ScriptPackage:
    """Output of the script step: script text, SEO metadata and confidence"""
    script: str
    title: str
    description: str
    tags: List[str]
    hashtags: List[str]
    pinned_comment: str
    seo_keywords: List[str]
    end_screen: EndScreenConfig
    confidence: float
    citations: List[Citation] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any, citations: Optional[List[Citation]] = None) -> "ScriptPackage":
        """Validate the structured script response.

        Raises:
            ParseError: If the payload does not match the expected shape
        """
        if not isinstance(data, Mapping):
            raise ParseError()

        confidence = data.get("confidence")
        if not _is_number(confidence) or not 0 <= confidence <= 1:
            raise ParseError("Failed to parse script generation response: 'confidence' must be a number in [0, 1].")

        end_screen = data.get("endScreenConfig")
        if not isinstance(end_screen, Mapping):
            raise ParseError("Failed to parse script generation response: 'endScreenConfig' is missing.")
        subscribe = end_screen.get("subscribe")
        recommended = end_screen.get("recommendedVideos")
        if not isinstance(subscribe, bool) or not _is_count(recommended):
            raise ParseError("Failed to parse script generation response: invalid 'endScreenConfig'.")
        playlist_link = end_screen.get("playlistLink")

        return cls(
            script=_require_str(data, "script"),
            title=_require_str(data, "title"),
            description=_require_str(data, "description"),
            tags=_require_str_list(data, "tags"),
            hashtags=_require_str_list(data, "hashtags"),
            pinned_comment=_require_str(data, "pinnedComment"),
            seo_keywords=_require_str_list(data, "seoKeywords"),
            end_screen=EndScreenConfig(
                subscribe=subscribe,
                recommended_videos=int(recommended),
                playlist_link=playlist_link if isinstance(playlist_link, str) else None,
            ),
            confidence=float(confidence),
            citations=list(citations or []),
        )


@dataclass
class MediaHandle:
    """A locally consumable media resource"""
    uri: str
    mime_type: str
    path: Optional[str] = None


@dataclass
class Thumbnail:
    variant: str
    handle: MediaHandle


@dataclass
class MediaBundle:
    video: MediaHandle
    voiceover: MediaHandle
    thumbnails: List[Thumbnail]


@dataclass
class VideoMetadata:
    """Upload metadata shown on the review screen"""
    title: str
    description: str
    tags: List[str]
    hashtags: List[str]
    pinned_comment: str
    seo_keywords: List[str]
    end_screen: EndScreenConfig

    @classmethod
    def from_script(cls, package: ScriptPackage) -> "VideoMetadata":
        return cls(
            title=package.title,
            description=package.description,
            tags=list(package.tags),
            hashtags=list(package.hashtags),
            pinned_comment=package.pinned_comment,
            seo_keywords=list(package.seo_keywords),
            end_screen=package.end_screen,
        )


@dataclass
class Report:
    job_id: str
    upload_time: str
    confidence: float
    summary: str
    grounding_sources: List[Citation] = field(default_factory=list)


@dataclass
class GenerationResult:
    metadata: VideoMetadata
    media: MediaBundle
    report: Report

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["report"]["grounding_sources"] = [c.to_dict() for c in self.report.grounding_sources]
        return data


__all__ = [
    "CitationKind",
    "Citation",
    "EndScreenConfig",
    "ScriptPackage",
    "MediaHandle",
    "Thumbnail",
    "MediaBundle",
    "VideoMetadata",
    "Report",
    "GenerationResult",
]
