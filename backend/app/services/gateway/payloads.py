"""Response payload helpers for google-genai responses."""

from __future__ import annotations

import base64
from typing import Any, Iterator

from app.core.exceptions import EmptyResponseError


def iter_inline_payloads(response: Any) -> Iterator[tuple[bytes, str | None]]:
    """Yield (bytes, mime_type) for every inline data part of every candidate."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) if content else None
        for part in parts or []:
            inline_data = getattr(part, "inline_data", None)
            if not inline_data:
                continue
            data = getattr(inline_data, "data", None)
            mime_type = getattr(inline_data, "mime_type", None)
            if isinstance(data, bytes) and data:
                yield data, mime_type
            elif isinstance(data, str) and data:
                try:
                    yield base64.b64decode(data), mime_type
                except ValueError as exc:
                    raise EmptyResponseError("Unable to decode base64 media payload.") from exc


def first_inline_payload(response: Any) -> tuple[bytes, str | None] | None:
    return next(iter_inline_payloads(response), None)


def extract_grounding_chunks(response: Any) -> list[Any]:
    """Grounding chunks of the first candidate; empty when the model cited nothing."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    return list(getattr(metadata, "grounding_chunks", None) or [])
