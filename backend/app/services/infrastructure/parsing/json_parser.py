"""
JSON parsing utilities for structured model responses.

Structured-output requests normally return bare JSON, but models still wrap
payloads in markdown fences or add a sentence around them now and then. These
helpers recover the object when it is there and raise ParseError when it is
not.
"""

import json
from typing import Any, Dict, List, Optional

from app.core.exceptions import ParseError


def remove_markdown_wrappers(text: str) -> str:
    """Strip ``` fences (with or without a language tag) around a payload."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    lines = [line for line in stripped.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Extract the largest balanced JSON object from text.

    Scans for balanced braces/brackets while respecting string literals and
    escapes. Arrays are only tracked so that their brackets do not confuse the
    object boundaries.
    """
    if not text:
        return None

    in_string = False
    escape = False
    stack: List[str] = []
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == "\"":
                in_string = False
            continue

        if ch == "\"":
            in_string = True
            continue

        if ch in "{[":
            if not stack:
                start_idx = i
            stack.append(ch)
            continue

        if ch in "}]":
            if not stack:
                continue
            open_ch = stack[-1]
            if (open_ch == "{" and ch == "}") or (open_ch == "[" and ch == "]"):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    if candidate.startswith("{") and (best is None or len(candidate) > len(best)):
                        best = candidate
                    start_idx = None
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


def parse_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Parse a JSON object from a model response.

    Raises:
        ParseError: If no JSON object can be recovered
    """
    if not text or not text.strip():
        raise ParseError("Failed to parse script generation response: empty response.")

    cleaned = remove_markdown_wrappers(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        candidate = extract_largest_balanced_json(cleaned)
        if candidate is None:
            raise ParseError()
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as exc:
            raise ParseError() from exc

    if not isinstance(data, dict):
        raise ParseError("Failed to parse script generation response: expected a JSON object.")
    return data
