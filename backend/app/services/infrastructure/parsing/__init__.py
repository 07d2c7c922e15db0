"""
Parsing Module

Recovers JSON objects from model responses.

Usage:
    from app.services.infrastructure.parsing import parse_json_object
"""

from .json_parser import (
    parse_json_object,
    extract_largest_balanced_json,
    remove_markdown_wrappers,
)

__all__ = [
    "parse_json_object",
    "extract_largest_balanced_json",
    "remove_markdown_wrappers",
]
