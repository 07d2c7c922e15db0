"""
Tests for app.services.infrastructure.parsing.json_parser
"""

import pytest

from app.core.exceptions import ParseError
from app.services.infrastructure.parsing import (
    extract_largest_balanced_json,
    parse_json_object,
    remove_markdown_wrappers,
)


def test_parse_plain_object():
    assert parse_json_object('{"a": 1}') == {"a": 1}


def test_parse_fenced_object():
    text = '```json\n{"title": "Hi", "tags": ["x"]}\n```'
    assert parse_json_object(text) == {"title": "Hi", "tags": ["x"]}


def test_parse_object_surrounded_by_prose():
    text = 'Here you go: {"confidence": 0.9, "nested": {"k": "v"}} Hope it helps!'
    assert parse_json_object(text) == {"confidence": 0.9, "nested": {"k": "v"}}


def test_remove_markdown_wrappers():
    assert remove_markdown_wrappers('```json\n{"a": 1}\n```').strip() == '{"a": 1}'


def test_largest_balanced_object_wins():
    text = '{"a": 1} and {"b": {"c": 2}}'
    assert extract_largest_balanced_json(text) == '{"b": {"c": 2}}'


def test_braces_inside_strings_are_ignored():
    text = 'noise {"text": "a } b { c"} tail'
    assert parse_json_object(text) == {"text": "a } b { c"}


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_input_raises(text):
    with pytest.raises(ParseError):
        parse_json_object(text)


def test_unrecoverable_text_raises():
    with pytest.raises(ParseError):
        parse_json_object("no json at all")


def test_top_level_array_raises():
    with pytest.raises(ParseError):
        parse_json_object("[1, 2, 3]")
