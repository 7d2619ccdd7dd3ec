"""Strict parsing of free-text model output into typed content.

The parser never invents content: it returns ``Parsed`` or ``ParseFailed`` and
leaves the fallback decision to the caller.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from app.modules.lessons.models import LessonContent
from app.modules.quiz.models import QuizQuestion

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    content: T


@dataclass(frozen=True)
class ParseFailed:
    reason: str


ParseResult = Union[Parsed[T], ParseFailed]

_PAIRS = {"{": "}", "[": "]"}


def find_json_span(text: str, opener: str) -> Optional[str]:
    """Return the first balanced ``{...}`` or ``[...]`` span in ``text``.

    Brackets inside JSON string literals are ignored. Returns None when no
    opener exists or the first one is never closed.
    """
    closer = _PAIRS[opener]
    start = text.find(opener)
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


_QUIZ_ADAPTER = TypeAdapter(list[QuizQuestion])


def parse_lesson(text: str) -> ParseResult[LessonContent]:
    span = find_json_span(text, "{")
    if span is None:
        return ParseFailed("no JSON object in response")
    try:
        payload = json.loads(span)
    except json.JSONDecodeError as e:
        return ParseFailed(f"invalid JSON: {e}")
    try:
        return Parsed(LessonContent.model_validate(payload))
    except ValidationError as e:
        return ParseFailed(f"lesson shape mismatch: {e.error_count()} errors")


def parse_quiz(text: str) -> ParseResult[list[QuizQuestion]]:
    span = find_json_span(text, "[")
    if span is None:
        return ParseFailed("no JSON array in response")
    try:
        payload = json.loads(span)
    except json.JSONDecodeError as e:
        return ParseFailed(f"invalid JSON: {e}")
    try:
        questions = _QUIZ_ADAPTER.validate_python(payload)
    except ValidationError as e:
        return ParseFailed(f"quiz shape mismatch: {e.error_count()} errors")
    if not questions:
        return ParseFailed("empty question list")
    return Parsed(questions)
