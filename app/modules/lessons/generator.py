"""Lesson and quiz generation against the configured text providers.

Provides:
- async generate_lesson(api_key, profile, subject, topic) -> GenerationResult
- async generate_quiz(api_key, profile, subject, topic, num_questions) -> GenerationResult
- async validate_api_key(api_key, provider) -> bool

Transport and provider failures come back as ``GenerationResult.error``. Text
that cannot be parsed into the expected shape is replaced by fallback content
and is not reported as an error.
"""

from __future__ import annotations

from typing import Optional

import httpx

from app.core.config import settings
from app.core.logging import get_logger
from app.modules.catalog.models import Subject, Topic
from app.modules.lessons.fallback import fallback_lesson, fallback_quiz
from app.modules.lessons.images import fill_image_urls
from app.modules.lessons.models import GenerationResult
from app.modules.lessons.parsing import ParseFailed, parse_lesson, parse_quiz
from app.modules.lessons.prompts import build_lesson_prompt, build_quiz_prompt
from app.modules.lessons.providers import ProviderError, build_provider
from app.modules.wizard.models import LearnerProfile, ProviderName

logger = get_logger(__name__)

API_KEY_REQUIRED = "API key is required"
LESSON_FAILED = "Failed to generate lesson. Please check your API key and try again."
QUIZ_FAILED = "Failed to generate quiz. Please check your API key and try again."


def _resolve_provider(provider: Optional[ProviderName | str]) -> ProviderName:
    return ProviderName(provider or settings.default_provider)


async def generate_lesson(
    api_key: str,
    profile: LearnerProfile,
    subject: Subject,
    topic: Topic,
    *,
    provider: Optional[ProviderName | str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> GenerationResult:
    if not (api_key or "").strip():
        return GenerationResult(error=API_KEY_REQUIRED)
    name = _resolve_provider(provider)
    backend = build_provider(name, api_key.strip(), client=client)
    prompt = build_lesson_prompt(profile, subject, topic)
    try:
        text = await backend.generate(prompt)
    except ProviderError as e:
        logger.warning("Lesson generation failed: %s", e, extra={"provider": name.value})
        return GenerationResult(error=f"{LESSON_FAILED} ({e})")

    parsed = parse_lesson(text)
    if isinstance(parsed, ParseFailed):
        logger.warning(
            "Using fallback lesson for %s/%s: %s",
            subject.id,
            topic.id,
            parsed.reason,
            extra={"provider": name.value},
        )
        lesson = fallback_lesson(profile, subject, topic)
    else:
        lesson = parsed.content
    return GenerationResult(content=fill_image_urls(lesson, subject.id))


async def generate_quiz(
    api_key: str,
    profile: LearnerProfile,
    subject: Subject,
    topic: Topic,
    num_questions: int = 5,
    *,
    provider: Optional[ProviderName | str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> GenerationResult:
    if not (api_key or "").strip():
        return GenerationResult(content=[], error=API_KEY_REQUIRED)
    name = _resolve_provider(provider)
    backend = build_provider(name, api_key.strip(), client=client)
    n = max(1, int(num_questions))
    prompt = build_quiz_prompt(profile, subject, topic, n)
    try:
        text = await backend.generate(prompt)
    except ProviderError as e:
        logger.warning("Quiz generation failed: %s", e, extra={"provider": name.value})
        return GenerationResult(content=[], error=f"{QUIZ_FAILED} ({e})")

    parsed = parse_quiz(text)
    if isinstance(parsed, ParseFailed):
        logger.warning(
            "Using fallback quiz for %s/%s: %s",
            subject.id,
            topic.id,
            parsed.reason,
            extra={"provider": name.value},
        )
        return GenerationResult(content=fallback_quiz(profile, subject, topic, n))
    return GenerationResult(content=parsed.content)


async def validate_api_key(
    api_key: str,
    provider: Optional[ProviderName | str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """Lightweight authorization check; blank keys fail without a request."""
    if not (api_key or "").strip():
        return False
    backend = build_provider(_resolve_provider(provider), api_key.strip(), client=client)
    return await backend.validate()
