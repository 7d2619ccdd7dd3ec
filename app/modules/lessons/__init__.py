"""Lessons module exports."""

from .models import GenerationResult, LessonContent, LessonSection
from .generator import generate_lesson, generate_quiz, validate_api_key
from .providers import (
    GeminiProvider,
    OpenAIProvider,
    ProviderAPIError,
    ProviderError,
    ProviderFormatError,
    ProviderHTTPError,
    TextProvider,
    build_provider,
)

__all__ = [
    "GenerationResult",
    "LessonContent",
    "LessonSection",
    "generate_lesson",
    "generate_quiz",
    "validate_api_key",
    "GeminiProvider",
    "OpenAIProvider",
    "ProviderAPIError",
    "ProviderError",
    "ProviderFormatError",
    "ProviderHTTPError",
    "TextProvider",
    "build_provider",
]
