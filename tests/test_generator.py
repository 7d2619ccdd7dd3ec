import asyncio
import json

import pytest

from app.modules.lessons.fallback import fallback_lesson, fallback_quiz
from app.modules.lessons.generator import (
    API_KEY_REQUIRED,
    LESSON_FAILED,
    QUIZ_FAILED,
    generate_lesson,
    generate_quiz,
    validate_api_key,
)
from app.modules.lessons.images import PLACEHOLDER_IMAGES
from app.modules.lessons.models import LessonContent
from tests.conftest import LESSON_PAYLOAD


def test_lesson_round_trip(fake, profile, subject, topic) -> None:
    fake.text = "Here you go!\n```json\n" + json.dumps(LESSON_PAYLOAD) + "\n```"

    result = asyncio.run(
        generate_lesson("good-key", profile, subject, topic, client=fake.client())
    )

    assert result.ok
    assert isinstance(result.content, LessonContent)
    assert result.content.to_wire() == LESSON_PAYLOAD


def test_lesson_prompt_mentions_learner(fake, profile, subject, topic) -> None:
    fake.text = json.dumps(LESSON_PAYLOAD)
    asyncio.run(
        generate_lesson(
            "good-key", profile, subject, topic, provider="openai", client=fake.client()
        )
    )
    prompt = fake.last_json()["messages"][1]["content"]
    assert "Sam" in prompt
    assert "The Solar System" in prompt
    assert "soccer" in prompt


def test_unparseable_lesson_falls_back(fake, profile, subject, topic) -> None:
    fake.text = "Sorry, I can only talk about planets in prose."

    result = asyncio.run(
        generate_lesson("good-key", profile, subject, topic, client=fake.client())
    )

    assert result.ok
    assert result.content == fallback_lesson(profile, subject, topic)
    assert result.content.title == "Understanding The Solar System"


def test_missing_key_makes_no_request(fake, profile, subject, topic) -> None:
    lesson = asyncio.run(
        generate_lesson("  ", profile, subject, topic, client=fake.client())
    )
    quiz = asyncio.run(generate_quiz("", profile, subject, topic, client=fake.client()))

    assert lesson.error == API_KEY_REQUIRED
    assert lesson.content is None
    assert quiz.error == API_KEY_REQUIRED
    assert quiz.content == []
    assert fake.requests == []


def test_provider_errors_are_surfaced(fake, profile, subject, topic) -> None:
    fake.status_code = 401

    lesson = asyncio.run(
        generate_lesson("good-key", profile, subject, topic, client=fake.client())
    )
    quiz = asyncio.run(
        generate_quiz("good-key", profile, subject, topic, client=fake.client())
    )

    assert not lesson.ok
    assert lesson.error.startswith(LESSON_FAILED)
    assert "401" in lesson.error
    assert quiz.error.startswith(QUIZ_FAILED)
    assert quiz.content == []


def test_missing_image_urls_get_placeholders(fake, profile, subject, topic) -> None:
    payload = dict(
        LESSON_PAYLOAD,
        images=[
            {"description": "Mars", "alt": "Mars"},
            {"description": "Moon", "url": " ", "alt": "Moon"},
        ],
    )
    fake.text = json.dumps(payload)

    result = asyncio.run(
        generate_lesson("good-key", profile, subject, topic, client=fake.client())
    )

    assert [img.url for img in result.content.images] == [
        PLACEHOLDER_IMAGES["science"],
        PLACEHOLDER_IMAGES["science"],
    ]


def test_quiz_parsed(fake, profile, subject, topic) -> None:
    fake.text = json.dumps(
        [
            {
                "id": 1,
                "type": "true-false",
                "question": "The Sun is a star.",
                "options": ["True", "False"],
                "correctAnswer": "True",
                "explanation": "It is.",
            }
        ]
    )

    result = asyncio.run(
        generate_quiz("good-key", profile, subject, topic, 1, client=fake.client())
    )

    assert result.ok
    assert [q.id for q in result.content] == ["1"]
    assert "exactly 1" in fake.last_json()["contents"][0]["parts"][0]["text"]


@pytest.mark.parametrize("n", [1, 3, 5, 12])
def test_unparseable_quiz_falls_back_trimmed(fake, profile, subject, topic, n) -> None:
    fake.text = "no quiz today"

    result = asyncio.run(
        generate_quiz("good-key", profile, subject, topic, n, client=fake.client())
    )

    assert result.ok
    assert len(result.content) == min(n, 5)
    assert result.content == fallback_quiz(profile, subject, topic, n)


def test_fallback_quiz_grade_labels(profile, subject, topic) -> None:
    young = profile.model_copy(update={"grade": 1})
    options = fallback_quiz(young, subject, topic)[4].options
    assert options == ["Kindergarten", "Grade 1", "Grade 2", "Grade 3"]


@pytest.mark.parametrize("provider", ["gemini", "openai"])
def test_validate_api_key(fake, provider: str) -> None:
    assert asyncio.run(validate_api_key("good-key", provider, client=fake.client()))
    assert not asyncio.run(validate_api_key("nope", provider, client=fake.client()))
    assert len(fake.requests) == 2

    assert not asyncio.run(validate_api_key("   ", provider, client=fake.client()))
    assert len(fake.requests) == 2
