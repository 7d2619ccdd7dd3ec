from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.modules.catalog import get_subject, get_topic
from app.modules.catalog.models import Subject, Topic
from app.modules.wizard.models import LearnerProfile


@pytest.fixture
def profile() -> LearnerProfile:
    return LearnerProfile(name="Sam", age=10, grade=5, interests=["soccer", "space"])


@pytest.fixture
def subject() -> Subject:
    return get_subject("science")


@pytest.fixture
def topic() -> Topic:
    return get_topic("science", "solarsystem")


LESSON_PAYLOAD = {
    "title": "Our Solar System",
    "introduction": "Hi Sam!",
    "sections": [
        {
            "title": "The Sun",
            "content": "A star.",
            "example": "Like a giant soccer ball of fire.",
            "activity": {
                "type": "question",
                "description": "How far is the Sun?",
                "hints": ["Think big"],
            },
        },
        {"title": "Planets", "content": "Eight of them."},
    ],
    "summary": "Space is big.",
    "relatedTopics": ["Stars", "Moons"],
    "images": [
        {"description": "The Sun", "url": "https://example.org/sun.png", "alt": "Sun"}
    ],
    "interactiveExercises": [{"title": "Orbit", "description": "Spin around"}],
}


def gemini_envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def openai_envelope(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


@dataclass
class FakeProvider:
    """Stands in for both provider hosts behind an ``httpx.MockTransport``."""

    text: str = "{}"
    status_code: int = 200
    body: Optional[Any] = None
    valid_keys: set[str] = field(default_factory=lambda: {"good-key"})
    raise_error: Optional[Exception] = None
    # runs while a generation request is in flight
    during_post: Optional[Callable[[], None]] = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if request.method == "GET":
            key = request.url.params.get("key") or request.headers.get(
                "Authorization", ""
            ).removeprefix("Bearer ")
            return httpx.Response(200 if key in self.valid_keys else 401, json={})
        if self.during_post is not None:
            self.during_post()
        if self.body is not None:
            return httpx.Response(self.status_code, json=self.body)
        if "chat/completions" in request.url.path:
            return httpx.Response(self.status_code, json=openai_envelope(self.text))
        return httpx.Response(self.status_code, json=gemini_envelope(self.text))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def api(fake: FakeProvider) -> Iterator[TestClient]:
    from app.apis.deps import get_http_client
    from app.modules.wizard.state import wizard_manager
    from main import app

    async def _client():
        async with fake.client() as client:
            yield client

    app.dependency_overrides[get_http_client] = _client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        wizard_manager.sessions.clear()
