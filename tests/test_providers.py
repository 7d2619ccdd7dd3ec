import asyncio

import httpx
import pytest

from app.modules.lessons.prompts import SYSTEM_PROMPT
from app.modules.lessons.providers import (
    GeminiProvider,
    OpenAIProvider,
    ProviderAPIError,
    ProviderFormatError,
    ProviderHTTPError,
    build_provider,
)
from app.modules.wizard.models import ProviderName


def test_gemini_request_shape(fake) -> None:
    fake.text = "hello"
    provider = GeminiProvider("k1", client=fake.client(), model="gemini-test")

    text = asyncio.run(provider.generate("teach me"))

    request = fake.requests[-1]
    assert text == "hello"
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-test:generateContent"
    assert request.url.params["key"] == "k1"
    assert fake.last_json() == {"contents": [{"parts": [{"text": "teach me"}]}]}


def test_openai_request_shape(fake) -> None:
    fake.text = "hi there"
    provider = OpenAIProvider(
        "sk-1", client=fake.client(), model="gpt-test", temperature=0.2, max_tokens=100
    )

    text = asyncio.run(provider.generate("teach me"))

    request = fake.requests[-1]
    body = fake.last_json()
    assert text == "hi there"
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-1"
    assert body["model"] == "gpt-test"
    assert body["temperature"] == 0.2
    assert body["max_tokens"] == 100
    assert body["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "teach me"},
    ]


def test_error_envelope_raises_api_error(fake) -> None:
    fake.body = {"error": {"message": "quota exceeded"}}
    provider = build_provider(ProviderName.OPENAI, "sk", client=fake.client())
    with pytest.raises(ProviderAPIError, match="quota exceeded"):
        asyncio.run(provider.generate("x"))


def test_http_status_raises_http_error(fake) -> None:
    fake.status_code = 500
    provider = build_provider("gemini", "k", client=fake.client())
    with pytest.raises(ProviderHTTPError) as info:
        asyncio.run(provider.generate("x"))
    assert info.value.status_code == 500


def test_transport_failure_raises_http_error(fake) -> None:
    fake.raise_error = httpx.ConnectError("boom")
    provider = build_provider("gemini", "k", client=fake.client())
    with pytest.raises(ProviderHTTPError, match="Network error"):
        asyncio.run(provider.generate("x"))


def test_missing_text_raises_format_error(fake) -> None:
    fake.body = {"candidates": []}
    provider = build_provider("gemini", "k", client=fake.client())
    with pytest.raises(ProviderFormatError):
        asyncio.run(provider.generate("x"))


@pytest.mark.parametrize("name", ["gemini", "openai"])
def test_validate(fake, name: str) -> None:
    assert asyncio.run(build_provider(name, "good-key", client=fake.client()).validate())
    assert not asyncio.run(build_provider(name, "bad", client=fake.client()).validate())
    assert all(r.method == "GET" for r in fake.requests)


def test_validate_swallows_transport_failure(fake) -> None:
    fake.raise_error = httpx.ConnectTimeout("slow")
    provider = build_provider("openai", "good-key", client=fake.client())
    assert asyncio.run(provider.validate()) is False
