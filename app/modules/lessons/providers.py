"""Text-generation providers called over plain HTTP with httpx.

Both providers expose the same capability: ``generate(prompt) -> str`` and
``validate() -> bool``. Pick one with ``build_provider(name, api_key)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from app.core.config import settings
from app.core.logging import get_logger
from app.modules.lessons.prompts import SYSTEM_PROMPT
from app.modules.wizard.models import ProviderName

logger = get_logger(__name__)


class ProviderError(Exception):
    """Base class for failures talking to a text-generation provider."""


class ProviderHTTPError(ProviderError):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderAPIError(ProviderError):
    """The provider answered with an explicit error envelope."""


class ProviderFormatError(ProviderError):
    """The response envelope carried no extractable text."""


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or error.get("status") or error)
    return str(error)


class TextProvider(ABC):
    name: ProviderName

    def __init__(
        self,
        api_key: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.request(method, url, **kwargs)

    async def _post_json(self, url: str, **kwargs: Any) -> dict:
        try:
            response = await self._request("POST", url, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderHTTPError(f"Network error calling {self.name.value}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            detail = ""
            if isinstance(data, dict) and data.get("error"):
                detail = f": {_error_message(data['error'])}"
            raise ProviderHTTPError(
                f"HTTP {response.status_code} from {self.name.value}{detail}",
                status_code=response.status_code,
            )
        if not isinstance(data, dict):
            raise ProviderFormatError(f"{self.name.value} returned a non-JSON response")
        if data.get("error"):
            raise ProviderAPIError(_error_message(data["error"]))
        return data

    async def generate(self, prompt: str) -> str:
        logger.info("Requesting completion", extra={"provider": self.name.value})
        data = await self._post_json(**self._generate_request(prompt))
        text = self._extract_text(data)
        if not text or not text.strip():
            raise ProviderFormatError(f"No text in {self.name.value} response")
        return text

    async def validate(self) -> bool:
        """True iff the listing endpoint answers 2xx for this key."""
        try:
            response = await self._request("GET", **self._validate_request())
        except httpx.HTTPError as e:
            logger.warning(
                "Key validation request failed: %s",
                e,
                extra={"provider": self.name.value},
            )
            return False
        return response.is_success

    @abstractmethod
    def _generate_request(self, prompt: str) -> dict[str, Any]: ...

    @abstractmethod
    def _validate_request(self) -> dict[str, Any]: ...

    @abstractmethod
    def _extract_text(self, data: dict) -> Optional[str]: ...


class GeminiProvider(TextProvider):
    name = ProviderName.GEMINI

    def __init__(
        self,
        api_key: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(
            api_key, client=client, timeout=timeout or settings.gemini.timeout
        )
        self.base_url = (base_url or settings.gemini.base_url).rstrip("/")
        self.model = model or settings.gemini.model

    def _generate_request(self, prompt: str) -> dict[str, Any]:
        return {
            "url": f"{self.base_url}/v1beta/models/{self.model}:generateContent",
            "params": {"key": self.api_key},
            "json": {"contents": [{"parts": [{"text": prompt}]}]},
        }

    def _validate_request(self) -> dict[str, Any]:
        return {
            "url": f"{self.base_url}/v1beta/models",
            "params": {"key": self.api_key},
        }

    def _extract_text(self, data: dict) -> Optional[str]:
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None


class OpenAIProvider(TextProvider):
    name = ProviderName.OPENAI

    def __init__(
        self,
        api_key: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(
            api_key, client=client, timeout=timeout or settings.openai.timeout
        )
        self.base_url = (base_url or settings.openai.base_url).rstrip("/")
        self.model = model or settings.openai.model
        self.temperature = (
            settings.openai.temperature if temperature is None else temperature
        )
        self.max_tokens = max_tokens or settings.openai.max_tokens

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _generate_request(self, prompt: str) -> dict[str, Any]:
        return {
            "url": f"{self.base_url}/v1/chat/completions",
            "headers": self._headers,
            "json": {
                "model": self.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
            },
        }

    def _validate_request(self) -> dict[str, Any]:
        return {"url": f"{self.base_url}/v1/models", "headers": self._headers}

    def _extract_text(self, data: dict) -> Optional[str]:
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None


PROVIDERS: dict[ProviderName, type[TextProvider]] = {
    ProviderName.GEMINI: GeminiProvider,
    ProviderName.OPENAI: OpenAIProvider,
}


def build_provider(
    name: ProviderName | str,
    api_key: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> TextProvider:
    return PROVIDERS[ProviderName(name)](api_key, client=client)
