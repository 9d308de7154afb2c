"""OpenRouter chat-completions client.

One request per call: no retries, no rate limiting. The raw message text is
returned untouched; cleaning it up is the normalizer's job.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx
from pydantic import BaseModel, Field, ValidationError

from app.core.config import GenerationSettings, settings
from app.core.errors import TransportError, UpstreamFormatError
from app.core.logging import get_logger

from .prompts import FlashcardPrompt


logger = get_logger(__name__)


class GenerationClient(Protocol):
    async def generate(self, system_instruction: str, user_instruction: str) -> str:
        ...


class _Message(BaseModel):
    content: Optional[str] = None


class _Choice(BaseModel):
    message: _Message


class ChatCompletionResponse(BaseModel):
    choices: list[_Choice] = Field(default_factory=list)


class OpenRouterClient:
    """Talks to an OpenAI-compatible ``/chat/completions`` endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 120.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.url = f"{base_url.rstrip('/')}/chat/completions"
        self._http = http_client
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls,
        config: GenerationSettings = settings.generation,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "OpenRouterClient":
        if not config.api_key:
            raise RuntimeError("OPENROUTER_API_KEY is missing")
        return cls(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            http_client=http_client,
            timeout=config.timeout_seconds,
        )

    async def _post(self, payload: dict) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self._http is not None:
            return await self._http.post(self.url, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, json=payload, headers=headers)

    async def generate(self, system_instruction: str, user_instruction: str) -> str:
        prompt = FlashcardPrompt(system=system_instruction, user=user_instruction)
        payload = {"model": self.model, "messages": prompt.messages()}

        logger.info(f"Sending generation request to {self.url} (model={self.model})")
        try:
            response = await self._post(payload)
        except httpx.HTTPError as e:
            logger.error(f"Generation request failed: {e!r}")
            raise TransportError() from e

        logger.info(
            f"Generation response status={response.status_code} "
            f"length={len(response.content)}"
        )

        try:
            envelope = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unreadable generation response: {response.text[:500]!r}")
            raise UpstreamFormatError() from e

        if not envelope.choices:
            logger.error(f"No choices in generation response: {response.text[:500]!r}")
            raise UpstreamFormatError("No choices from AI")

        content = envelope.choices[0].message.content
        if content is None:
            logger.error("First choice carries no message content")
            raise UpstreamFormatError()

        logger.debug(f"Raw generation content ({len(content)} chars): {content[:500]}")
        return content
