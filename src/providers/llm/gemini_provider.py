"""Google Gemini LLM provider adapter.

Calls the Gemini REST ``generateContent`` endpoint over httpx.  Gemini has
no separate system role in this request shape, so the system prompt is
prepended to the user prompt inside a single text part.

Response shape parsed::

    {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import EmptyResponseError, MisconfiguredProviderError
from src.utils.http import request_json

logger = structlog.get_logger(logger_name=__name__)


class GeminiLLMProvider(ILLMProvider):
    """LLM provider backed by the Google Gemini REST API."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._api_key = settings.google_gemini_api_key
        self._model = settings.google_gemini_model
        self._base_url = settings.google_gemini_base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.ai_timeout)
        )

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        if not self.is_available():
            raise MisconfiguredProviderError(
                message="Google Gemini API key not configured",
                provider_name=self.get_provider_name(),
            )

        url = f"{self._base_url}/v1beta/models/{self._model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": f"{system_prompt}\n\n{user_prompt}"}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }
        data = await request_json(
            self._client,
            "POST",
            url,
            provider_name=self.get_provider_name(),
            params={"key": self._api_key},
            json=payload,
        )

        text = _first_candidate_text(data)
        if not text:
            raise EmptyResponseError(
                message="No response generated from Gemini",
                provider_name=self.get_provider_name(),
            )
        logger.info("gemini_completion", model=self._model, text_length=len(text))
        return text

    def is_available(self) -> bool:
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return "google"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _first_candidate_text(data: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of *data*, or ``""``."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return ""
    return parts[0].get("text") or ""
