"""Ollama LLM provider adapter.

Talks to a local Ollama server through its native ``/api/generate``
endpoint with streaming disabled, so the whole answer arrives as one JSON
object whose ``response`` field holds the text.

Ollama is a free, open-source tool for running LLMs locally.  This adapter
lets the service work completely offline with no API costs.

Setup: Install Ollama (https://ollama.ai), then ``ollama pull llama2``.
Set OLLAMA_BASE_URL=http://localhost:11434
"""

from __future__ import annotations

import httpx
import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import EmptyResponseError, MisconfiguredProviderError
from src.utils.http import request_json

logger = structlog.get_logger(logger_name=__name__)


class OllamaLLMProvider(ILLMProvider):
    """LLM provider backed by a local Ollama server.

    The only mandatory setting is the base URL; no API key is involved.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._base_url = settings.ollama_base_url.rstrip("/")
        self._model = settings.ollama_model
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
                message="Ollama base URL not configured",
                provider_name=self.get_provider_name(),
            )

        payload = {
            "model": self._model,
            "prompt": f"{system_prompt}\n\n{user_prompt}",
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }
        data = await request_json(
            self._client,
            "POST",
            f"{self._base_url}/api/generate",
            provider_name=self.get_provider_name(),
            json=payload,
        )

        text = data.get("response") if isinstance(data, dict) else None
        if not text:
            raise EmptyResponseError(
                message="No response generated from Ollama",
                provider_name=self.get_provider_name(),
            )
        logger.info("ollama_completion", model=self._model, text_length=len(text))
        return text

    def is_available(self) -> bool:
        """Return ``True`` if the Ollama base URL is configured."""
        return bool(self._base_url)

    def get_provider_name(self) -> str:
        return "ollama"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
