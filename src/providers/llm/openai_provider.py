"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When a custom ``openai_base_url`` is configured (e.g. an OpenAI-compatible
gateway), the client points at that URL instead of the default endpoint.
"""

from __future__ import annotations

import openai
import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import (
    EmptyResponseError,
    MisconfiguredProviderError,
    RemoteError,
    RequestTimeoutError,
)

logger = structlog.get_logger(logger_name=__name__)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by the OpenAI chat completions API.

    The SDK client is created on first use, so a missing API key surfaces
    as ``MisconfiguredProviderError`` from :meth:`complete` rather than as a
    constructor failure.  SDK retries are disabled.

    Subclasses for other OpenAI-protocol hosts override the client factory,
    the availability check and the labels below.
    """

    _label = "OpenAI"
    _missing_config_message = "OpenAI API key not configured"

    def __init__(self, settings: Settings, client: openai.AsyncOpenAI | None = None) -> None:
        self._api_key = settings.openai_api_key
        self._base_url = settings.openai_base_url
        self._model = settings.openai_model
        self._timeout = settings.ai_timeout
        self._client = client

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Generate a text completion via the chat completions API."""
        if not self.is_available():
            raise MisconfiguredProviderError(
                message=self._missing_config_message,
                provider_name=self.get_provider_name(),
            )

        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as exc:
            raise RequestTimeoutError(
                message=f"{self._label} timed out after {self._timeout}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIStatusError as exc:
            raise RemoteError(
                message=f"{self._label} API error: HTTP {exc.status_code}",
                provider_name=self.get_provider_name(),
                status=exc.status_code,
                body=exc.response.text,
            ) from exc
        except openai.APIConnectionError as exc:
            raise RemoteError(
                message=f"{self._label} connection error: {exc}",
                provider_name=self.get_provider_name(),
                body=str(exc),
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise EmptyResponseError(
                message=f"{self._label} returned empty response",
                provider_name=self.get_provider_name(),
            )
        logger.info(
            "openai_completion",
            provider=self.get_provider_name(),
            model=self._model,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return content

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return "openai"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            client_kwargs: dict = {
                "api_key": self._api_key,
                "timeout": self._timeout,
                "max_retries": 0,
            }
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
        return self._client
