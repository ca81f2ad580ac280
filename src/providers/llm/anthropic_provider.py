"""Anthropic LLM provider adapter.

Wraps the ``anthropic`` async client to implement :class:`ILLMProvider`.

Key differences from the OpenAI adapter:
    - Uses Anthropic's Messages API (not chat.completions)
    - System prompt is a separate parameter, not a message in the list
    - Response content is a list of blocks, so text blocks are filtered
      and joined
"""

from __future__ import annotations

import anthropic
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


class AnthropicLLMProvider(ILLMProvider):
    """LLM provider backed by the Anthropic Claude API."""

    def __init__(
        self, settings: Settings, client: anthropic.AsyncAnthropic | None = None
    ) -> None:
        self._api_key = settings.anthropic_api_key
        self._model = settings.anthropic_model
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
        """Generate a text completion via the Anthropic Messages API."""
        if not self.is_available():
            raise MisconfiguredProviderError(
                message="Anthropic API key not configured",
                provider_name=self.get_provider_name(),
            )

        client = self._get_client()
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                # Anthropic takes the system prompt as a separate kwarg.
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
            )
        except anthropic.APITimeoutError as exc:
            raise RequestTimeoutError(
                message=f"Anthropic timed out after {self._timeout}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except anthropic.APIStatusError as exc:
            raise RemoteError(
                message=f"Anthropic API error: HTTP {exc.status_code}",
                provider_name=self.get_provider_name(),
                status=exc.status_code,
                body=exc.response.text,
            ) from exc
        except anthropic.APIConnectionError as exc:
            raise RemoteError(
                message=f"Anthropic connection error: {exc}",
                provider_name=self.get_provider_name(),
                body=str(exc),
            ) from exc

        text_blocks = [
            block.text for block in response.content if block.type == "text" and block.text
        ]
        if not text_blocks:
            raise EmptyResponseError(
                message="Anthropic returned no text content",
                provider_name=self.get_provider_name(),
            )
        logger.info(
            "anthropic_completion",
            model=self._model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        return "\n".join(text_blocks)

    def is_available(self) -> bool:
        """Return ``True`` if an Anthropic API key is configured."""
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return "anthropic"

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client
