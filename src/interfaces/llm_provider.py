"""Abstract base class for text-generation (LLM) providers.

Defines the single contract every insight backend implements: take a system
prompt and a user prompt, return the generated text.  Implementations wrap
OpenAI, Azure OpenAI, Google Gemini, Anthropic, a local Ollama server, or
the offline demo template.  The adapter pattern keeps the insight service
provider-agnostic; it selects an adapter by name and never imports an SDK.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations live in src/providers/llm/.
class ILLMProvider(ABC):
    """Contract for text-generation backends used by the insight service.

    Implementations must check their mandatory configuration *before*
    touching the network and raise ``MisconfiguredProviderError`` when it
    is incomplete.  They never retry.
    """

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The instruction message that sets the model's behaviour.
        user_prompt:
            The prompt containing the query and the document context.
        temperature:
            Sampling temperature.
        max_tokens:
            Upper bound on the number of generated tokens.

        Returns
        -------
        str
            The model's non-empty text response.

        Raises
        ------
        src.utils.errors.MisconfiguredProviderError
            A required key or endpoint is missing; no request was sent.
        src.utils.errors.RemoteError
            The provider answered with a non-2xx status or was unreachable.
        src.utils.errors.RequestTimeoutError
            The call exceeded the configured timeout.
        src.utils.errors.EmptyResponseError
            The provider answered but its text field was absent or empty.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider's configuration name, e.g. ``"anthropic"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if every mandatory setting is present.

        Does not contact the remote service.
        """
