"""Azure OpenAI LLM provider adapter.

Same chat completions protocol as :mod:`openai_provider`, reached through
``openai.AsyncAzureOpenAI``.  Azure addresses models by *deployment* name,
so the configured deployment is what goes in the ``model`` field.
"""

from __future__ import annotations

import openai

from src.config.settings import Settings
from src.providers.llm.openai_provider import OpenAILLMProvider


class AzureOpenAILLMProvider(OpenAILLMProvider):
    """LLM provider backed by an Azure OpenAI deployment.

    Requires both ``AZURE_OPENAI_ENDPOINT`` and ``AZURE_OPENAI_API_KEY``.
    """

    _label = "Azure OpenAI"
    _missing_config_message = "Azure OpenAI endpoint and API key must both be configured"

    def __init__(
        self, settings: Settings, client: openai.AsyncAzureOpenAI | None = None
    ) -> None:
        super().__init__(settings, client=client)
        self._api_key = settings.azure_openai_api_key
        self._base_url = None
        self._model = settings.azure_openai_deployment
        self._endpoint = settings.azure_openai_endpoint
        self._api_version = settings.azure_openai_api_version

    def is_available(self) -> bool:
        return bool(self._endpoint and self._api_key)

    def get_provider_name(self) -> str:
        return "azure"

    def _get_client(self) -> openai.AsyncAzureOpenAI:
        if self._client is None:
            self._client = openai.AsyncAzureOpenAI(
                azure_endpoint=self._endpoint,
                api_key=self._api_key,
                api_version=self._api_version,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client
