"""Provider-name -> adapter table built from Settings."""

from __future__ import annotations

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.providers.llm.anthropic_provider import AnthropicLLMProvider
from src.providers.llm.azure_provider import AzureOpenAILLMProvider
from src.providers.llm.demo_provider import DemoLLMProvider
from src.providers.llm.gemini_provider import GeminiLLMProvider
from src.providers.llm.ollama_provider import OllamaLLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider


def build_llm_providers(settings: Settings) -> dict[str, ILLMProvider]:
    """Build one adapter per supported provider name.

    Every adapter is registered even when unconfigured; calling an
    unconfigured one fails with ``MisconfiguredProviderError``.  Keys match
    ``PROVIDER_NAMES``.
    """
    return {
        "openai": OpenAILLMProvider(settings),
        "azure": AzureOpenAILLMProvider(settings),
        "google": GeminiLLMProvider(settings),
        "anthropic": AnthropicLLMProvider(settings),
        "ollama": OllamaLLMProvider(settings),
        "demo": DemoLLMProvider(),
    }
