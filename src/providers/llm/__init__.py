"""LLM provider adapters.

Concrete implementations of ILLMProvider (src/interfaces/llm_provider.py):
    - OpenAILLMProvider      -- OpenAI chat completions (also OpenAI-compatible APIs)
    - AzureOpenAILLMProvider -- Azure OpenAI deployments
    - GeminiLLMProvider      -- Google Gemini REST API over httpx
    - AnthropicLLMProvider   -- Claude Messages API
    - OllamaLLMProvider      -- local models via Ollama's native API
    - DemoLLMProvider        -- offline canned responses

build_llm_providers() builds every adapter from Settings and hands them to the
InsightService, which picks one per call by provider name.
"""

from src.providers.llm.anthropic_provider import AnthropicLLMProvider
from src.providers.llm.azure_provider import AzureOpenAILLMProvider
from src.providers.llm.demo_provider import DEMO_TOPICS, DemoLLMProvider
from src.providers.llm.gemini_provider import GeminiLLMProvider
from src.providers.llm.ollama_provider import OllamaLLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider
from src.providers.llm.registry import build_llm_providers

__all__ = [
    "DEMO_TOPICS",
    "AnthropicLLMProvider",
    "AzureOpenAILLMProvider",
    "DemoLLMProvider",
    "GeminiLLMProvider",
    "OllamaLLMProvider",
    "OpenAILLMProvider",
    "build_llm_providers",
]
