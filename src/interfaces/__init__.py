"""Public interface definitions for all external service providers.

Every external API or service Document Insights talks to is accessed
exclusively through the abstract base classes defined in this package.
Concrete adapters implement these interfaces and are injected at runtime
by ``src/main.py`` (or the CLI), so business logic never imports an SDK.

ADAPTER PATTERN EXPLAINED (for junior developers):
    Instead of calling ``openai.chat.completions.create(...)`` in the
    insight service, the service calls ``provider.complete(...)`` where
    ``provider`` is any object implementing ``ILLMProvider``.  Adding a new
    AI backend means writing one adapter and registering it in
    ``src/providers/llm/registry.py``; unit tests inject fakes instead of
    real API clients.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    ILLMProvider       →  OpenAILLMProvider, AzureOpenAILLMProvider,
                          GeminiLLMProvider, AnthropicLLMProvider,
                          OllamaLLMProvider, DemoLLMProvider
    ICacheProvider     →  MemoryCacheProvider
    IContentProvider   →  ConfluenceContentProvider
    IDocumentStore     →  SQLiteDocumentStore

Re-exports
----------
ILLMProvider
    Text-completion contract.
ICacheProvider
    Key-value cache contract.
IContentProvider
    Remote page fetch contract (URL in, title and plain text out).
IDocumentStore
    Persistence contract for stored documents.
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.content_provider import IContentProvider
from src.interfaces.document_store import IDocumentStore
from src.interfaces.llm_provider import ILLMProvider

__all__ = [
    "ICacheProvider",
    "IContentProvider",
    "IDocumentStore",
    "ILLMProvider",
]
