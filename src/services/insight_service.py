"""Provider routing for AI insights, summaries and key topics.

# ─── HOW A REQUEST FLOWS ──────────────────────────────────────────────
#
#   generate_insights(query, documents, provider)
#     1. RESOLVE   -- provider name (or the configured default) is looked
#                     up in the adapter table; unknown -> UnsupportedProvider.
#     2. CACHE     -- key = provider + query + order-sensitive document
#                     fingerprint.  A hit returns immediately; concurrent
#                     misses share one in-flight computation.
#     3. PROMPT    -- documents become one context block, each under a
#                     "=== DOCUMENT i: name ===" header and capped at
#                     MAX_DOCUMENT_LENGTH characters.
#     4. COMPLETE  -- the adapter is called once.  Its errors propagate
#                     unchanged and nothing is cached.
#
# The demo provider short-circuits step 3/4 with a template that names
# every document, so the service works with no credentials at all.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.llm_provider import ILLMProvider
from src.models.insight import InsightDocument, InsightRequest, documents_fingerprint
from src.providers.llm.demo_provider import DemoLLMProvider
from src.utils.errors import EmptyResponseError, UnsupportedProviderError

logger = structlog.get_logger(logger_name=__name__)

MAX_DOCUMENT_LENGTH = 10_000
TRUNCATION_MARKER = "... [truncated]"
MAX_TOPICS = 10

SYSTEM_PROMPT = (
    "You are an expert document analyst and insights generator. Your role is to analyze "
    "documents and provide comprehensive, accurate, and helpful insights based on user queries.\n\n"
    "Key responsibilities:\n"
    "1. Analyze the provided documents thoroughly\n"
    "2. Answer questions based ONLY on the content available in the documents\n"
    "3. Provide detailed, well-structured responses\n"
    "4. If information is not available in the documents, clearly state this\n"
    "5. Cite specific documents when relevant\n"
    "6. Summarize key findings and provide actionable insights\n"
    "7. Maintain a professional and helpful tone\n\n"
    "Guidelines:\n"
    "- Be thorough but concise\n"
    "- Use bullet points and structure for clarity\n"
    "- Quote relevant sections when helpful\n"
    "- Highlight important findings\n"
    "- Suggest follow-up questions or areas for further investigation\n"
    "- If multiple documents contain relevant information, synthesize insights across them"
)

SUMMARY_QUERY = "Please provide a concise summary of this document"

TOPICS_QUERY = (
    "List the key topics covered by these documents. Answer with a bulleted list, "
    f"one short topic per line, at most {MAX_TOPICS} topics, and nothing else."
)

# "- topic", "* topic", "• topic", "1. topic", "2) topic"
_BULLET_LINE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+(.+?)\s*$")


def build_context(documents: Sequence[InsightDocument]) -> str:
    """Concatenate *documents* into one headed, length-capped context block."""
    blocks: list[str] = []
    for index, document in enumerate(documents, start=1):
        content = document.content
        if len(content) > MAX_DOCUMENT_LENGTH:
            content = content[:MAX_DOCUMENT_LENGTH] + TRUNCATION_MARKER
        blocks.append(f"=== DOCUMENT {index}: {document.name} ===\n{content}\n\n")
    return "".join(blocks)


def build_user_prompt(query: str, documents: Sequence[InsightDocument]) -> str:
    document_list = "\n".join(f'- "{doc.name}" ({doc.type})' for doc in documents)
    return (
        f"USER QUERY: {query}\n\n"
        f"AVAILABLE DOCUMENTS:\n{document_list}\n\n"
        f"DOCUMENT CONTENT:\n{build_context(documents)}\n"
        "Please analyze the above documents and provide comprehensive insights to answer "
        "the user's query.\n"
        "Structure your response clearly and cite specific documents when relevant.\n"
    )


def parse_topics(text: str, limit: int = MAX_TOPICS) -> list[str]:
    """Pull bullet or numbered list items out of *text*, up to *limit*."""
    topics: list[str] = []
    for line in text.splitlines():
        match = _BULLET_LINE.match(line)
        if not match:
            continue
        topic = match.group(1).strip().strip("*").strip()
        if topic:
            topics.append(topic)
        if len(topics) >= limit:
            break
    return topics


class InsightService:
    """Routes insight, summary and topic requests to a named provider.

    Parameters
    ----------
    providers:
        Adapter table keyed by lower-case provider name.
    default_provider:
        Name used when a call does not specify one.
    insights_cache / summaries_cache / topics_cache:
        Independent caches for the three computed artifacts.
    temperature / max_tokens:
        Generation parameters passed to every adapter call.
    """

    def __init__(
        self,
        providers: Mapping[str, ILLMProvider],
        insights_cache: ICacheProvider,
        summaries_cache: ICacheProvider,
        topics_cache: ICacheProvider,
        default_provider: str = "demo",
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> None:
        self._providers = {name.lower(): provider for name, provider in providers.items()}
        self._default_provider = default_provider.lower()
        self._insights_cache = insights_cache
        self._summaries_cache = summaries_cache
        self._topics_cache = topics_cache
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def default_provider(self) -> str:
        return self._default_provider

    def get_provider(self, name: str | None = None) -> ILLMProvider:
        """Return the adapter registered under *name* (case-insensitive)."""
        key = (name or self._default_provider).strip().lower()
        provider = self._providers.get(key)
        if provider is None:
            raise UnsupportedProviderError(
                message=f"Unsupported AI provider: {name or self._default_provider}",
                provider_name=key,
            )
        return provider

    def available_providers(self) -> list[str]:
        """Names of registered providers whose configuration is complete."""
        return [name for name, provider in self._providers.items() if provider.is_available()]

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    async def generate_insights(
        self,
        query: str,
        documents: Sequence[InsightDocument],
        provider: str | None = None,
    ) -> str:
        """Answer *query* from *documents* using the selected provider.

        Raises
        ------
        UnsupportedProviderError
            *provider* (or the default) is not a known backend.
        pydantic.ValidationError
            *query* is blank or *documents* is empty.
        """
        request = InsightRequest(query=query, documents=tuple(documents))
        adapter = self.get_provider(provider)
        name = adapter.get_provider_name()
        key = f"{name}:{request.cache_key()}"

        logger.info(
            "insights_requested",
            provider=name,
            query=query[:100],
            document_count=len(request.documents),
        )

        async def compute() -> str:
            if isinstance(adapter, DemoLLMProvider):
                return adapter.render_insights(request.query, request.documents)
            return await self._complete(adapter, request.query, request.documents)

        return await self._insights_cache.get_or_compute(key, compute)

    # ------------------------------------------------------------------
    # Summaries and topics
    # ------------------------------------------------------------------

    async def summarize_document(
        self, document: InsightDocument, provider: str | None = None
    ) -> str:
        """Return a concise summary of one document, cached per document id."""
        adapter = self.get_provider(provider)
        name = adapter.get_provider_name()

        async def compute() -> str:
            if isinstance(adapter, DemoLLMProvider):
                return adapter.render_summary(document)
            return await self._complete(adapter, SUMMARY_QUERY, [document])

        return await self._summaries_cache.get_or_compute(f"{name}:{document.id}", compute)

    async def extract_key_topics(
        self, documents: Sequence[InsightDocument], provider: str | None = None
    ) -> list[str]:
        """Return up to ``MAX_TOPICS`` key topics for *documents*.

        Raises
        ------
        EmptyResponseError
            The provider answered without any list items.
        """
        adapter = self.get_provider(provider)
        name = adapter.get_provider_name()
        key = f"{name}:{documents_fingerprint(documents)}"

        async def compute() -> list[str]:
            if isinstance(adapter, DemoLLMProvider):
                return adapter.render_topics()
            text = await self._complete(adapter, TOPICS_QUERY, documents)
            topics = parse_topics(text)
            if not topics:
                raise EmptyResponseError(
                    message="Provider response contained no topic list",
                    provider_name=name,
                )
            return topics

        topics = await self._topics_cache.get_or_compute(key, compute)
        return list(topics)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _complete(
        self,
        adapter: ILLMProvider,
        query: str,
        documents: Sequence[InsightDocument],
    ) -> str:
        user_prompt = build_user_prompt(query, documents)
        logger.debug(
            "provider_call",
            provider=adapter.get_provider_name(),
            prompt_length=len(user_prompt),
        )
        return await adapter.complete(
            SYSTEM_PROMPT,
            user_prompt,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
