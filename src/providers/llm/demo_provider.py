"""Offline demo provider.

Produces canned, deterministic text without any credentials or network
access, so the whole upload -> insight flow can be exercised on a fresh
checkout.  The insight service asks it for document-aware templates via
:meth:`DemoLLMProvider.render_insights`, :meth:`render_summary` and
:meth:`render_topics`; :meth:`complete` exists to satisfy the adapter
contract for callers that only hold an :class:`ILLMProvider`.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from src.interfaces.llm_provider import ILLMProvider
from src.models.insight import InsightDocument

logger = structlog.get_logger(logger_name=__name__)

DEMO_TOPICS: tuple[str, ...] = (
    "Demo Topic 1",
    "Demo Topic 2",
    "Demo Topic 3",
    "Demo Topic 4",
    "Demo Topic 5",
)

_PROVIDER_NOTE = (
    "**Note**: This is a demo response. To get actual AI-powered insights, "
    "configure one of the supported AI providers with AI_PROVIDER:\n"
    "- OpenAI (openai)\n"
    "- Azure OpenAI (azure)\n"
    "- Google Gemini API (google)\n"
    "- Anthropic Claude API (anthropic)\n"
    "- Local AI with Ollama (ollama)"
)


class DemoLLMProvider(ILLMProvider):
    """Template-based provider that never leaves the process."""

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Return a fixed demo answer; the prompts only affect its length note."""
        logger.debug("demo_completion", prompt_length=len(user_prompt))
        return (
            "**Demo Mode Response**\n\n"
            f"Received a prompt of {len(user_prompt)} characters.\n\n"
            f"{_PROVIDER_NOTE}"
        )

    def render_insights(self, query: str, documents: Sequence[InsightDocument]) -> str:
        """Deterministic insight template naming every document."""
        document_list = "\n".join(f"• {doc.name} ({doc.type})" for doc in documents)
        count = len(documents)
        plural = "" if count == 1 else "s"
        return (
            "**Demo Mode Response**\n\n"
            f'Thank you for your question: "{query}"\n\n'
            "I would analyze the following documents to provide insights:\n"
            f"{document_list}\n\n"
            "**Sample Analysis:**\n"
            f"Based on the {count} document{plural} provided, here are some key points "
            "I would typically identify:\n\n"
            "• **Document Summary**: I would extract the main themes and topics from each document\n"
            "• **Key Insights**: Important findings, recommendations, or action items "
            "would be highlighted\n"
            "• **Cross-Document Analysis**: Connections and patterns across multiple "
            "documents would be identified\n"
            "• **Actionable Items**: Specific next steps or recommendations would be provided\n\n"
            f"{_PROVIDER_NOTE}"
        )

    def render_summary(self, document: InsightDocument) -> str:
        return (
            f"**Demo Summary for: {document.name}**\n\n"
            f"This document contains {len(document.content)} characters of content. "
            "With a configured provider this would be an AI-generated summary highlighting "
            "the key points and important findings of the document."
        )

    def render_topics(self) -> list[str]:
        return list(DEMO_TOPICS)

    def is_available(self) -> bool:
        """Always available: no credentials required."""
        return True

    def get_provider_name(self) -> str:
        return "demo"
