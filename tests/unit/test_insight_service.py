"""Unit tests for InsightService routing, prompt building and caching."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from src.models.insight import InsightDocument
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.llm.demo_provider import DEMO_TOPICS, DemoLLMProvider
from src.services.insight_service import (
    MAX_DOCUMENT_LENGTH,
    MAX_TOPICS,
    SUMMARY_QUERY,
    SYSTEM_PROMPT,
    TRUNCATION_MARKER,
    InsightService,
    build_context,
    build_user_prompt,
    parse_topics,
)
from src.utils.errors import EmptyResponseError, RemoteError, UnsupportedProviderError
from tests.helpers import RecordingLLMProvider, make_insight_document


# ======================================================================
# Prompt building
# ======================================================================


class TestBuildContext:
    def test_headers_are_numbered_in_order(self, sample_documents: list[InsightDocument]) -> None:
        context = build_context(sample_documents)
        assert context == (
            "=== DOCUMENT 1: report.pdf ===\nQuarterly revenue grew by 12 percent.\n\n"
            "=== DOCUMENT 2: Team Wiki ===\nHiring plan for the platform team.\n\n"
        )

    def test_long_content_is_truncated_with_marker(self) -> None:
        doc = make_insight_document(content="a" * (MAX_DOCUMENT_LENGTH + 1))
        context = build_context([doc])
        assert "a" * MAX_DOCUMENT_LENGTH + TRUNCATION_MARKER + "\n\n" in context
        assert "a" * (MAX_DOCUMENT_LENGTH + 1) not in context

    def test_content_at_limit_is_untouched(self) -> None:
        doc = make_insight_document(content="b" * MAX_DOCUMENT_LENGTH)
        assert TRUNCATION_MARKER not in build_context([doc])

    def test_user_prompt_lists_documents(self, sample_documents: list[InsightDocument]) -> None:
        prompt = build_user_prompt("What is the plan?", sample_documents)
        assert prompt.startswith("USER QUERY: What is the plan?\n\n")
        assert '- "report.pdf" (upload)' in prompt
        assert '- "Team Wiki" (confluence)' in prompt
        assert "DOCUMENT CONTENT:\n=== DOCUMENT 1: report.pdf ===" in prompt


class TestParseTopics:
    def test_mixed_list_styles(self) -> None:
        text = "Here are the topics:\n1. Alpha\n2) Beta\n- Gamma\n• Delta\n* **Epsilon**\nclosing line"
        assert parse_topics(text) == ["Alpha", "Beta", "Gamma", "Delta", "Epsilon"]

    def test_respects_limit(self) -> None:
        text = "\n".join(f"- topic {i}" for i in range(MAX_TOPICS + 5))
        assert len(parse_topics(text)) == MAX_TOPICS

    def test_no_list_items(self) -> None:
        assert parse_topics("Just a paragraph with no list.") == []


# ======================================================================
# Provider routing
# ======================================================================


class TestRouting:
    def test_default_provider(self, insight_service: InsightService) -> None:
        assert insight_service.default_provider == "demo"
        assert isinstance(insight_service.get_provider(), DemoLLMProvider)

    def test_lookup_is_case_insensitive(
        self, insight_service: InsightService, openai_double: RecordingLLMProvider
    ) -> None:
        assert insight_service.get_provider(" OpenAI ") is openai_double

    def test_unknown_provider(self, insight_service: InsightService) -> None:
        with pytest.raises(UnsupportedProviderError):
            insight_service.get_provider("watson")

    def test_unknown_default_provider(self) -> None:
        service = InsightService(
            providers={"demo": DemoLLMProvider()},
            insights_cache=MemoryCacheProvider(),
            summaries_cache=MemoryCacheProvider(),
            topics_cache=MemoryCacheProvider(),
            default_provider="mystery",
        )
        with pytest.raises(UnsupportedProviderError):
            service.get_provider()

    def test_available_providers(self, insight_service: InsightService) -> None:
        assert sorted(insight_service.available_providers()) == ["demo", "openai"]


# ======================================================================
# Insights
# ======================================================================


class TestGenerateInsights:
    @pytest.mark.asyncio
    async def test_routes_to_named_provider(
        self,
        insight_service: InsightService,
        openai_double: RecordingLLMProvider,
        sample_documents: list[InsightDocument],
    ) -> None:
        result = await insight_service.generate_insights(
            "What is the plan?", sample_documents, provider="openai"
        )

        assert result == "Generated insight text"
        call = openai_double.calls[0]
        assert call["system_prompt"] == SYSTEM_PROMPT
        assert call["user_prompt"] == build_user_prompt("What is the plan?", sample_documents)
        assert call["temperature"] == 0.2
        assert call["max_tokens"] == 512

    @pytest.mark.asyncio
    async def test_demo_default_mentions_documents(
        self,
        insight_service: InsightService,
        openai_double: RecordingLLMProvider,
        sample_documents: list[InsightDocument],
    ) -> None:
        result = await insight_service.generate_insights("Summarize", sample_documents)

        assert "report.pdf" in result
        assert "Team Wiki" in result
        assert openai_double.calls == []

    @pytest.mark.asyncio
    async def test_repeat_request_is_cached(
        self,
        insight_service: InsightService,
        openai_double: RecordingLLMProvider,
        sample_documents: list[InsightDocument],
    ) -> None:
        await insight_service.generate_insights("q", sample_documents, provider="openai")
        await insight_service.generate_insights("q", sample_documents, provider="openai")
        assert len(openai_double.calls) == 1

    @pytest.mark.asyncio
    async def test_document_order_changes_cache_key(
        self,
        insight_service: InsightService,
        openai_double: RecordingLLMProvider,
        sample_documents: list[InsightDocument],
    ) -> None:
        await insight_service.generate_insights("q", sample_documents, provider="openai")
        await insight_service.generate_insights(
            "q", list(reversed(sample_documents)), provider="openai"
        )
        assert len(openai_double.calls) == 2

    @pytest.mark.asyncio
    async def test_cache_is_per_provider(
        self,
        insight_service: InsightService,
        openai_double: RecordingLLMProvider,
        sample_documents: list[InsightDocument],
    ) -> None:
        demo = await insight_service.generate_insights("q", sample_documents, provider="demo")
        real = await insight_service.generate_insights("q", sample_documents, provider="openai")
        assert demo != real
        assert len(openai_double.calls) == 1

    @pytest.mark.asyncio
    async def test_provider_error_propagates_and_is_not_cached(
        self, sample_documents: list[InsightDocument]
    ) -> None:
        flaky = RecordingLLMProvider(
            name="openai",
            responses=[RemoteError(message="bad gateway", status=502), "second try"],
        )
        service = InsightService(
            providers={"openai": flaky},
            insights_cache=MemoryCacheProvider(),
            summaries_cache=MemoryCacheProvider(),
            topics_cache=MemoryCacheProvider(),
            default_provider="openai",
        )

        with pytest.raises(RemoteError):
            await service.generate_insights("q", sample_documents)
        assert await service.generate_insights("q", sample_documents) == "second try"
        assert len(flaky.calls) == 2

    @pytest.mark.asyncio
    async def test_concurrent_identical_requests_share_one_call(
        self, sample_documents: list[InsightDocument]
    ) -> None:
        gate = asyncio.Event()
        slow = RecordingLLMProvider(name="openai", responses=["first", "second"], gate=gate)
        service = InsightService(
            providers={"openai": slow},
            insights_cache=MemoryCacheProvider(),
            summaries_cache=MemoryCacheProvider(),
            topics_cache=MemoryCacheProvider(),
            default_provider="openai",
        )

        tasks = [
            asyncio.create_task(
                service.generate_insights("q", sample_documents, provider="openai")
            )
            for _ in range(3)
        ]
        await asyncio.sleep(0.01)
        gate.set()
        results = await asyncio.gather(*tasks)

        assert len(slow.calls) == 1
        assert results == ["first", "first", "first"]

    @pytest.mark.asyncio
    async def test_blank_query_rejected(
        self, insight_service: InsightService, sample_documents: list[InsightDocument]
    ) -> None:
        with pytest.raises(ValidationError):
            await insight_service.generate_insights("   ", sample_documents)

    @pytest.mark.asyncio
    async def test_empty_document_list_rejected(self, insight_service: InsightService) -> None:
        with pytest.raises(ValidationError):
            await insight_service.generate_insights("q", [])

    @pytest.mark.asyncio
    async def test_unknown_provider_makes_no_call(
        self,
        insight_service: InsightService,
        openai_double: RecordingLLMProvider,
        sample_documents: list[InsightDocument],
    ) -> None:
        with pytest.raises(UnsupportedProviderError):
            await insight_service.generate_insights("q", sample_documents, provider="bard")
        assert openai_double.calls == []


# ======================================================================
# Summaries and topics
# ======================================================================


class TestSummariesAndTopics:
    @pytest.mark.asyncio
    async def test_summary_uses_summary_query(
        self, insight_service: InsightService, openai_double: RecordingLLMProvider
    ) -> None:
        doc = make_insight_document()
        await insight_service.summarize_document(doc, provider="openai")
        await insight_service.summarize_document(doc, provider="openai")

        assert len(openai_double.calls) == 1
        assert openai_double.calls[0]["user_prompt"].startswith(f"USER QUERY: {SUMMARY_QUERY}")

    @pytest.mark.asyncio
    async def test_demo_summary(self, insight_service: InsightService) -> None:
        summary = await insight_service.summarize_document(make_insight_document(name="plan.docx"))
        assert "plan.docx" in summary

    @pytest.mark.asyncio
    async def test_demo_topics(
        self, insight_service: InsightService, sample_documents: list[InsightDocument]
    ) -> None:
        assert await insight_service.extract_key_topics(sample_documents) == list(DEMO_TOPICS)

    @pytest.mark.asyncio
    async def test_provider_topics_are_parsed(self, sample_documents: list[InsightDocument]) -> None:
        provider = RecordingLLMProvider(name="openai", responses=["- Revenue\n- Hiring\n"])
        service = InsightService(
            providers={"openai": provider},
            insights_cache=MemoryCacheProvider(),
            summaries_cache=MemoryCacheProvider(),
            topics_cache=MemoryCacheProvider(),
            default_provider="openai",
        )
        assert await service.extract_key_topics(sample_documents) == ["Revenue", "Hiring"]

    @pytest.mark.asyncio
    async def test_topics_without_list_is_empty_response(
        self, sample_documents: list[InsightDocument]
    ) -> None:
        provider = RecordingLLMProvider(name="openai", responses=["No topics, sorry."])
        service = InsightService(
            providers={"openai": provider},
            insights_cache=MemoryCacheProvider(),
            summaries_cache=MemoryCacheProvider(),
            topics_cache=MemoryCacheProvider(),
            default_provider="openai",
        )
        with pytest.raises(EmptyResponseError):
            await service.extract_key_topics(sample_documents)
