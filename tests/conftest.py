"""Shared pytest fixtures for the Document Insights test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from structlog.testing import LogCapture

from src.config.settings import Settings
from src.models.insight import InsightDocument
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.llm.demo_provider import DemoLLMProvider
from src.services.insight_service import InsightService
from tests.helpers import RecordingLLMProvider, make_insight_document, make_settings


@pytest.fixture(name="log_output")
def fixture_log_output() -> LogCapture:
    return LogCapture()


@pytest.fixture(autouse=True)
def fixture_configure_structlog(log_output: LogCapture) -> None:
    """Route structlog events into ``log_output`` instead of stdout."""
    structlog.configure(processors=[log_output], cache_logger_on_first_use=False)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Demo-provider settings with the document database under ``tmp_path``."""
    return make_settings(document_db_path=str(tmp_path / "documents.db"))


@pytest.fixture
def openai_double() -> RecordingLLMProvider:
    return RecordingLLMProvider(name="openai")


@pytest.fixture
def insight_service(openai_double: RecordingLLMProvider) -> InsightService:
    """InsightService with the demo adapter as default and a recording 'openai'."""
    return InsightService(
        providers={"openai": openai_double, "demo": DemoLLMProvider()},
        insights_cache=MemoryCacheProvider(name="insights"),
        summaries_cache=MemoryCacheProvider(name="summaries"),
        topics_cache=MemoryCacheProvider(name="topics"),
        default_provider="demo",
        temperature=0.2,
        max_tokens=512,
    )


@pytest.fixture
def sample_documents() -> list[InsightDocument]:
    return [
        make_insight_document("1", "report.pdf", "Quarterly revenue grew by 12 percent."),
        make_insight_document(
            "2", "Team Wiki", "Hiring plan for the platform team.", doc_type="confluence"
        ),
    ]
