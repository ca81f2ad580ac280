"""Document Insights FastAPI application entry point.

Wires together all providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml`` and configures
structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.content.confluence_provider import ConfluenceContentProvider
from src.providers.llm import build_llm_providers
from src.providers.store.sqlite_document_store import SQLiteDocumentStore
from src.services.document_extractor import DocumentExtractor
from src.services.document_service import DocumentService
from src.services.insight_service import InsightService
from src.utils.logging import configure_logging, get_logger

_APP_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    app_env=settings.app_env,
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component construction
# ---------------------------------------------------------------------------


def _build_cache(config: dict[str, Any], name: str) -> MemoryCacheProvider:
    cache_config = config["cache"][name]
    return MemoryCacheProvider(
        max_size=int(cache_config["max_size"]),
        ttl=float(cache_config["ttl"]),
        name=name,
    )


def _build_all(app_settings: Settings, config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- AI providers + caches --
    llm_providers = build_llm_providers(app_settings)
    insight_service = InsightService(
        providers=llm_providers,
        insights_cache=_build_cache(config, "insights"),
        summaries_cache=_build_cache(config, "summaries"),
        topics_cache=_build_cache(config, "topics"),
        default_provider=app_settings.ai_provider,
        temperature=app_settings.ai_temperature,
        max_tokens=app_settings.ai_max_tokens,
    )

    # -- Ingestion --
    confluence = ConfluenceContentProvider(app_settings)
    store = SQLiteDocumentStore(db_path=app_settings.document_db_path)
    extractor = DocumentExtractor(libreoffice_timeout=app_settings.libreoffice_timeout)

    document_service = DocumentService(
        store=store,
        extractor=extractor,
        content_provider=confluence,
        insight_service=insight_service,
        max_upload_size=int(config["upload"]["max_size"]),
    )

    # Adapters that own an httpx client and must be closed on shutdown.
    closeables = [
        confluence,
        llm_providers["google"],
        llm_providers["ollama"],
    ]

    return {
        "config": config,
        "document_store": store,
        "document_service": document_service,
        "insight_service": insight_service,
        "closeables": closeables,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def _make_lifespan(app_settings: Settings, config_path: str):  # noqa: ANN202
    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise all providers and services on startup, clean up on shutdown."""
        components = _build_all(app_settings, load_config(config_path, app_settings))

        for key, value in components.items():
            setattr(application.state, key, value)

        # Creates the documents table if needed.
        await components["document_store"].initialize()

        insight_service: InsightService = components["insight_service"]
        _logger.info(
            "app_startup",
            version=_APP_VERSION,
            environment=app_settings.app_env,
            ai_provider=insight_service.default_provider,
            available_providers=insight_service.available_providers(),
        )

        yield

        for resource in components["closeables"]:
            await resource.aclose()
        _logger.info("app_shutdown", message="HTTP clients closed")

    return _lifespan


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    config_path: str = "config/config.yaml",
) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or settings
    application = FastAPI(
        title="Document Insights API",
        version=_APP_VERSION,
        description=(
            "Upload PDF, Word and text documents or import Confluence pages, "
            "then ask questions about them through a configurable AI provider."
        ),
        lifespan=_make_lifespan(app_settings, config_path),
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(
        application,
        allowed_origins=[app_settings.frontend_url] if app_settings.frontend_url else None,
    )

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
