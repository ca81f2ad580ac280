"""FastAPI API routes for Document Insights.

Provides REST endpoints for document upload, Confluence import, document
listing and deletion, AI insights, summaries, key topics, and health.
Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/documents/upload              POST    Upload file -> extract -> store
# /api/v1/documents/confluence          POST    Fetch Confluence page -> store
# /api/v1/documents                     GET     List stored documents
# /api/v1/documents/search              GET     Keyword search over content
# /api/v1/documents/{id}                GET     One document with content
# /api/v1/documents/{id}                DELETE  Delete a document
# /api/v1/documents/{id}/summary        GET     Cached AI summary
# /api/v1/insights                      POST    Ask a question about documents
# /api/v1/topics                        POST    Key topics for documents
# /api/v1/health                        GET     Health check + provider status
#
# Domain errors raised by the services are turned into JSON error bodies
# by ErrorHandlingMiddleware (see middleware.py); routes do not catch them.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response, UploadFile

from src.api.schemas import (
    ConfluenceRequest,
    DocumentDetailResponse,
    DocumentSummaryResponse,
    ErrorResponse,
    HealthResponse,
    InsightsRequest,
    InsightsResponse,
    SummaryResponse,
    TopicsRequest,
    TopicsResponse,
    UploadResponse,
)
from src.services.document_service import DocumentService
from src.utils.errors import FileTooLargeError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

_UPLOAD_CHUNK_SIZE = 64 * 1024
_APP_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_document_service(request: Request) -> DocumentService:
    """Return the document service from application state."""
    return request.app.state.document_service


def _get_preview_length(request: Request) -> int:
    config = getattr(request.app.state, "config", None) or {}
    return int(config.get("api", {}).get("content_preview_length", 500))


DocumentServiceDep = Annotated[DocumentService, Depends(_get_document_service)]
PreviewLengthDep = Annotated[int, Depends(_get_preview_length)]


# ---------------------------------------------------------------------------
# Document ingestion
# ---------------------------------------------------------------------------


@router.post(
    "/documents/upload",
    response_model=UploadResponse,
    responses={
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Upload a document for text extraction",
)
async def upload_document(
    file: UploadFile,
    service: DocumentServiceDep,
    preview_length: PreviewLengthDep,
) -> UploadResponse:
    """Accept a PDF/DOC/DOCX/TXT file, extract its text and store it."""
    # Read in chunks so an oversized upload is rejected without buffering
    # the whole body.
    max_size = service.max_upload_size
    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = await file.read(_UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_size:
            _logger.warning(
                "upload_rejected_too_large",
                filename=file.filename,
                max_size=max_size,
            )
            raise FileTooLargeError(
                message=f"File too large: exceeds limit of {max_size / 1024 / 1024:.2f} MB",
            )
        chunks.append(chunk)
    data = b"".join(chunks)
    del chunks

    document = await service.upload_document(
        file.filename or "unknown",
        data,
        mime_type=file.content_type,
    )
    return UploadResponse(
        message="Document uploaded and processed successfully",
        document_id=document.id,
        original_name=document.original_name,
        content_preview=document.content_preview(preview_length),
    )


@router.post(
    "/documents/confluence",
    response_model=UploadResponse,
    responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Import a Confluence page",
)
async def add_confluence_page(
    body: ConfluenceRequest,
    service: DocumentServiceDep,
    preview_length: PreviewLengthDep,
) -> UploadResponse:
    document = await service.add_confluence_page(
        body.url,
        token=body.confluence_token,
        email=body.confluence_email,
    )
    return UploadResponse(
        message="Confluence content fetched and processed successfully",
        document_id=document.id,
        original_name=document.original_name,
        content_preview=document.content_preview(preview_length),
    )


# ---------------------------------------------------------------------------
# Document queries
# ---------------------------------------------------------------------------


@router.get(
    "/documents",
    response_model=list[DocumentSummaryResponse],
    summary="List stored documents",
)
async def list_documents(
    service: DocumentServiceDep,
    preview_length: PreviewLengthDep,
) -> list[DocumentSummaryResponse]:
    documents = await service.list_documents()
    return [DocumentSummaryResponse.from_document(doc, preview_length) for doc in documents]


@router.get(
    "/documents/search",
    response_model=list[DocumentSummaryResponse],
    summary="Search document content by keyword",
)
async def search_documents(
    service: DocumentServiceDep,
    preview_length: PreviewLengthDep,
    keyword: str = Query(..., min_length=1),
) -> list[DocumentSummaryResponse]:
    documents = await service.search_documents(keyword)
    return [DocumentSummaryResponse.from_document(doc, preview_length) for doc in documents]


@router.get(
    "/documents/{document_id}",
    response_model=DocumentDetailResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get one document including its text",
)
async def get_document(
    document_id: int,
    service: DocumentServiceDep,
    preview_length: PreviewLengthDep,
) -> DocumentDetailResponse:
    document = await service.get_document(document_id)
    return DocumentDetailResponse.from_document(document, preview_length)


@router.delete(
    "/documents/{document_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a document",
)
async def delete_document(document_id: int, service: DocumentServiceDep) -> Response:
    await service.delete_document(document_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# AI insights
# ---------------------------------------------------------------------------


@router.get(
    "/documents/{document_id}/summary",
    response_model=SummaryResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Summarize one document",
)
async def summarize_document(
    document_id: int,
    service: DocumentServiceDep,
    provider: str | None = None,
) -> SummaryResponse:
    summary = await service.summarize_document(document_id, provider=provider)
    return SummaryResponse(document_id=document_id, summary=summary)


@router.post(
    "/insights",
    response_model=InsightsResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
    summary="Generate AI insights over stored documents",
)
async def generate_insights(body: InsightsRequest, service: DocumentServiceDep) -> InsightsResponse:
    answer = await service.generate_insights(
        body.query,
        document_ids=body.document_ids,
        provider=body.provider,
    )
    return InsightsResponse(
        query=answer.query,
        insights=answer.insights,
        documents_analyzed=answer.documents_analyzed,
        provider=answer.provider,
        timestamp=answer.generated_at,
    )


@router.post(
    "/topics",
    response_model=TopicsResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Extract key topics from stored documents",
)
async def extract_topics(body: TopicsRequest, service: DocumentServiceDep) -> TopicsResponse:
    topics = await service.extract_key_topics(body.document_ids, provider=body.provider)
    return TopicsResponse(topics=topics)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(service: DocumentServiceDep) -> HealthResponse:
    """Return application health, version and provider availability."""
    status = service.provider_status()
    provider = str(status["provider"])
    available = list(status["available_providers"])
    return HealthResponse(
        status="healthy" if provider in available else "degraded",
        version=_APP_VERSION,
        provider=provider,
        available_providers=available,
    )
