"""Pydantic request/response schemas for the Document Insights API.

Defines the public contract for all REST endpoints: uploads, Confluence
imports, document listing, insights, summaries, topics and health.

Convention: Request schemas end with "Request", response schemas end with
"Response".  Field(...) adds constraints and descriptions for the API docs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.models.document import StoredDocument


class UploadResponse(BaseModel):
    """Returned after a document (file or wiki page) has been stored."""

    message: str
    document_id: int
    original_name: str
    content_preview: str


class ConfluenceRequest(BaseModel):
    """A Confluence page to import, with optional per-request credentials."""

    url: str = Field(..., min_length=1)
    confluence_token: str | None = None
    confluence_email: str | None = None


class DocumentSummaryResponse(BaseModel):
    """A stored document without its full content."""

    id: int
    original_name: str
    type: str
    file_size: int | None = None
    file_extension: str | None = None
    mime_type: str | None = None
    url: str | None = None
    created_at: datetime
    content_preview: str

    @classmethod
    def from_document(cls, document: StoredDocument, preview_length: int = 500) -> DocumentSummaryResponse:
        return cls(
            id=document.id,
            original_name=document.original_name,
            type=document.type.value,
            file_size=document.file_size,
            file_extension=document.file_extension,
            mime_type=document.mime_type,
            url=document.url,
            created_at=document.created_at,
            content_preview=document.content_preview(preview_length),
        )


class DocumentDetailResponse(DocumentSummaryResponse):
    """A stored document including its full extracted text."""

    content: str

    @classmethod
    def from_document(cls, document: StoredDocument, preview_length: int = 500) -> DocumentDetailResponse:
        summary = DocumentSummaryResponse.from_document(document, preview_length)
        return cls(**summary.model_dump(), content=document.content)


class InsightsRequest(BaseModel):
    """A question about the stored documents.

    When ``document_ids`` is empty or omitted, every stored document is used.
    """

    query: str = Field(..., min_length=1, max_length=5000)
    document_ids: list[int] | None = None
    provider: str | None = Field(default=None, description="Overrides AI_PROVIDER for this call")

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value


class InsightsResponse(BaseModel):
    query: str
    insights: str
    documents_analyzed: int
    provider: str
    timestamp: datetime


class SummaryResponse(BaseModel):
    document_id: int
    summary: str


class TopicsRequest(BaseModel):
    document_ids: list[int] | None = None
    provider: str | None = None


class TopicsResponse(BaseModel):
    topics: list[str]


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    provider: str
    available_providers: list[str]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
