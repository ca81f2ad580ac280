"""Document Insights domain models -- re-exports all public model classes.

The models are organized by pipeline stage:
    - document.py -- uploads, extracted metadata, wiki pages, stored documents
    - insight.py  -- provider-agnostic insight requests and cache keys
"""

from __future__ import annotations

from src.models.document import (
    DocumentFormat,
    DocumentMetadata,
    DocumentType,
    RawDocument,
    RemoteContent,
    StoredDocument,
    file_extension,
)
from src.models.insight import (
    InsightAnswer,
    InsightDocument,
    InsightRequest,
    documents_fingerprint,
)

__all__ = [
    "DocumentFormat",
    "DocumentMetadata",
    "DocumentType",
    "InsightAnswer",
    "InsightDocument",
    "InsightRequest",
    "RawDocument",
    "RemoteContent",
    "StoredDocument",
    "documents_fingerprint",
    "file_extension",
]
