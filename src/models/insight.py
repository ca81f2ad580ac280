"""Insight request models for the provider routing stage.

An :class:`InsightRequest` is the provider-agnostic description of one
"generate insights" call: the user's query plus the ordered documents it
refers to.  Its :meth:`~InsightRequest.cache_key` is what the insight cache
is keyed on.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.document import StoredDocument


class InsightDocument(BaseModel):
    """A document as seen by the AI providers: identity, label and text."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    content: str

    @classmethod
    def from_stored(cls, document: StoredDocument) -> InsightDocument:
        return cls(
            id=str(document.id),
            name=document.original_name,
            type=document.type.value,
            content=document.content,
        )


def documents_fingerprint(documents: Sequence[InsightDocument]) -> str:
    """Return an order-sensitive SHA-256 over document identities and contents.

    Swapping two documents changes the fingerprint; callers that want cache
    hits across orderings must sort before calling.
    """
    digest = hashlib.sha256()
    for document in documents:
        for part in (document.id, document.name, document.type, document.content):
            digest.update(part.encode("utf-8"))
            digest.update(b"\x1f")
        digest.update(b"\x1e")
    return digest.hexdigest()


class InsightRequest(BaseModel):
    """Query text plus the ordered documents it should be answered from."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(min_length=1)
    documents: tuple[InsightDocument, ...] = Field(min_length=1)

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value

    def cache_key(self) -> str:
        """Deterministic key: query text joined to the document fingerprint."""
        return f"{self.query}_{documents_fingerprint(self.documents)}"


class InsightAnswer(BaseModel):
    """Generated insights together with what they were generated from."""

    model_config = ConfigDict(frozen=True)

    query: str
    insights: str
    documents_analyzed: int
    provider: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
