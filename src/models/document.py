"""Document models for the extraction and storage stages.

Defines Pydantic v2 models for raw uploads, extracted-document metadata,
fetched wiki pages and stored documents.  Value models are frozen.

These models follow a document through ingestion:
    1. A user uploads a file          -> RawDocument (bytes + DocumentFormat)
    2. The extractor reads it          -> normalized text + DocumentMetadata
    3. Or a wiki page is fetched       -> RemoteContent
    4. The document service saves it   -> StoredDocument
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field

from src.utils.errors import UnsupportedFormatError


class DocumentFormat(str, Enum):
    """Supported upload formats, keyed by lower-cased file extension."""

    PDF = ".pdf"
    DOC = ".doc"
    DOCX = ".docx"
    TXT = ".txt"

    @property
    def label(self) -> str:
        """Human-readable type label shown alongside stored documents."""
        return _FORMAT_LABELS[self]

    @classmethod
    def from_filename(cls, filename: str) -> DocumentFormat:
        """Resolve the format from a file name's extension.

        Only the extension is consulted; file contents are never sniffed.

        Raises
        ------
        UnsupportedFormatError
            If the extension is missing or not one of .pdf/.doc/.docx/.txt.
        """
        extension = file_extension(filename)
        try:
            return cls(extension)
        except ValueError:
            raise UnsupportedFormatError(
                message=f"Unsupported file type: {extension or '(none)'}",
            ) from None


_FORMAT_LABELS: dict[DocumentFormat, str] = {
    DocumentFormat.PDF: "PDF Document",
    DocumentFormat.DOCX: "Microsoft Word Document (DOCX)",
    DocumentFormat.DOC: "Microsoft Word Document (DOC)",
    DocumentFormat.TXT: "Text Document",
}


def file_extension(filename: str) -> str:
    """Return the lower-cased extension of *filename* including the dot, or ``""``."""
    return PurePath(filename).suffix.lower()


class DocumentType(str, Enum):
    """Where a stored document came from."""

    UPLOAD = "upload"
    CONFLUENCE = "confluence"


class RawDocument(BaseModel):
    """An uploaded payload awaiting extraction.  Exists only during extraction."""

    model_config = ConfigDict(frozen=True)

    filename: str
    format: DocumentFormat
    # Excluded from dumps and reprs; uploads can be up to 100 MB.
    data: bytes = Field(repr=False, exclude=True)

    @property
    def size(self) -> int:
        return len(self.data)


class DocumentMetadata(BaseModel):
    """Size, extension and type label recorded next to extracted text."""

    model_config = ConfigDict(frozen=True)

    size: int = Field(ge=0)
    extension: str
    type: str


class RemoteContent(BaseModel):
    """Title and cleaned body text of a single fetched wiki page."""

    model_config = ConfigDict(frozen=True)

    title: str = "Untitled"
    content: str


class StoredDocument(BaseModel):
    """A document as persisted by the document store.

    ``id`` is ``None`` until the store assigns one on save.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    original_name: str
    type: DocumentType
    content: str
    file_size: int | None = None
    file_extension: str | None = None
    mime_type: str | None = None
    url: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def content_preview(self, length: int = 500) -> str:
        """Return the first *length* characters, with ``...`` appended when cut."""
        if len(self.content) <= length:
            return self.content
        return self.content[:length] + "..."
