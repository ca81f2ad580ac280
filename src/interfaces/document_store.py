"""Abstract base class for document persistence.

The extraction and insight core only needs a handful of operations from
storage: save a document and get its id back, load documents by id, list
and delete.  Implementations may use SQLite (local), PostgreSQL, or any
other backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.document import StoredDocument


class IDocumentStore(ABC):
    """Contract for stored-document persistence.

    All operations are async to support network-backed stores.
    """

    @abstractmethod
    async def save(self, document: StoredDocument) -> int:
        """Persist *document* and return its newly assigned id."""

    @abstractmethod
    async def get(self, document_id: int) -> StoredDocument | None:
        """Return the document with *document_id*, or ``None``."""

    @abstractmethod
    async def get_many(self, document_ids: list[int]) -> list[StoredDocument]:
        """Return the documents that exist among *document_ids*.

        Results follow the order of *document_ids*; missing ids are skipped,
        so callers compare lengths to detect them.
        """

    @abstractmethod
    async def list_all(self) -> list[StoredDocument]:
        """Return every stored document, oldest first."""

    @abstractmethod
    async def delete(self, document_id: int) -> bool:
        """Delete *document_id*; return ``True`` if a row was removed."""

    @abstractmethod
    async def search(self, keyword: str) -> list[StoredDocument]:
        """Return documents whose content contains *keyword* (case-insensitive)."""
