"""Document ingestion and insight orchestration.

DocumentService is the single entry point the API and CLI use.  It wires
the extractor, the Confluence provider, the document store and the insight
service together:

    upload_document     validate -> extract -> save
    add_confluence_page fetch -> save
    generate_insights   load documents -> InsightService
    summarize_document  load one document -> InsightService
    extract_key_topics  load documents -> InsightService

Extraction always completes before anything is written to the store, so a
failed extraction leaves no stored row behind.
"""

from __future__ import annotations

import structlog

from src.interfaces.content_provider import IContentProvider
from src.interfaces.document_store import IDocumentStore
from src.models.document import DocumentType, StoredDocument, file_extension
from src.models.insight import InsightAnswer, InsightDocument
from src.services.document_extractor import DocumentExtractor
from src.services.insight_service import InsightService
from src.utils.errors import DocumentNotFoundError

logger = structlog.get_logger(logger_name=__name__)


class DocumentService:
    """Coordinates document ingestion, storage and AI insight requests.

    Parameters
    ----------
    store:
        Persistence backend for extracted documents.
    extractor:
        Turns upload bytes into normalized text.
    content_provider:
        Fetches wiki pages (Confluence).
    insight_service:
        Routes insight, summary and topic requests to an AI provider.
    max_upload_size:
        Upload size limit in bytes.
    """

    def __init__(
        self,
        store: IDocumentStore,
        extractor: DocumentExtractor,
        content_provider: IContentProvider,
        insight_service: InsightService,
        max_upload_size: int = 100 * 1024 * 1024,
    ) -> None:
        self._store = store
        self._extractor = extractor
        self._content_provider = content_provider
        self._insight_service = insight_service
        self._max_upload_size = max_upload_size

    @property
    def max_upload_size(self) -> int:
        return self._max_upload_size

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    async def upload_document(
        self,
        filename: str,
        data: bytes,
        mime_type: str | None = None,
    ) -> StoredDocument:
        """Validate, extract and store an uploaded file.

        Raises
        ------
        EmptyContentError, FileTooLargeError, UnsupportedFormatError
            The upload was rejected before extraction.
        EncryptedDocumentError, ExtractionError, ConfigurationError
            Extraction failed; nothing was stored.
        """
        logger.info("document_upload_started", filename=filename, size=len(data))

        fmt = self._extractor.validate(filename, len(data), self._max_upload_size)
        content = await self._extractor.extract(data, fmt)

        document = StoredDocument(
            original_name=filename,
            type=DocumentType.UPLOAD,
            content=content,
            file_size=len(data),
            file_extension=file_extension(filename),
            mime_type=mime_type,
        )
        document_id = await self._store.save(document)
        return document.model_copy(update={"id": document_id})

    async def add_confluence_page(
        self,
        url: str,
        token: str | None = None,
        email: str | None = None,
    ) -> StoredDocument:
        """Fetch a Confluence page and store it as a document."""
        page = await self._content_provider.fetch(url, token=token, email=email)

        document = StoredDocument(
            original_name=page.title,
            type=DocumentType.CONFLUENCE,
            content=page.content,
            url=url,
        )
        document_id = await self._store.save(document)
        return document.model_copy(update={"id": document_id})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_documents(self) -> list[StoredDocument]:
        return await self._store.list_all()

    async def get_document(self, document_id: int) -> StoredDocument:
        document = await self._store.get(document_id)
        if document is None:
            raise DocumentNotFoundError(message=f"Document not found with ID: {document_id}")
        return document

    async def delete_document(self, document_id: int) -> None:
        if not await self._store.delete(document_id):
            raise DocumentNotFoundError(message=f"Document not found with ID: {document_id}")

    async def search_documents(self, keyword: str) -> list[StoredDocument]:
        return await self._store.search(keyword)

    # ------------------------------------------------------------------
    # AI insights
    # ------------------------------------------------------------------

    async def generate_insights(
        self,
        query: str,
        document_ids: list[int] | None = None,
        provider: str | None = None,
    ) -> InsightAnswer:
        """Answer *query* over the given documents, or over all documents.

        Raises
        ------
        DocumentNotFoundError
            A requested id does not exist, or the store is empty.
        """
        documents = await self._load_documents(document_ids)
        adapter = self._insight_service.get_provider(provider)
        insights = await self._insight_service.generate_insights(
            query, documents, provider=adapter.get_provider_name()
        )
        return InsightAnswer(
            query=query,
            insights=insights,
            documents_analyzed=len(documents),
            provider=adapter.get_provider_name(),
        )

    async def summarize_document(self, document_id: int, provider: str | None = None) -> str:
        document = await self.get_document(document_id)
        return await self._insight_service.summarize_document(
            InsightDocument.from_stored(document), provider=provider
        )

    async def extract_key_topics(
        self,
        document_ids: list[int] | None = None,
        provider: str | None = None,
    ) -> list[str]:
        documents = await self._load_documents(document_ids)
        return await self._insight_service.extract_key_topics(documents, provider=provider)

    def provider_status(self) -> dict[str, object]:
        """Configured default provider plus every provider ready to use."""
        return {
            "provider": self._insight_service.default_provider,
            "available_providers": self._insight_service.available_providers(),
        }

    async def _load_documents(self, document_ids: list[int] | None) -> list[InsightDocument]:
        if document_ids:
            unique_ids = list(dict.fromkeys(document_ids))
            stored = await self._store.get_many(unique_ids)
            if len(stored) != len(unique_ids):
                raise DocumentNotFoundError(message="Some requested documents were not found")
        else:
            stored = await self._store.list_all()

        if not stored:
            raise DocumentNotFoundError(message="No documents available for analysis")
        return [InsightDocument.from_stored(doc) for doc in stored]
