"""SQLite-backed document store.

Persists extracted documents to a local SQLite database at
``data/documents.db``.  Uses ``aiosqlite`` for async I/O.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

from src.interfaces.document_store import IDocumentStore
from src.models.document import DocumentType, StoredDocument

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/documents.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS documents (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    original_name   TEXT    NOT NULL,
    type            TEXT    NOT NULL,
    content         TEXT    NOT NULL,
    file_size       INTEGER,
    file_extension  TEXT,
    mime_type       TEXT,
    url             TEXT,
    created_at      TEXT    NOT NULL
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_documents_type ON documents(type);",
]

_INSERT_SQL = """\
INSERT INTO documents
    (original_name, type, content, file_size, file_extension, mime_type, url, created_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?);
"""

_SELECT_COLUMNS = (
    "SELECT id, original_name, type, content, file_size, file_extension, "
    "mime_type, url, created_at FROM documents"
)


class SQLiteDocumentStore(IDocumentStore):
    """SQLite-backed document persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the documents table and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_TABLE_SQL)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("document_db_initialized", path=str(self._db_path))

    async def save(self, document: StoredDocument) -> int:
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(
                _INSERT_SQL,
                (
                    document.original_name,
                    document.type.value,
                    document.content,
                    document.file_size,
                    document.file_extension,
                    document.mime_type,
                    document.url,
                    document.created_at.isoformat(),
                ),
            )
            await db.commit()
            document_id = cursor.lastrowid

        logger.info(
            "document_saved",
            document_id=document_id,
            name=document.original_name,
            type=document.type.value,
            content_length=len(document.content),
        )
        return document_id

    async def get(self, document_id: int) -> StoredDocument | None:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(f"{_SELECT_COLUMNS} WHERE id = ?", (document_id,))
            row = await cursor.fetchone()
        return _row_to_document(dict(row)) if row else None

    async def get_many(self, document_ids: list[int]) -> list[StoredDocument]:
        """Return existing documents in the order of *document_ids*."""
        if not document_ids:
            return []
        placeholders = ", ".join("?" for _ in document_ids)
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"{_SELECT_COLUMNS} WHERE id IN ({placeholders})",
                tuple(document_ids),
            )
            rows = await cursor.fetchall()

        by_id = {r["id"]: _row_to_document(dict(r)) for r in rows}
        return [by_id[doc_id] for doc_id in document_ids if doc_id in by_id]

    async def list_all(self) -> list[StoredDocument]:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(f"{_SELECT_COLUMNS} ORDER BY id ASC")
            rows = await cursor.fetchall()
        return [_row_to_document(dict(r)) for r in rows]

    async def search(self, keyword: str) -> list[StoredDocument]:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            # LIKE is case-insensitive for ASCII in SQLite.
            cursor = await db.execute(
                f"{_SELECT_COLUMNS} WHERE content LIKE ? ESCAPE '\\' ORDER BY id ASC",
                (f"%{_escape_like(keyword)}%",),
            )
            rows = await cursor.fetchall()
        return [_row_to_document(dict(r)) for r in rows]

    async def delete(self, document_id: int) -> bool:
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute("DELETE FROM documents WHERE id = ?", (document_id,))
            await db.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("document_deleted", document_id=document_id)
        return deleted

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
        return "sqlite_documents"


def _row_to_document(row: dict[str, Any]) -> StoredDocument:
    return StoredDocument(
        id=row["id"],
        original_name=row["original_name"],
        type=DocumentType(row["type"]),
        content=row["content"],
        file_size=row["file_size"],
        file_extension=row["file_extension"],
        mime_type=row["mime_type"],
        url=row["url"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
