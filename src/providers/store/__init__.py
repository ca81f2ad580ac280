"""Document store providers.

SQLiteDocumentStore implements IDocumentStore on a local SQLite file via
aiosqlite.  Swap in another IDocumentStore for a networked database.
"""

from src.providers.store.sqlite_document_store import SQLiteDocumentStore

__all__ = ["SQLiteDocumentStore"]
