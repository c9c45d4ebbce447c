# src/ragline/stores/sqlite_document.py
"""SQLite document store implementation."""

import sqlite3
from datetime import datetime

from ragline.exceptions import DuplicateError
from ragline.models import Chunk, Document
from ragline.stores.base import DocumentStore
from ragline.stores.sqlite_schema import CHUNK_COLUMNS, chunk_to_row, init_schema, transaction

_DOCUMENT_COLUMNS = "id, source, filename, checksum, created_at"


def _row_to_document(row: tuple) -> Document:
    return Document(
        id=row[0],
        source=row[1],
        filename=row[2],
        checksum=row[3],
        created_at=datetime.fromisoformat(row[4]),
    )


class SQLiteDocumentStore(DocumentStore):
    """SQLite-based document store.

    Shares its database file with SQLiteChunkStore.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        init_schema(db_path)

    def add_with_chunks(self, document: Document, chunks: list[Chunk]) -> None:
        """Store a document and its chunks in one transaction."""
        with transaction(self.db_path, "add document") as conn:
            try:
                conn.execute(
                    f"INSERT INTO documents ({_DOCUMENT_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                    (
                        document.id,
                        document.source,
                        document.filename,
                        document.checksum,
                        document.created_at.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as e:
                existing = conn.execute(
                    "SELECT id FROM documents WHERE checksum = ?", (document.checksum,)
                ).fetchone()
                if existing is None:
                    raise
                raise DuplicateError(
                    f"Document already ingested with ID: {existing[0]}",
                    document_id=existing[0],
                    checksum=document.checksum,
                ) from e

            conn.executemany(
                f"INSERT INTO chunks ({CHUNK_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                [chunk_to_row(c) for c in chunks],
            )

    def get(self, document_id: str) -> Document | None:
        """Retrieve a document by ID."""
        with transaction(self.db_path, "get document") as conn:
            row = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = ?", (document_id,)
            ).fetchone()
        return _row_to_document(row) if row else None

    def find_by_checksum(self, checksum: str) -> Document | None:
        """Find the document with the given content checksum."""
        with transaction(self.db_path, "find document by checksum") as conn:
            row = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE checksum = ?", (checksum,)
            ).fetchone()
        return _row_to_document(row) if row else None

    def list_documents(self) -> list[Document]:
        """List all documents, oldest first."""
        with transaction(self.db_path, "list documents") as conn:
            rows = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents ORDER BY created_at, id"
            ).fetchall()
        return [_row_to_document(row) for row in rows]

    def exists(self, document_id: str) -> bool:
        """Check whether a document exists."""
        with transaction(self.db_path, "check document") as conn:
            row = conn.execute("SELECT 1 FROM documents WHERE id = ?", (document_id,)).fetchone()
        return row is not None

    def delete_with_chunks(self, document_id: str) -> int:
        """Delete chunks first, then the document, in one transaction."""
        with transaction(self.db_path, "delete document") as conn:
            cursor = conn.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))
            deleted = cursor.rowcount
            conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))
        return deleted

    def count_documents(self) -> int:
        """Count the total number of documents in the store."""
        with transaction(self.db_path, "count documents") as conn:
            count = conn.execute("SELECT COUNT(id) FROM documents").fetchone()
        return count[0] if count else 0
