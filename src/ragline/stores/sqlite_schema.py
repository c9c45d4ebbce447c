# src/ragline/stores/sqlite_schema.py
"""Shared SQLite schema and connection handling for the document and chunk stores.

Documents and chunks live in the same database file so that a document and
its chunks can be written or deleted in one transaction.
"""

import json
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ragline.exceptions import PersistenceError
from ragline.models import Chunk
from ragline.vectors import parse_vector_literal, to_vector_literal

# Seconds a writer waits for a lock held by another worker thread
BUSY_TIMEOUT_SECONDS = 30.0

CHUNK_COLUMNS = "id, document_id, chunk_index, content, embedding, metadata"


@contextmanager
def transaction(db_path: str, operation: str) -> Iterator[sqlite3.Connection]:
    """Open a connection, commit on success and roll back on any error.

    sqlite3 errors are re-raised as PersistenceError; other exceptions pass
    through unchanged after the rollback.
    """
    try:
        conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT_SECONDS)
    except sqlite3.Error as e:
        raise PersistenceError(f"{operation} failed: {e}", operation=operation) from e

    try:
        conn.execute("PRAGMA foreign_keys = ON")
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise PersistenceError(f"{operation} failed: {e}", operation=operation) from e
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_schema(db_path: str) -> None:
    """Create tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with transaction(db_path, "init schema") as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS documents (
                id TEXT PRIMARY KEY,
                source TEXT NOT NULL,
                filename TEXT NOT NULL,
                checksum TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS chunks (
                id TEXT PRIMARY KEY,
                document_id TEXT NOT NULL REFERENCES documents(id),
                chunk_index INTEGER NOT NULL,
                content TEXT NOT NULL,
                embedding TEXT,
                metadata TEXT NOT NULL,
                UNIQUE (document_id, chunk_index)
            )
        """)
        conn.execute("CREATE INDEX IF NOT EXISTS idx_chunks_document ON chunks(document_id)")


def chunk_to_row(chunk: Chunk) -> tuple:
    """Convert a Chunk to a row tuple matching CHUNK_COLUMNS."""
    embedding = to_vector_literal(chunk.embedding) if chunk.embedding is not None else None
    return (
        chunk.id,
        chunk.document_id,
        chunk.index,
        chunk.content,
        embedding,
        json.dumps(chunk.metadata),
    )


def row_to_chunk(row: tuple) -> Chunk:
    """Convert a row selected with CHUNK_COLUMNS to a Chunk."""
    return Chunk(
        id=row[0],
        document_id=row[1],
        index=row[2],
        content=row[3],
        embedding=parse_vector_literal(row[4]) if row[4] is not None else None,
        metadata=json.loads(row[5]),
    )
