# src/ragline/stores/sqlite_chunk.py
"""SQLite chunk store with exact cosine nearest-neighbour search."""

import numpy as np

from ragline.exceptions import NotFoundError, PersistenceError
from ragline.models import Chunk, SearchRow
from ragline.stores.base import ChunkStore, VectorStore
from ragline.stores.sqlite_schema import CHUNK_COLUMNS, init_schema, row_to_chunk, transaction
from ragline.vectors import cosine_distances, parse_vector_literal, to_vector_literal

# Component count of a stored vector literal
_DIMENSIONS_SQL = "(length(embedding) - length(replace(embedding, ',', '')) + 1)"


class SQLiteChunkStore(ChunkStore, VectorStore):
    """SQLite-based chunk store.

    Embeddings are stored as vector literals. ``nearest`` scans every embedded
    chunk and ranks by cosine distance with numpy, so results are exact.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        init_schema(db_path)

    def get(self, chunk_id: str) -> Chunk | None:
        """Retrieve a chunk by ID."""
        with transaction(self.db_path, "get chunk") as conn:
            row = conn.execute(
                f"SELECT {CHUNK_COLUMNS} FROM chunks WHERE id = ?", (chunk_id,)
            ).fetchone()
        return row_to_chunk(row) if row else None

    def get_by_document(self, document_id: str) -> list[Chunk]:
        """Get all chunks of a document, ordered by index."""
        with transaction(self.db_path, "get chunks by document") as conn:
            rows = conn.execute(
                f"SELECT {CHUNK_COLUMNS} FROM chunks WHERE document_id = ? ORDER BY chunk_index",
                (document_id,),
            ).fetchall()
        return [row_to_chunk(row) for row in rows]

    def get_without_embedding(self, document_id: str | None = None) -> list[Chunk]:
        """Get chunks lacking an embedding, ordered by document and index."""
        query = f"SELECT {CHUNK_COLUMNS} FROM chunks WHERE embedding IS NULL"
        params: tuple = ()
        if document_id is not None:
            query += " AND document_id = ?"
            params = (document_id,)
        query += " ORDER BY document_id, chunk_index"

        with transaction(self.db_path, "get chunks without embedding") as conn:
            rows = conn.execute(query, params).fetchall()
        return [row_to_chunk(row) for row in rows]

    def delete_by_document(self, document_id: str) -> int:
        """Delete all chunks of a document."""
        with transaction(self.db_path, "delete chunks") as conn:
            cursor = conn.execute("DELETE FROM chunks WHERE document_id = ?", (document_id,))
        return cursor.rowcount

    def count_chunks(self, document_id: str | None = None) -> int:
        """Count chunks, globally or for one document."""
        return self._count("SELECT COUNT(id) FROM chunks", document_id)

    def count_embedded(self, document_id: str | None = None) -> int:
        """Count chunks that have an embedding."""
        return self._count("SELECT COUNT(id) FROM chunks WHERE embedding IS NOT NULL", document_id)

    def _count(self, query: str, document_id: str | None) -> int:
        params: tuple = ()
        if document_id is not None:
            query += (" AND" if "WHERE" in query else " WHERE") + " document_id = ?"
            params = (document_id,)
        with transaction(self.db_path, "count chunks") as conn:
            count = conn.execute(query, params).fetchone()
        return count[0] if count else 0

    def set_embedding(self, chunk_id: str, embedding: list[float]) -> bool:
        """Persist one chunk's embedding; never overwrites an existing one.

        Raises:
            NotFoundError: If the chunk does not exist
            PersistenceError: If the vector's length differs from stored embeddings
        """
        literal = to_vector_literal(embedding)
        with transaction(self.db_path, "set embedding") as conn:
            # Single statement so concurrent writers cannot mix dimensions
            cursor = conn.execute(
                "UPDATE chunks SET embedding = ? WHERE id = ? AND embedding IS NULL "
                "AND NOT EXISTS (SELECT 1 FROM chunks WHERE embedding IS NOT NULL "
                f"AND {_DIMENSIONS_SQL} != ?)",
                (literal, chunk_id, len(embedding)),
            )
            if cursor.rowcount == 1:
                return True
            row = conn.execute(
                "SELECT embedding IS NOT NULL FROM chunks WHERE id = ?", (chunk_id,)
            ).fetchone()
            stored = conn.execute(
                f"SELECT {_DIMENSIONS_SQL} FROM chunks WHERE embedding IS NOT NULL LIMIT 1"
            ).fetchone()
        expected = stored[0] if stored else None
        if row is None:
            raise NotFoundError(f"Chunk not found: {chunk_id}", chunk_id=chunk_id)
        if row[0]:
            return False
        raise PersistenceError(
            f"Embedding has {len(embedding)} dimensions but stored embeddings have {expected}",
            chunk_id=chunk_id,
            dimensions=len(embedding),
            expected=expected,
        )

    def nearest(self, vector_literal: str, k: int) -> list[SearchRow]:
        """Return the k embedded chunks closest to the query, ascending by distance."""
        query = np.asarray(parse_vector_literal(vector_literal), dtype=float)
        if k < 1:
            return []

        with transaction(self.db_path, "nearest chunks") as conn:
            rows = conn.execute(
                "SELECT id, document_id, chunk_index, content, embedding "
                "FROM chunks WHERE embedding IS NOT NULL"
            ).fetchall()
        if not rows:
            return []

        vectors = [parse_vector_literal(row[4]) for row in rows]
        if any(len(v) != len(query) for v in vectors):
            raise PersistenceError(
                f"Query vector has {len(query)} dimensions but stored vectors differ",
                dimensions=len(query),
            )

        distances = cosine_distances(np.asarray(vectors, dtype=float), query)
        order = np.argsort(distances, kind="stable")[:k]
        return [
            SearchRow(
                chunk_id=rows[i][0],
                document_id=rows[i][1],
                chunk_index=rows[i][2],
                content=rows[i][3],
                distance=float(distances[i]),
            )
            for i in order
        ]
