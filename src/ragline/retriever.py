"""Retrieval pipeline for ragline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ragline.embedder import Embedder
from ragline.exceptions import ValidationError
from ragline.models import SearchResult
from ragline.stores import VectorStore
from ragline.vectors import to_vector_literal

if TYPE_CHECKING:
    from ragline.settings import Settings

logger = logging.getLogger(__name__)


class Retriever:
    """Embeds a query and returns the closest embedded chunks."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        default_k: int = 5,
        max_k: int = 50,
    ) -> None:
        """Initialize the retriever.

        Args:
            embedder: Embedder for query embedding
            vector_store: Store searched by cosine distance
            default_k: Number of results when k is not given
            max_k: Upper bound for k
        """
        self.embedder = embedder
        self.vector_store = vector_store
        self.default_k = default_k
        self.max_k = max_k

    @classmethod
    def from_settings(
        cls, embedder: Embedder, vector_store: VectorStore, settings: Settings
    ) -> Retriever:
        return cls(
            embedder=embedder,
            vector_store=vector_store,
            default_k=settings.default_k,
            max_k=settings.max_k,
        )

    def clamp_k(self, k: int | None) -> int:
        """Resolve k: None means default_k, then clamp into [1, max_k]."""
        k = self.default_k if k is None else k
        return max(1, min(k, self.max_k))

    def search(self, query: str, k: int | None = None) -> list[SearchResult]:
        """Get the chunks closest to a query.

        Args:
            query: User's search query
            k: Number of results to return (default: self.default_k)

        Returns:
            SearchResults ordered by ascending cosine distance

        Raises:
            ValidationError: If the query is blank
            ExternalServiceError: If the query cannot be embedded
        """
        if query is None or not query.strip():
            raise ValidationError("Query must not be blank")

        k = self.clamp_k(k)
        logger.info("Semantic search | k=%d | query=%r", k, query)

        query_embedding = self.embedder.embed_text(query)
        rows = self.vector_store.nearest(to_vector_literal(query_embedding), k)

        results = [
            SearchResult(
                chunk_id=row.chunk_id,
                document_id=row.document_id,
                chunk_index=row.chunk_index,
                content=row.content,
                score=row.distance,
            )
            for row in rows
        ]
        logger.info("Semantic search returned %d result(s)", len(results))
        return results
