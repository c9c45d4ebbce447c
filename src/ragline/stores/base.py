# src/ragline/stores/base.py
"""Abstract base classes for storage."""

from abc import ABC, abstractmethod

from ragline.models import Chunk, Document, SearchRow


class DocumentStore(ABC):
    """Abstract base class for document storage.

    A document and its chunks are written together and deleted together,
    each as one atomic unit.
    """

    @abstractmethod
    def add_with_chunks(self, document: Document, chunks: list[Chunk]) -> None:
        """Store a document and its chunks atomically.

        Raises:
            DuplicateError: If a document with the same checksum exists.
        """
        ...

    @abstractmethod
    def get(self, document_id: str) -> Document | None:
        """Retrieve a document by ID. Returns None if not found."""
        ...

    @abstractmethod
    def find_by_checksum(self, checksum: str) -> Document | None:
        """Find the document with the given content checksum."""
        ...

    @abstractmethod
    def list_documents(self) -> list[Document]:
        """List all documents, oldest first."""
        ...

    @abstractmethod
    def exists(self, document_id: str) -> bool:
        """Check whether a document exists."""
        ...

    @abstractmethod
    def delete_with_chunks(self, document_id: str) -> int:
        """Delete a document's chunks, then the document, in one transaction.

        Returns:
            Number of chunks deleted.
        """
        ...

    @abstractmethod
    def count_documents(self) -> int:
        """Count the total number of documents in the store."""
        ...


class ChunkStore(ABC):
    """Abstract base class for chunk storage."""

    @abstractmethod
    def get(self, chunk_id: str) -> Chunk | None:
        """Retrieve a chunk by ID. Returns None if not found."""
        ...

    @abstractmethod
    def get_by_document(self, document_id: str) -> list[Chunk]:
        """Get all chunks of a document, ordered by index."""
        ...

    @abstractmethod
    def get_without_embedding(self, document_id: str | None = None) -> list[Chunk]:
        """Get chunks lacking an embedding, globally or for one document."""
        ...

    @abstractmethod
    def delete_by_document(self, document_id: str) -> int:
        """Delete all chunks of a document. Returns the number deleted."""
        ...

    @abstractmethod
    def count_chunks(self, document_id: str | None = None) -> int:
        """Count chunks, globally or for one document."""
        ...

    @abstractmethod
    def count_embedded(self, document_id: str | None = None) -> int:
        """Count chunks that have an embedding, globally or for one document."""
        ...


class VectorStore(ABC):
    """Abstract base class for chunk vector storage and nearest-neighbour search."""

    @abstractmethod
    def set_embedding(self, chunk_id: str, embedding: list[float]) -> bool:
        """Persist a chunk's embedding in its own atomic write.

        Returns:
            True if written, False if the chunk already had an embedding.

        Raises:
            NotFoundError: If the chunk does not exist.
            PersistenceError: If the vector length differs from stored embeddings.
        """
        ...

    @abstractmethod
    def nearest(self, vector_literal: str, k: int) -> list[SearchRow]:
        """Return the k embedded chunks closest to the vector, by ascending cosine distance.

        Args:
            vector_literal: Query vector as "[v0,v1,...]" in fixed decimal notation.
            k: Maximum number of rows.
        """
        ...
