"""Ingestion pipeline for ragline."""

from __future__ import annotations

import hashlib
import logging

from ragline.chunker import SlidingWindowChunker
from ragline.exceptions import DuplicateError, ExtractionError, NotFoundError, ValidationError
from ragline.extractors import ExtractorRegistry
from ragline.models import Chunk, Document, IngestionResult
from ragline.stores import ChunkStore, DocumentStore

logger = logging.getLogger(__name__)


def compute_checksum(data: bytes) -> str:
    """SHA-256 hex digest of raw file bytes."""
    return hashlib.sha256(data).hexdigest()


class Ingestor:
    """Turns uploaded files into stored documents and chunks.

    Pipeline:
    1. Checksum the raw bytes and reject content that is already stored
    2. Extract plain text
    3. Split the text into sliding word windows
    4. Store the document and all of its chunks in one transaction

    Embeddings are not generated here; see EmbeddingOrchestrator.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        chunk_store: ChunkStore,
        chunker: SlidingWindowChunker,
        extractor_registry: ExtractorRegistry | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            document_store: Store for documents (also writes their chunks)
            chunk_store: Store for chunk reads
            chunker: Component that splits text into windows
            extractor_registry: Text extraction by file type. Defaults to text + PDF.
        """
        self.document_store = document_store
        self.chunk_store = chunk_store
        self.chunker = chunker
        self.extractor_registry = extractor_registry or ExtractorRegistry.default()

    def ingest(self, data: bytes, filename: str, source: str | None = None) -> IngestionResult:
        """Ingest one file.

        Args:
            data: Raw file bytes
            filename: Original filename; selects the extractor
            source: Optional source label (e.g. a path or content type)

        Raises:
            ValidationError: If the filename is blank
            DuplicateError: If identical bytes were already ingested
            ExtractionError: If no text can be extracted
        """
        if not filename or not filename.strip():
            raise ValidationError("Filename must not be blank")

        logger.info("Starting ingestion for file: %s", filename)

        checksum = compute_checksum(data)
        existing = self.document_store.find_by_checksum(checksum)
        if existing is not None:
            raise DuplicateError(
                f"Document already ingested with ID: {existing.id}",
                document_id=existing.id,
                checksum=checksum,
            )

        text = self.extractor_registry.extract(data, filename)
        if not text.strip():
            raise ExtractionError(f"No text could be extracted from: {filename}", filename=filename)

        document = Document(source=source or filename, filename=filename, checksum=checksum)
        chunks = self.chunker.chunk(text, document.id)
        logger.info("Generated %d chunks for document: %s", len(chunks), document.id)

        self.document_store.add_with_chunks(document, chunks)
        logger.info("Saved document %s (%s) with %d chunks", document.id, filename, len(chunks))

        return IngestionResult(
            document_id=document.id,
            filename=filename,
            chunk_count=len(chunks),
            created_at=document.created_at,
        )

    def get_document(self, document_id: str) -> Document:
        document = self.document_store.get(document_id)
        if document is None:
            raise NotFoundError(f"Document not found: {document_id}", document_id=document_id)
        return document

    def list_documents(self) -> list[Document]:
        return self.document_store.list_documents()

    def get_chunks(self, document_id: str) -> list[Chunk]:
        """Chunks of a document in index order."""
        if not self.document_store.exists(document_id):
            raise NotFoundError(f"Document not found: {document_id}", document_id=document_id)
        return self.chunk_store.get_by_document(document_id)

    def delete_document(self, document_id: str) -> int:
        """Delete a document and its chunks. Returns the number of chunks removed."""
        if not self.document_store.exists(document_id):
            raise NotFoundError(f"Document not found: {document_id}", document_id=document_id)
        deleted = self.document_store.delete_with_chunks(document_id)
        logger.info("Deleted document %s and %d chunks", document_id, deleted)
        return deleted
