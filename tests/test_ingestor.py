# tests/test_ingestor.py
"""Tests for the Ingestor."""

import pytest

from ragline.chunker import SlidingWindowChunker
from ragline.exceptions import (
    DuplicateError,
    ErrorKind,
    ExtractionError,
    NotFoundError,
    ValidationError,
)
from ragline.ingestor import Ingestor, compute_checksum


@pytest.fixture
def ingestor(stores):
    document_store, chunk_store = stores
    return Ingestor(
        document_store=document_store,
        chunk_store=chunk_store,
        chunker=SlidingWindowChunker(window_size=5, overlap=2),
    )


TEN_WORDS = b"one two three four five six seven eight nine ten"


class TestIngest:
    def test_ingest_text(self, ingestor):
        result = ingestor.ingest(TEN_WORDS, "numbers.txt")

        assert result.filename == "numbers.txt"
        assert result.chunk_count == 3
        assert result.status == "COMPLETED"

        document = ingestor.get_document(result.document_id)
        assert document.checksum == compute_checksum(TEN_WORDS)
        assert document.source == "numbers.txt"

        chunks = ingestor.get_chunks(result.document_id)
        assert [c.content for c in chunks] == [
            "one two three four five",
            "four five six seven eight",
            "seven eight nine ten",
        ]
        assert not any(c.is_embedded for c in chunks)

    def test_source_label(self, ingestor):
        result = ingestor.ingest(TEN_WORDS, "numbers.txt", source="/srv/docs/numbers.txt")
        assert ingestor.get_document(result.document_id).source == "/srv/docs/numbers.txt"

    def test_duplicate_content_rejected(self, ingestor):
        first = ingestor.ingest(TEN_WORDS, "a.txt")

        with pytest.raises(DuplicateError) as exc_info:
            ingestor.ingest(TEN_WORDS, "renamed.md")

        assert exc_info.value.context["document_id"] == first.document_id
        assert len(ingestor.list_documents()) == 1

    def test_different_content_same_name(self, ingestor):
        ingestor.ingest(b"alpha beta", "a.txt")
        ingestor.ingest(b"gamma delta", "a.txt")
        assert len(ingestor.list_documents()) == 2

    @pytest.mark.parametrize("filename", ["", "   "])
    def test_blank_filename(self, ingestor, filename):
        with pytest.raises(ValidationError):
            ingestor.ingest(TEN_WORDS, filename)

    def test_blank_text(self, ingestor):
        with pytest.raises(ExtractionError) as exc_info:
            ingestor.ingest(b"   \n\n  ", "empty.txt")
        assert exc_info.value.kind is ErrorKind.EXTRACTION_FAILURE
        assert ingestor.list_documents() == []

    def test_unsupported_type(self, ingestor):
        with pytest.raises(ExtractionError):
            ingestor.ingest(b"\x89PNG", "picture.png")


class TestDocumentAccess:
    def test_get_missing_document(self, ingestor):
        with pytest.raises(NotFoundError):
            ingestor.get_document("missing")

    def test_get_chunks_missing_document(self, ingestor):
        with pytest.raises(NotFoundError):
            ingestor.get_chunks("missing")

    def test_delete_document(self, ingestor, stores):
        _, chunk_store = stores
        result = ingestor.ingest(TEN_WORDS, "numbers.txt")

        assert ingestor.delete_document(result.document_id) == 3

        assert ingestor.list_documents() == []
        assert chunk_store.count_chunks() == 0
        with pytest.raises(NotFoundError):
            ingestor.delete_document(result.document_id)

    def test_reingest_after_delete(self, ingestor):
        first = ingestor.ingest(TEN_WORDS, "numbers.txt")
        ingestor.delete_document(first.document_id)

        second = ingestor.ingest(TEN_WORDS, "numbers.txt")

        assert second.document_id != first.document_id
