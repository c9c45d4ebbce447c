# tests/stores/test_sqlite_chunk.py
"""Tests for SQLiteChunkStore."""

import pytest

from ragline.exceptions import ErrorKind, NotFoundError, PersistenceError, ValidationError
from ragline.models import Chunk, Document
from ragline.vectors import to_vector_literal


@pytest.fixture
def document_with_chunks(stores):
    document_store, _ = stores
    document = Document(source="a.txt", filename="a.txt", checksum="abc")
    chunks = [Chunk(document_id=document.id, index=i, content=f"chunk {i}") for i in range(3)]
    document_store.add_with_chunks(document, chunks)
    return document, chunks


class TestSetEmbedding:
    def test_set_embedding(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks

        assert chunk_store.set_embedding(chunks[0].id, [0.25, -0.5]) is True

        stored = chunk_store.get(chunks[0].id)
        assert stored.embedding == [0.25, -0.5]
        assert stored.is_embedded

    def test_never_overwrites(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[0].id, [1.0, 0.0])

        assert chunk_store.set_embedding(chunks[0].id, [0.0, 1.0]) is False
        assert chunk_store.get(chunks[0].id).embedding == [1.0, 0.0]

    def test_rejects_length_differing_from_stored(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[0].id, [1.0, 0.0])

        with pytest.raises(PersistenceError):
            chunk_store.set_embedding(chunks[1].id, [1.0, 0.0, 0.0])

        assert chunk_store.get(chunks[1].id).embedding is None
        assert chunk_store.set_embedding(chunks[1].id, [0.0, 1.0]) is True
        assert chunk_store.count_embedded() == 2

    def test_non_finite_vector_never_stored(self, stores, document_with_chunks):
        _, chunk_store = stores
        document, chunks = document_with_chunks

        with pytest.raises(ValidationError):
            chunk_store.set_embedding(chunks[0].id, [float("nan"), 1.0])

        assert chunk_store.count_embedded() == 0
        assert len(chunk_store.get_by_document(document.id)) == 3

    def test_missing_chunk(self, stores):
        _, chunk_store = stores
        with pytest.raises(NotFoundError):
            chunk_store.set_embedding("missing", [1.0])

    def test_get_without_embedding(self, stores, document_with_chunks):
        _, chunk_store = stores
        document, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[1].id, [1.0])

        pending = chunk_store.get_without_embedding()

        assert [c.id for c in pending] == [chunks[0].id, chunks[2].id]
        assert chunk_store.get_without_embedding("other-document") == []
        assert len(chunk_store.get_without_embedding(document.id)) == 2

    def test_counts(self, stores, document_with_chunks):
        _, chunk_store = stores
        document, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[0].id, [1.0])

        assert chunk_store.count_chunks() == 3
        assert chunk_store.count_chunks(document.id) == 3
        assert chunk_store.count_embedded() == 1
        assert chunk_store.count_embedded(document.id) == 1
        assert chunk_store.count_embedded("other") == 0

    def test_metadata_round_trips(self, stores, document_with_chunks):
        document_store, chunk_store = stores
        document = Document(source="b.txt", filename="b.txt", checksum="def")
        chunk = Chunk(
            document_id=document.id, index=0, content="x", metadata={"start_index": 0, "end_index": 1}
        )
        document_store.add_with_chunks(document, [chunk])

        assert chunk_store.get(chunk.id).metadata == {"start_index": 0, "end_index": 1}


class TestNearest:
    def test_ordered_by_distance(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[0].id, [0.0, 1.0])
        chunk_store.set_embedding(chunks[1].id, [1.0, 0.0])
        chunk_store.set_embedding(chunks[2].id, [1.0, 1.0])

        rows = chunk_store.nearest(to_vector_literal([1.0, 0.0]), k=3)

        assert [r.chunk_id for r in rows] == [chunks[1].id, chunks[2].id, chunks[0].id]
        assert rows[0].distance == pytest.approx(0.0)
        assert rows[2].distance == pytest.approx(1.0)
        distances = [r.distance for r in rows]
        assert distances == sorted(distances)

    def test_k_limits_results(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks
        for chunk in chunks:
            chunk_store.set_embedding(chunk.id, [1.0, 0.5])

        assert len(chunk_store.nearest(to_vector_literal([1.0, 0.0]), k=2)) == 2
        assert chunk_store.nearest(to_vector_literal([1.0, 0.0]), k=0) == []

    def test_unembedded_chunks_excluded(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[2].id, [0.3, 0.4])

        rows = chunk_store.nearest(to_vector_literal([1.0, 0.0]), k=10)

        assert [r.chunk_id for r in rows] == [chunks[2].id]
        assert rows[0].chunk_index == 2
        assert rows[0].content == "chunk 2"

    def test_empty_store(self, stores):
        _, chunk_store = stores
        assert chunk_store.nearest(to_vector_literal([1.0]), k=5) == []

    def test_dimension_mismatch_is_a_store_failure(self, stores, document_with_chunks):
        _, chunk_store = stores
        _, chunks = document_with_chunks
        chunk_store.set_embedding(chunks[0].id, [1.0, 0.0, 0.0])

        with pytest.raises(PersistenceError) as exc_info:
            chunk_store.nearest(to_vector_literal([1.0, 0.0]), k=1)

        assert exc_info.value.kind is ErrorKind.PERSISTENCE_FAILURE
