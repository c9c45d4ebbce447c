# tests/test_orchestrator.py
"""Tests for the EmbeddingOrchestrator."""

import threading

import pytest

from ragline.embedder import Embedder
from ragline.exceptions import ExternalServiceError, PersistenceError, ValidationError
from ragline.models import Chunk, Document
from ragline.orchestrator import EmbeddingOrchestrator, partition
from ragline.settings import Settings


class FailingOnMarkerEmbedder(Embedder):
    """Fails any batch that contains the marker text."""

    def __init__(self, marker="poison"):
        self.marker = marker

    def embed_texts(self, texts, deadline=None):
        if any(self.marker in t for t in texts):
            raise ExternalServiceError("Embedding failed after 3 attempts: 500")
        return [[1.0, float(len(t))] for t in texts]


class BlockingEmbedder(Embedder):
    """Blocks batches containing 'slow' until released."""

    def __init__(self):
        self.release = threading.Event()

    def embed_texts(self, texts, deadline=None):
        if any("slow" in t for t in texts):
            self.release.wait(timeout=5)
        return [[1.0, 0.0] for _ in texts]


class FixedVectorEmbedder(Embedder):
    """Returns the same vector for every text."""

    def __init__(self, vector):
        self.vector = vector

    def embed_texts(self, texts, deadline=None):
        return [list(self.vector) for _ in texts]


class RefusingVectorStore:
    """Delegates to a real store but fails writes for selected chunk ids."""

    def __init__(self, store, refused_ids):
        self.store = store
        self.refused_ids = set(refused_ids)

    def set_embedding(self, chunk_id, embedding):
        if chunk_id in self.refused_ids:
            raise PersistenceError("set embedding failed: disk I/O error", chunk_id=chunk_id)
        return self.store.set_embedding(chunk_id, embedding)

    def nearest(self, vector_literal, k):
        return self.store.nearest(vector_literal, k)


def store_chunks(stores, contents):
    document_store, _ = stores
    document = Document(source="s.txt", filename="s.txt", checksum=str(hash(tuple(contents))))
    chunks = [Chunk(document_id=document.id, index=i, content=c) for i, c in enumerate(contents)]
    document_store.add_with_chunks(document, chunks)
    return document, chunks


def make_orchestrator(stores, embedder, **kwargs):
    _, chunk_store = stores
    return EmbeddingOrchestrator(
        embedder=embedder, vector_store=chunk_store, chunk_store=chunk_store, **kwargs
    )


class TestPartition:
    def test_partition(self):
        chunks = [Chunk(document_id="d", index=i, content=str(i)) for i in range(5)]
        batches = partition(chunks, 2)
        assert [[c.index for c in b] for b in batches] == [[0, 1], [2, 3], [4]]

    def test_partition_empty(self):
        assert partition([], 3) == []


class TestEmbeddingOrchestrator:
    def test_generate_embeds_everything(self, stores, fake_embedder):
        _, chunk_store = stores
        _, chunks = store_chunks(stores, [f"text {i}" for i in range(7)])

        with make_orchestrator(stores, fake_embedder, batch_size=3, parallelism=2) as orch:
            assert orch.generate(chunks) == 7

        assert chunk_store.count_embedded() == 7
        assert sorted(len(call) for call in fake_embedder.calls) == [1, 3, 3]

    def test_generate_is_idempotent(self, stores, fake_embedder):
        _, chunks = store_chunks(stores, ["a", "b", "c"])

        with make_orchestrator(stores, fake_embedder) as orch:
            assert orch.generate(chunks) == 3
            # Stale in-memory chunks still lack embeddings; the store refuses overwrites
            assert orch.generate(chunks) == 0
            assert orch.generate_pending().embedded == 0

    def test_already_embedded_chunks_skipped(self, stores, fake_embedder):
        chunks = [
            Chunk(document_id="d", index=0, content="x", embedding=[1.0, 0.0]),
            Chunk(document_id="d", index=1, content="y", embedding=[0.0, 1.0]),
        ]
        with make_orchestrator(stores, fake_embedder) as orch:
            report = orch.run(chunks)

        assert report.candidates == 0
        assert report.batches == 0
        assert fake_embedder.calls == []

    def test_empty_input(self, stores, fake_embedder):
        with make_orchestrator(stores, fake_embedder) as orch:
            assert orch.generate([]) == 0
        assert fake_embedder.calls == []

    def test_failed_batch_does_not_affect_siblings(self, stores):
        _, chunk_store = stores
        _, chunks = store_chunks(stores, ["ok 1", "ok 2", "poison", "ok 3", "ok 4", "ok 5"])

        with make_orchestrator(
            stores, FailingOnMarkerEmbedder(), batch_size=2, parallelism=3
        ) as orch:
            report = orch.run(chunks)

        assert report.candidates == 6
        assert report.batches == 3
        assert report.embedded == 4
        assert not report.failed
        assert len(report.failed_batches) == 1
        failure = report.failed_batches[0]
        assert failure.batch == 2
        assert failure.chunk_ids == [chunks[2].id, chunks[3].id]
        assert "500" in failure.error
        assert [c.id for c in chunk_store.get_without_embedding()] == [chunks[2].id, chunks[3].id]

    def test_failed_chunk_write_does_not_affect_siblings(self, stores, fake_embedder):
        _, chunk_store = stores
        _, chunks = store_chunks(stores, ["a", "b", "c", "d"])
        refusing = RefusingVectorStore(chunk_store, [chunks[1].id])

        with EmbeddingOrchestrator(
            embedder=fake_embedder, vector_store=refusing, chunk_store=chunk_store, batch_size=4
        ) as orch:
            report = orch.run(chunks)

        assert report.batches == 1
        assert report.embedded == len(chunks) - 1
        assert report.failed_batches == []
        assert [c.id for c in chunk_store.get_without_embedding()] == [chunks[1].id]
        for chunk in (chunks[0], chunks[2], chunks[3]):
            assert chunk_store.get(chunk.id).is_embedded

    def test_non_finite_vectors_are_not_persisted(self, stores):
        _, chunk_store = stores
        document, chunks = store_chunks(stores, ["a", "b"])

        with make_orchestrator(stores, FixedVectorEmbedder([float("nan"), 1.0])) as orch:
            report = orch.run(chunks)

        assert report.embedded == 0
        assert report.failed_batches == []
        assert chunk_store.count_embedded() == 0
        assert len(chunk_store.get_by_document(document.id)) == 2
        assert chunk_store.nearest("[1.00000000,0.00000000]", k=5) == []

    def test_later_run_with_other_dimensions_is_not_persisted(self, stores):
        _, chunk_store = stores
        _, first = store_chunks(stores, ["one", "two"])
        _, second = store_chunks(stores, ["three"])

        with make_orchestrator(stores, FixedVectorEmbedder([1.0, 0.0])) as orch:
            assert orch.generate(first) == 2
        with make_orchestrator(stores, FixedVectorEmbedder([1.0, 0.0, 0.0])) as orch:
            report = orch.run(second)

        assert report.embedded == 0
        assert report.failed_batches == []
        assert [c.id for c in chunk_store.get_without_embedding()] == [second[0].id]
        assert len(chunk_store.nearest("[1.00000000,0.00000000]", k=5)) == 2

    def test_total_failure_persists_nothing(self, stores):
        _, chunk_store = stores
        _, chunks = store_chunks(stores, ["poison a", "poison b"])

        with make_orchestrator(stores, FailingOnMarkerEmbedder()) as orch:
            report = orch.run(chunks)

        assert report.embedded == 0
        assert report.failed
        assert chunk_store.count_embedded() == 0

    def test_generate_pending_for_document(self, stores, fake_embedder):
        _, chunk_store = stores
        first, _ = store_chunks(stores, ["one", "two"])
        store_chunks(stores, ["three"])

        with make_orchestrator(stores, fake_embedder) as orch:
            report = orch.generate_pending(first.id)

        assert report.embedded == 2
        assert chunk_store.count_embedded(first.id) == 2
        assert chunk_store.count_embedded() == 2

    def test_timeout_leaves_batches_pending(self, stores):
        _, chunk_store = stores
        _, chunks = store_chunks(stores, ["fast", "slow"])
        embedder = BlockingEmbedder()

        orch = make_orchestrator(stores, embedder, batch_size=1, parallelism=2)
        try:
            report = orch.run(chunks, timeout=0.5)
        finally:
            embedder.release.set()
            orch.close()

        assert report.embedded == 1
        assert report.pending_batches == 1
        assert report.failed_batches == []
        # The straggler finished after the report was produced
        assert chunk_store.count_embedded() == 2

    def test_pool_is_reused_and_recreated(self, stores, fake_embedder):
        _, chunks = store_chunks(stores, ["a"])
        orch = make_orchestrator(stores, fake_embedder)

        first = orch._get_executor()
        assert orch._get_executor() is first
        orch.close()
        assert orch._executor is None

        assert orch.generate(chunks) == 1
        orch.close()

    @pytest.mark.parametrize(("batch_size", "parallelism"), [(0, 1), (1, 0)])
    def test_invalid_configuration(self, stores, fake_embedder, batch_size, parallelism):
        with pytest.raises(ValidationError):
            make_orchestrator(stores, fake_embedder, batch_size=batch_size, parallelism=parallelism)

    def test_from_settings(self, stores, fake_embedder):
        _, chunk_store = stores
        settings = Settings(embedding_batch_size=7, embedding_parallelism=2)

        orch = EmbeddingOrchestrator.from_settings(fake_embedder, chunk_store, chunk_store, settings)

        assert orch.batch_size == 7
        assert orch.parallelism == 2
