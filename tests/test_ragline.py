# tests/test_ragline.py
"""Tests for the central Ragline class."""

import os

import pytest

from ragline import FALLBACK_ANSWER, LocalStorage, Ragline
from ragline.exceptions import DuplicateError, NotFoundError, ValidationError
from ragline.orchestrator import EmbeddingOrchestrator
from ragline.settings import Settings


@pytest.fixture
def rag(temp_dir, fake_provider):
    settings = Settings(chunk_size=4, chunk_overlap=1, embedding_batch_size=2)
    with Ragline(provider=fake_provider, storage=LocalStorage(temp_dir), settings=settings) as r:
        yield r


class TestConstruction:
    def test_storage_bundle(self, temp_dir, fake_provider):
        rag = Ragline(provider=fake_provider, storage=LocalStorage(temp_dir))

        assert rag.vector_store is rag.chunk_store
        assert os.path.exists(os.path.join(temp_dir, "ragline.db"))
        assert rag.settings == Settings()

    def test_from_stores(self, stores, fake_provider, fake_embedder):
        document_store, chunk_store = stores

        rag = Ragline.from_stores(
            provider=fake_provider, document_store=document_store, chunk_store=chunk_store
        )

        assert rag.document_store is document_store
        assert rag.vector_store is chunk_store
        assert rag.embedder is fake_embedder

    def test_mixing_storage_and_stores(self, temp_dir, stores, fake_provider):
        document_store, chunk_store = stores
        with pytest.raises(ValidationError, match="Cannot mix"):
            Ragline(
                provider=fake_provider,
                storage=LocalStorage(temp_dir),
                document_store=document_store,
            )

    def test_no_storage(self, fake_provider):
        with pytest.raises(ValidationError):
            Ragline(provider=fake_provider)

    def test_orchestrator_is_shared(self, rag):
        orchestrator = rag.orchestrator()
        assert isinstance(orchestrator, EmbeddingOrchestrator)
        assert rag.orchestrator() is orchestrator
        assert orchestrator.batch_size == 2

    def test_close_releases_orchestrator(self, rag):
        first = rag.orchestrator()
        rag.close()
        assert rag.orchestrator() is not first


class TestEndToEnd:
    def test_ingest_embed_search_answer(self, rag, fake_llm):
        ingested = rag.ingest_bytes(b"apples are abundant. bananas bend. cats do dance.", "f.txt")
        assert ingested.chunk_count == 3

        report = rag.embed_pending()
        assert report.embedded == 3
        assert report.batches == 2

        results = rag.search("aaa apple", k=2)
        assert len(results) == 2
        assert results[0].score <= results[1].score

        answer = rag.answer("what about apples?")
        assert answer.answer == "Forty-two."
        assert len(fake_llm.calls) == 1

    def test_answer_with_empty_corpus(self, rag, fake_llm):
        answer = rag.answer("Is anyone there?")

        assert answer.answer == FALLBACK_ANSWER
        assert answer.results == []
        assert fake_llm.calls == []

    def test_unembedded_chunks_are_not_searchable(self, rag):
        rag.ingest_bytes(b"some words here", "f.txt")
        assert rag.search("some words") == []

    def test_ingest_file(self, rag, temp_dir):
        path = os.path.join(temp_dir, "notes.md")
        with open(path, "w") as f:
            f.write("# Notes\n\nremember the milk")

        result = rag.ingest_file(path)

        document = rag.get_document(result.document_id)
        assert document.filename == "notes.md"
        assert document.source == os.path.realpath(path)

        with pytest.raises(DuplicateError):
            rag.ingest_file(path)

    def test_ingest_missing_file(self, rag):
        with pytest.raises(FileNotFoundError):
            rag.ingest_file("/nonexistent/notes.md")

    def test_embed_pending_for_document(self, rag):
        first = rag.ingest_bytes(b"one two three four five", "a.txt")
        rag.ingest_bytes(b"six seven", "b.txt")

        report = rag.embed_pending(first.document_id)

        assert report.embedded == len(rag.get_chunks(first.document_id))
        assert rag.chunk_store.count_embedded() == report.embedded

    def test_embed_pending_unknown_document(self, rag):
        with pytest.raises(NotFoundError):
            rag.embed_pending("missing")

    def test_embed_chunks(self, rag):
        result = rag.ingest_bytes(b"alpha beta gamma", "a.txt")
        chunks = rag.get_chunks(result.document_id)

        assert rag.embed(chunks).embedded == 1
        assert rag.embed(chunks).embedded == 0

    def test_list_and_delete(self, rag):
        result = rag.ingest_bytes(b"alpha beta gamma delta epsilon", "a.txt")
        assert [d.id for d in rag.list_documents()] == [result.document_id]

        assert rag.delete_document(result.document_id) == result.chunk_count
        assert rag.list_documents() == []
