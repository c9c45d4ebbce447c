"""Central configuration class for ragline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ragline.exceptions import ValidationError
from ragline.settings import Settings

if TYPE_CHECKING:
    from ragline.configuration import ProviderConfig, StorageConfig
    from ragline.extractors import ExtractorRegistry
    from ragline.ingestor import Ingestor
    from ragline.models import Chunk, Document, EmbeddingReport, IngestionResult, RagAnswer
    from ragline.models import SearchResult
    from ragline.orchestrator import EmbeddingOrchestrator
    from ragline.providers import LLMClient
    from ragline.retriever import Retriever
    from ragline.stores import ChunkStore, DocumentStore, VectorStore
    from ragline.synthesizer import AnswerSynthesizer


class Ragline:
    """Central configuration for ragline stores and components.

    Ragline bundles the stores and provider components together so you can
    configure once and create ingestors, orchestrators, retrievers and
    synthesizers from it.

    There are two ways to create a Ragline instance:

    1. With a storage bundle:

        from ragline import Ragline, LiteLLMProvider, LocalStorage

        rag = Ragline(
            provider=LiteLLMProvider(
                llm="openai/gpt-4o-mini",
                embedding="openai/text-embedding-3-small",
            ),
            storage=LocalStorage("./data"),
        )
        rag.ingest_file("handbook.pdf")
        rag.embed_pending()
        print(rag.answer("How many vacation days do I get?").answer)

    2. With explicit stores:

        from ragline.stores import SQLiteChunkStore, SQLiteDocumentStore

        rag = Ragline.from_stores(
            provider=LiteLLMProvider(),
            document_store=SQLiteDocumentStore("./data/ragline.db"),
            chunk_store=SQLiteChunkStore("./data/ragline.db"),
        )
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        document_store: DocumentStore | None = None,
        chunk_store: ChunkStore | None = None,
        vector_store: VectorStore | None = None,
        # Common
        settings: Settings | None = None,
        extractor_registry: ExtractorRegistry | None = None,
    ) -> None:
        """Create a Ragline instance.

        Args:
            provider: Provider configuration (builds the embedder and LLM client).
            storage: Storage bundle. Mutually exclusive with explicit stores.
            document_store: Explicit document store.
            chunk_store: Explicit chunk store.
            vector_store: Explicit vector store. Defaults to chunk_store when it
                also implements VectorStore.
            settings: Behavioral settings (chunking, batching, retrieval, synthesis)
            extractor_registry: Optional text extraction registry. If None, uses default.

        Raises:
            ValidationError: If neither a storage bundle nor explicit stores are
                provided, or if both are provided.
        """
        from ragline.stores import VectorStore

        self._settings = settings if settings is not None else Settings()

        # Path 1: Storage bundle
        if storage is not None:
            if any([document_store, chunk_store, vector_store]):
                raise ValidationError("Cannot mix 'storage' bundle with explicit stores")
            self.document_store, self.chunk_store = storage.build_stores()
            self.vector_store = self.chunk_store

        # Path 2: Explicit stores
        elif document_store is not None and chunk_store is not None:
            self.document_store = document_store
            self.chunk_store = chunk_store
            if vector_store is None:
                if not isinstance(chunk_store, VectorStore):
                    raise ValidationError(
                        "vector_store is required when chunk_store is not a VectorStore"
                    )
                vector_store = chunk_store
            self.vector_store = vector_store

        else:
            raise ValidationError(
                "Must provide either 'storage' bundle or explicit stores "
                "(document_store, chunk_store)"
            )

        self._provider = provider
        self.embedder = provider.build_embedder(self._settings)
        self._llm_client: LLMClient | None = None
        self._extractor_registry = extractor_registry
        self._orchestrator: EmbeddingOrchestrator | None = None

    @classmethod
    def from_stores(
        cls,
        *,
        provider: ProviderConfig,
        document_store: DocumentStore,
        chunk_store: ChunkStore,
        vector_store: VectorStore | None = None,
        settings: Settings | None = None,
        extractor_registry: ExtractorRegistry | None = None,
    ) -> Ragline:
        """Create Ragline with explicit stores.

        This is the explicit alternative to using a StorageConfig bundle.
        """
        return cls(
            provider=provider,
            document_store=document_store,
            chunk_store=chunk_store,
            vector_store=vector_store,
            settings=settings,
            extractor_registry=extractor_registry,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_llm_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = self._provider.build_llm_client(self._settings)
        return self._llm_client

    def ingestor(self) -> Ingestor:
        """Create an Ingestor using this instance's stores and chunking settings."""
        from ragline.chunker import SlidingWindowChunker
        from ragline.ingestor import Ingestor

        return Ingestor(
            document_store=self.document_store,
            chunk_store=self.chunk_store,
            chunker=SlidingWindowChunker.from_settings(self._settings),
            extractor_registry=self._extractor_registry,
        )

    def orchestrator(self) -> EmbeddingOrchestrator:
        """Get the embedding orchestrator.

        The orchestrator owns a worker pool, so one instance is shared by every
        call on this Ragline until close().
        """
        from ragline.orchestrator import EmbeddingOrchestrator

        if self._orchestrator is None:
            self._orchestrator = EmbeddingOrchestrator.from_settings(
                embedder=self.embedder,
                vector_store=self.vector_store,
                chunk_store=self.chunk_store,
                settings=self._settings,
            )
        return self._orchestrator

    def retriever(self, *, default_k: int | None = None) -> Retriever:
        """Create a Retriever.

        Args:
            default_k: Number of results to return. If None, uses settings default.
        """
        from ragline.retriever import Retriever

        return Retriever(
            embedder=self.embedder,
            vector_store=self.vector_store,
            default_k=default_k if default_k is not None else self._settings.default_k,
            max_k=self._settings.max_k,
        )

    def synthesizer(self, *, llm_client: LLMClient | None = None) -> AnswerSynthesizer:
        """Create an AnswerSynthesizer.

        Args:
            llm_client: LLM client for answer synthesis. If None, the provider builds one.
        """
        from ragline.synthesizer import AnswerSynthesizer

        return AnswerSynthesizer.from_settings(
            retriever=self.retriever(),
            llm_client=llm_client or self._get_llm_client(),
            settings=self._settings,
        )

    def ingest_bytes(
        self, data: bytes, filename: str, source: str | None = None
    ) -> IngestionResult:
        """Ingest raw file bytes. Embeddings are generated separately."""
        return self.ingestor().ingest(data, filename, source=source)

    def ingest_file(self, filepath: str | Path, source: str | None = None) -> IngestionResult:
        """Ingest a file from disk.

        Args:
            filepath: Path to the file to ingest
            source: Optional source label. Defaults to the absolute path.
        """
        file_path = Path(filepath)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        return self.ingest_bytes(
            file_path.read_bytes(),
            file_path.name,
            source=source or str(file_path.resolve()),
        )

    def embed(self, chunks: list[Chunk], timeout: float | None = None) -> EmbeddingReport:
        """Embed the given chunks (already-embedded ones are skipped)."""
        return self.orchestrator().run(chunks, timeout=timeout)

    def embed_pending(self, document_id: str | None = None) -> EmbeddingReport:
        """Embed every stored chunk lacking an embedding, globally or for one document."""
        if document_id is not None:
            self.ingestor().get_document(document_id)
        return self.orchestrator().generate_pending(document_id)

    def search(self, query: str, k: int | None = None) -> list[SearchResult]:
        return self.retriever().search(query, k)

    def answer(self, query: str, top_k: int | None = None) -> RagAnswer:
        return self.synthesizer().answer(query, top_k)

    def get_document(self, document_id: str) -> Document:
        return self.ingestor().get_document(document_id)

    def list_documents(self) -> list[Document]:
        return self.ingestor().list_documents()

    def get_chunks(self, document_id: str) -> list[Chunk]:
        return self.ingestor().get_chunks(document_id)

    def delete_document(self, document_id: str) -> int:
        return self.ingestor().delete_document(document_id)

    def close(self) -> None:
        """Release the embedding worker pool."""
        if self._orchestrator is not None:
            self._orchestrator.close()
            self._orchestrator = None

    def __enter__(self) -> Ragline:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
