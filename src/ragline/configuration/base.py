# src/ragline/configuration/base.py
"""Protocol definitions for configuration objects.

These protocols define the interfaces for provider and storage configurations.
Implementations can use @dataclass(frozen=True) for immutability.

Protocols here vs ABCs in stores/base.py: any frozen dataclass with the right
methods satisfies a configuration protocol without inheritance, while store
implementations inherit from their ABCs explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ragline.embedder import Embedder
    from ragline.providers import LLMClient
    from ragline.settings import Settings
    from ragline.stores import DocumentStore, SQLiteChunkStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the model-facing components:
    - Embedder: Creates vector embeddings for chunks and queries
    - LLMClient: Answers questions from retrieved context

    Example implementation:
        @dataclass(frozen=True)
        class LiteLLMProvider:
            llm: str
            embedding: str

            def build_embedder(self, settings: Settings) -> Embedder: ...
            def build_llm_client(self, settings: Settings) -> LLMClient: ...
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder with the retry policy from settings."""
        ...

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build an LLM client for answer synthesis."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - DocumentStore: Documents, written and deleted together with their chunks
    - Chunk store: Chunk reads plus embedding writes and nearest-neighbour search

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_stores(self) -> tuple[DocumentStore, SQLiteChunkStore]: ...
    """

    def build_stores(self) -> tuple[DocumentStore, SQLiteChunkStore]:
        """Build the storage components.

        Returns:
            Tuple of (document_store, chunk_store). The chunk store also
            implements VectorStore.
        """
        ...
