"""ragline - retrieval-augmented generation over your own documents.

Documents are split into overlapping word windows, embedded in parallel
batches, and searched by exact cosine distance; answers are synthesized by an
LLM from the closest windows.

Quick Start (LiteLLM + Local Storage):
    from ragline import Ragline, LiteLLMProvider, LocalStorage

    rag = Ragline(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini", embedding="openai/text-embedding-3-small"),
        storage=LocalStorage("./data"),
    )

    # Ingest and embed
    rag.ingest_file("document.pdf")
    rag.embed_pending()

    # Ask
    response = rag.answer("What is...?")
    print(response.answer)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ragline")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    import tomllib
    from pathlib import Path

    def _read_version_from_pyproject() -> str | None:
        for parent in Path(__file__).resolve().parents:
            pyproject = parent / "pyproject.toml"
            if pyproject.exists():
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                project_version = data.get("project", {}).get("version")
                return str(project_version) if project_version is not None else None
        return None

    __version__ = _read_version_from_pyproject() or "unknown"

# Core pieces
from ragline.chunker import SlidingWindowChunker

# Configuration objects
from ragline.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from ragline.embedder import Embedder, RetryingEmbedder
from ragline.exceptions import (
    DuplicateError,
    ErrorKind,
    ExternalServiceError,
    ExtractionError,
    NotFoundError,
    PersistenceError,
    RaglineError,
    ValidationError,
)
from ragline.extractors import ExtractorRegistry, TextExtractor

# Pipelines
from ragline.ingestor import Ingestor
from ragline.models import (
    BatchFailure,
    Chunk,
    Document,
    EmbeddingReport,
    IngestionResult,
    RagAnswer,
    SearchResult,
)
from ragline.orchestrator import EmbeddingOrchestrator

# Provider ABCs
from ragline.providers import EmbeddingClient, LLMClient

# Central configuration
from ragline.ragline import Ragline
from ragline.retriever import Retriever

# Settings
from ragline.settings import Settings

# Storage ABCs
from ragline.stores import (
    ChunkStore,
    DocumentStore,
    SQLiteChunkStore,
    SQLiteDocumentStore,
    VectorStore,
)
from ragline.synthesizer import FALLBACK_ANSWER, AnswerSynthesizer
from ragline.vectors import to_vector_literal

__all__ = [
    # Version
    "__version__",
    # Models
    "Document",
    "Chunk",
    "SearchResult",
    "RagAnswer",
    "IngestionResult",
    "BatchFailure",
    "EmbeddingReport",
    # Errors
    "ErrorKind",
    "RaglineError",
    "ValidationError",
    "DuplicateError",
    "NotFoundError",
    "ExternalServiceError",
    "PersistenceError",
    "ExtractionError",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage
    "DocumentStore",
    "ChunkStore",
    "VectorStore",
    "SQLiteDocumentStore",
    "SQLiteChunkStore",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Components
    "SlidingWindowChunker",
    "Embedder",
    "RetryingEmbedder",
    "TextExtractor",
    "ExtractorRegistry",
    "to_vector_literal",
    # Pipelines
    "Ingestor",
    "EmbeddingOrchestrator",
    "Retriever",
    "AnswerSynthesizer",
    "FALLBACK_ANSWER",
    # Central configuration
    "Ragline",
]
