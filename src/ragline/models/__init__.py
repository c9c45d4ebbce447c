"""Data models for ragline."""

from ragline.models.chunk import Chunk
from ragline.models.document import Document
from ragline.models.results import (
    BatchFailure,
    EmbeddingReport,
    IngestionResult,
    RagAnswer,
    SearchResult,
    SearchRow,
)

__all__ = [
    "Document",
    "Chunk",
    "SearchRow",
    "SearchResult",
    "RagAnswer",
    "IngestionResult",
    "BatchFailure",
    "EmbeddingReport",
]
