# src/ragline/models/results.py
"""Result data models for ragline operations."""

from datetime import datetime

from pydantic import BaseModel, Field


class SearchRow(BaseModel):
    """A raw nearest-neighbour row as returned by a VectorStore."""

    chunk_id: str
    document_id: str
    chunk_index: int
    content: str
    distance: float


class SearchResult(BaseModel):
    """A ranked chunk. Lower score means closer (cosine distance)."""

    chunk_id: str
    document_id: str
    chunk_index: int
    content: str
    score: float


class RagAnswer(BaseModel):
    """A synthesized answer plus the results it was grounded on."""

    query: str
    answer: str
    results: list[SearchResult]


class IngestionResult(BaseModel):
    """Outcome of ingesting one file."""

    document_id: str
    filename: str
    chunk_count: int
    status: str = "COMPLETED"
    created_at: datetime


class BatchFailure(BaseModel):
    """An embedding batch that could not be embedded."""

    batch: int
    chunk_ids: list[str]
    error: str


class EmbeddingReport(BaseModel):
    """Aggregate outcome of one embedding run."""

    candidates: int = 0
    embedded: int = 0
    batches: int = 0
    pending_batches: int = 0
    failed_batches: list[BatchFailure] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        """True when there was work to do but nothing got embedded."""
        return self.candidates > 0 and self.embedded == 0
