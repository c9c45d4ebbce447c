# src/ragline/models/chunk.py
"""Chunk data model."""

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """A window of a document's text; the unit of embedding and retrieval."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    document_id: str
    index: int = Field(ge=0)
    content: str
    embedding: list[float] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_embedded(self) -> bool:
        return self.embedding is not None
