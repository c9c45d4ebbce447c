# src/ragline/models/document.py
"""Document data model."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """An ingested file, identified by the checksum of its raw bytes."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    source: str
    filename: str
    checksum: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
