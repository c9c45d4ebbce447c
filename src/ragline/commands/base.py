# src/ragline/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Confirmation callbacks for destructive commands (like delete)
- Result types for each command

Failures are reported in the result rather than raised. ``error_kind`` holds
the ErrorKind value of the underlying RaglineError so callers can classify a
failure without parsing ``error``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from ragline.exceptions import RaglineError


@dataclass
class ConfirmRequest:
    """Request for yes/no confirmation before a destructive action."""

    message: str
    details: str | None = None


# Callback type for confirmations - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None
    error_kind: str | None = None

    def fail(self, error: RaglineError | str, kind: str | None = None) -> None:
        """Mark the result as failed, recording the error kind if known."""
        self.success = False
        if isinstance(error, RaglineError):
            self.error = error.message
            self.error_kind = error.kind.value
        else:
            self.error = error
            self.error_kind = kind


@dataclass
class FileIngestResult:
    """Result for a single file ingestion."""

    filepath: str
    skipped: bool
    document_id: str | None = None
    chunks: int = 0
    reason: str | None = None  # Why the file was skipped or failed
    error_kind: str | None = None


@dataclass
class IngestResult(CommandResult):
    """Result of the ingest command.

    Attributes:
        files_processed: Number of files stored as new documents
        files_skipped: Number of files skipped as duplicates
        files_failed: Number of files that failed
        total_chunks: Total chunks created
        embedded: Chunks embedded afterwards (with --embed)
        file_results: Per-file results
    """

    files_processed: int = 0
    files_skipped: int = 0
    files_failed: int = 0
    total_chunks: int = 0
    embedded: int = 0
    file_results: list[FileIngestResult] = field(default_factory=list)


@dataclass
class EmbedResult(CommandResult):
    """Result of the embed command."""

    document_id: str | None = None
    candidates: int = 0
    embedded: int = 0
    batches: int = 0
    failed_batches: int = 0
    pending_batches: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class SearchHit:
    """A single search result."""

    document_id: str
    chunk_id: str
    chunk_index: int
    content: str
    score: float
    filename: str | None = None


@dataclass
class SearchCommandResult(CommandResult):
    """Result of the search command."""

    query: str = ""
    k: int = 0
    results: list[SearchHit] = field(default_factory=list)


@dataclass
class AskResult(CommandResult):
    """Result of the ask command.

    Attributes:
        query: The (trimmed) question
        answer: Synthesized answer, or the fallback sentence when nothing matched
        results: The chunks the answer was grounded on, in rank order
    """

    query: str = ""
    answer: str | None = None
    results: list[SearchHit] = field(default_factory=list)


@dataclass
class DocumentInfo:
    """Information about a stored document."""

    document_id: str
    filename: str
    source: str
    created_at: datetime
    chunk_count: int = 0
    embedded_count: int = 0


@dataclass
class ListResult(CommandResult):
    """Result of the list command."""

    documents: list[DocumentInfo] = field(default_factory=list)


@dataclass
class ChunkInfo:
    """A chunk as shown by the chunks command."""

    chunk_id: str
    index: int
    content: str
    embedded: bool
    start_index: int | None = None
    end_index: int | None = None


@dataclass
class ChunksResult(CommandResult):
    """Result of the chunks command."""

    document_id: str = ""
    filename: str = ""
    chunks: list[ChunkInfo] = field(default_factory=list)


@dataclass
class DeleteResult(CommandResult):
    """Result of the delete command."""

    document_id: str = ""
    filename: str = ""
    chunks_deleted: int = 0


@dataclass
class StatusResult(CommandResult):
    """Result of the status command."""

    data_dir: str = ""
    total_documents: int = 0
    total_chunks: int = 0
    embedded_chunks: int = 0

    @property
    def pending_chunks(self) -> int:
        return self.total_chunks - self.embedded_chunks


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        provider: Provider type
        llm_model: Chat model used for answers
        embedding_model: Embedding model
        data_dir: Data directory path
        settings: Behavioral settings with their sources
        config_path: Path to config file (if found)
        warnings: Unknown keys found in the config file
    """

    provider: str = "litellm"
    llm_model: str | None = None
    embedding_model: str | None = None
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
    warnings: list[str] = field(default_factory=list)
