"""UI-agnostic command layer for ragline.

Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from ragline.commands import ingest, ask, status

    result = ingest.ingest("./docs", embed=True)
    result = ask.ask("How does authentication work?")
    result = status.status()
"""

from ragline.commands import ask, chunks, config_cmd, delete, embed, ingest, search, status
from ragline.commands import list as list_cmd
from ragline.commands.base import (
    AskResult,
    ChunkInfo,
    ChunksResult,
    CommandResult,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    DeleteResult,
    DocumentInfo,
    EmbedResult,
    FileIngestResult,
    IngestResult,
    ListResult,
    SearchCommandResult,
    SearchHit,
    SettingInfo,
    StatusResult,
)

__all__ = [
    # Base types
    "CommandResult",
    "ConfirmRequest",
    "ConfirmCallback",
    # Result types
    "IngestResult",
    "FileIngestResult",
    "EmbedResult",
    "SearchCommandResult",
    "SearchHit",
    "AskResult",
    "ListResult",
    "DocumentInfo",
    "ChunksResult",
    "ChunkInfo",
    "DeleteResult",
    "StatusResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "ingest",
    "embed",
    "search",
    "ask",
    "list_cmd",
    "chunks",
    "delete",
    "status",
    "config_cmd",
]
