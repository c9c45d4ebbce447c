# src/ragline/commands/chunks.py
"""Chunks command - show a document's chunks in order."""

from __future__ import annotations

import os
from pathlib import Path

from ragline.commands.base import ChunkInfo, ChunksResult
from ragline.config import get_data_dir, get_stores, load_config
from ragline.exceptions import NotFoundError, RaglineError


def chunks(
    document_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ChunksResult:
    """Get the chunks of one document in index order."""
    result = ChunksResult(success=True, document_id=document_id)
    effective_data_dir = get_data_dir(data_dir, load_config(config_path))

    try:
        if not os.path.exists(effective_data_dir):
            raise NotFoundError(f"Document not found: {document_id}", document_id=document_id)
        stores = get_stores(effective_data_dir)
        document = stores["document_store"].get(document_id)
        if document is None:
            raise NotFoundError(f"Document not found: {document_id}", document_id=document_id)
        stored = stores["chunk_store"].get_by_document(document_id)
    except RaglineError as e:
        result.fail(e)
        return result

    result.filename = document.filename
    result.chunks = [
        ChunkInfo(
            chunk_id=c.id,
            index=c.index,
            content=c.content,
            embedded=c.is_embedded,
            start_index=c.metadata.get("start_index"),
            end_index=c.metadata.get("end_index"),
        )
        for c in stored
    ]
    return result
