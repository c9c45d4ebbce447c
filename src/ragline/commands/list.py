# src/ragline/commands/list.py
"""List command - list stored documents."""

from __future__ import annotations

import os
from pathlib import Path

from ragline.commands.base import DocumentInfo, ListResult
from ragline.config import get_data_dir, get_stores, load_config
from ragline.exceptions import RaglineError


def list_documents(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ListResult:
    """List all documents, oldest first, with chunk and embedding counts."""
    effective_data_dir = get_data_dir(data_dir, load_config(config_path))

    if not os.path.exists(effective_data_dir):
        return ListResult(success=True)

    result = ListResult(success=True)
    try:
        stores = get_stores(effective_data_dir)
        chunk_store = stores["chunk_store"]
        for document in stores["document_store"].list_documents():
            result.documents.append(
                DocumentInfo(
                    document_id=document.id,
                    filename=document.filename,
                    source=document.source,
                    created_at=document.created_at,
                    chunk_count=chunk_store.count_chunks(document.id),
                    embedded_count=chunk_store.count_embedded(document.id),
                )
            )
    except RaglineError as e:
        result.fail(e)

    return result
