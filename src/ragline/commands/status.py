# src/ragline/commands/status.py
"""Status command - show database statistics."""

from __future__ import annotations

import os
from pathlib import Path

from ragline.commands.base import StatusResult
from ragline.config import get_data_dir, get_stores, load_config
from ragline.exceptions import RaglineError


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> StatusResult:
    """Count documents, chunks and embedded chunks."""
    effective_data_dir = get_data_dir(data_dir, load_config(config_path))
    result = StatusResult(success=True, data_dir=effective_data_dir)

    if not os.path.exists(effective_data_dir):
        return result

    try:
        stores = get_stores(effective_data_dir)
        result.total_documents = stores["document_store"].count_documents()
        result.total_chunks = stores["chunk_store"].count_chunks()
        result.embedded_chunks = stores["chunk_store"].count_embedded()
    except RaglineError as e:
        result.fail(e)

    return result
