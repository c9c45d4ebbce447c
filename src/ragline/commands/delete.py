# src/ragline/commands/delete.py
"""Delete command - remove a document and its chunks.

Uses a callback for interactive confirmation, so each UI can implement its
own confirmation method.
"""

from __future__ import annotations

import os
from pathlib import Path

from ragline.commands.base import ConfirmCallback, ConfirmRequest, DeleteResult
from ragline.config import get_data_dir, get_stores, load_config
from ragline.exceptions import NotFoundError, RaglineError


def delete(
    document_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> DeleteResult:
    """Delete a document and all of its chunks in one transaction.

    Args:
        document_id: Document to delete
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional callback for confirmation. Return True to proceed,
            False to cancel. If None, deletion proceeds without confirmation.

    Returns:
        DeleteResult with the number of chunks deleted, or a cancelled result
    """
    result = DeleteResult(success=True, document_id=document_id)
    effective_data_dir = get_data_dir(data_dir, load_config(config_path))

    if not os.path.exists(effective_data_dir):
        result.fail(NotFoundError(f"Document not found: {document_id}", document_id=document_id))
        return result

    try:
        stores = get_stores(effective_data_dir)
        document_store = stores["document_store"]
        document = document_store.get(document_id)
        if document is None:
            raise NotFoundError(f"Document not found: {document_id}", document_id=document_id)
        result.filename = document.filename

        if on_confirm is not None:
            chunk_count = stores["chunk_store"].count_chunks(document_id)
            request = ConfirmRequest(
                message=f"Delete {document.filename}?",
                details=f"This will remove the document and its {chunk_count} chunks.",
            )
            if not on_confirm(request):
                result.fail("Cancelled.")
                return result

        result.chunks_deleted = document_store.delete_with_chunks(document_id)
    except RaglineError as e:
        result.fail(e)

    return result
