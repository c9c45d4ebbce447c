# src/ragline/commands/embed.py
"""Embed command - generate embeddings for chunks that lack them."""

from __future__ import annotations

from pathlib import Path

from ragline.commands.base import EmbedResult
from ragline.config import ConfigError, get_ragline
from ragline.exceptions import RaglineError


def embed(
    document_id: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> EmbedResult:
    """Embed pending chunks, globally or for one document.

    Partial success is still success: failed batches are listed in
    ``errors`` and the result fails only when nothing could be embedded.
    """
    result = EmbedResult(success=True, document_id=document_id)

    rag = get_ragline(data_dir, config_path)
    if isinstance(rag, ConfigError):
        result.fail(rag.message, kind="invalid")
        return result

    with rag:
        try:
            report = rag.embed_pending(document_id)
        except RaglineError as e:
            result.fail(e)
            return result

    result.candidates = report.candidates
    result.embedded = report.embedded
    result.batches = report.batches
    result.failed_batches = len(report.failed_batches)
    result.pending_batches = report.pending_batches
    result.errors = [f"batch {f.batch}: {f.error}" for f in report.failed_batches]

    if report.failed:
        result.fail(
            f"No chunks embedded; {len(report.failed_batches)} batch(es) failed",
            kind="service_failure",
        )
    return result
