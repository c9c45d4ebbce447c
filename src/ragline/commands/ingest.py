# src/ragline/commands/ingest.py
"""Ingest command - store files as documents and chunks."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from ragline.commands.base import FileIngestResult, IngestResult
from ragline.config import ConfigError, get_ragline
from ragline.exceptions import DuplicateError, RaglineError
from ragline.extractors import ExtractorRegistry

if TYPE_CHECKING:
    from ragline.ragline import Ragline


def find_files(path: Path, registry: ExtractorRegistry | None = None) -> list[str]:
    """List the supported files under path (or path itself), sorted."""
    if path.is_file():
        return [str(path)]

    registry = registry or ExtractorRegistry.default()
    files = []
    for root, _, filenames in os.walk(path):
        for filename in filenames:
            if registry.find_extractor(filename):
                files.append(os.path.join(root, filename))
    return sorted(files)


def ingest(
    path: str | Path,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    embed: bool = False,
    on_file_start: Callable[[str, int, int], None] | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestResult:
    """Ingest a file or every supported file in a directory.

    Args:
        path: File or directory to ingest
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        embed: Generate embeddings for the new documents afterwards
        on_file_start: Callback when starting a file (filepath, file_index, total_files)
        on_file_complete: Callback when a file is done (receives FileIngestResult)

    Returns:
        IngestResult with aggregated statistics and per-file results
    """
    path = Path(path)

    if not path.exists():
        result = IngestResult(success=True)
        result.fail(f"Path not found: {path}", kind="not_found")
        return result

    rag = get_ragline(data_dir, config_path)
    if isinstance(rag, ConfigError):
        result = IngestResult(success=True)
        result.fail(rag.message, kind="invalid")
        return result

    with rag:
        return ingest_with_ragline(rag, path, embed, on_file_start, on_file_complete)


def ingest_with_ragline(
    rag: Ragline,
    path: str | Path,
    embed: bool = False,
    on_file_start: Callable[[str, int, int], None] | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestResult:
    """Ingest files using an existing Ragline instance."""
    files = find_files(Path(path))
    result = IngestResult(success=True)

    if not files:
        result.error = "No supported files found"
        return result

    for i, filepath in enumerate(files):
        if on_file_start:
            on_file_start(filepath, i, len(files))

        file_result = _ingest_file(rag, filepath)
        result.file_results.append(file_result)

        if file_result.skipped:
            result.files_skipped += 1
        elif file_result.document_id is None:
            result.files_failed += 1
        else:
            result.files_processed += 1
            result.total_chunks += file_result.chunks

        if on_file_complete:
            on_file_complete(file_result)

    if embed:
        for file_result in result.file_results:
            if file_result.document_id is not None:
                result.embedded += rag.embed_pending(file_result.document_id).embedded

    if result.files_failed and result.files_processed == 0 and result.files_skipped == 0:
        failed = result.file_results[-1]
        result.fail(failed.reason or "All files failed", kind=failed.error_kind)

    return result


def _ingest_file(rag: Ragline, filepath: str) -> FileIngestResult:
    try:
        ingestion = rag.ingest_file(filepath)
    except DuplicateError as e:
        return FileIngestResult(
            filepath=filepath,
            skipped=True,
            document_id=None,
            reason=e.message,
            error_kind=e.kind.value,
        )
    except RaglineError as e:
        return FileIngestResult(
            filepath=filepath,
            skipped=False,
            reason=e.message,
            error_kind=e.kind.value,
        )
    except OSError as e:
        return FileIngestResult(
            filepath=filepath,
            skipped=False,
            reason=f"Error: {type(e).__name__}: {e}",
        )

    return FileIngestResult(
        filepath=filepath,
        skipped=False,
        document_id=ingestion.document_id,
        chunks=ingestion.chunk_count,
    )
