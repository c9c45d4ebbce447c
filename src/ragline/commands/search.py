# src/ragline/commands/search.py
"""Search command - nearest chunks for a query, without an LLM."""

from __future__ import annotations

from pathlib import Path

from ragline.commands.base import SearchCommandResult, SearchHit
from ragline.config import ConfigError, get_ragline
from ragline.exceptions import RaglineError
from ragline.models import SearchResult


def to_hits(results: list[SearchResult], filenames: dict[str, str]) -> list[SearchHit]:
    return [
        SearchHit(
            document_id=r.document_id,
            chunk_id=r.chunk_id,
            chunk_index=r.chunk_index,
            content=r.content,
            score=r.score,
            filename=filenames.get(r.document_id),
        )
        for r in results
    ]


def search(
    query: str,
    k: int | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> SearchCommandResult:
    """Return the k chunks closest to query, closest first."""
    result = SearchCommandResult(success=True, query=query)

    rag = get_ragline(data_dir, config_path)
    if isinstance(rag, ConfigError):
        result.fail(rag.message, kind="invalid")
        return result

    with rag:
        try:
            retriever = rag.retriever()
            result.k = retriever.clamp_k(k)
            results = retriever.search(query, k)
            filenames = {d.id: d.filename for d in rag.list_documents()}
        except RaglineError as e:
            result.fail(e)
            return result

    result.results = to_hits(results, filenames)
    return result
