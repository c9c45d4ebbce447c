# src/ragline/commands/ask.py
"""Ask command - answer a question from the stored documents."""

from __future__ import annotations

from pathlib import Path

from ragline.commands.base import AskResult
from ragline.commands.search import to_hits
from ragline.config import ConfigError, get_ragline
from ragline.exceptions import RaglineError


def ask(
    question: str,
    top_k: int | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AskResult:
    """Retrieve context for a question and synthesize an answer."""
    result = AskResult(success=True, query=question)

    rag = get_ragline(data_dir, config_path)
    if isinstance(rag, ConfigError):
        result.fail(rag.message, kind="invalid")
        return result

    with rag:
        try:
            answer = rag.answer(question, top_k)
            filenames = {d.id: d.filename for d in rag.list_documents()}
        except RaglineError as e:
            result.fail(e)
            return result

    result.query = answer.query
    result.answer = answer.answer
    result.results = to_hits(answer.results, filenames)
    return result
