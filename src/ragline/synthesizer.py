"""Answer synthesis over retrieved chunks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ragline.exceptions import ValidationError
from ragline.models import RagAnswer, SearchResult
from ragline.providers import LLMClient
from ragline.retriever import Retriever

if TYPE_CHECKING:
    from ragline.settings import Settings

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "I don't have enough information to answer that."

SYSTEM_PROMPT = f"""You are a helpful assistant that answers questions strictly based on the provided context.
Each context chunk is delimited by "---".
If the answer cannot be found in the context, say "{FALLBACK_ANSWER}"
Be concise and accurate. Do not make up information.
"""


def build_context(results: list[SearchResult]) -> str:
    """Number and delimit chunk contents in rank order.

    Example:
        [1]
        <chunk text>
        ---
        [2]
        <chunk text>
        ---
    """
    return "".join(
        f"[{i}]\n{result.content.strip()}\n---\n" for i, result in enumerate(results, start=1)
    )


def build_messages(context: str, query: str, system_prompt: str = SYSTEM_PROMPT) -> list[dict]:
    """System rules, then the context, then the question, as separate turns."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": "Here is the relevant context:\n\n" + context},
        {"role": "user", "content": "Question: " + query},
    ]


class AnswerSynthesizer:
    """Retrieves context for a question and asks an LLM to answer from it.

    LLM failures are not retried; they surface as ExternalServiceError.
    """

    def __init__(
        self,
        retriever: Retriever,
        llm_client: LLMClient,
        default_top_k: int = 5,
        max_tokens: int = 1024,
        temperature: float = 0.2,
        system_prompt: str | None = None,
    ) -> None:
        self.retriever = retriever
        self._llm_client = llm_client
        self.default_top_k = default_top_k
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt or SYSTEM_PROMPT

    @classmethod
    def from_settings(
        cls, retriever: Retriever, llm_client: LLMClient, settings: Settings
    ) -> AnswerSynthesizer:
        return cls(
            retriever=retriever,
            llm_client=llm_client,
            default_top_k=settings.default_top_k,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            system_prompt=settings.system_prompt,
        )

    def answer(self, query: str, top_k: int | None = None) -> RagAnswer:
        """Answer a question from the top-k retrieved chunks.

        Args:
            query: User's question
            top_k: Chunks to retrieve; non-positive or None uses default_top_k

        Returns:
            RagAnswer with the answer text and the exact results used as context.
            When nothing is retrieved the answer is FALLBACK_ANSWER and the LLM
            is not called.

        Raises:
            ValidationError: If the query is blank
        """
        if query is None or not query.strip():
            raise ValidationError("Query must not be blank")

        query = query.strip()
        k = top_k if top_k is not None and top_k > 0 else self.default_top_k
        logger.info("RAG pipeline | k=%d | query=%r", k, query)

        results = self.retriever.search(query, k)
        if not results:
            logger.warning("No relevant chunks found for query: %s", query)
            return RagAnswer(query=query, answer=FALLBACK_ANSWER, results=[])

        messages = build_messages(build_context(results), query, self.system_prompt)
        answer = self._llm_client.complete(
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        logger.info("RAG pipeline complete | chunks_used=%d", len(results))
        return RagAnswer(query=query, answer=answer, results=results)
