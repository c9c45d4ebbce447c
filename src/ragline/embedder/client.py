# src/ragline/embedder/client.py
"""Client-based embedder with retry and exponential backoff."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from tenacity import RetryCallState, RetryError, Retrying, stop_after_attempt, wait_exponential
from tenacity.stop import stop_base
from tenacity.wait import wait_base

from ragline.embedder.base import Embedder
from ragline.exceptions import ExternalServiceError
from ragline.providers.base import EmbeddingClient

if TYPE_CHECKING:
    from ragline.settings import Settings

logger = logging.getLogger(__name__)


class stop_before_deadline(stop_base):
    """Stop when the next backoff would end after an absolute monotonic deadline."""

    def __init__(
        self, deadline: float | None, wait: wait_base, clock: Callable[[], float]
    ) -> None:
        self.deadline = deadline
        self.wait = wait
        self.clock = clock

    def __call__(self, retry_state: RetryCallState) -> bool:
        if self.deadline is None:
            return False
        return self.clock() + self.wait(retry_state) > self.deadline


class RetryingEmbedder(Embedder):
    """Embedder that calls an EmbeddingClient and retries failed batches.

    Each attempt sends the whole batch in one request. A failed attempt (provider
    error, timeout, or a malformed response) is retried after
    ``base_delay * 2 ** (attempt - 1)`` seconds, so delays run 1s, 2s, ... with
    the default base. The sleep blocks only the calling thread. After
    ``max_attempts`` failures an ExternalServiceError is raised with the last
    underlying error as its cause.

    Example:
        from ragline.providers.litellm import LiteLLMEmbeddingClient
        from ragline.embedder import RetryingEmbedder

        client = LiteLLMEmbeddingClient(model="openai/text-embedding-3-small", timeout=30)
        embedder = RetryingEmbedder(embedding_client=client)
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        dimensions: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            max_attempts: Total attempts per batch, including the first
            base_delay: Backoff before the second attempt, in seconds
            dimensions: Expected vector length. None accepts any consistent length.
            sleep: Backoff function (injectable for tests)
            clock: Monotonic clock used to honour deadlines
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self._client = embedding_client
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.dimensions = dimensions
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_settings(cls, embedding_client: EmbeddingClient, settings: Settings) -> RetryingEmbedder:
        return cls(
            embedding_client=embedding_client,
            max_attempts=settings.embedding_max_attempts,
            base_delay=settings.embedding_retry_base_delay,
            dimensions=settings.embedding_dimensions,
        )

    @property
    def model(self) -> str | None:
        return getattr(self._client, "model", None)

    def embed_texts(self, texts: list[str], deadline: float | None = None) -> list[list[float]]:
        """Embed a batch, retrying the whole batch on any failure."""
        if not texts:
            return []

        wait = wait_exponential(multiplier=self.base_delay, exp_base=2)
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts)
            | stop_before_deadline(deadline, wait, self._clock),
            wait=wait,
            sleep=self._sleep,
            before_sleep=self._log_retry,
        )

        try:
            return retrying(self._embed_once, list(texts))
        except RetryError as e:
            attempts = e.last_attempt.attempt_number
            cause = e.last_attempt.exception()
            if attempts < self.max_attempts:
                raise ExternalServiceError(
                    f"Embedding deadline reached after {attempts} attempt(s): {cause}",
                    attempts=attempts,
                    model=self.model,
                ) from cause
            raise ExternalServiceError(
                f"Embedding failed after {attempts} attempts: {cause}",
                attempts=attempts,
                model=self.model,
            ) from cause

    def _embed_once(self, texts: list[str]) -> list[list[float]]:
        vectors = self._client.embed(texts)
        self._check_response(texts, vectors)
        return vectors

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "Embedding call failed (attempt %d/%d): %s. Retrying in %.1fs",
            retry_state.attempt_number,
            self.max_attempts,
            retry_state.outcome.exception() if retry_state.outcome else None,
            retry_state.next_action.sleep if retry_state.next_action else 0.0,
        )

    def _check_response(self, texts: list[str], vectors: list[list[float]]) -> None:
        """Reject responses that cannot be matched one-to-one with the inputs."""
        if len(vectors) != len(texts):
            raise ExternalServiceError(
                f"Embedding count mismatch: {len(texts)} texts, {len(vectors)} vectors",
                expected=len(texts),
                received=len(vectors),
            )
        expected = self.dimensions or len(vectors[0])
        for i, vector in enumerate(vectors):
            if not vector:
                raise ExternalServiceError(f"Empty embedding at position {i}", position=i)
            if len(vector) != expected:
                raise ExternalServiceError(
                    f"Embedding at position {i} has {len(vector)} dimensions, expected {expected}",
                    position=i,
                    dimensions=len(vector),
                    expected=expected,
                )
            if not all(math.isfinite(v) for v in vector):
                raise ExternalServiceError(
                    f"Embedding at position {i} has non-finite components", position=i
                )
