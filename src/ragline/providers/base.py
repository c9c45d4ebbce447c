# src/ragline/providers/base.py
"""Abstract base classes for LLM and embedding providers."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Abstract base class for chat completion providers.

    The interface is intentionally minimal to support the widest range of
    providers. Implementations make exactly one request per call and raise
    ExternalServiceError on failure; there is no retry at this level.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, messages, temperature=None, max_tokens=None):
                return my_api.chat(messages, temp=temperature)
    """

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Example: [{"role": "system", "content": "..."},
                                {"role": "user", "content": "Hello"}]
            temperature: Optional sampling temperature. None uses the provider default.
            max_tokens: Optional cap on output tokens. None uses the provider default.

        Returns:
            The text of the first returned completion.
        """
        ...


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Implementations issue one batched request per call. Retrying is the job
    of ragline.embedder.RetryingEmbedder, not of the client.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...
