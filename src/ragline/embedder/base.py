# src/ragline/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_texts. Results are all-or-nothing: either
    one vector per input text, in input order, or an exception.
    """

    @abstractmethod
    def embed_texts(self, texts: list[str], deadline: float | None = None) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched).

        Args:
            texts: Texts to embed.
            deadline: Optional absolute time.monotonic() value after which no
                further attempt should be started.
        """
        ...

    def embed_text(self, text: str, deadline: float | None = None) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self.embed_texts([text], deadline=deadline)[0]
