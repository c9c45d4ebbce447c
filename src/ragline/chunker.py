# src/ragline/chunker.py
"""Sliding-window text chunker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ragline.exceptions import ValidationError
from ragline.models import Chunk

if TYPE_CHECKING:
    from ragline.settings import Settings


class SlidingWindowChunker:
    """Split text into overlapping windows of whitespace-delimited words.

    Each window holds at most ``window_size`` words and starts
    ``window_size - overlap`` words after the previous one. The last window may
    be shorter. Windows record their word span in ``metadata`` as
    ``start_index`` (inclusive) and ``end_index`` (exclusive).

    Example:
        chunker = SlidingWindowChunker(window_size=5, overlap=2)
        chunks = chunker.chunk("a b c d e f g h i j", document_id="doc-1")
        # spans: [0, 5), [3, 8), [6, 10)
    """

    def __init__(self, window_size: int = 200, overlap: int = 40) -> None:
        """Initialize the chunker.

        Raises:
            ValidationError: If window_size < 1, overlap < 0 or overlap >= window_size
        """
        if window_size < 1:
            raise ValidationError(
                f"window_size ({window_size}) must be positive", window_size=window_size
            )
        if overlap < 0 or overlap >= window_size:
            raise ValidationError(
                f"overlap ({overlap}) must be in [0, window_size) ({window_size})",
                window_size=window_size,
                overlap=overlap,
            )
        self.window_size = window_size
        self.overlap = overlap

    @classmethod
    def from_settings(cls, settings: Settings) -> SlidingWindowChunker:
        return cls(window_size=settings.chunk_size, overlap=settings.chunk_overlap)

    @property
    def step(self) -> int:
        return self.window_size - self.overlap

    def chunk(self, text: str, document_id: str) -> list[Chunk]:
        """Split text into ordered chunks with indices 0..n-1."""
        words = text.split()
        chunks: list[Chunk] = []

        start = 0
        while start < len(words):
            end = min(start + self.window_size, len(words))
            chunks.append(
                Chunk(
                    document_id=document_id,
                    index=len(chunks),
                    content=" ".join(words[start:end]),
                    metadata={"start_index": start, "end_index": end},
                )
            )
            if end == len(words):
                break
            start += self.step

        return chunks
