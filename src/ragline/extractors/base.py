# src/ragline/extractors/base.py
"""Text extractor abstract base class."""

from abc import ABC, abstractmethod


class TextExtractor(ABC):
    """Abstract base class for turning uploaded bytes into plain text."""

    @abstractmethod
    def extract(self, data: bytes, filename: str) -> str:
        """Extract the text content of a file.

        Args:
            data: Raw file bytes
            filename: Original filename, used for error context

        Raises:
            ExtractionError: If the bytes cannot be read as this file type
        """
        ...

    @abstractmethod
    def supports(self, filename: str) -> bool:
        """Check if this extractor supports the given filename."""
        ...
