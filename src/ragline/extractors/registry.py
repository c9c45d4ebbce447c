# src/ragline/extractors/registry.py
"""Extractor registry for auto-selecting text extractors."""

from ragline.exceptions import ExtractionError
from ragline.extractors.base import TextExtractor
from ragline.extractors.pypdf_extractor import PyPDFExtractor
from ragline.extractors.text import PlainTextExtractor


class ExtractorRegistry:
    """Registry for text extractors.

    Automatically selects the appropriate extractor based on file extension.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._extractors: list[TextExtractor] = []

    def register(self, extractor: TextExtractor) -> None:
        """Register an extractor."""
        self._extractors.append(extractor)

    def find_extractor(self, filename: str) -> TextExtractor | None:
        """Find an extractor that supports the given filename."""
        for extractor in self._extractors:
            if extractor.supports(filename):
                return extractor
        return None

    def extract(self, data: bytes, filename: str) -> str:
        """Extract text using the appropriate extractor.

        Raises:
            ExtractionError: If no extractor supports the file type, or extraction fails
        """
        extractor = self.find_extractor(filename)
        if extractor is None:
            raise ExtractionError(f"Unsupported file type: {filename}", filename=filename)
        return extractor.extract(data, filename)

    @classmethod
    def default(cls) -> "ExtractorRegistry":
        """Create a registry with the plain text and PDF extractors registered."""
        registry = cls()
        registry.register(PlainTextExtractor())
        registry.register(PyPDFExtractor())
        return registry
