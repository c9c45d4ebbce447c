# src/ragline/extractors/text.py
"""Plain text and Markdown extractor."""

from pathlib import Path

from ragline.exceptions import ExtractionError
from ragline.extractors.base import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decode text and markdown files as UTF-8."""

    SUPPORTED_EXTENSIONS = {".txt", ".md", ".markdown", ".text"}

    def supports(self, filename: str) -> bool:
        """Check if this extractor supports the given file."""
        return Path(filename).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def extract(self, data: bytes, filename: str) -> str:
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ExtractionError(
                f"{filename} is not valid UTF-8 text: {e}", filename=filename
            ) from e
