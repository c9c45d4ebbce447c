# src/ragline/extractors/pypdf_extractor.py
"""PDF extractor using pypdf - lightweight, pure Python."""

from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from ragline.exceptions import ExtractionError
from ragline.extractors.base import TextExtractor


class PyPDFExtractor(TextExtractor):
    """Extract text from PDF files using pypdf.

    Pages are joined with blank lines; pages without a text layer contribute
    nothing.
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def supports(self, filename: str) -> bool:
        """Check if this extractor supports the given file."""
        return Path(filename).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def extract(self, data: bytes, filename: str) -> str:
        """Extract text from every page of a PDF.

        Raises:
            ExtractionError: If pypdf cannot parse the document
        """
        try:
            reader = PdfReader(BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            # pypdf raises assorted builtin errors on damaged files
            raise ExtractionError(f"Failed to read PDF {filename}: {e}", filename=filename) from e

        return "\n\n".join(text.strip() for text in pages if text.strip())
