"""Text extraction for uploaded files."""

from ragline.extractors.base import TextExtractor
from ragline.extractors.pypdf_extractor import PyPDFExtractor
from ragline.extractors.registry import ExtractorRegistry
from ragline.extractors.text import PlainTextExtractor

__all__ = [
    "TextExtractor",
    "PlainTextExtractor",
    "PyPDFExtractor",
    "ExtractorRegistry",
]
