# src/ragline/embedder/__init__.py
"""Embedding functionality for ragline."""

from ragline.embedder.base import Embedder
from ragline.embedder.client import RetryingEmbedder

__all__ = ["Embedder", "RetryingEmbedder"]
