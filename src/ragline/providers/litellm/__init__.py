# src/ragline/providers/litellm/__init__.py
"""LiteLLM provider clients for ragline.

This module contains LiteLLM-based client implementations:
- LiteLLMClient: Chat completion using LiteLLM
- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- ChatModels: Curated chat model constants
- EmbeddingModels: Curated embedding model constants

Usage:
    from ragline.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

    client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
"""

from ragline.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from ragline.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = ["LiteLLMClient", "LiteLLMEmbeddingClient", "ChatModels", "EmbeddingModels"]
