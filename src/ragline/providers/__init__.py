# src/ragline/providers/__init__.py
"""Provider implementations for ragline.

This module contains chat and embedding provider abstractions:
- LLMClient: Abstract base class for chat completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations of both

Usage:
    from ragline.providers import LLMClient, EmbeddingClient
    from ragline.providers.litellm import LiteLLMClient, ChatModels
"""

from ragline.providers.base import EmbeddingClient, LLMClient
from ragline.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
