# src/ragline/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ragline.providers.litellm.models import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from ragline.embedder import RetryingEmbedder
    from ragline.providers import EmbeddingClient, LLMClient
    from ragline.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for chat and embedding calls.

    LiteLLM provides a unified interface to 100+ LLM providers including
    OpenAI, Anthropic, Azure, Bedrock, and more.

    Args:
        llm: LiteLLM model identifier for answer synthesis.
             Examples: "openai/gpt-4o-mini", "anthropic/claude-sonnet-4-5-20250929"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "openai/text-embedding-3-small", "openai/text-embedding-3-large"
        llm_api_key: Optional API key for the chat model.
        embedding_api_key: Optional API key for the embedding model.

    Example:
        provider = LiteLLMProvider(
            llm="openai/gpt-4o-mini",
            embedding="openai/text-embedding-3-small",
        )
    """

    llm: str = ChatModels.GPT_4O_MINI
    embedding: str = EmbeddingModels.TEXT_3_SMALL
    llm_api_key: str | None = None
    embedding_api_key: str | None = None

    def build_embedding_client(self, settings: Settings) -> EmbeddingClient:
        """Build a single-request LiteLLM embedding client.

        Args:
            settings: Settings containing request_timeout.
        """
        from ragline.providers.litellm import LiteLLMEmbeddingClient

        return LiteLLMEmbeddingClient(
            model=self.embedding,
            timeout=settings.request_timeout,
            api_key=self.embedding_api_key,
        )

    def build_embedder(self, settings: Settings) -> RetryingEmbedder:
        """Build a RetryingEmbedder around the LiteLLM embedding client.

        Args:
            settings: Settings containing the retry policy and expected dimensions.
        """
        from ragline.embedder import RetryingEmbedder

        return RetryingEmbedder.from_settings(self.build_embedding_client(settings), settings)

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a LiteLLMClient for answer synthesis."""
        from ragline.providers.litellm import LiteLLMClient

        return LiteLLMClient(
            model=self.llm,
            timeout=settings.request_timeout,
            api_key=self.llm_api_key,
        )
