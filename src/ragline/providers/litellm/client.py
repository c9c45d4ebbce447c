# src/ragline/providers/litellm/client.py
"""LiteLLM client implementations for chat and embedding APIs."""

from typing import Any

import litellm

from ragline.exceptions import ExternalServiceError
from ragline.providers.base import EmbeddingClient, LLMClient
from ragline.providers.litellm.models import ChatModels, EmbeddingModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based chat client used for answer synthesis.

    Supports any model available through LiteLLM (OpenAI, Anthropic, Gemini,
    Bedrock, etc.). Errors are terminal for the call.

    Example:
        from ragline.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GPT_4O_MINI, timeout=30)
        answer = client.complete([{"role": "user", "content": "Hello"}], max_tokens=256)
    """

    def __init__(
        self,
        model: str = ChatModels.GPT_4O_MINI,
        timeout: float | None = None,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "openai/gpt-4o-mini", "anthropic/claude-sonnet-4-5-20250929"
            timeout: Request timeout in seconds. None uses the LiteLLM default.
            api_key: Optional API key; otherwise LiteLLM reads the provider's env var.
        """
        self.model = model
        self.timeout = timeout
        self.api_key = api_key

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if max_tokens is not None:
            completion_kwargs["max_tokens"] = max_tokens
        if self.timeout is not None:
            completion_kwargs["timeout"] = self.timeout
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key

        try:
            response = litellm.completion(**completion_kwargs)
        except Exception as e:
            raise ExternalServiceError(
                f"Chat completion failed for model {self.model}: {e}", model=self.model
            ) from e

        if not response.choices:
            raise ExternalServiceError(
                f"LLM returned no choices for model {self.model}", model=self.model
            )
        content = response.choices[0].message.content
        if content is None:
            raise ExternalServiceError(
                f"LLM returned None content for model {self.model}", model=self.model
            )
        return str(content)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Makes a single request per call. Provider errors propagate unchanged so
    the caller's retry policy can see them.

    Example:
        from ragline.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.TEXT_3_SMALL,
        timeout: float | None = None,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "openai/text-embedding-3-small", "gemini/gemini-embedding-001"
            timeout: Request timeout in seconds. None uses the LiteLLM default.
            api_key: Optional API key; otherwise LiteLLM reads the provider's env var.
        """
        self.model = model
        self.timeout = timeout
        self.api_key = api_key

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        embedding_kwargs: dict[str, Any] = {"model": self.model, "input": texts}
        if self.timeout is not None:
            embedding_kwargs["timeout"] = self.timeout
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key

        response = litellm.embedding(**embedding_kwargs)
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]
