"""Provider configurations."""

from ragline.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
