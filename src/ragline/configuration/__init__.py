"""Configuration objects for ragline.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build model-facing components):
- LiteLLMProvider: Uses LiteLLM for chat and embedding calls

Storage configurations (build data stores):
- LocalStorage: SQLite in a local data directory

Example:
    from ragline import Ragline, LiteLLMProvider, LocalStorage

    rag = Ragline(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini", embedding="openai/text-embedding-3-small"),
        storage=LocalStorage("./data"),
    )
"""

from ragline.configuration.base import ProviderConfig, StorageConfig
from ragline.configuration.providers import LiteLLMProvider
from ragline.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
