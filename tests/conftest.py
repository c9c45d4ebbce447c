"""Shared pytest fixtures."""

import math
import os
import tempfile

import pytest

from ragline.embedder import Embedder
from ragline.providers import LLMClient


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def db_path(temp_dir):
    return os.path.join(temp_dir, "ragline.db")


@pytest.fixture
def stores(db_path):
    """Document and chunk stores sharing one database file."""
    from ragline.stores import SQLiteChunkStore, SQLiteDocumentStore

    return SQLiteDocumentStore(db_path), SQLiteChunkStore(db_path)


def word_vector(text: str) -> list[float]:
    """Deterministic 4-d vector from the letters a-d in text."""
    counts = [float(text.lower().count(letter)) for letter in "abcd"]
    if not any(counts):
        counts = [0.0, 0.0, 0.0, 1.0]
    norm = math.sqrt(sum(c * c for c in counts))
    return [c / norm for c in counts]


class FakeEmbedder(Embedder):
    """Embedder returning letter-count vectors and recording every batch."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def embed_texts(self, texts, deadline=None):
        self.calls.append(list(texts))
        return [word_vector(t) for t in texts]


class FakeLLMClient(LLMClient):
    """LLM client that records its calls and returns a canned answer."""

    def __init__(self, answer: str = "Forty-two.") -> None:
        self.answer = answer
        self.calls: list[dict] = []

    def complete(self, messages, temperature=None, max_tokens=None):
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        return self.answer


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


class FakeProvider:
    """ProviderConfig handing out pre-built fakes."""

    def __init__(self, embedder, llm_client) -> None:
        self.embedder = embedder
        self.llm_client = llm_client

    def build_embedder(self, settings):
        return self.embedder

    def build_llm_client(self, settings):
        return self.llm_client


@pytest.fixture
def fake_provider(fake_embedder, fake_llm):
    return FakeProvider(fake_embedder, fake_llm)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep RAGLINE_* variables and stray config files out of every test."""
    for key in list(os.environ):
        if key.startswith("RAGLINE_"):
            monkeypatch.delenv(key)
    with tempfile.TemporaryDirectory() as workdir:
        monkeypatch.chdir(workdir)
        yield workdir
