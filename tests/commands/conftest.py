"""Fixtures for command tests."""

import os
from unittest.mock import patch

import pytest

from ragline import LocalStorage, Ragline
from ragline.settings import Settings

PROVIDER_COMMANDS = ["ingest", "embed", "search", "ask"]


@pytest.fixture
def rag(temp_dir, fake_provider):
    """Ragline over a temp data dir, returned by every provider-backed command."""
    instance = Ragline(
        provider=fake_provider,
        storage=LocalStorage(temp_dir),
        settings=Settings(chunk_size=4, chunk_overlap=1),
    )
    patchers = [
        patch(f"ragline.commands.{name}.get_ragline", return_value=instance)
        for name in PROVIDER_COMMANDS
    ]
    for patcher in patchers:
        patcher.start()
    yield instance
    for patcher in patchers:
        patcher.stop()
    instance.close()


@pytest.fixture
def docs_dir(isolated_env):
    """A small directory of supported and unsupported files."""
    root = os.path.join(isolated_env, "docs")
    os.makedirs(os.path.join(root, "nested"))
    files = {
        "a.txt": "apples and avocados are always available",
        "b.md": "# Bees\n\nbees build beautiful combs",
        os.path.join("nested", "c.txt"): "cats chase colourful critters daily",
        "image.png": "not really an image",
    }
    for name, content in files.items():
        with open(os.path.join(root, name), "w") as f:
            f.write(content)
    return root
