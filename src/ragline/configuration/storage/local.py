# src/ragline/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ragline.stores import SQLiteChunkStore, SQLiteDocumentStore

DATABASE_FILENAME = "ragline.db"


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    Documents, chunks and embeddings live in one database file,
    ``<data_dir>/ragline.db``, so documents and their chunks can be written and
    deleted in a single transaction.

    Args:
        data_dir: Base directory for the database. Created if it doesn't exist.

    Example:
        storage = LocalStorage("./my_data")

        # In combination with a provider:
        rag = Ragline(
            provider=LiteLLMProvider(llm="openai/gpt-4o-mini"),
            storage=LocalStorage("./my_data"),
        )
    """

    data_dir: str

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_dir, DATABASE_FILENAME)

    def build_stores(self) -> tuple[SQLiteDocumentStore, SQLiteChunkStore]:
        """Build the document and chunk stores.

        Creates the data directory if it doesn't exist.

        Returns:
            Tuple of (document_store, chunk_store)
        """
        from ragline.stores import SQLiteChunkStore, SQLiteDocumentStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        return SQLiteDocumentStore(self.db_path), SQLiteChunkStore(self.db_path)
