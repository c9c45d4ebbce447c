"""Storage abstractions for ragline."""

from ragline.stores.base import ChunkStore, DocumentStore, VectorStore
from ragline.stores.sqlite_chunk import SQLiteChunkStore
from ragline.stores.sqlite_document import SQLiteDocumentStore

__all__ = [
    "DocumentStore",
    "ChunkStore",
    "VectorStore",
    "SQLiteDocumentStore",
    "SQLiteChunkStore",
]
