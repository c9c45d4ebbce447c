"""Batch embedding orchestration over a bounded thread pool."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from ragline.embedder import Embedder
from ragline.exceptions import RaglineError, ValidationError
from ragline.models import BatchFailure, Chunk, EmbeddingReport
from ragline.stores import ChunkStore, VectorStore

if TYPE_CHECKING:
    from ragline.settings import Settings

logger = logging.getLogger(__name__)


def partition(chunks: list[Chunk], size: int) -> list[list[Chunk]]:
    """Split chunks into consecutive batches of at most ``size``, preserving order."""
    return [chunks[i : i + size] for i in range(0, len(chunks), size)]


class EmbeddingOrchestrator:
    """Embeds chunks in parallel batches and persists each vector individually.

    The orchestrator owns one thread pool of ``parallelism`` workers, created on
    first use and reused by every later run. Each batch is one embedder call;
    a batch that fails contributes nothing and does not disturb its siblings.
    Each vector is written with its own ``set_embedding`` call, so a crash
    mid-batch leaves a prefix of the batch embedded and nothing half-written.

    Example:
        with EmbeddingOrchestrator(embedder, chunk_store, chunk_store) as orchestrator:
            report = orchestrator.generate_pending()
            print(report.embedded, len(report.failed_batches))
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        chunk_store: ChunkStore,
        batch_size: int = 20,
        parallelism: int = 4,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            embedder: Embedder used for each batch (retries are its concern)
            vector_store: Receives one set_embedding call per vector
            chunk_store: Source of chunks lacking embeddings
            batch_size: Chunks per embedder call
            parallelism: Maximum batches in flight at once
        """
        if batch_size < 1:
            raise ValidationError(f"batch_size must be positive, got {batch_size}")
        if parallelism < 1:
            raise ValidationError(f"parallelism must be positive, got {parallelism}")
        self.embedder = embedder
        self.vector_store = vector_store
        self.chunk_store = chunk_store
        self.batch_size = batch_size
        self.parallelism = parallelism
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        embedder: Embedder,
        vector_store: VectorStore,
        chunk_store: ChunkStore,
        settings: Settings,
    ) -> EmbeddingOrchestrator:
        return cls(
            embedder=embedder,
            vector_store=vector_store,
            chunk_store=chunk_store,
            batch_size=settings.embedding_batch_size,
            parallelism=settings.embedding_parallelism,
        )

    def __enter__(self) -> EmbeddingOrchestrator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self, wait: bool = True) -> None:
        """Shut the worker pool down. A later run creates a fresh pool."""
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.parallelism,
                    thread_name_prefix="ragline-embed",
                )
            return self._executor

    def generate(self, chunks: list[Chunk]) -> int:
        """Embed every chunk that lacks an embedding.

        Returns:
            Number of chunks newly embedded and persisted.
        """
        return self.run(chunks).embedded

    def generate_pending(self, document_id: str | None = None) -> EmbeddingReport:
        """Embed stored chunks without embeddings, globally or for one document."""
        pending = self.chunk_store.get_without_embedding(document_id)
        if document_id is None:
            logger.info("Found %d chunk(s) without embeddings", len(pending))
        else:
            logger.info("Document %s: %d chunk(s) need embeddings", document_id, len(pending))
        return self.run(pending)

    def run(self, chunks: list[Chunk], timeout: float | None = None) -> EmbeddingReport:
        """Embed chunks and report per-batch outcomes.

        Args:
            chunks: Candidate chunks; already-embedded ones are skipped
            timeout: Seconds to wait for batches. Unfinished batches keep running
                in the pool, are not counted, and show up as ``pending_batches``.
        """
        candidates = [c for c in chunks if c.embedding is None]
        report = EmbeddingReport(candidates=len(candidates))
        if not candidates:
            return report

        batches = partition(candidates, self.batch_size)
        report.batches = len(batches)
        logger.info(
            "Processing %d batch(es) of up to %d chunks, parallelism=%d",
            len(batches),
            self.batch_size,
            self.parallelism,
        )

        deadline = time.monotonic() + timeout if timeout is not None else None
        executor = self._get_executor()
        futures: dict[Future[int], int] = {
            executor.submit(self._process_batch, batch, deadline): number
            for number, batch in enumerate(batches, start=1)
        }

        done, not_done = wait(futures, timeout=timeout)

        for future in sorted(done, key=futures.__getitem__):
            number = futures[future]
            error = future.exception()
            if error is None:
                report.embedded += future.result()
                continue
            logger.error("Embedding batch %d failed: %s", number, error)
            report.failed_batches.append(
                BatchFailure(
                    batch=number,
                    chunk_ids=[c.id for c in batches[number - 1]],
                    error=str(error),
                )
            )

        report.pending_batches = len(not_done)
        if not_done:
            logger.warning("%d batch(es) still running after %.1fs", len(not_done), timeout)

        logger.info("Embedding complete. Total newly embedded: %d", report.embedded)
        return report

    def _process_batch(self, batch: list[Chunk], deadline: float | None) -> int:
        vectors = self.embedder.embed_texts([c.content for c in batch], deadline=deadline)

        saved = 0
        for chunk, vector in zip(batch, vectors, strict=True):
            try:
                if self.vector_store.set_embedding(chunk.id, vector):
                    saved += 1
            except RaglineError as e:
                logger.error("Failed to save embedding for chunk %s: %s", chunk.id, e)
        return saved
