"""
Incremental vector database builder.

Orchestrates one build: classify each document as unchanged or changed by
its content hash, reuse cached chunks for unchanged documents, chunk and
embed the changed ones, and assemble the resulting database.

The processing flow:
1. Build a CacheIndex from the previous database (if any)
2. Hash every document; a cache hit means the document is unchanged
3. Unchanged documents contribute their cached chunks verbatim
4. Changed documents are chunked and embedded in one batched pass
5. Chunks are ordered reused-documents first, then new documents,
   each group in input document order
"""

import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..batch.progress import ProgressCallback
from ..cache.index import CacheIndex
from ..chunker.base import BaseChunker
from ..embedder.embedder import Embedder
from ..entities.chunk import DocumentChunk, TextChunk
from ..entities.document import Document
from ..entities.vector_db import VECTOR_DB_VERSION, VectorDatabase
from ..errors import VectorDatabaseError
from ..utils.async_helpers import run_async_in_sync_context
from ..utils.hashing import chunk_id, content_hash
from ..utils.performance import timer
from .storage import load_vector_database, save_vector_database


@dataclass
class BuildStats:
    """Counters for the most recent build."""
    documents: int = 0
    reused_documents: int = 0
    changed_documents: int = 0
    reused_chunks: int = 0
    new_chunks: int = 0
    duration: float = 0.0


class VectorDatabaseBuilder:
    """
    Builds a VectorDatabase from documents, reusing unchanged work.

    Attributes:
        embedder: Embedder used for changed documents
        chunker: Chunker used for changed documents
        batch_size: Concurrent embedding calls per batch
        last_stats: Statistics of the most recent ``build`` call

    Example:
        >>> builder = VectorDatabaseBuilder(embedder, HeadingChunker(500, 50))
        >>> db = await builder.build_to_path(documents, "site/vector-db.json")
        >>> print(builder.last_stats.new_chunks)
    """

    def __init__(self, embedder: Embedder, chunker: BaseChunker, batch_size: int = 10):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.embedder = embedder
        self.chunker = chunker
        self.batch_size = batch_size
        self.last_stats = BuildStats()

    async def build(
        self,
        documents: list[Document],
        existing: VectorDatabase | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> VectorDatabase:
        """
        Build a database for ``documents``.

        Args:
            documents: Documents in corpus order
            existing: Previously built database used as a cache, if any
            on_progress: Optional callback for embedding progress

        Returns:
            The new VectorDatabase (not persisted)

        Raises:
            ModelLoadError: If the embedding model cannot be loaded
            EmbeddingError: If embedding a changed chunk fails
        """
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        stats = BuildStats(documents=len(documents))

        cache = CacheIndex.from_database(self._compatible(existing))
        logger.info(
            f"[{request_id}] Building vector database: documents={len(documents)}, "
            f"cached_documents={len(cache)}"
        )

        reused: list[DocumentChunk] = []
        # (document, chunks) for documents that need embedding
        pending: list[tuple[Document, list[TextChunk]]] = []

        with timer(f"[{request_id}] Chunking", level="DEBUG"):
            for doc in documents:
                fresh_hash = content_hash(doc.content)
                cached = cache.lookup(doc.relative_path, fresh_hash)
                if cached is not None:
                    reused.extend(cached)
                    stats.reused_documents += 1
                    stats.reused_chunks += len(cached)
                    continue

                pending.append((doc, self.chunker.chunk(doc, content_hash=fresh_hash)))
                stats.changed_documents += 1

        texts = [chunk.text for _, chunks in pending for chunk in chunks]
        logger.info(
            f"[{request_id}] {stats.reused_documents} unchanged, "
            f"{stats.changed_documents} changed documents; {len(texts)} chunks to embed"
        )

        embeddings: list[list[float]] = []
        if texts:
            with timer(f"[{request_id}] Embedding {len(texts)} chunks"):
                embeddings = await self.embedder.embed_batch(
                    texts, batch_size=self.batch_size, on_progress=on_progress
                )

        new_chunks: list[DocumentChunk] = []
        vectors = iter(embeddings)
        for doc, chunks in pending:
            for index, chunk in enumerate(chunks):
                new_chunks.append(DocumentChunk(
                    id=chunk_id(doc.relative_path, index, chunk.text),
                    text=chunk.text,
                    embedding=next(vectors),
                    metadata=chunk.metadata,
                ))
        stats.new_chunks = len(new_chunks)

        database = VectorDatabase(
            version=VECTOR_DB_VERSION,
            model=self.embedder.model_name,
            dimension=self.embedder.dimension,
            chunks=reused + new_chunks,
        )

        stats.duration = time.time() - start_time
        self.last_stats = stats
        logger.info(
            f"[{request_id}] Vector database built: chunks={len(database.chunks)} "
            f"(reused={stats.reused_chunks}, new={stats.new_chunks}), "
            f"dimension={database.dimension}, duration={stats.duration:.2f}s"
        )
        return database

    def _compatible(self, existing: VectorDatabase | None) -> VectorDatabase | None:
        """Drop a cache built with a different model or dimension."""
        if existing is None:
            return None
        if existing.model != self.embedder.model_name or existing.dimension != self.embedder.dimension:
            logger.warning(
                f"Ignoring cached vectors from model {existing.model} "
                f"(dimension {existing.dimension}); rebuilding all documents"
            )
            return None
        return existing

    @staticmethod
    def load_existing(path: str | Path) -> VectorDatabase | None:
        """Load a previous artifact to use as cache.

        A missing or unparsable artifact is not an error: it means there is
        no cache and every document will be rebuilt.
        """
        path = Path(path)
        if not path.exists():
            logger.info(f"No existing vector database at {path}; full build")
            return None
        try:
            return load_vector_database(path)
        except VectorDatabaseError as e:
            logger.warning(f"Existing vector database unusable, rebuilding all documents: {e}")
            return None

    async def build_to_path(
        self,
        documents: list[Document],
        path: str | Path,
        on_progress: ProgressCallback | None = None,
    ) -> VectorDatabase:
        """Load the artifact at ``path`` as cache, build, and overwrite it."""
        existing = self.load_existing(path)
        database = await self.build(documents, existing, on_progress=on_progress)
        save_vector_database(database, path)
        return database

    def build_sync(
        self,
        documents: list[Document],
        existing: VectorDatabase | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> VectorDatabase:
        """Synchronous wrapper around ``build``."""
        return run_async_in_sync_context(self.build(documents, existing, on_progress))
