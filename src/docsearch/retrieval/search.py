"""Exact cosine-similarity search over a vector database artifact."""

import asyncio
from pathlib import Path

import httpx
import numpy as np
from loguru import logger

from ..entities.search_result import SearchResult
from ..entities.vector_db import VectorDatabase
from ..errors import DimensionMismatchError, VectorDatabaseError
from ..indexing.storage import load_vector_database, parse_vector_database
from ..utils.similarity import cosine_similarities
from ..utils.single_flight import SingleFlight


class VectorSearch:
    """Linear-scan nearest-neighbor search.

    The artifact is fetched whole on first use from a local path or an
    http(s) URL. Concurrent callers share that single fetch.

    Attributes:
        source: Path or URL of the artifact, or None for an in-memory database

    Example:
        >>> search = VectorSearch("site/vector-db.json")
        >>> results = await search.search(query_vector, top_k=3)
    """

    def __init__(
        self,
        source: str | Path | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.source = source
        self.timeout = timeout
        self._transport = transport
        self._database: SingleFlight[VectorDatabase] = SingleFlight("vector database")
        self._matrix: np.ndarray | None = None

    @classmethod
    def from_database(cls, database: VectorDatabase) -> "VectorSearch":
        """Create a search over an already-loaded database."""
        search = cls()
        search._set_database(database)
        return search

    def _set_database(self, database: VectorDatabase) -> None:
        self._matrix = np.asarray(
            [chunk.embedding for chunk in database.chunks], dtype=np.float64
        ).reshape(len(database.chunks), database.dimension)
        self._database.set(database)

    async def load(self) -> VectorDatabase:
        """Load the database once; later and concurrent calls share the result.

        Raises:
            VectorDatabaseError: If the artifact cannot be fetched or parsed
        """
        return await self._database.get(self._fetch)

    async def _fetch(self) -> VectorDatabase:
        if self.source is None:
            raise VectorDatabaseError("No vector database source configured")

        logger.info(f"Loading vector database from {self.source}...")
        source = str(self.source)
        if source.startswith(("http://", "https://")):
            database = await self._fetch_url(source)
        else:
            database = await asyncio.to_thread(load_vector_database, source)

        self._set_database(database)
        logger.info(f"Loaded {len(database.chunks)} chunks")
        return database

    async def _fetch_url(self, url: str) -> VectorDatabase:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise VectorDatabaseError(
                f"Failed to fetch vector database: {url}",
                original_error=e,
            ) from e
        return parse_vector_database(response.content)

    async def search(self, query_vector: list[float], top_k: int = 5) -> list[SearchResult]:
        """Rank every chunk by cosine similarity to ``query_vector``.

        Args:
            query_vector: Query embedding
            top_k: Maximum number of results

        Returns:
            Up to ``top_k`` results, highest score first; equal scores keep
            database order

        Raises:
            DimensionMismatchError: If the query length differs from the database dimension
        """
        database = await self.load()
        if len(query_vector) != database.dimension:
            raise DimensionMismatchError(
                database.dimension, len(query_vector), context="Query vector"
            )
        if top_k <= 0 or not database.chunks:
            return []

        scores = cosine_similarities(self._matrix, query_vector)
        order = np.argsort(-scores, kind="stable")[:top_k]

        results = [
            SearchResult(chunk=database.chunks[i], score=float(scores[i]))
            for i in order
        ]
        logger.debug(f"Scored {len(database.chunks)} chunks, returning top {len(results)}")
        return results

    def is_ready(self) -> bool:
        """Whether the database has been loaded."""
        return self._database.ready

    def info(self) -> dict | None:
        """Chunk count, dimension and model of the loaded database."""
        database = self._database.value
        if database is None:
            return None
        return {
            "chunk_count": len(database.chunks),
            "dimension": database.dimension,
            "model": database.model,
        }
