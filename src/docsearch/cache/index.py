"""
Content-hash cache for incremental builds.

A previous vector database is regrouped by source file into one CacheEntry
per document. Each entry carries the content hash of the document text the
chunks were produced from, so the builder can tell an unchanged document
(reuse its chunks and embeddings verbatim) from a changed one (re-chunk and
re-embed everything). Invalidation is whole-document: a changed document
never reuses any of its old chunks.

Example:
    >>> index = CacheIndex.from_database(previous_db)
    >>> cached = index.lookup("guide/setup.md", content_hash(text))
    >>> if cached is not None:
    ...     chunks.extend(cached)
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from loguru import logger

from ..entities.chunk import DocumentChunk
from ..entities.vector_db import VectorDatabase


@dataclass
class CacheEntry:
    """
    Cached chunks of one document.

    Attributes:
        source_file: Relative path of the document
        content_hash: Hash of the text the chunks were built from; None when
            the stored chunks do not agree on one hash (never a cache hit)
        chunks: The document's chunks in their original order
    """
    source_file: str
    content_hash: str | None
    chunks: list[DocumentChunk] = field(default_factory=list)

    def matches(self, fresh_hash: str) -> bool:
        """Whether this entry was built from text with ``fresh_hash``."""
        return self.content_hash is not None and self.content_hash == fresh_hash


class CacheIndex:
    """Maps source file to its CacheEntry."""

    def __init__(self, entries: dict[str, CacheEntry] | None = None):
        self._entries: dict[str, CacheEntry] = dict(entries or {})

    @classmethod
    def from_database(cls, database: VectorDatabase | None) -> "CacheIndex":
        """Group a database's chunks by source file.

        Args:
            database: Previously persisted database, or None for an empty cache

        Returns:
            CacheIndex with one entry per source file
        """
        if database is None:
            return cls()

        grouped: dict[str, list[DocumentChunk]] = {}
        for chunk in database.chunks:
            grouped.setdefault(chunk.metadata.source_file, []).append(chunk)

        entries = {
            source_file: CacheEntry(
                source_file=source_file,
                content_hash=cls._document_hash(chunks),
                chunks=chunks,
            )
            for source_file, chunks in grouped.items()
        }

        unusable = sum(1 for entry in entries.values() if entry.content_hash is None)
        if unusable:
            logger.debug(f"{unusable} cached documents have no consistent content hash")

        return cls(entries)

    @staticmethod
    def _document_hash(chunks: list[DocumentChunk]) -> str | None:
        hashes = {chunk.metadata.content_hash for chunk in chunks}
        if len(hashes) != 1:
            return None
        return hashes.pop()

    def get(self, source_file: str) -> CacheEntry | None:
        return self._entries.get(source_file)

    def lookup(self, source_file: str, fresh_hash: str) -> list[DocumentChunk] | None:
        """Cached chunks for an unchanged document, else None.

        A document with no entry is never unchanged, whatever its hash.
        """
        entry = self._entries.get(source_file)
        if entry is None or not entry.matches(fresh_hash):
            return None
        return list(entry.chunks)

    def entries(self) -> Iterator[CacheEntry]:
        return iter(self._entries.values())

    def __contains__(self, source_file: object) -> bool:
        return source_file in self._entries

    def __len__(self) -> int:
        return len(self._entries)
