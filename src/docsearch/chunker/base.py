"""Base chunker interface."""

from abc import ABC, abstractmethod

from loguru import logger

from ..entities.chunk import TextChunk
from ..entities.document import Document


class BaseChunker(ABC):
    """Abstract base class for text chunking.

    Chunkers split documents into smaller pieces suitable
    for embedding and retrieval.
    """

    @abstractmethod
    def chunk(self, document: Document, content_hash: str | None = None) -> list[TextChunk]:
        """Split one document into ordered chunks.

        Args:
            document: Document to split
            content_hash: Hash of the document text, stamped on every chunk

        Returns:
            Chunks in document order; never contains blank chunks
        """
        pass

    def chunk_documents(
        self,
        documents: list[Document],
        content_hashes: dict[str, str] | None = None
    ) -> list[TextChunk]:
        """Chunk several documents, concatenating results in input order.

        Args:
            documents: Documents to split
            content_hashes: Optional map of relative path to content hash

        Returns:
            All chunks, grouped by document
        """
        content_hashes = content_hashes or {}
        chunks: list[TextChunk] = []
        for doc in documents:
            chunks.extend(self.chunk(doc, content_hashes.get(doc.relative_path)))

        logger.info(f"Created {len(chunks)} chunks from {len(documents)} documents")
        return chunks
