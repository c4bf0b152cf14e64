"""Base interface for embedding models (the external inference engine)."""

from abc import ABC, abstractmethod


class BaseEmbeddingModel(ABC):
    """Abstract base class for embedding generation.

    Embedding models convert text strings into fixed-length vectors. They are
    synchronous and may block; ``Embedder`` runs them in worker threads.
    """

    def load(self) -> None:
        """Load weights or open connections. Called once before first use.

        Raises:
            Exception: Any failure; the caller wraps it in ModelLoadError
        """
        return None

    def close(self) -> None:
        """Release whatever ``load`` acquired. Safe to call more than once."""
        return None

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors (same order as input)

        Raises:
            ValueError: If texts is empty
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Model identifier recorded in the vector database."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension.

        Returns:
            Size of embedding vectors produced by this model
        """
        pass
