"""Mock embedding model for testing (no model download)."""

import hashlib
import random

from loguru import logger

from ..base import BaseEmbeddingModel


class MockEmbeddingModel(BaseEmbeddingModel):
    """Generates deterministic pseudo-random embeddings for testing.

    WARNING: This model is NOT suitable for production use.
    Vectors carry no meaning; equal texts simply map to equal vectors.

    Attributes:
        seed: Seed mixed into every per-text generator
    """

    def __init__(self, dimension: int = 384, seed: int = 42):
        """Initialize the mock model.

        Args:
            dimension: Size of embedding vectors
            seed: Random seed for deterministic output
        """
        self._dimension = dimension
        self.seed = seed
        logger.warning(
            "Using MockEmbeddingModel - NOT for production use! "
            "Replace with a real model for actual applications."
        )

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate mock embeddings for texts.

        A digest of the text seeds the generator, so output is stable
        across processes.

        Args:
            texts: List of text strings to embed

        Returns:
            List of normalized random vectors

        Raises:
            ValueError: If texts is empty
        """
        if not texts:
            raise ValueError("texts cannot be empty")

        logger.debug(f"Generating {len(texts)} mock embeddings")

        embeddings = []
        for text in texts:
            digest = hashlib.sha256(text.encode("utf-8")).digest()
            rng = random.Random(int.from_bytes(digest[:8], "big") + self.seed)

            vec = [rng.gauss(0, 1) for _ in range(self._dimension)]

            # Normalize to unit length
            magnitude = sum(x**2 for x in vec) ** 0.5
            if magnitude > 0:
                vec = [x / magnitude for x in vec]
            else:
                vec = [0.0] * self._dimension

            embeddings.append(vec)

        return embeddings

    @property
    def name(self) -> str:
        return f"mock-{self._dimension}"

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension
