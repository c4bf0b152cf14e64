"""Async embedder wrapping a blocking embedding model.

``Embedder`` owns the model's lifecycle: it loads the model exactly once no
matter how many requests arrive while loading, and it bounds concurrent
inference by embedding in fixed-size batches.
"""

import asyncio

from loguru import logger

from ..batch.progress import BatchProgress, BatchStage, ProgressCallback, log_progress
from ..errors import DimensionMismatchError, EmbeddingError, ModelLoadError
from ..utils.single_flight import SingleFlight
from .base import BaseEmbeddingModel


class Embedder:
    """Single-text and batched embedding on top of a BaseEmbeddingModel.

    Attributes:
        model: The wrapped inference engine
        text_prefix: Prepended to every text before embedding
            (e.g. "query: " for e5 models at query time)

    Example:
        >>> embedder = Embedder(SentenceTransformerModel())
        >>> vectors = await embedder.embed_batch(texts, batch_size=10)
    """

    def __init__(self, model: BaseEmbeddingModel, text_prefix: str = ""):
        self.model = model
        self.text_prefix = text_prefix
        self._loaded: SingleFlight[BaseEmbeddingModel] = SingleFlight(
            f"embedding model {model.name}"
        )

    @property
    def model_name(self) -> str:
        return self.model.name

    @property
    def dimension(self) -> int:
        return self.model.dimension

    def is_ready(self) -> bool:
        """Whether the model has been loaded."""
        return self._loaded.ready

    async def initialize(self) -> None:
        """Load the model; concurrent callers share a single load.

        Raises:
            ModelLoadError: If loading fails (delivered to every waiter)
        """
        await self._loaded.get(self._load_model)

    async def _load_model(self) -> BaseEmbeddingModel:
        logger.info(f"Loading embedding model: {self.model.name}...")
        try:
            await asyncio.to_thread(self.model.load)
        except Exception as e:
            raise ModelLoadError(
                f"Failed to load embedding model {self.model.name}",
                original_error=e,
            ) from e
        logger.info("Embedding model loaded")
        return self.model

    def close(self) -> None:
        """Release the model's resources; the next call loads it again."""
        self.model.close()
        self._loaded.reset()

    async def embed(self, text: str) -> list[float]:
        """Embed one text.

        Raises:
            ModelLoadError: If the model cannot be loaded
            EmbeddingError: If inference fails
            DimensionMismatchError: If the model returns a vector of the wrong length
        """
        await self.initialize()

        try:
            vectors = await asyncio.to_thread(self.model.embed, [self.text_prefix + text])
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(
                f"Embedding failed with model {self.model.name}",
                original_error=e,
            ) from e

        vector = [float(x) for x in vectors[0]]
        if len(vector) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(vector), context=self.model.name)
        return vector

    async def embed_batch(
        self,
        texts: list[str],
        batch_size: int = 10,
        on_progress: ProgressCallback | None = None,
    ) -> list[list[float]]:
        """Embed many texts, ``batch_size`` concurrent calls at a time.

        Each batch is awaited in full before the next one starts, so at most
        ``batch_size`` inference calls are in flight. Progress is reported
        after every batch, to ``on_progress`` or to the log.

        Args:
            texts: Texts to embed
            batch_size: Concurrent embedding calls per batch
            on_progress: Optional progress callback

        Returns:
            One vector per text, in input order
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if not texts:
            return []

        await self.initialize()

        report = on_progress or log_progress
        total = len(texts)
        total_batches = (total + batch_size - 1) // batch_size
        embeddings: list[list[float]] = []

        for start in range(0, total, batch_size):
            batch = texts[start:start + batch_size]
            batch_num = start // batch_size + 1

            vectors = await asyncio.gather(*(self.embed(text) for text in batch))
            embeddings.extend(vectors)

            current = min(start + batch_size, total)
            report(BatchProgress(
                stage=BatchStage.EMBEDDING,
                current=current,
                total=total,
                batch_num=batch_num,
                total_batches=total_batches,
            ))

        return embeddings
