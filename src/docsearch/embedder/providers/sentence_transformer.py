"""Local embedding model backed by sentence-transformers.

The default model, all-MiniLM-L6-v2, produces 384-dimensional
mean-pooled, normalized embeddings and runs on CPU.
"""

from typing import Any

from loguru import logger

from ...errors import EmbeddingError
from ..base import BaseEmbeddingModel

DEFAULT_MODEL_NAME = "sentence-transformers/all-MiniLM-L6-v2"


class SentenceTransformerModel(BaseEmbeddingModel):
    """Embedding model running locally through sentence-transformers.

    The model is not loaded until ``load()`` is called, so constructing one
    is cheap.

    Attributes:
        model_name: Hugging Face model id
        device: Torch device ("cpu", "cuda", ...)
        normalize: Whether vectors are L2-normalized
    """

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL_NAME,
        dimension: int = 384,
        device: str = "cpu",
        normalize: bool = True,
    ):
        self.model_name = model_name
        self.device = device
        self.normalize = normalize
        self._dimension = dimension
        self._model: Any = None

    def load(self) -> None:
        if self._model is not None:
            return

        from sentence_transformers import SentenceTransformer

        self._model = SentenceTransformer(self.model_name, device=self.device)
        logger.info(
            f"Loaded sentence-transformers model {self.model_name} "
            f"(device={self.device}, normalize={self.normalize})"
        )

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts cannot be empty")
        if self._model is None:
            raise EmbeddingError(f"Model {self.model_name} is not loaded")

        vectors = self._model.encode(
            texts,
            convert_to_numpy=True,
            normalize_embeddings=self.normalize,
            show_progress_bar=False,
        )
        return vectors.tolist()

    @property
    def name(self) -> str:
        return self.model_name

    @property
    def dimension(self) -> int:
        return self._dimension
