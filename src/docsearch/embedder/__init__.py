"""Embedder module for vector generation.

``Embedder`` is the async front end used by the build and query pipelines;
the embedding models behind it are pluggable and created by
``EmbedderFactory``.
"""

from .base import BaseEmbeddingModel
from .embedder import Embedder
from .factory import EmbedderFactory
from .providers import MockEmbeddingModel, OpenAICompatibleModel, SentenceTransformerModel

__all__ = [
    "BaseEmbeddingModel",
    "Embedder",
    "EmbedderFactory",
    "MockEmbeddingModel",
    "OpenAICompatibleModel",
    "SentenceTransformerModel",
]
