"""Embedding model implementations."""

from .mock import MockEmbeddingModel
from .openai_compatible import OpenAICompatibleModel
from .sentence_transformer import SentenceTransformerModel

__all__ = ["MockEmbeddingModel", "OpenAICompatibleModel", "SentenceTransformerModel"]
