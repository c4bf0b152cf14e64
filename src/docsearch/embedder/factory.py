"""Factory for creating embedding model instances."""

from typing import Any

from loguru import logger

from ..errors import ConfigurationError
from .base import BaseEmbeddingModel
from .providers.mock import MockEmbeddingModel
from .providers.openai_compatible import OpenAICompatibleModel
from .providers.sentence_transformer import SentenceTransformerModel


class EmbedderFactory:
    """Factory for creating embedding models based on type.

    This factory maintains a registry of available model types
    and creates instances based on string identifiers.
    """

    _registry: dict[str, type[BaseEmbeddingModel]] = {
        "mock": MockEmbeddingModel,
        "sentence_transformer": SentenceTransformerModel,
        "openai_compatible": OpenAICompatibleModel,
    }

    @classmethod
    def create(cls, model_type: str, **params: Any) -> BaseEmbeddingModel:
        """Create an embedding model by type.

        Args:
            model_type: Type identifier (e.g., "sentence_transformer")
            **params: Initialization parameters for the model

        Returns:
            Embedding model instance (not yet loaded)

        Raises:
            ConfigurationError: If the type is not registered or params don't fit
        """
        if model_type not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ConfigurationError(
                f"Unknown embedder type: '{model_type}'. "
                f"Available types: {available}"
            )

        model_class = cls._registry[model_type]
        logger.debug(f"Creating {model_class.__name__} with params: {params}")

        try:
            return model_class(**params)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid parameters for embedder type '{model_type}'",
                details={"params": sorted(params)},
                original_error=e,
            ) from e

    @classmethod
    def register(cls, model_type: str, model_class: type[BaseEmbeddingModel]) -> None:
        """Register a new model type.

        Raises:
            TypeError: If model_class is not a subclass of BaseEmbeddingModel
        """
        if not issubclass(model_class, BaseEmbeddingModel):
            raise TypeError(
                f"{model_class.__name__} must be a subclass of BaseEmbeddingModel"
            )

        cls._registry[model_type] = model_class
        logger.info(f"Registered embedder type '{model_type}': {model_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        """Get list of available model types."""
        return list(cls._registry.keys())
