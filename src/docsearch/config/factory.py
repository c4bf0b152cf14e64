"""Build pipeline components from configuration."""

from loguru import logger

from ..chunker.heading import HeadingChunker
from ..embedder.embedder import Embedder
from ..embedder.factory import EmbedderFactory
from .models import BuildConfig, ComponentConfig, DocSearchConfig
from .settings import settings


class ComponentFactory:
    """Creates configured components for builds and query sessions."""

    @staticmethod
    def create_chunker(config: BuildConfig) -> HeadingChunker:
        logger.info(f"Creating chunker: size={config.chunk_size}, overlap={config.chunk_overlap}")
        return HeadingChunker(max_chunk_size=config.chunk_size, chunk_overlap=config.chunk_overlap)

    @staticmethod
    def create_embedder(config: ComponentConfig, text_prefix: str = "") -> Embedder:
        """Create an embedder from configuration.

        For the ``openai_compatible`` type, ``base_url`` and ``api_key``
        default to the ``EMBEDDING_BASE_URL`` and ``EMBEDDING_API_KEY``
        settings.
        """
        logger.info(f"Creating embedder: {config.type}")
        params = dict(config.params)
        if config.type == "openai_compatible":
            if settings.EMBEDDING_BASE_URL:
                params.setdefault("base_url", settings.EMBEDDING_BASE_URL)
            if settings.EMBEDDING_API_KEY:
                params.setdefault("api_key", settings.EMBEDDING_API_KEY)
        model = EmbedderFactory.create(config.type, **params)
        return Embedder(model, text_prefix=text_prefix)

    @classmethod
    def create_query_embedder(cls, config: DocSearchConfig) -> Embedder:
        """Embedder for queries, with the configured query prefix."""
        return cls.create_embedder(config.embedder, text_prefix=config.query_prefix)
