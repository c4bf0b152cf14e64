"""
docsearch - Semantic search over a documentation site.

A build turns markdown documents into a single vector database artifact
(heading-aware chunks plus embeddings), reusing the work done for
unchanged documents. At query time the artifact is searched by cosine
similarity and the best excerpts are formatted into an answer with
citations.
"""

__version__ = "0.1.0"

# Core entities
from .entities import (
    Answer,
    ChunkMetadata,
    Document,
    DocumentChunk,
    SearchResult,
    Source,
    TextChunk,
    VectorDatabase,
)

# Components
from .chunker import BaseChunker, HeadingChunker
from .embedder import BaseEmbeddingModel, Embedder, EmbedderFactory, MockEmbeddingModel
from .cache import CacheIndex
from .loader import MarkdownLoader

# Pipelines
from .indexing import VectorDatabaseBuilder, load_vector_database, save_vector_database
from .retrieval import SearchSession, VectorSearch, format_answer

# Configuration
from .config import ComponentFactory, DocSearchConfig, load_config

from .errors import DocSearchError

__all__ = [
    "Answer",
    "BaseChunker",
    "BaseEmbeddingModel",
    "CacheIndex",
    "ChunkMetadata",
    "ComponentFactory",
    "DocSearchConfig",
    "DocSearchError",
    "Document",
    "DocumentChunk",
    "Embedder",
    "EmbedderFactory",
    "HeadingChunker",
    "MarkdownLoader",
    "MockEmbeddingModel",
    "SearchResult",
    "SearchSession",
    "Source",
    "TextChunk",
    "VectorDatabase",
    "VectorDatabaseBuilder",
    "VectorSearch",
    "format_answer",
    "load_config",
    "load_vector_database",
    "save_vector_database",
]
