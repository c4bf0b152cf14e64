"""Data model shared by the build and query pipelines."""

from .chunk import ChunkMetadata, DocumentChunk, TextChunk
from .document import Document
from .search_result import Answer, SearchResult, Source
from .vector_db import VECTOR_DB_VERSION, VectorDatabase

__all__ = [
    "Document",
    "ChunkMetadata",
    "TextChunk",
    "DocumentChunk",
    "VectorDatabase",
    "VECTOR_DB_VERSION",
    "SearchResult",
    "Source",
    "Answer",
]
