"""Utility functions for docsearch."""

from .async_helpers import run_async_in_sync_context
from .hashing import chunk_id, content_hash
from .log import configure_logging
from .performance import timer
from .similarity import cosine_similarities, cosine_similarity
from .single_flight import SingleFlight

__all__ = [
    "cosine_similarity",
    "cosine_similarities",
    "content_hash",
    "chunk_id",
    "configure_logging",
    "run_async_in_sync_context",
    "SingleFlight",
    "timer",
]
