"""Content-hash cache for incremental vector database builds."""

from docsearch.cache.index import CacheEntry, CacheIndex
from docsearch.utils.hashing import content_hash

__all__ = ["CacheEntry", "CacheIndex", "content_hash"]
