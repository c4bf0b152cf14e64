"""Stable digests for documents and chunks.

Both functions are deterministic across processes and platforms, which the
incremental build relies on: the same input always produces the same id.
"""

import hashlib

CHUNK_ID_LENGTH = 16
CHUNK_ID_PREFIX_CHARS = 100


def content_hash(text: str) -> str:
    """MD5 hex digest of a document's raw text."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def chunk_id(source_file: str, index: int, text: str) -> str:
    """Deterministic chunk id over (source file, index within file, text prefix).

    Args:
        source_file: Relative path of the owning document
        index: Position of the chunk within its document
        text: Chunk text; only the first 100 characters are hashed

    Returns:
        16 hex characters
    """
    key = f"{source_file}:{index}:{text[:CHUNK_ID_PREFIX_CHARS]}"
    return hashlib.md5(key.encode("utf-8")).hexdigest()[:CHUNK_ID_LENGTH]
