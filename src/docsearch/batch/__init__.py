"""
Progress reporting for batch work.

Example:
    >>> await embedder.embed_batch(
    ...     texts,
    ...     batch_size=10,
    ...     on_progress=lambda p: print(f"{p.percent:.0%}")
    ... )
"""

from docsearch.batch.progress import BatchProgress, BatchStage, ProgressCallback, log_progress

__all__ = ["BatchProgress", "BatchStage", "ProgressCallback", "log_progress"]
