"""
docsearch error hierarchy.

All exceptions raised by docsearch derive from DocSearchError so callers can
catch library failures with a single except clause.

Error Categories:
-----------------
1. Configuration errors: invalid or unreadable project configuration
2. Embedding errors: the inference engine failed to load or to embed
3. Vector database errors: the persisted artifact is missing or malformed
4. Data integrity errors: vectors of different lengths were compared

Usage:
------
    from docsearch.errors import DocSearchError, ModelLoadError

    try:
        answer = await session.query("How do I install it?")
    except ModelLoadError as e:
        logger.error(f"Embedding model unavailable: {e}")
    except DocSearchError as e:
        logger.error(f"Search failed: {e}")
"""

from typing import Any


class DocSearchError(Exception):
    """
    Base exception for all docsearch errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


class ConfigurationError(DocSearchError):
    """
    Raised when there's a configuration problem.

    Common causes:
    - Config file is not valid JSON
    - Invalid chunking values (e.g. overlap larger than chunk size)
    - Unknown embedder type
    """

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class EmbeddingError(DocSearchError):
    """Raised when an embedding operation fails."""
    pass


class ModelLoadError(EmbeddingError):
    """
    Raised when the embedding model cannot be loaded.

    Every caller waiting on the same load receives this error. Nothing is
    retried automatically; a later call to ``initialize()`` starts a new load.
    """

    def __init__(
        self,
        message: str = "Failed to load embedding model",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class VectorDatabaseError(DocSearchError):
    """Raised when the vector database artifact cannot be read or parsed."""
    pass


class DimensionMismatchError(DocSearchError, ValueError):
    """
    Raised when two vectors of different lengths are compared.

    This is a data-integrity error (e.g. a query embedded with a different
    model than the one that built the database) and is never coerced into a
    score.
    """

    def __init__(self, expected: int, actual: int, context: str = ""):
        message = f"Vector dimension mismatch: {expected} != {actual}"
        if context:
            message = f"{context}: {message}"
        super().__init__(message, details={"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual
