"""Vector similarity calculation utilities."""

from collections.abc import Sequence

import numpy as np

from ..errors import DimensionMismatchError


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity score in [-1, 1]. Returns 0.0 when either vector has zero norm.

    Raises:
        DimensionMismatchError: If vectors have different dimensions
    """
    if len(vec1) != len(vec2):
        raise DimensionMismatchError(len(vec1), len(vec2))

    a = np.asarray(vec1, dtype=np.float64)
    b = np.asarray(vec2, dtype=np.float64)

    norm_sq_a = float(np.dot(a, a))
    norm_sq_b = float(np.dot(b, b))
    if norm_sq_a == 0.0 or norm_sq_b == 0.0:
        return 0.0

    score = float(np.dot(a, b)) / float(np.sqrt(norm_sq_a * norm_sq_b))

    # Clamp to [-1, 1] to handle floating point errors
    return max(-1.0, min(1.0, score))


def cosine_similarities(matrix: np.ndarray, query: Sequence[float]) -> np.ndarray:
    """Score every row of ``matrix`` against ``query``.

    Args:
        matrix: 2-D array of shape (n, dimension), one stored vector per row
        query: Query vector of length ``dimension``

    Returns:
        1-D array of n scores in [-1, 1]; rows with zero norm score 0.0

    Raises:
        DimensionMismatchError: If the query length differs from the row length
    """
    q = np.asarray(query, dtype=np.float64)
    if matrix.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    if matrix.shape[1] != q.shape[0]:
        raise DimensionMismatchError(matrix.shape[1], q.shape[0])

    dots = matrix @ q
    denom = np.sqrt(np.einsum("ij,ij->i", matrix, matrix) * float(np.dot(q, q)))

    scores = np.divide(dots, denom, out=np.zeros_like(dots), where=denom != 0)
    return np.clip(scores, -1.0, 1.0)
