"""
Vector similarity and top-K ranking.

Pure functions over equal-dimension vectors. Comparing vectors of
different dimension is always an error, never a silent truncation.
"""

from typing import Callable, Optional, Sequence, TypeVar

import numpy as np

from resumatch.utils.exceptions import DimensionMismatchError, InvalidArgumentError
from resumatch.utils.scoring import round_half_up

T = TypeVar("T")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors, in [-1, 1].

    Returns exactly 0.0 when either vector has zero magnitude.

    Raises:
        DimensionMismatchError: len(a) != len(b)
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / denom, -1.0, 1.0))


def similarity_percentage(a: Sequence[float], b: Sequence[float]) -> int:
    """Cosine similarity scaled to a rounded percentage."""
    return round_half_up(cosine_similarity(a, b) * 100)


def top_similar(
    query: Sequence[float],
    items: Sequence[T],
    k: int,
    key: Optional[Callable[[T], Sequence[float]]] = None,
) -> list[tuple[T, float]]:
    """
    Rank items by cosine similarity to the query.

    Args:
        query: Query vector
        items: Items to rank; each item is a vector unless `key` is given
        k: Maximum number of results
        key: Maps an item to its vector

    Returns:
        Up to min(k, len(items)) (item, similarity) pairs, highest first.
        Equal similarities keep their input order.
    """
    if k < 0:
        raise InvalidArgumentError(f"k must be non-negative, got {k}", field="k")

    get_vector = key or (lambda item: item)
    scored = [(item, cosine_similarity(query, get_vector(item))) for item in items]
    # sorted() is stable, so ties stay in input order
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return scored[:k]
