"""
Embedding provider interface.

A VectorProvider turns text into a fixed-dimension vector. Providers are
synchronous and may block on model inference or network I/O; callers that
need concurrency go through EmbeddingService.
"""

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

from resumatch.utils.exceptions import DimensionMismatchError


@runtime_checkable
class VectorProvider(Protocol):
    """Injected embedding capability."""

    @property
    def dimension(self) -> int:
        """Dimension of every vector this provider returns."""
        ...

    def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            EmbeddingUnavailableError: the provider could not produce a vector
        """
        ...


@dataclass(frozen=True)
class Embedding:
    """
    A vector plus a flag telling whether it carries real semantic content.

    Placeholder embeddings are produced only in degraded mode and must never
    be ranked against real ones.
    """

    vector: list[float]
    is_placeholder: bool = False

    @property
    def dimension(self) -> int:
        return len(self.vector)


def placeholder_embedding(dimension: int) -> Embedding:
    """A flagged all-zero vector. Cosine against it is always 0."""
    return Embedding(vector=[0.0] * dimension, is_placeholder=True)


def check_dimension(vector: Sequence[float], expected: int) -> None:
    """Raise DimensionMismatchError unless len(vector) == expected."""
    if len(vector) != expected:
        raise DimensionMismatchError(expected=expected, actual=len(vector))
