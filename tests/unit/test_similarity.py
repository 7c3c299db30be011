"""
Tests for resumatch.ml.embeddings: cosine similarity, top-K ranking and vector helpers.
"""

import math

import pytest

from resumatch.ml.embeddings import (
    Embedding,
    check_dimension,
    cosine_similarity,
    placeholder_embedding,
    similarity_percentage,
    top_similar,
)
from resumatch.utils.exceptions import DimensionMismatchError, InvalidArgumentError

VECTORS = [
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [1.0, 1.0, 0.0, 0.0],
    [-1.0, 0.5, 0.0, 2.0],
    [0.3, 0.3, 0.3, 0.3],
]


# ── cosine_similarity ───────────────────────────────────────────────────────


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1, 0, 0, 0], [1, 0, 0, 0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1, 0], [0, 1]) == 0.0

    def test_opposite_vectors(self):
        assert cosine_similarity([1, 2], [-1, -2]) == pytest.approx(-1.0)

    def test_known_angle(self):
        assert cosine_similarity([1, 0], [1, 1]) == pytest.approx(1 / math.sqrt(2))

    def test_zero_vector_gives_zero(self):
        assert cosine_similarity([0, 0, 0], [1, 2, 3]) == 0.0
        assert cosine_similarity([1, 2, 3], [0, 0, 0]) == 0.0

    @pytest.mark.parametrize("a", VECTORS)
    @pytest.mark.parametrize("b", VECTORS)
    def test_symmetric_and_bounded(self, a, b):
        ab = cosine_similarity(a, b)
        assert ab == pytest.approx(cosine_similarity(b, a))
        assert -1.0 <= ab <= 1.0

    @pytest.mark.parametrize("v", [v for v in VECTORS if any(v)])
    def test_self_similarity_is_one(self, v):
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            cosine_similarity([1, 0, 0], [1, 0])
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_percentage(self):
        assert similarity_percentage([1, 0, 0, 0], [1, 0, 0, 0]) == 100
        assert similarity_percentage([1, 0], [1, 1]) == 71


# ── top_similar ─────────────────────────────────────────────────────────────


class TestTopSimilar:
    def test_descending_order(self):
        ranked = top_similar([1, 0, 0, 0], VECTORS, k=5)
        scores = [score for _, score in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[0][0] == [1.0, 0.0, 0.0, 0.0]

    @pytest.mark.parametrize("k", [0, 1, 3, 5, 10])
    def test_length_is_min_of_k_and_items(self, k):
        assert len(top_similar([1, 0, 0, 0], VECTORS, k)) == min(k, len(VECTORS))

    def test_results_subset_of_items(self):
        ranked = top_similar([0, 1, 0, 0], VECTORS, k=3)
        assert all(item in VECTORS for item, _ in ranked)

    def test_ties_keep_input_order(self):
        items = [("a", [1.0, 0.0]), ("b", [2.0, 0.0]), ("c", [0.0, 1.0])]
        ranked = top_similar([1, 0], items, k=3, key=lambda pair: pair[1])
        assert [name for (name, _), _ in ranked] == ["a", "b", "c"]

    def test_empty_items(self):
        assert top_similar([1, 0], [], k=3) == []

    def test_negative_k(self):
        with pytest.raises(InvalidArgumentError):
            top_similar([1, 0], [[1, 0]], k=-1)

    def test_mismatched_item_raises(self):
        with pytest.raises(DimensionMismatchError):
            top_similar([1, 0, 0], [[1, 0, 0], [1, 0]], k=2)


# ── Embedding helpers ───────────────────────────────────────────────────────


class TestEmbeddingHelpers:
    def test_placeholder_is_flagged_zero_vector(self):
        placeholder = placeholder_embedding(4)
        assert placeholder.is_placeholder
        assert placeholder.vector == [0.0, 0.0, 0.0, 0.0]
        assert placeholder.dimension == 4

    def test_real_embedding_not_placeholder(self):
        assert not Embedding(vector=[1.0, 0.0]).is_placeholder

    def test_check_dimension(self):
        check_dimension([0.0] * 4, 4)
        with pytest.raises(DimensionMismatchError):
            check_dimension([0.0] * 3, 4)
