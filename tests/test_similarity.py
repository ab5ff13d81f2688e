"""Tests for similarity scoring."""

import math

import numpy as np
import pytest

from ragcore.core.embeddings import FeatureEmbedder
from ragcore.core.similarity import cosine_similarity, rank_by_similarity
from ragcore.exceptions import DimensionMismatch


class TestCosineSimilarity:
    """Test cosine similarity."""

    def test_self_similarity(self):
        vector = FeatureEmbedder().embed("vector databases and retrieval")
        assert cosine_similarity(vector, vector) == pytest.approx(1.0)

    def test_plain_lists(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
        assert cosine_similarity([1.0, 2.0], [2.0, 4.0]) == pytest.approx(1.0)
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_magnitude_is_ignored(self):
        a = np.array([3.0, 4.0, 0.0])
        assert cosine_similarity(a, a * 10) == pytest.approx(1.0)

    def test_dimension_mismatch(self):
        """Vectors of different lengths are rejected."""
        with pytest.raises(DimensionMismatch) as exc_info:
            cosine_similarity(np.ones(384), np.ones(10))

        assert exc_info.value.left == 384
        assert exc_info.value.right == 10
        assert isinstance(exc_info.value, ValueError)

    def test_zero_vector_is_nan(self):
        assert math.isnan(cosine_similarity([0.0, 0.0], [1.0, 0.0]))

    def test_returns_python_float(self):
        assert isinstance(cosine_similarity([1.0], [1.0]), float)


class TestRankBySimilarity:
    """Test ranking candidates against a query."""

    def test_ranks_highest_first(self):
        query = [1.0, 0.0]
        candidates = [[0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]

        ranked = rank_by_similarity(query, candidates)

        assert [index for index, _ in ranked] == [1, 2, 0]
        assert ranked[0][1] == pytest.approx(1.0)

    def test_zero_candidate_ranks_last(self):
        """A zero vector scores NaN and must not disturb the ordering."""
        ranked = rank_by_similarity([1.0, 0.0], [[0.5, 0.5], [0.0, 0.0], [1.0, 0.0]])

        assert [index for index, _ in ranked] == [2, 0, 1]
        assert ranked[0][1] == pytest.approx(1.0)
        assert math.isnan(ranked[2][1])

    def test_zero_candidate_dropped_by_top_k(self):
        ranked = rank_by_similarity([1.0, 0.0], [[0.0, 0.0], [1.0, 0.0], [0.5, 0.5]], top_k=2)

        assert [index for index, _ in ranked] == [1, 2]

    def test_top_k(self):
        ranked = rank_by_similarity([1.0, 0.0], [[0.0, 1.0], [1.0, 0.0], [1.0, 1.0]], top_k=2)
        assert len(ranked) == 2

    def test_ties_keep_candidate_order(self):
        ranked = rank_by_similarity([1.0, 0.0], [[2.0, 0.0], [1.0, 0.0]])
        assert [index for index, _ in ranked] == [0, 1]

    def test_similar_text_ranks_above_unrelated(self):
        embedder = FeatureEmbedder()
        query = embedder.embed("how to deploy a docker container")
        candidates = [
            embedder.embed("1234567890 0987654321"),
            embedder.embed("deploying docker containers"),
        ]

        assert rank_by_similarity(query, candidates)[0][0] == 1

    def test_mismatch_propagates(self):
        with pytest.raises(DimensionMismatch):
            rank_by_similarity([1.0, 0.0], [[1.0, 0.0, 0.0]])
