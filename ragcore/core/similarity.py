"""
Vector similarity scoring.
"""
from typing import List, Optional, Sequence, Tuple
import math

import numpy as np

from ragcore.exceptions import DimensionMismatch


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    The result is not clamped to [-1, 1]. A zero vector gives ``nan``.

    Raises:
        DimensionMismatch: if the vectors have different lengths
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatch(len(a), len(b))

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))


def rank_by_similarity(
    query: Sequence[float],
    candidates: Sequence[Sequence[float]],
    top_k: Optional[int] = None,
) -> List[Tuple[int, float]]:
    """
    Rank candidate vectors against a query vector.

    Args:
        query: Query embedding
        candidates: Candidate embeddings
        top_k: Keep only the best ``top_k`` results

    Returns:
        (candidate index, score) pairs, highest score first. NaN scores
        (zero vectors) come last.
    """
    scored = [(i, cosine_similarity(query, candidate)) for i, candidate in enumerate(candidates)]
    scored.sort(key=lambda x: (not math.isnan(x[1]), x[1]), reverse=True)
    return scored[:top_k] if top_k is not None else scored
