"""
similarity.py

Scores a query embedding against every item of a labeled corpus using the
dot product, rescales the raw scores so the best match reads 100.0, and
ranks / classifies the results against a threshold.

Note: when the best raw score is negative the percentages of worse items
come out above 100. That case is left as computed.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from embedscore.errors import DegenerateScore, DimensionMismatch, EmptyCorpus, InvalidVector
from embedscore.models import Emotion, SimilarityResult


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Sum of elementwise products of two equal-length vectors.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise DimensionMismatch(f"cannot multiply vectors of length {a.size} and {b.size}")
    return float(np.dot(a, b))


def score(query: Sequence[float], corpus: Sequence) -> List[SimilarityResult]:
    """
    Compare `query` with each corpus item (anything with .label and .embedding).

    Returns one SimilarityResult per item, in corpus order (not sorted).
    """
    if len(corpus) == 0:
        raise EmptyCorpus("corpus has no items to compare against")

    query_vector = np.asarray(query, dtype=float)
    dim = query_vector.size
    if query_vector.ndim != 1 or dim == 0:
        raise DimensionMismatch("query vector must be one-dimensional and non-empty")

    for index, item in enumerate(corpus):
        if len(item.embedding) != dim:
            raise DimensionMismatch(
                f"corpus item {index} ({item.label}) has {len(item.embedding)} dimensions, query has {dim}"
            )

    matrix = np.asarray([item.embedding for item in corpus], dtype=float)
    if not np.all(np.isfinite(query_vector)):
        raise InvalidVector("query vector contains NaN or infinite values")
    if not np.all(np.isfinite(matrix)):
        raise InvalidVector("corpus contains NaN or infinite values")

    raw_scores = matrix @ query_vector
    if not np.all(np.isfinite(raw_scores)):
        raise InvalidVector("raw scores overflowed; vector components are too large")
    max_raw = float(raw_scores.max())
    if max_raw == 0:
        raise DegenerateScore("best raw score is zero; nothing to normalize against")

    return [
        SimilarityResult(item.label, float(raw), 100.0 * (float(raw) / max_raw))
        for item, raw in zip(corpus, raw_scores)
    ]


def rank(results: Sequence[SimilarityResult]) -> List[SimilarityResult]:
    """Sort by percentage, best first. Ties keep their corpus order."""
    return sorted(results, key=lambda r: r.percentage, reverse=True)


def is_similar(result: SimilarityResult, threshold: float) -> bool:
    return result.percentage > threshold


def classify(results: Sequence[SimilarityResult], threshold: float) -> List[Tuple[SimilarityResult, bool]]:
    return [(r, is_similar(r, threshold)) for r in results]


def conclude(results: Sequence[SimilarityResult]) -> Optional[Emotion]:
    """
    Name the category of the input when the best match carries an Emotion label.

    Free-form labels (e.g. "POSITIVE-3") never produce a conclusion.
    """
    if not results:
        return None
    best = max(results, key=lambda r: r.percentage)
    if best.percentage == 100.0 and isinstance(best.label, Emotion):
        return best.label
    return None
