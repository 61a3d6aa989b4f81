"""Cosine-similarity ranking of indexed elements against a query vector."""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence

import numpy as np

from ..ast.models import CodeElement

# Floor for the norm product so all-zero vectors score 0 instead of NaN.
EPSILON = 1e-6


class SearchResult(NamedTuple):
    """Result from semantic search."""

    element: CodeElement
    score: float


def cosine_similarity(vec1: Sequence[float] | np.ndarray, vec2: Sequence[float] | np.ndarray) -> float:
    """Compute cosine similarity between two vectors.

    Parameters
    ----------
    vec1, vec2:
        Embedding vectors of equal length

    Returns
    -------
    Similarity score in ``[-1, 1]``
    """
    v1 = np.asarray(vec1, dtype=np.float64)
    v2 = np.asarray(vec2, dtype=np.float64)
    magnitude = max(float(np.linalg.norm(v1) * np.linalg.norm(v2)), EPSILON)
    return float(np.dot(v1, v2) / magnitude)


def rank(
    corpus: Iterable[CodeElement],
    query_vector: Sequence[float] | np.ndarray,
    k: int,
) -> List[SearchResult]:
    """Score every embedded element against ``query_vector`` and keep the top ``k``.

    Equal scores keep corpus order. Elements without an embedding are left
    out. ``k`` larger than the corpus returns every scored element.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    if k == 0:
        return []

    query = np.asarray(query_vector, dtype=np.float64)
    results = [
        SearchResult(element, cosine_similarity(element.embedding, query))
        for element in corpus
        if element.embedding is not None
    ]

    # list.sort is stable, also with reverse=True
    results.sort(key=lambda result: result.score, reverse=True)
    return results[:k]
