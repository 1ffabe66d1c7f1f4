"""Out-of-place distance between ranked profiles."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from textcat.profiling.ranking import RankedProfile

_ABSENT = -1


def _category_ranks(query: RankedProfile, category: RankedProfile) -> np.ndarray:
    ranks = (category.rank(ngram) for ngram in query.ngrams)
    return np.array([_ABSENT if rank is None else rank for rank in ranks], dtype=np.int64)


def out_of_place_distance(query: RankedProfile, category: RankedProfile, *, penalty: int) -> int:
    """Sum of rank displacements of the query's n-grams within *category*.

    Each n-gram missing from *category* contributes *penalty* instead.
    """

    if penalty < 0:
        raise ValueError("penalty cannot be negative")
    if query.is_empty:
        return 0

    query_ranks = np.arange(len(query), dtype=np.int64)
    category_ranks = _category_ranks(query, category)
    displacement = np.where(
        category_ranks == _ABSENT,
        penalty,
        np.abs(query_ranks - category_ranks),
    )
    return int(displacement.sum())


def distances(query: RankedProfile, categories: Sequence[RankedProfile], *, penalty: int) -> np.ndarray:
    """Distances from *query* to each profile in *categories*, in order."""

    return np.fromiter(
        (out_of_place_distance(query, category, penalty=penalty) for category in categories),
        dtype=np.int64,
        count=len(categories),
    )
