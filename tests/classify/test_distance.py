from __future__ import annotations

import pytest

from textcat.classify.distance import distances, out_of_place_distance
from textcat.profiling.ranking import RankedProfile, build_profile
from textcat.profiling.ngrams import extract_ngrams


def test_identical_profiles_have_zero_distance() -> None:
    profile = RankedProfile(ngrams=("a", "b", "c"))

    assert out_of_place_distance(profile, profile, penalty=400) == 0


def test_rank_displacements_are_summed() -> None:
    query = RankedProfile(ngrams=("a", "b", "c"))
    category = RankedProfile(ngrams=("c", "a", "b"))

    # a: |0-1|, b: |1-2|, c: |2-0|
    assert out_of_place_distance(query, category, penalty=400) == 4


def test_absent_ngrams_cost_the_fixed_penalty() -> None:
    query = RankedProfile(ngrams=("a", "x", "y"))
    category = RankedProfile(ngrams=("a", "b"))

    assert out_of_place_distance(query, category, penalty=10) == 20


def test_empty_query_has_zero_distance() -> None:
    assert out_of_place_distance(RankedProfile(), RankedProfile(ngrams=("a",)), penalty=5) == 0


def test_negative_penalty_is_rejected() -> None:
    with pytest.raises(ValueError, match="penalty"):
        out_of_place_distance(RankedProfile(ngrams=("a",)), RankedProfile(), penalty=-1)


@pytest.mark.parametrize(
    ("query_text", "category_text"),
    [
        ("the quick brown fox", "le renard brun rapide"),
        ("zzzz qqqq", "aaaa bbbb"),
        ("abracadabra", "abracadabra abracadabra"),
    ],
)
def test_distance_is_bounded_by_cap_squared(query_text: str, category_text: str) -> None:
    cap = 30
    query = build_profile(extract_ngrams(query_text), cap)
    category = build_profile(extract_ngrams(category_text), cap)

    value = out_of_place_distance(query, category, penalty=cap)

    assert 0 <= value <= cap * cap


def test_distances_follow_category_order() -> None:
    query = RankedProfile(ngrams=("a", "b"))
    categories = [
        RankedProfile(ngrams=("a", "b")),
        RankedProfile(ngrams=("b", "a")),
        RankedProfile(ngrams=("z",)),
    ]

    assert distances(query, categories, penalty=7).tolist() == [0, 2, 14]
