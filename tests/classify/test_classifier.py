from __future__ import annotations

import pytest

from textcat.classify.classifier import CategoryDistance, ClassificationResult, Classifier, MatchStatus
from textcat.config import ConfigError, ProfileSettings, TextcatSettings
from textcat.profiling.store import ProfileStore


def _en_fr_store() -> ProfileStore:
    return ProfileStore.from_corpus(
        {"en": ["the quick brown fox"], "fr": ["le renard brun rapide"]},
        ngram_lengths={1, 2, 3},
        profile_cap=50,
    )


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------

def test_english_and_french_queries_pick_their_language() -> None:
    classifier = Classifier(_en_fr_store())

    english = classifier.classify("the fox jumps")
    french = classifier.classify("le chat noir")

    assert english.status is MatchStatus.MATCHED
    assert english.label == "en"
    assert french.status is MatchStatus.MATCHED
    assert french.label == "fr"


def test_classifying_a_sample_returns_its_own_category() -> None:
    corpus = {
        "en": "the quick brown fox jumps over the lazy dog",
        "es": "el veloz zorro marrón salta sobre el perro perezoso",
        "de": "der schnelle braune fuchs springt über den faulen hund",
    }
    classifier = Classifier(ProfileStore.from_corpus(corpus))

    for label, sample in corpus.items():
        result = classifier.classify(sample)
        assert result.label == label
        assert result.ranking[0].distance == 0


def test_single_category_store_always_matches_it() -> None:
    classifier = Classifier(ProfileStore.from_corpus({"en": "the quick brown fox"}), ambiguity_margin=0)

    for text in ("xyz", "le chat noir", "日本語のテキスト", "42"):
        result = classifier.classify(text)
        assert result.status is MatchStatus.MATCHED
        assert result.label == "en"


def test_single_category_ignores_the_gate() -> None:
    classifier = Classifier(ProfileStore.from_corpus({"en": "the quick brown fox"}), ambiguity_margin=1_000_000)

    assert classifier.classify("anything").label == "en"


def test_disjoint_vocabularies_tie_at_max_penalty_and_break_by_label() -> None:
    cap = 20
    corpus = [("beta", "bbb"), ("alpha", "aaa")]
    settings = ProfileSettings(ngram_lengths=(2, 3), profile_cap=cap)
    forward = Classifier(ProfileStore.from_corpus(corpus, settings=settings))
    backward = Classifier(ProfileStore.from_corpus(list(reversed(corpus)), settings=settings))

    query_size = len(forward.profile("zzz"))
    ranking = forward.rank("zzz")

    assert [item.distance for item in ranking] == [query_size * cap, query_size * cap]
    assert [item.label for item in ranking] == ["alpha", "beta"]
    assert forward.classify("zzz").label == "alpha"
    assert backward.classify("zzz").label == "alpha"


# ---------------------------------------------------------------------------
# No-match outcomes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_empty_input_is_empty_not_an_error(text: str) -> None:
    result = Classifier(_en_fr_store()).classify(text)

    assert result.status is MatchStatus.EMPTY
    assert result.label is None
    assert result.ranking == ()
    assert not result.matched


def test_close_distances_are_ambiguous_under_margin() -> None:
    store = _en_fr_store()
    gap = Classifier(store).rank("le chat noir")
    margin = gap[1].distance - gap[0].distance + 1

    result = Classifier(store, ambiguity_margin=margin).classify("le chat noir")

    assert result.status is MatchStatus.AMBIGUOUS
    assert result.label is None
    assert [item.label for item in result.ranking] == ["fr", "en"]


def test_gap_equal_to_margin_still_matches() -> None:
    store = _en_fr_store()
    ranking = Classifier(store).rank("the fox jumps")
    margin = ranking[1].distance - ranking[0].distance

    assert Classifier(store, ambiguity_margin=margin).classify("the fox jumps").label == "en"


def test_zero_margin_matches_exact_ties() -> None:
    classifier = Classifier(ProfileStore.from_corpus({"b": "same text", "a": "same text"}))

    result = classifier.classify("same text")

    assert result.status is MatchStatus.MATCHED
    assert result.label == "a"


# ---------------------------------------------------------------------------
# Ranking, candidates and configuration
# ---------------------------------------------------------------------------

def test_rank_lists_every_category_closest_first() -> None:
    ranking = Classifier(_en_fr_store()).rank("the fox jumps")

    assert [item.label for item in ranking] == ["en", "fr"]
    assert ranking[0].distance < ranking[1].distance
    assert all(isinstance(item, CategoryDistance) for item in ranking)


def test_candidates_include_near_ties_only() -> None:
    classifier = Classifier(_en_fr_store())

    assert [item.label for item in classifier.candidates("the fox jumps", tolerance=0.0)] == ["en"]
    assert [item.label for item in classifier.candidates("le chat noir", tolerance=0.5)] == ["fr", "en"]
    assert classifier.candidates("   ") == []


def test_classify_label_returns_plain_optional() -> None:
    classifier = Classifier(_en_fr_store())

    assert classifier.classify_label("the fox jumps") == "en"
    assert classifier.classify_label("") is None


def test_result_serializes_to_dict() -> None:
    result = ClassificationResult(
        status=MatchStatus.MATCHED,
        label="en",
        ranking=(CategoryDistance("en", 3), CategoryDistance("fr", 9)),
    )

    assert result.to_dict() == {
        "status": "matched",
        "label": "en",
        "ranking": [{"label": "en", "distance": 3}, {"label": "fr", "distance": 9}],
    }


def test_negative_margin_and_tolerance_are_rejected() -> None:
    store = _en_fr_store()

    with pytest.raises(ConfigError, match="ambiguity_margin"):
        Classifier(store, ambiguity_margin=-1)
    with pytest.raises(ConfigError, match="tolerance"):
        Classifier(store).candidates("text", tolerance=-0.1)


def test_from_settings_uses_configured_margin() -> None:
    classifier = Classifier.from_settings(_en_fr_store(), TextcatSettings(ambiguity_margin=2.5))

    assert classifier.ambiguity_margin == 2.5
