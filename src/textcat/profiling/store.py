"""Immutable label -> ranked profile store, built once from a labelled corpus."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
import logging
from types import MappingProxyType

from textcat.config import ConfigError, ProfileSettings
from textcat.profiling.ranking import RankedProfile, build_category_profile, profile_text

logger = logging.getLogger(__name__)

Samples = str | Iterable[str]
Corpus = Mapping[str, Samples] | Iterable[tuple[str, Samples]]


@dataclass(frozen=True, slots=True)
class Category:
    """A labelled text class and its ranked n-gram profile."""

    label: str
    profile: RankedProfile


def _iter_corpus(corpus: Corpus) -> Iterator[tuple[str, Samples]]:
    if isinstance(corpus, Mapping):
        yield from corpus.items()
        return
    for entry in corpus:
        try:
            label, samples = entry
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Corpus entries must be (label, samples) pairs, got {entry!r}") from exc
        yield label, samples


def _as_sample_list(label: str, samples: Samples) -> list[str]:
    if isinstance(samples, str):
        return [samples]
    values = list(samples)
    for value in values:
        if not isinstance(value, str):
            raise ConfigError(f"Samples for category {label!r} must be strings, got {type(value).__name__}")
    return values


def _validate_label(label: object) -> str:
    if not isinstance(label, str) or not label.strip():
        raise ConfigError(f"Category label must be a non-empty string, got {label!r}")
    return label


class ProfileStore:
    """Read-only collection of categories sharing one set of profile settings.

    Construction validates that labels are unique, that no profile is longer
    than ``settings.profile_cap`` and that at least one category has a
    non-empty profile. Nothing mutates the store afterwards,
    so concurrent readers need no locking.
    """

    __slots__ = ("_categories", "_by_label", "_settings")

    def __init__(self, categories: Iterable[Category], settings: ProfileSettings | None = None) -> None:
        resolved = settings or ProfileSettings()
        ordered = tuple(categories)
        by_label: dict[str, Category] = {}
        for category in ordered:
            label = _validate_label(category.label)
            if label in by_label:
                raise ConfigError(f"Duplicate category label: {label!r}")
            if len(category.profile) > resolved.profile_cap:
                raise ConfigError(
                    f"Category {label!r} has {len(category.profile)} ngrams, "
                    f"more than profile_cap={resolved.profile_cap}"
                )
            by_label[label] = category

        if not any(not category.profile.is_empty for category in ordered):
            raise ConfigError("Profile store needs at least one category with a non-empty profile")

        self._categories = ordered
        self._by_label = MappingProxyType(by_label)
        self._settings = resolved

    @classmethod
    def from_corpus(
        cls,
        corpus: Corpus,
        *,
        ngram_lengths: Iterable[int] | None = None,
        profile_cap: int | None = None,
        settings: ProfileSettings | None = None,
    ) -> "ProfileStore":
        """Pool each label's samples into one ranked profile and freeze the result.

        Categories whose samples yield no n-grams are dropped with a warning;
        if none remain the corpus is rejected.
        """

        resolved = settings or ProfileSettings()
        if ngram_lengths is not None:
            resolved = replace(resolved, ngram_lengths=tuple(ngram_lengths))
        if profile_cap is not None:
            resolved = replace(resolved, profile_cap=profile_cap)

        seen: set[str] = set()
        categories: list[Category] = []
        for raw_label, raw_samples in _iter_corpus(corpus):
            label = _validate_label(raw_label)
            if label in seen:
                raise ConfigError(f"Duplicate category label: {label!r}")
            seen.add(label)

            samples = _as_sample_list(label, raw_samples)
            profile = build_category_profile(samples, resolved)
            if profile.is_empty:
                logger.warning("Dropping category %s: its samples produced no n-grams", label)
                continue

            logger.debug("Built category %s from %d sample(s): %d ngrams", label, len(samples), len(profile))
            categories.append(Category(label=label, profile=profile))

        if not categories:
            raise ConfigError("Corpus has no usable categories: every sample set is empty")

        return cls(categories, resolved)

    @property
    def settings(self) -> ProfileSettings:
        return self._settings

    def categories(self) -> tuple[Category, ...]:
        return self._categories

    def labels(self) -> tuple[str, ...]:
        return tuple(category.label for category in self._categories)

    def get(self, label: str) -> Category | None:
        return self._by_label.get(label)

    def profile_text(self, text: str) -> RankedProfile:
        """Profile *text* with the same settings the categories were built with."""

        return profile_text(text, self._settings)

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __contains__(self, label: object) -> bool:
        return label in self._by_label

    def __repr__(self) -> str:
        return f"ProfileStore(labels={list(self.labels())!r}, settings={self._settings!r})"
