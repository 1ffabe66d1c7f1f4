"""Ranked, size-capped n-gram frequency profiles."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from textcat.config import ConfigError, ProfileSettings
from textcat.profiling.ngrams import extract_ngrams


@dataclass(frozen=True, slots=True)
class RankedProfile:
    """Top-K n-grams of a text or category, most frequent first.

    An n-gram's rank is its 0-based position in ``ngrams``. ``counts`` runs
    parallel to ``ngrams``; it is empty for profiles restored from disk,
    which keep only the order.
    """

    ngrams: tuple[str, ...] = ()
    counts: tuple[int, ...] = ()
    _ranks: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ngrams", tuple(self.ngrams))
        object.__setattr__(self, "counts", tuple(self.counts))
        if self.counts and len(self.counts) != len(self.ngrams):
            raise ValueError("counts must align with ngrams")

        ranks: dict[str, int] = {}
        for rank, ngram in enumerate(self.ngrams):
            if ngram in ranks:
                raise ValueError(f"duplicate ngram in profile: {ngram!r}")
            ranks[ngram] = rank
        object.__setattr__(self, "_ranks", ranks)

    def __len__(self) -> int:
        return len(self.ngrams)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ngrams)

    def __contains__(self, ngram: object) -> bool:
        return ngram in self._ranks

    @property
    def is_empty(self) -> bool:
        return not self.ngrams

    def rank(self, ngram: str) -> int | None:
        return self._ranks.get(ngram)

    def count(self, ngram: str) -> int | None:
        rank = self._ranks.get(ngram)
        if rank is None or not self.counts:
            return None
        return self.counts[rank]

    def top(self, n: int) -> tuple[str, ...]:
        return self.ngrams[: max(n, 0)]


def _validate_cap(cap: int) -> None:
    if isinstance(cap, bool) or not isinstance(cap, int):
        raise ConfigError(f"profile cap must be an integer, got {cap!r}")
    if cap <= 0:
        raise ConfigError("profile cap must be positive")


def build_profile(ngrams: Iterable[str] | Mapping[str, int], cap: int) -> RankedProfile:
    """Rank n-grams by descending count, ties by ascending n-gram text, and keep *cap*."""

    _validate_cap(cap)
    counts = ngrams if isinstance(ngrams, Mapping) else Counter(ngrams)
    ordered = sorted(
        ((ngram, int(count)) for ngram, count in counts.items() if count > 0),
        key=lambda item: (-item[1], item[0]),
    )[:cap]
    return RankedProfile(
        ngrams=tuple(ngram for ngram, _ in ordered),
        counts=tuple(count for _, count in ordered),
    )


def pool_counts(samples: Iterable[str], settings: ProfileSettings) -> Counter[str]:
    """Sum n-gram counts across all samples of one category."""

    pooled: Counter[str] = Counter()
    for sample in samples:
        pooled.update(
            extract_ngrams(
                sample,
                settings.ngram_lengths,
                padding=settings.padding,
                strip_punctuation=settings.strip_punctuation,
            )
        )
    return pooled


def build_category_profile(samples: Iterable[str], settings: ProfileSettings) -> RankedProfile:
    return build_profile(pool_counts(samples, settings), settings.profile_cap)


def profile_text(text: str, settings: ProfileSettings) -> RankedProfile:
    """Build the ranked profile of a single text, as used for queries."""

    return build_category_profile((text,), settings)
