"""Nearest-profile text classifier with an optional ambiguity gate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from textcat.classify.distance import distances
from textcat.config import DEFAULT_AMBIGUITY_MARGIN, ConfigError, TextcatSettings
from textcat.profiling.ranking import RankedProfile
from textcat.profiling.store import ProfileStore

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_TOLERANCE = 0.03


class MatchStatus(Enum):
    MATCHED = "matched"
    AMBIGUOUS = "ambiguous"  # best and runner-up closer than the margin
    EMPTY = "empty"  # query produced no n-grams, or nothing to compare against


@dataclass(frozen=True, slots=True)
class CategoryDistance:
    label: str
    distance: int


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of one classification; ``label`` is set only when matched."""

    status: MatchStatus
    label: str | None = None
    ranking: tuple[CategoryDistance, ...] = ()

    @property
    def matched(self) -> bool:
        return self.status is MatchStatus.MATCHED

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "label": self.label,
            "ranking": [{"label": item.label, "distance": item.distance} for item in self.ranking],
        }


class Classifier:
    """Pick the category whose profile is closest to the query's profile."""

    def __init__(self, store: ProfileStore, *, ambiguity_margin: float = DEFAULT_AMBIGUITY_MARGIN) -> None:
        if ambiguity_margin < 0.0:
            raise ConfigError("ambiguity_margin cannot be negative")
        self._store = store
        self._ambiguity_margin = float(ambiguity_margin)

    @classmethod
    def from_settings(cls, store: ProfileStore, settings: TextcatSettings) -> "Classifier":
        return cls(store, ambiguity_margin=settings.ambiguity_margin)

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def ambiguity_margin(self) -> float:
        return self._ambiguity_margin

    def profile(self, text: str) -> RankedProfile:
        return self._store.profile_text(text)

    def _rank_profile(self, query: RankedProfile) -> list[CategoryDistance]:
        categories = self._store.categories()
        if query.is_empty or not categories:
            return []

        values = distances(
            query,
            [category.profile for category in categories],
            penalty=self._store.settings.profile_cap,
        )
        ranked = [
            CategoryDistance(label=category.label, distance=int(value))
            for category, value in zip(categories, values)
        ]
        ranked.sort(key=lambda item: (item.distance, item.label))
        return ranked

    def rank(self, text: str) -> list[CategoryDistance]:
        """Every category with its distance to *text*, closest first.

        Equal distances are ordered by label. Returns ``[]`` when *text*
        yields no n-grams.
        """

        return self._rank_profile(self.profile(text))

    def classify(self, text: str) -> ClassificationResult:
        ranking = self.rank(text)
        if not ranking:
            logger.debug("No match: query produced no n-grams or store is empty")
            return ClassificationResult(status=MatchStatus.EMPTY)

        best = ranking[0]
        if len(ranking) > 1:
            gap = ranking[1].distance - best.distance
            if gap < self._ambiguity_margin:
                logger.debug(
                    "Ambiguous: %s=%d vs %s=%d within margin %s",
                    best.label,
                    best.distance,
                    ranking[1].label,
                    ranking[1].distance,
                    self._ambiguity_margin,
                )
                return ClassificationResult(status=MatchStatus.AMBIGUOUS, ranking=tuple(ranking))

        return ClassificationResult(status=MatchStatus.MATCHED, label=best.label, ranking=tuple(ranking))

    def classify_label(self, text: str) -> str | None:
        return self.classify(text).label

    def candidates(self, text: str, *, tolerance: float = DEFAULT_CANDIDATE_TOLERANCE) -> list[CategoryDistance]:
        """Categories within ``(1 + tolerance) * best`` distance, closest first."""

        if tolerance < 0.0:
            raise ConfigError("tolerance cannot be negative")

        ranking = self.rank(text)
        if not ranking:
            return []
        limit = ranking[0].distance * (1.0 + tolerance)
        return [item for item in ranking if item.distance <= limit]
