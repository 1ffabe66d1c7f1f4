"""Profile-distance classification."""

from .classifier import CategoryDistance, ClassificationResult, Classifier, MatchStatus
from .distance import distances, out_of_place_distance

__all__ = [
    "CategoryDistance",
    "ClassificationResult",
    "Classifier",
    "MatchStatus",
    "distances",
    "out_of_place_distance",
]
