"""Character n-gram text categorization."""

from textcat.classify.classifier import CategoryDistance, ClassificationResult, Classifier, MatchStatus
from textcat.config import ConfigError, ProfileSettings, TextcatSettings
from textcat.profiling.store import Category, ProfileStore

__all__ = [
    "Category",
    "CategoryDistance",
    "ClassificationResult",
    "Classifier",
    "ConfigError",
    "MatchStatus",
    "ProfileSettings",
    "ProfileStore",
    "TextcatSettings",
]
