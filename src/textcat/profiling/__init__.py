"""N-gram extraction, ranked profiles and the profile store."""

from .ngrams import extract_ngrams, iter_ngrams
from .normalization import pad_text
from .ranking import RankedProfile, build_category_profile, build_profile, pool_counts, profile_text
from .store import Category, ProfileStore

__all__ = [
    "Category",
    "ProfileStore",
    "RankedProfile",
    "build_category_profile",
    "build_profile",
    "extract_ngrams",
    "iter_ngrams",
    "pad_text",
    "pool_counts",
    "profile_text",
]
