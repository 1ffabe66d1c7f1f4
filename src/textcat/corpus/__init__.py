"""Corpus sources: sample directories and the bundled language corpus."""

from .default import DEFAULT_CORPUS_NAME, default_classifier, default_store, load_default_corpus
from .loader import CorpusError, load_samples_directory, read_sample

__all__ = [
    "CorpusError",
    "DEFAULT_CORPUS_NAME",
    "default_classifier",
    "default_store",
    "load_default_corpus",
    "load_samples_directory",
    "read_sample",
]
