"""Character n-gram extraction over padded, case-normalized text."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator

from textcat.config import DEFAULT_NGRAM_LENGTHS, DEFAULT_PADDING, normalize_ngram_lengths
from textcat.profiling.normalization import pad_text


def iter_ngrams(padded: str, lengths: Iterable[int]) -> Iterator[str]:
    """Yield every window of each requested length, duplicates included.

    Lengths longer than *padded* simply produce nothing.
    """

    text_length = len(padded)
    for length in normalize_ngram_lengths(lengths):
        for start in range(text_length - length + 1):
            yield padded[start : start + length]


def extract_ngrams(
    text: str,
    lengths: Iterable[int] = DEFAULT_NGRAM_LENGTHS,
    *,
    padding: str = DEFAULT_PADDING,
    strip_punctuation: bool = False,
) -> Counter[str]:
    """Return the n-gram multiset of *text* as ``ngram -> occurrences``.

    Empty or whitespace-only input yields an empty counter.
    """

    padded = pad_text(text, padding=padding, strip_punctuation=strip_punctuation)
    if not padded:
        # Still reject bad lengths for degenerate input.
        normalize_ngram_lengths(lengths)
        return Counter()
    return Counter(iter_ngrams(padded, lengths))
