"""Text normalization applied before n-gram windowing."""

from __future__ import annotations

import re
import unicodedata

from razdel import tokenize

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_CHAR_RE = re.compile(r"\w", re.UNICODE)


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_text(text: str) -> str:
    """Produce single-case, whitespace-collapsed text."""

    normalized = unicodedata.normalize("NFKC", text)
    return normalize_whitespace(normalized).casefold()


def keep_word_tokens(text: str) -> str:
    """Drop punctuation-only tokens, keeping words separated by single spaces."""

    words: list[str] = []
    for token in tokenize(text):
        value = token.text.strip()
        if value and _WORD_CHAR_RE.search(value):
            words.append(value)
    return " ".join(words)


def pad_text(text: str, *, padding: str = "_", strip_punctuation: bool = False) -> str:
    """Return the padded form of *text* that n-gram windows slide over.

    Whitespace runs become a single *padding* character and one more is added
    at each end, so word-boundary n-grams such as ``"_the_"`` are captured.
    Text that is empty after normalization yields ``""`` without padding.
    """

    normalized = normalize_text(text)
    if strip_punctuation:
        normalized = keep_word_tokens(normalized)
    if not normalized:
        return ""
    return padding + normalized.replace(" ", padding) + padding
