"""Runtime configuration for profile building and classification."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Iterable, Mapping


DEFAULT_NGRAM_LENGTHS: tuple[int, ...] = (1, 2, 3, 4, 5)
DEFAULT_PROFILE_CAP = 400
DEFAULT_AMBIGUITY_MARGIN = 0.0
DEFAULT_PADDING = "_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(slots=True)
class ConfigError(ValueError):
    """Raised when a store, classifier or setting is configured incorrectly."""

    message: str

    def __str__(self) -> str:
        return self.message


def normalize_ngram_lengths(lengths: Iterable[int]) -> tuple[int, ...]:
    """Return *lengths* as a sorted tuple of unique positive ints."""

    values: set[int] = set()
    for value in lengths:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"ngram length must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigError(f"ngram length must be positive, got {value}")
        values.add(value)
    if not values:
        raise ConfigError("ngram lengths cannot be empty")
    return tuple(sorted(values))


def parse_ngram_lengths(raw_value: str) -> tuple[int, ...]:
    """Parse ``"1-5"`` ranges and ``"1,2,3"`` lists (or a mix of both)."""

    lengths: list[int] = []
    for part in raw_value.split(","):
        token = part.strip()
        if not token:
            continue
        start_raw, _, end_raw = token.partition("-")
        try:
            start = int(start_raw)
            end = int(end_raw) if end_raw else start
        except ValueError as exc:
            raise ConfigError(f"Invalid ngram lengths value: {raw_value!r}") from exc
        if start > end:
            raise ConfigError(f"Invalid ngram length range: {token}")
        lengths.extend(range(start, end + 1))
    return normalize_ngram_lengths(lengths)


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw_value!r}") from exc
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}")
    return value


def _parse_non_negative_float(*, name: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw_value!r}") from exc
    if value < 0.0:
        raise ConfigError(f"{name} cannot be negative")
    return value


def _parse_bool(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.casefold()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw_value!r}")


@dataclass(frozen=True, slots=True)
class ProfileSettings:
    """Extraction and ranking parameters shared by category and query profiles."""

    ngram_lengths: tuple[int, ...] = DEFAULT_NGRAM_LENGTHS
    profile_cap: int = DEFAULT_PROFILE_CAP
    padding: str = DEFAULT_PADDING
    strip_punctuation: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "ngram_lengths", normalize_ngram_lengths(self.ngram_lengths))
        if isinstance(self.profile_cap, bool) or not isinstance(self.profile_cap, int):
            raise ConfigError(f"profile_cap must be an integer, got {self.profile_cap!r}")
        if self.profile_cap <= 0:
            raise ConfigError("profile_cap must be positive")
        if not isinstance(self.padding, str) or len(self.padding) != 1:
            raise ConfigError("padding must be exactly one character")

    def to_dict(self) -> dict[str, object]:
        return {
            "ngram_lengths": list(self.ngram_lengths),
            "profile_cap": self.profile_cap,
            "padding": self.padding,
            "strip_punctuation": self.strip_punctuation,
        }


@dataclass(frozen=True, slots=True)
class TextcatSettings:
    """Validated settings for building stores and running the classifier."""

    profile: ProfileSettings = field(default_factory=ProfileSettings)
    ambiguity_margin: float = DEFAULT_AMBIGUITY_MARGIN

    def __post_init__(self) -> None:
        if self.ambiguity_margin < 0.0:
            raise ConfigError("ambiguity_margin cannot be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TextcatSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        lengths_raw = source.get("TEXTCAT_NGRAM_LENGTHS", "1-5").strip()
        cap_raw = source.get("TEXTCAT_PROFILE_CAP", str(DEFAULT_PROFILE_CAP)).strip()
        margin_raw = source.get("TEXTCAT_AMBIGUITY_MARGIN", str(DEFAULT_AMBIGUITY_MARGIN)).strip()
        # Whitespace is a legal padding character, so this one is not stripped.
        padding_raw = source.get("TEXTCAT_PADDING", DEFAULT_PADDING)
        strip_raw = source.get("TEXTCAT_STRIP_PUNCTUATION", "false").strip()

        if not lengths_raw:
            raise ConfigError("TEXTCAT_NGRAM_LENGTHS cannot be empty")
        if not cap_raw:
            raise ConfigError("TEXTCAT_PROFILE_CAP cannot be empty")
        if not margin_raw:
            raise ConfigError("TEXTCAT_AMBIGUITY_MARGIN cannot be empty")
        if len(padding_raw) != 1:
            raise ConfigError("TEXTCAT_PADDING must be exactly one character")
        if not strip_raw:
            raise ConfigError("TEXTCAT_STRIP_PUNCTUATION cannot be empty")

        try:
            ngram_lengths = parse_ngram_lengths(lengths_raw)
        except ConfigError as exc:
            raise ConfigError(f"TEXTCAT_NGRAM_LENGTHS: {exc.message}") from exc

        profile = ProfileSettings(
            ngram_lengths=ngram_lengths,
            profile_cap=_parse_positive_int(name="TEXTCAT_PROFILE_CAP", raw_value=cap_raw),
            padding=padding_raw,
            strip_punctuation=_parse_bool(name="TEXTCAT_STRIP_PUNCTUATION", raw_value=strip_raw),
        )
        return cls(
            profile=profile,
            ambiguity_margin=_parse_non_negative_float(name="TEXTCAT_AMBIGUITY_MARGIN", raw_value=margin_raw),
        )
