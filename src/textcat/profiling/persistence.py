"""Portable JSON representation of a profile store."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from textcat.config import ConfigError, ProfileSettings
from textcat.profiling.ranking import RankedProfile
from textcat.profiling.store import Category, ProfileStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


@dataclass(slots=True)
class StoreFormatError(RuntimeError):
    message: str

    def __str__(self) -> str:
        return self.message


def store_to_dict(store: ProfileStore) -> dict[str, Any]:
    """Serialize *store* as ordered ``label -> ngram list`` records."""

    return {
        "format_version": FORMAT_VERSION,
        "settings": store.settings.to_dict(),
        "categories": [
            {"label": category.label, "ngrams": list(category.profile.ngrams)}
            for category in store.categories()
        ],
    }


def _settings_from_payload(payload: Any) -> ProfileSettings:
    if not isinstance(payload, Mapping):
        raise StoreFormatError("Profile file 'settings' must be an object")
    strip_punctuation = payload.get("strip_punctuation", False)
    if not isinstance(strip_punctuation, bool):
        raise StoreFormatError(f"Profile file 'strip_punctuation' must be true or false, got {strip_punctuation!r}")
    try:
        return ProfileSettings(
            ngram_lengths=tuple(payload["ngram_lengths"]),
            profile_cap=payload["profile_cap"],
            padding=payload.get("padding", "_"),
            strip_punctuation=strip_punctuation,
        )
    except KeyError as exc:
        raise StoreFormatError(f"Profile file settings missing field: {exc.args[0]}") from exc
    except (TypeError, ConfigError) as exc:
        raise StoreFormatError(f"Invalid profile file settings: {exc}") from exc


def _category_from_payload(payload: Any) -> Category:
    if not isinstance(payload, Mapping):
        raise StoreFormatError("Profile file categories must be objects")
    label = payload.get("label")
    ngrams = payload.get("ngrams")
    if not isinstance(label, str):
        raise StoreFormatError("Profile file category is missing a string 'label'")
    if not isinstance(ngrams, list) or not all(isinstance(ngram, str) for ngram in ngrams):
        raise StoreFormatError(f"Category {label!r} must list its ngrams as strings")
    try:
        profile = RankedProfile(ngrams=tuple(ngrams))
    except ValueError as exc:
        raise StoreFormatError(f"Category {label!r}: {exc}") from exc
    return Category(label=label, profile=profile)


def store_from_dict(payload: Any) -> ProfileStore:
    """Rebuild a store from :func:`store_to_dict` output."""

    if not isinstance(payload, Mapping):
        raise StoreFormatError("Profile file root must be an object")
    version = payload.get("format_version")
    if version != FORMAT_VERSION:
        raise StoreFormatError(f"Unsupported profile file version: {version!r} (expected {FORMAT_VERSION})")

    settings = _settings_from_payload(payload.get("settings"))
    raw_categories = payload.get("categories")
    if not isinstance(raw_categories, list):
        raise StoreFormatError("Profile file 'categories' must be a list")

    categories = [_category_from_payload(item) for item in raw_categories]
    try:
        return ProfileStore(categories, settings)
    except ConfigError as exc:
        raise StoreFormatError(f"Invalid profile file: {exc}") from exc


def save_store(store: ProfileStore, path: str | Path) -> Path:
    """Write *store* to *path* atomically and return the path."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_suffix(target.suffix + ".tmp")
    try:
        tmp_path.write_text(json.dumps(store_to_dict(store), ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info("Saved %d categories to %s", len(store), target)
    return target


def load_store(path: str | Path) -> ProfileStore:
    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise StoreFormatError(f"Failed to read profile file '{source}': {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StoreFormatError(f"Failed to parse profile file '{source}': {exc}") from exc

    store = store_from_dict(payload)
    logger.info("Loaded %d categories from %s", len(store), source)
    return store
