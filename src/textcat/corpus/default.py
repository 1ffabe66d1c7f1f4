"""Bundled ``languages`` corpus and factories for stores built from it."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from textcat.classify.classifier import Classifier
from textcat.config import ConfigError, TextcatSettings
from textcat.profiling.store import ProfileStore

DEFAULT_CORPUS_PATH = Path(__file__).parent / "languages.json"
DEFAULT_CORPUS_NAME = "languages"


def _read_corpus_file(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def default_corpus_version() -> str:
    return str(_read_corpus_file(DEFAULT_CORPUS_PATH)["version"])


def load_default_corpus() -> dict[str, list[str]]:
    """Return ``label -> samples`` of the bundled corpus, in file order."""

    payload = _read_corpus_file(DEFAULT_CORPUS_PATH)
    if payload.get("name") != DEFAULT_CORPUS_NAME:
        raise ConfigError(f"Unexpected bundled corpus name: {payload.get('name')!r}")
    return {label: list(samples) for label, samples in payload["categories"].items()}


def default_store(settings: TextcatSettings | None = None) -> ProfileStore:
    """Build a new store from the bundled corpus on every call."""

    resolved = settings or TextcatSettings()
    return ProfileStore.from_corpus(load_default_corpus(), settings=resolved.profile)


def default_classifier(settings: TextcatSettings | None = None) -> Classifier:
    resolved = settings or TextcatSettings()
    return Classifier.from_settings(default_store(resolved), resolved)
