"""Load labelled sample texts from a directory of sample files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = (".sample", ".txt")


@dataclass(slots=True)
class CorpusError(Exception):
    """Domain error for unreadable corpus directories and sample files."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


def _detect_encoding(raw: bytes) -> str:
    # Valid UTF-8, with or without a BOM, never goes through detection.
    try:
        raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    else:
        return "utf-8-sig"

    best = from_bytes(raw).best()
    if best is None or not best.encoding:
        raise ValueError("Could not detect sample encoding")
    return best.encoding


def read_sample(path: str | Path) -> str:
    """Decode one sample file, detecting its charset."""

    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise CorpusError(source, f"Failed to read sample file: {exc}") from exc
    if not raw:
        return ""

    try:
        encoding = _detect_encoding(raw)
        return raw.decode(encoding)
    except (ValueError, LookupError) as exc:
        raise CorpusError(source, f"Failed to decode sample file: {exc}") from exc


def _matches(path: Path, suffixes: tuple[str, ...]) -> bool:
    return path.is_file() and path.suffix.lower() in suffixes and not path.name.startswith(".")


def load_samples_directory(
    path: str | Path,
    *,
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES,
) -> dict[str, list[str]]:
    """Return ``label -> samples`` for a corpus directory.

    ``<label>.sample`` contributes one sample to *label*; a ``<label>/``
    sub-directory contributes every matching file inside it. Labels are
    returned in sorted order so store construction is reproducible.
    """

    root = Path(path)
    if not root.is_dir():
        raise CorpusError(root, "Samples directory does not exist or is not a directory")

    wanted = tuple(suffix.lower() for suffix in suffixes)
    corpus: dict[str, list[str]] = {}

    for entry in sorted(root.iterdir()):
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            files = sorted(child for child in entry.iterdir() if _matches(child, wanted))
            if not files:
                logger.warning("Skipping %s: no sample files inside", entry)
                continue
            corpus.setdefault(entry.name, []).extend(read_sample(child) for child in files)
        elif _matches(entry, wanted):
            corpus.setdefault(entry.stem, []).append(read_sample(entry))

    if not corpus:
        raise CorpusError(root, "No sample files found")

    logger.info("Loaded %d categories from %s", len(corpus), root)
    return dict(sorted(corpus.items()))
