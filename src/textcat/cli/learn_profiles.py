"""CLI that learns category profiles from a samples directory and saves them."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging

from dotenv import load_dotenv

from textcat.config import ConfigError, TextcatSettings, parse_ngram_lengths
from textcat.corpus.loader import CorpusError, load_samples_directory
from textcat.profiling.persistence import save_store
from textcat.profiling.store import ProfileStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build n-gram category profiles from sample files")
    parser.add_argument(
        "--samples-dir",
        required=True,
        help="Directory of <label>.sample files or <label>/ folders of samples",
    )
    parser.add_argument("--output", default="profiles.json", help="Profile file to write")
    parser.add_argument("--ngram-lengths", default=None, help="N-gram lengths, e.g. '1-5' or '1,2,3'")
    parser.add_argument("--profile-cap", type=int, default=None, help="Profile size K (default: 400)")
    parser.add_argument(
        "--strip-punctuation",
        action="store_true",
        default=None,
        help="Keep only word tokens before extracting n-grams",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    load_dotenv()

    try:
        settings = TextcatSettings.from_env()
        profile_settings = settings.profile
        if args.ngram_lengths is not None:
            profile_settings = replace(profile_settings, ngram_lengths=parse_ngram_lengths(args.ngram_lengths))
        if args.profile_cap is not None:
            profile_settings = replace(profile_settings, profile_cap=args.profile_cap)
        if args.strip_punctuation is not None:
            profile_settings = replace(profile_settings, strip_punctuation=args.strip_punctuation)

        corpus = load_samples_directory(args.samples_dir)
        store = ProfileStore.from_corpus(corpus, settings=profile_settings)
    except (ConfigError, CorpusError) as error:
        logger.error("Failed to build profiles: %s", error)
        return 1

    try:
        output = save_store(store, args.output)
    except OSError as error:
        logger.error("Failed to write profiles to %s: %s", args.output, error)
        return 1

    print(
        json.dumps(
            {
                "output": str(output),
                "settings": store.settings.to_dict(),
                "categories": [
                    {"label": category.label, "ngrams": len(category.profile)}
                    for category in store.categories()
                ],
            },
            ensure_ascii=False,
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
