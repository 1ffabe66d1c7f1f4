"""CLI that classifies text against stored or bundled category profiles."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

from textcat.classify.classifier import Classifier
from textcat.config import ConfigError, TextcatSettings
from textcat.corpus.default import default_store
from textcat.profiling.persistence import StoreFormatError, load_store

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Classify text by character n-gram profile distance")
    parser.add_argument(
        "--profiles",
        default=None,
        help="Profile file from textcat-learn (default: $TEXTCAT_PROFILES_PATH or the bundled languages corpus)",
    )
    parser.add_argument("--text", default=None, help="Text to classify (default: read stdin)")
    parser.add_argument(
        "--ambiguity-margin",
        type=float,
        default=None,
        help="Report ambiguous when best and runner-up differ by less than this",
    )
    parser.add_argument(
        "--candidates",
        type=float,
        default=None,
        metavar="TOLERANCE",
        help="Also list categories within (1 + TOLERANCE) of the best distance",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )
    load_dotenv()

    text = args.text if args.text is not None else sys.stdin.read()

    try:
        settings = TextcatSettings.from_env()
        margin = settings.ambiguity_margin if args.ambiguity_margin is None else args.ambiguity_margin
        profiles_path = args.profiles or os.environ.get("TEXTCAT_PROFILES_PATH", "").strip()
        store = load_store(profiles_path) if profiles_path else default_store(settings)
        classifier = Classifier(store, ambiguity_margin=margin)
        result = classifier.classify(text)
        candidates = None if args.candidates is None else classifier.candidates(text, tolerance=args.candidates)
    except (ConfigError, StoreFormatError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    payload = result.to_dict()
    payload["categories"] = list(store.labels())
    if candidates is not None:
        payload["candidates"] = [{"label": item.label, "distance": item.distance} for item in candidates]

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
