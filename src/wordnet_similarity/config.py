"""Configuration defaults for wordnet-similarity."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from wordnet_similarity.exceptions import WordnetSimilarityError
from wordnet_similarity.models import PartOfSpeech

# Default store location, overridable through the environment.
DEFAULT_DB_PATH = Path.home() / ".wn_similarity.db"
DB_PATH_ENV = "WN_SIMILARITY_DB"

# Upper bound on hypernym chain length; WordNet 3.0 nouns peak at 20.
MAX_TAXONOMY_DEPTH = 100


def default_db_path() -> Path:
    """Return the store path from ``WN_SIMILARITY_DB`` or the default."""
    value = os.environ.get(DB_PATH_ENV)
    return Path(value).expanduser() if value else DEFAULT_DB_PATH


def parse_depth_seeds(data: Any) -> dict[PartOfSpeech, int]:
    """Validate a ``{pos: depth}`` mapping into cache seeds."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise WordnetSimilarityError("Depth seeds must be a mapping of POS to depth")
    seeds: dict[PartOfSpeech, int] = {}
    for key, value in data.items():
        pos = PartOfSpeech.parse(key).category()
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise WordnetSimilarityError(
                f"Depth for {key!r} must be a positive integer, got {value!r}"
            )
        seeds[pos] = value
    return seeds


def load_depth_seeds(path: str | Path) -> dict[PartOfSpeech, int]:
    """Load taxonomy depth seeds from a YAML file.

    The file holds a plain mapping, e.g. ``{n: 20, v: 14}``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise WordnetSimilarityError(f"Invalid YAML in {path}: {e}") from e
    return parse_depth_seeds(data)
