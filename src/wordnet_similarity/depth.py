"""Taxonomy depth statistics with a process-wide cache."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping

from wordnet_similarity.config import parse_depth_seeds
from wordnet_similarity.dictionary import Dictionary
from wordnet_similarity.graph import hypernym_paths
from wordnet_similarity.models import PartOfSpeech, Synset

logger = logging.getLogger(__name__)


class TaxonomyDepthCache:
    """Maximum taxonomy depth per part-of-speech category.

    Values are computed on first demand and kept for the life of the
    process.  The mapping is guarded by a lock but the computation runs
    outside it: two threads asking for a cold category may both scan, and
    the last one to finish stores its (identical) result.  A computation
    that raises stores nothing.
    """

    def __init__(self, seed: Mapping[str | PartOfSpeech, int] | None = None) -> None:
        self._lock = threading.Lock()
        self._depths: dict[PartOfSpeech, int] = {}
        if seed:
            self.seed(seed)

    def get(self, pos: str | PartOfSpeech) -> int | None:
        """Return the cached depth for a category, or None."""
        key = PartOfSpeech.parse(pos).category()
        with self._lock:
            return self._depths.get(key)

    def get_or_compute(
        self, pos: str | PartOfSpeech, compute: Callable[[], int]
    ) -> int:
        """Return the cached depth, computing and storing it if absent."""
        key = PartOfSpeech.parse(pos).category()
        with self._lock:
            if key in self._depths:
                return self._depths[key]
        value = compute()
        with self._lock:
            self._depths[key] = value
        return value

    def seed(self, depths: Mapping[str | PartOfSpeech, int]) -> None:
        """Store known depths so that no scan is needed for them.

        Raises WordnetSimilarityError for a depth that is not a positive
        integer.
        """
        parsed = parse_depth_seeds(dict(depths))
        with self._lock:
            self._depths.update(parsed)

    def reset(self) -> None:
        """Forget every cached depth (for tests)."""
        with self._lock:
            self._depths.clear()

    def snapshot(self) -> dict[PartOfSpeech, int]:
        with self._lock:
            return dict(self._depths)


DEPTH_CACHE = TaxonomyDepthCache()


def max_depth(dictionary: Dictionary, synsets: Iterable[Synset]) -> int:
    """Return the longest hypernym path length over ``synsets``."""
    longest = 0
    for synset in synsets:
        for path in hypernym_paths(dictionary, synset):
            longest = max(longest, len(path))
    return longest


def taxonomy_max_depth(
    dictionary: Dictionary,
    pos: str | PartOfSpeech,
    cache: TaxonomyDepthCache = DEPTH_CACHE,
) -> int:
    """The maximum depth of the taxonomy for the POS.

    Expensive on first use for a category (every synset of the category
    is walked), cached afterwards.
    """
    category = PartOfSpeech.parse(pos).category()

    def scan() -> int:
        logger.info("Scanning %s taxonomy for its maximum depth", category.name.lower())
        depth = max_depth(dictionary, dictionary.all_senses(category))
        logger.info("Maximum %s depth: %d", category.name.lower(), depth)
        return depth

    return cache.get_or_compute(category, scan)
