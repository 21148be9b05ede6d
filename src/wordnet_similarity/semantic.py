"""Semantic similarity measures: Path, Leacock-Chodorow and Wu-Palmer.

Terms may be given as text (``"job#n#2"``, ``"synset:<id>"``), as a term
descriptor, or as an already resolved :class:`~wordnet_similarity.models.Synset`.
Every call builds its own taxonomy graphs; only the taxonomy depth used
by Leacock-Chodorow is cached between calls.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Sequence
from typing import Union

from wordnet_similarity.depth import DEPTH_CACHE, TaxonomyDepthCache, taxonomy_max_depth
from wordnet_similarity.dictionary import Dictionary, synset_pos
from wordnet_similarity.exceptions import (
    NoCommonSubsumerError,
    PartOfSpeechMismatchError,
)
from wordnet_similarity.graph import (
    build_graph,
    hypernym_paths,
    root_paths,
    shortest_path,
    shortest_path_to_root,
)
from wordnet_similarity.models import VERB_ROOT, Synset, TermDescriptor

logger = logging.getLogger(__name__)

Term = Union[str, TermDescriptor, Synset]

# Leacock-Chodorow score of two senses with no connecting path (-log 0).
LCH_NO_PATH = float("-inf")


def _synset(dictionary: Dictionary, term: Term) -> Synset:
    if isinstance(term, Synset):
        return term
    return dictionary.resolve(term)


def path_pair_length(p1: Sequence[str], p2: Sequence[str]) -> float:
    """Return the length of the path connecting the ends of two root paths."""
    counts = Counter(p1)
    counts.update(p2)
    freqs = counts.values()
    if all(f == 1 for f in freqs):
        return math.inf
    if all(f == 2 for f in freqs):
        return 1.0
    return sum(1 for f in freqs if f == 1) + 1


def shortest_connecting_length(
    paths1: Sequence[Sequence[str]], paths2: Sequence[Sequence[str]]
) -> float:
    """Return the length of the shortest path connecting paths1 x paths2."""
    shortest = math.inf
    for p1 in paths1:
        for p2 in paths2:
            shortest = min(shortest, path_pair_length(p1, p2))
    return shortest


def connecting_length(dictionary: Dictionary, synset1: Synset, synset2: Synset) -> float:
    """Shortest connecting path length between two senses through the taxonomy."""
    paths1 = root_paths(build_graph(dictionary, synset1), synset1.id)
    paths2 = root_paths(build_graph(dictionary, synset2), synset2.id)
    return shortest_connecting_length(paths1, paths2)


def path_similarity(dictionary: Dictionary, term1: Term, term2: Term) -> float:
    """Path Distance Similarity.

    Return a score denoting how similar two word senses are, based on the
    shortest path that connects the senses in the is-a (hypernym/hyponym)
    taxonomy. The score is in the range 0 to 1. A score of 1 represents
    identity, i.e. comparing a sense with itself; 0 means no path connects
    the senses (e.g. a noun and a verb).
    """
    s1 = _synset(dictionary, term1)
    s2 = _synset(dictionary, term2)
    length = connecting_length(dictionary, s1, s2)
    score = 1.0 / length
    logger.debug("path(%s, %s) = %s (length %s)", s1.id, s2.id, score, length)
    return score


def lch_similarity(
    dictionary: Dictionary,
    term1: Term,
    term2: Term,
    *,
    depth_cache: TaxonomyDepthCache = DEPTH_CACHE,
) -> float:
    """Leacock-Chodorow Similarity.

    Return a score denoting how similar two word senses are, based on the
    shortest path that connects the senses (as above) and the maximum depth
    of the taxonomy in which the senses occur. The relationship is given as
    ``-log(p / 2d)`` where p is the shortest path length and d is the
    taxonomy depth.  Senses with no connecting path score ``LCH_NO_PATH``.

    Raises:
        PartOfSpeechMismatchError: the senses have different parts of speech.
    """
    s1 = _synset(dictionary, term1)
    s2 = _synset(dictionary, term2)
    pos1 = synset_pos(dictionary, s1)
    pos2 = synset_pos(dictionary, s2)
    if pos1 is None or pos1 is not pos2:
        raise PartOfSpeechMismatchError(
            f"Terms must be of the same part of speech: "
            f"{s1.id!r} ({pos1 and pos1.value}) vs {s2.id!r} ({pos2 and pos2.value})"
        )

    p = connecting_length(dictionary, s1, s2)
    if math.isinf(p):
        return LCH_NO_PATH
    d = taxonomy_max_depth(dictionary, pos1, depth_cache)
    score = -math.log(p / (2.0 * d))
    logger.debug("lch(%s, %s) = %s (p=%s, d=%s)", s1.id, s2.id, score, p, d)
    return score


def _specificity(dictionary: Dictionary, candidate: Synset) -> int:
    """Longest hypernym path measured from the candidate itself."""
    if candidate.id == VERB_ROOT.id:
        return 1
    return max(len(path) for path in hypernym_paths(dictionary, candidate))


def _root_depth(dictionary: Dictionary, candidate: Synset) -> int:
    if candidate.id == VERB_ROOT.id:
        return 1
    return len(shortest_path_to_root(dictionary, candidate))


def least_common_subsumer(dictionary: Dictionary, term1: Term, term2: Term) -> Synset:
    """Return the Least Common Subsumer (most specific common ancestor).

    The LCS does not necessarily feature in the shortest path connecting
    the two senses, as it is by definition the common ancestor deepest in
    the taxonomy, not closest to the two senses. Where several candidates
    are equally specific, the one whose shortest path to the root is
    longest is selected; if that still ties, the first candidate found
    wins (candidates are found walking the first sense's paths in order).

    Raises:
        NoCommonSubsumerError: the senses share no ancestor.
    """
    s1 = _synset(dictionary, term1)
    s2 = _synset(dictionary, term2)
    paths1 = hypernym_paths(dictionary, s1)
    paths2 = hypernym_paths(dictionary, s2)

    candidates: dict[str, Synset] = {}
    for p1 in paths1:
        for p2 in paths2:
            ids2 = {s.id for s in p2}
            shared = next((s for s in p1 if s.id in ids2), None)
            if shared is not None:
                candidates.setdefault(shared.id, shared)
    if not candidates:
        raise NoCommonSubsumerError(f"No common subsumer for {s1.id!r} and {s2.id!r}")

    scores = {cid: _specificity(dictionary, c) for cid, c in candidates.items()}
    best = max(scores.values())
    best_few = [c for c in candidates.values() if scores[c.id] == best]
    if len(best_few) == 1:
        return best_few[0]

    depths = {c.id: _root_depth(dictionary, c) for c in best_few}
    deepest = max(depths.values())
    return next(c for c in best_few if depths[c.id] == deepest)


def wup_similarity(dictionary: Dictionary, term1: Term, term2: Term) -> float:
    """Wu-Palmer Similarity.

    Return a score denoting how similar two word senses are, based on the
    depth of the two senses in the taxonomy and that of their Least Common
    Subsumer (most specific ancestor node, LCS).

    Raises:
        NoCommonSubsumerError: the senses share no ancestor, so the score
            is undefined.
    """
    s1 = _synset(dictionary, term1)
    s2 = _synset(dictionary, term2)
    lcs = least_common_subsumer(dictionary, s1, s2)
    depth = _root_depth(dictionary, lcs)

    # Edges from each sense up to the LCS, within the sense's own graph.
    lengths = []
    for synset in (s1, s2):
        path = shortest_path(build_graph(dictionary, synset), synset.id, lcs.id)
        if path is None:
            raise NoCommonSubsumerError(
                f"{lcs.id!r} is not reachable from {synset.id!r}"
            )
        lengths.append(len(path) - 1 + depth)

    score = (2.0 * depth) / (lengths[0] + lengths[1])
    logger.debug(
        "wup(%s, %s) = %s (lcs=%s, depth=%s)", s1.id, s2.id, score, lcs.id, depth
    )
    return score
