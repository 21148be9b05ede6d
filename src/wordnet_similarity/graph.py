"""Taxonomy graph construction, shortest paths and hypernym path enumeration."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import networkx as nx

from wordnet_similarity.config import MAX_TAXONOMY_DEPTH
from wordnet_similarity.dictionary import Dictionary, synset_pos
from wordnet_similarity.exceptions import TaxonomyError
from wordnet_similarity.models import (
    COMMON_VERB_ROOT,
    VERB_ROOT,
    PartOfSpeech,
    Synset,
)
from wordnet_similarity.relations import TAXONOMY_RELATIONS

logger = logging.getLogger(__name__)


def build_graph(
    dictionary: Dictionary,
    synset: Synset,
    relations: Iterable[str] = TAXONOMY_RELATIONS,
    *,
    max_depth: int = MAX_TAXONOMY_DEPTH,
) -> nx.DiGraph:
    """Build the graph reached from ``synset`` by following ``relations``.

    Edges point from child to parent.  Each synset is expanded once.  When
    the starting synset is a verb every root is linked to
    ``COMMON_VERB_ROOT``, which becomes the single root of the graph.
    """
    relations = tuple(relations)
    if not relations:
        raise ValueError("At least one relation type is required")

    graph = nx.DiGraph()
    graph.add_node(synset.id)
    seen = {synset.id}
    stack = [(synset, 0)]
    while stack:
        current, depth = stack.pop()
        for rel_type in relations:
            for parent in dictionary.related(current, rel_type):
                graph.add_edge(current.id, parent.id)
                if parent.id in seen:
                    continue
                if depth + 1 > max_depth:
                    raise TaxonomyError(
                        f"Taxonomy above {synset.id!r} is deeper than {max_depth}"
                    )
                seen.add(parent.id)
                stack.append((parent, depth + 1))

    if synset_pos(dictionary, synset) is PartOfSpeech.VERB:
        for root in graph_roots(graph):
            graph.add_edge(root, COMMON_VERB_ROOT)

    logger.debug(
        "Built graph for %s: %d nodes, %d edges",
        synset.id, graph.number_of_nodes(), graph.number_of_edges(),
    )
    return graph


def graph_roots(graph: nx.DiGraph) -> list[str]:
    """Return root nodes of the graph (nodes without parents)."""
    return [node for node in graph.nodes if graph.out_degree(node) == 0]


def shortest_path(graph: nx.DiGraph, source: str, target: str) -> list[str] | None:
    """Return the shortest path from source to target, or None."""
    if source not in graph or target not in graph:
        return None
    try:
        return nx.shortest_path(graph, source, target)
    except nx.NetworkXNoPath:
        return None


def root_paths(graph: nx.DiGraph, source: str) -> list[list[str]]:
    """Shortest path from ``source`` to each root of the graph."""
    paths = []
    for root in graph_roots(graph):
        path = shortest_path(graph, source, root)
        if path is not None:
            paths.append(path)
    return paths


def general_hypernyms(dictionary: Dictionary, synset: Synset) -> list[Synset]:
    """Return the hypernyms and instance hypernyms of the synset."""
    parents: list[Synset] = []
    seen: set[str] = set()
    for rel_type in TAXONOMY_RELATIONS:
        for parent in dictionary.related(synset, rel_type):
            if parent.id not in seen:
                seen.add(parent.id)
                parents.append(parent)
    return parents


def hypernym_paths(
    dictionary: Dictionary,
    synset: Synset,
    *,
    max_depth: int = MAX_TAXONOMY_DEPTH,
) -> list[list[Synset]]:
    """Return every hypernym path from the synset up to a root.

    A path branches at each synset with several parents.  Paths are
    produced depth-first, parents in the order the dictionary returns
    them.  Verb paths end with ``VERB_ROOT``.
    """
    complete: list[list[Synset]] = []
    stack = [[synset]]
    while stack:
        path = stack.pop()
        on_path = {s.id for s in path}
        parents = []
        for parent in general_hypernyms(dictionary, path[-1]):
            if parent.id in on_path:
                logger.warning(
                    "Ignoring hypernym cycle %s -> %s", path[-1].id, parent.id
                )
                continue
            parents.append(parent)
        if not parents:
            complete.append(path)
            continue
        if len(path) >= max_depth:
            raise TaxonomyError(
                f"Hypernym path from {synset.id!r} is longer than {max_depth}"
            )
        for parent in reversed(parents):
            stack.append(path + [parent])

    if synset_pos(dictionary, synset) is PartOfSpeech.VERB:
        complete = [path + [VERB_ROOT] for path in complete]
    return complete


def shortest_path_to_root(dictionary: Dictionary, synset: Synset) -> list[str]:
    """Following hypernyms, return the shortest path from the synset to a root."""
    graph = build_graph(dictionary, synset)
    paths = root_paths(graph, synset.id)
    if not paths:
        raise TaxonomyError(f"No root reachable from {synset.id!r}")
    return min(paths, key=len)
