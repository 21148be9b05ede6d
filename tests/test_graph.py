"""Tests for taxonomy graphs and hypernym paths."""

import pytest

from conftest import build_resource, synset_id
from wordnet_similarity.exceptions import TaxonomyError
from wordnet_similarity.graph import (
    build_graph,
    general_hypernyms,
    graph_roots,
    hypernym_paths,
    root_paths,
    shortest_path,
    shortest_path_to_root,
)
from wordnet_similarity.models import COMMON_VERB_ROOT


def ids(path):
    return [s.id if hasattr(s, "id") else s for s in path]


class TestBuildGraph:
    """Tests for build_graph."""

    def test_edges_point_to_parents(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("municipality"))
        assert graph.has_edge(synset_id("municipality"), synset_id("urban_area"))
        assert graph.has_edge(synset_id("municipality"), synset_id("administrative_district"))
        assert not graph.has_edge(synset_id("urban_area"), synset_id("municipality"))

    def test_single_noun_root(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("hartford"))
        assert graph_roots(graph) == [synset_id("entity")]
        # region is reached twice but expanded once
        assert graph.out_degree(synset_id("region")) == 1

    def test_verb_graph_gets_common_root(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("sip"))
        assert graph_roots(graph) == [COMMON_VERB_ROOT]
        assert graph.has_edge(synset_id("consume", "v"), COMMON_VERB_ROOT)

    def test_isolated_sense(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("good"))
        assert list(graph.nodes) == [synset_id("good", "a")]
        assert graph_roots(graph) == [synset_id("good", "a")]

    def test_hypernyms_only(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("hartford"), ("hypernym",))
        assert list(graph.nodes) == [synset_id("hartford")]

    def test_no_relations(self, taxonomy):
        with pytest.raises(ValueError):
            build_graph(taxonomy, taxonomy.resolve("city"), ())

    def test_depth_bound(self, taxonomy):
        with pytest.raises(TaxonomyError):
            build_graph(taxonomy, taxonomy.resolve("hartford"), max_depth=3)


class TestPaths:
    """Tests for shortest paths over a built graph."""

    def test_shortest_path(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("city"))
        path = shortest_path(graph, synset_id("city"), synset_id("region"))
        assert path == [synset_id(k) for k in
                        ("city", "municipality", "administrative_district", "region")]

    def test_shortest_path_unreachable(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("city"))
        assert shortest_path(graph, synset_id("region"), synset_id("city")) is None
        assert shortest_path(graph, synset_id("city"), "absent") is None

    def test_root_paths(self, taxonomy):
        graph = build_graph(taxonomy, taxonomy.resolve("drink"))
        assert root_paths(graph, synset_id("drink", "v")) == [
            [synset_id("drink", "v"), synset_id("consume", "v"), COMMON_VERB_ROOT],
        ]

    def test_shortest_path_to_root(self, taxonomy):
        path = shortest_path_to_root(taxonomy, taxonomy.resolve("neighborhood"))
        assert path == [synset_id(k) for k in
                        ("neighborhood", "district", "region", "location",
                         "physical_entity", "entity")]

    def test_shortest_path_to_root_of_root(self, taxonomy):
        assert shortest_path_to_root(taxonomy, taxonomy.resolve("entity")) == [
            synset_id("entity"),
        ]


class TestHypernymPaths:
    """Tests for hypernym_paths and general_hypernyms."""

    def test_general_hypernyms_include_instances(self, taxonomy):
        parents = general_hypernyms(taxonomy, taxonomy.resolve("hartford"))
        assert ids(parents) == [synset_id("city")]

    def test_branching_paths(self, taxonomy):
        paths = hypernym_paths(taxonomy, taxonomy.resolve("city"))
        assert [ids(p) for p in paths] == [
            [synset_id(k) for k in ("city", "municipality", "urban_area",
                                    "geographical_area", "region", "location",
                                    "physical_entity", "entity")],
            [synset_id(k) for k in ("city", "municipality", "administrative_district",
                                    "region", "location", "physical_entity", "entity")],
        ]

    def test_every_path_ends_at_a_root(self, taxonomy):
        for path in hypernym_paths(taxonomy, taxonomy.resolve("spork")):
            assert path[0].id == synset_id("spork")
            assert path[-1].id == synset_id("entity")

    def test_verb_paths_end_with_common_root(self, taxonomy):
        paths = hypernym_paths(taxonomy, taxonomy.resolve("think"))
        assert [ids(p) for p in paths] == [[synset_id("think", "v"), COMMON_VERB_ROOT]]

    def test_root_is_its_own_path(self, taxonomy):
        assert [ids(p) for p in hypernym_paths(taxonomy, taxonomy.resolve("bad"))] == [
            [synset_id("bad", "a")],
        ]

    def test_cycle_is_cut(self, store, caplog):
        store.import_resource(build_resource([
            ("a", "n", ["a"], ["b"], []),
            ("b", "n", ["b"], ["a"], []),
        ]))
        paths = hypernym_paths(store, store.resolve("a"))
        assert [ids(p) for p in paths] == [[synset_id("a"), synset_id("b")]]
        assert "cycle" in caplog.text

    def test_depth_bound(self, taxonomy):
        with pytest.raises(TaxonomyError):
            hypernym_paths(taxonomy, taxonomy.resolve("hartford"), max_depth=4)
