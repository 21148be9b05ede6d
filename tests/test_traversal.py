"""Tests for transitive relation walks."""

import pytest

from conftest import build_resource, synset_id
from wordnet_similarity.traversal import (
    hypernym_instances,
    hypernyms,
    instances,
    lexical_relations,
    semantic_relations,
    synonyms,
)


def ids(synsets):
    return [s.id for s in synsets]


class TestHypernyms:
    """Tests for hypernyms and hypernym_instances."""

    def test_breadth_first_closure(self, taxonomy):
        result = hypernyms(taxonomy, taxonomy.resolve("city"))
        assert ids(result) == [synset_id(k) for k in (
            "municipality", "urban_area", "administrative_district",
            "geographical_area", "region", "location", "physical_entity", "entity",
        )]

    def test_each_synset_once(self, taxonomy):
        result = ids(hypernyms(taxonomy, taxonomy.resolve("spork")))
        assert len(result) == len(set(result))
        assert result.count(synset_id("entity")) == 1

    def test_root_has_none(self, taxonomy):
        assert hypernyms(taxonomy, taxonomy.resolve("entity")) == []

    def test_instance_has_no_plain_hypernyms(self, taxonomy):
        assert hypernyms(taxonomy, taxonomy.resolve("hartford")) == []

    def test_hypernym_instances(self, taxonomy):
        result = ids(hypernym_instances(taxonomy, taxonomy.resolve("hartford")))
        assert result[:2] == [synset_id("city"), synset_id("municipality")]
        assert result[-1] == synset_id("entity")

    def test_hypernym_instances_of_class(self, taxonomy):
        assert hypernym_instances(taxonomy, taxonomy.resolve("city")) == []


class TestInstances:
    """Tests for instances."""

    def test_direct(self, taxonomy):
        assert ids(instances(taxonomy, taxonomy.resolve("city"))) == [synset_id("hartford")]

    def test_below(self, taxonomy):
        assert ids(instances(taxonomy, taxonomy.resolve("region"))) == [synset_id("hartford")]
        assert ids(instances(taxonomy, taxonomy.resolve("entity"))) == [synset_id("hartford")]

    def test_none(self, taxonomy):
        assert instances(taxonomy, taxonomy.resolve("work")) == []


class TestSynonyms:
    """Tests for synonyms."""

    def test_synset_then_hypernym_lemmas(self, taxonomy):
        assert synonyms(taxonomy, "job#n#1") == ["job", "occupation", "abstraction"]

    def test_two_hypernyms(self, taxonomy):
        assert synonyms(taxonomy, "municipality") == [
            "municipality", "urban area", "administrative district",
        ]

    def test_root(self, taxonomy):
        assert synonyms(taxonomy, taxonomy.resolve("entity")) == ["entity"]


class TestSemanticRelations:
    """Tests for semantic_relations."""

    def test_stored_and_inverse_types(self, taxonomy):
        relations = semantic_relations(taxonomy, taxonomy.resolve("city"))
        assert {k: ids(v) for k, v in relations.items()} == {
            "hypernym": [synset_id("municipality")],
            "instance_hyponym": [synset_id("hartford")],
        }

    def test_parent_sees_hyponyms(self, taxonomy):
        relations = semantic_relations(taxonomy, taxonomy.resolve("work#n"))
        assert ids(relations["hypernym"]) == [synset_id("act")]
        assert set(ids(relations["hyponym"])) == {synset_id("task"), synset_id("job2")}

    def test_unrelated_synset(self, taxonomy):
        assert semantic_relations(taxonomy, taxonomy.resolve("good")) == {}


class TestLexicalRelations:
    """Tests for related_words and lexical_relations."""

    @pytest.fixture
    def antonyms(self, store):
        resource = build_resource()
        entries = {e["id"]: e for e in resource["lexicons"][0]["entries"]}
        entries["test-good-a"]["senses"][0]["relations"] = [
            {"relType": "antonym", "target": "test-bad-a-1"},
        ]
        store.import_resource(resource)
        return store

    def word(self, dictionary, lemma):
        return dictionary.words_of(dictionary.resolve(lemma))[0]

    def test_related_words(self, antonyms):
        related = antonyms.related_words(self.word(antonyms, "good"), "antonym")
        assert [(w.id, w.lemma, w.synset_id) for w in related] == [
            ("test-bad-a-1", "bad", synset_id("bad", "a")),
        ]

    def test_lexical_relations(self, antonyms):
        relations = lexical_relations(antonyms, self.word(antonyms, "good"))
        assert {k: [w.lemma for w in v] for k, v in relations.items()} == {
            "antonym": ["bad"],
        }

    def test_symmetric_relation_read_backwards(self, antonyms):
        relations = lexical_relations(antonyms, self.word(antonyms, "bad"))
        assert [w.lemma for w in relations["antonym"]] == ["good"]

    def test_no_relations(self, antonyms):
        assert lexical_relations(antonyms, self.word(antonyms, "city")) == {}
