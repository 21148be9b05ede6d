"""Transitive walks over the hypernym and instance relations, and relation maps."""

from __future__ import annotations

from collections import deque

from wordnet_similarity.dictionary import Dictionary, RelationalDictionary
from wordnet_similarity.models import Synset, TermDescriptor, Word
from wordnet_similarity.relations import (
    HYPERNYM,
    HYPONYM,
    INSTANCE_HYPERNYM,
    INSTANCE_HYPONYM,
)


def _closure(dictionary: Dictionary, start: list[Synset], relation_type: str) -> list[Synset]:
    """Breadth-first closure of ``relation_type`` from ``start`` (inclusive)."""
    result: list[Synset] = []
    seen: set[str] = set()
    queue = deque(start)
    while queue:
        synset = queue.popleft()
        if synset.id in seen:
            continue
        seen.add(synset.id)
        result.append(synset)
        queue.extend(dictionary.related(synset, relation_type))
    return result


def hypernyms(dictionary: Dictionary, synset: Synset) -> list[Synset]:
    """All transitive hypernyms of a synset, nearest first."""
    return _closure(dictionary, dictionary.related(synset, HYPERNYM), HYPERNYM)


def hypernym_instances(dictionary: Dictionary, synset: Synset) -> list[Synset]:
    """The synset's instance hypernyms followed by their hypernym closure.

    For an instance such as a named city this yields the classes it is an
    instance of and then everything above them.
    """
    classes = dictionary.related(synset, INSTANCE_HYPERNYM)
    return _closure(dictionary, classes, HYPERNYM)


def instances(dictionary: Dictionary, synset: Synset) -> list[Synset]:
    """Instances of the synset and of every synset below it."""
    result: list[Synset] = []
    seen: set[str] = set()
    for node in _closure(dictionary, [synset], HYPONYM):
        for instance in dictionary.related(node, INSTANCE_HYPONYM):
            if instance.id not in seen:
                seen.add(instance.id)
                result.append(instance)
    return result


def synonyms(dictionary: Dictionary, term: str | TermDescriptor | Synset) -> list[str]:
    """Lemmas of the term's synset, then those of its direct hypernyms."""
    synset = term if isinstance(term, Synset) else dictionary.resolve(term)
    lemmas: list[str] = []
    for node in [synset, *dictionary.related(synset, HYPERNYM)]:
        for word in dictionary.words_of(node):
            if word.lemma not in lemmas:
                lemmas.append(word.lemma)
    return lemmas


def semantic_relations(
    dictionary: RelationalDictionary, synset: Synset
) -> dict[str, list[Synset]]:
    """Every relation of a synset, keyed by relation type.

    Types stored in either direction are included, so a hypernym edge
    stored on the child also shows up as ``hyponym`` on the parent.
    """
    return {
        relation_type: dictionary.related(synset, relation_type)
        for relation_type in dictionary.relation_types(synset)
    }


def lexical_relations(
    dictionary: RelationalDictionary, word: Word
) -> dict[str, list[Word]]:
    """Every word-level relation of a word sense (e.g. ``derivation``)."""
    return {
        relation_type: dictionary.related_words(word, relation_type)
        for relation_type in dictionary.word_relation_types(word)
    }
