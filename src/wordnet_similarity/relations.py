"""Relation type constants and inverse mapping for wordnet-similarity."""

from __future__ import annotations

HYPERNYM = "hypernym"
HYPONYM = "hyponym"
INSTANCE_HYPERNYM = "instance_hypernym"
INSTANCE_HYPONYM = "instance_hyponym"

# Relations followed upward when building a taxonomy graph.
TAXONOMY_RELATIONS: tuple[str, ...] = (HYPERNYM, INSTANCE_HYPERNYM)

# Bidirectional mapping of synset relation types to their inverses.
# Source: wn/wn/constants.py REVERSE_RELATIONS dict.

SYNSET_RELATION_INVERSES: dict[str, str] = {
    # Asymmetric pairs
    "hypernym": "hyponym",
    "hyponym": "hypernym",
    "instance_hypernym": "instance_hyponym",
    "instance_hyponym": "instance_hypernym",
    "meronym": "holonym",
    "holonym": "meronym",
    "mero_member": "holo_member",
    "holo_member": "mero_member",
    "mero_part": "holo_part",
    "holo_part": "mero_part",
    "mero_substance": "holo_substance",
    "holo_substance": "mero_substance",
    "causes": "is_caused_by",
    "is_caused_by": "causes",
    "entails": "is_entailed_by",
    "is_entailed_by": "entails",
    "domain_topic": "has_domain_topic",
    "has_domain_topic": "domain_topic",
    "domain_region": "has_domain_region",
    "has_domain_region": "domain_region",
    "exemplifies": "is_exemplified_by",
    "is_exemplified_by": "exemplifies",
    # Symmetric (map to themselves)
    "antonym": "antonym",
    "similar": "similar",
    "attribute": "attribute",
}


def get_synset_inverse(relation_type: str) -> str | None:
    """Get the inverse of a synset relation type, or None if no inverse."""
    return SYNSET_RELATION_INVERSES.get(relation_type)


# Sense (word-level) relations with a known inverse.
SENSE_RELATION_INVERSES: dict[str, str] = {
    # Asymmetric pairs
    "domain_topic": "has_domain_topic",
    "has_domain_topic": "domain_topic",
    "domain_region": "has_domain_region",
    "has_domain_region": "domain_region",
    "exemplifies": "is_exemplified_by",
    "is_exemplified_by": "exemplifies",
    "agent": "involved_agent",
    "involved_agent": "agent",
    "instrument": "involved_instrument",
    "involved_instrument": "instrument",
    # Symmetric (map to themselves)
    "antonym": "antonym",
    "derivation": "derivation",
    "also": "also",
    "similar": "similar",
}


def get_sense_inverse(relation_type: str) -> str | None:
    """Get the inverse of a sense relation type, or None if no inverse."""
    return SENSE_RELATION_INVERSES.get(relation_type)
