"""Shared test fixtures for wordnet-similarity."""

from pathlib import Path

import pytest

try:
    # Import wn before any test captures output: its progress bar binds
    # sys.stderr at import time, and a capsys stream is closed afterwards.
    import wn  # noqa: F401
except ImportError:
    pass

from wordnet_similarity import DEPTH_CACHE, SqliteDictionary

FIXTURES = Path(__file__).parent / "fixtures"

# (key, pos, lemmas, hypernyms, instance hypernyms)
TAXONOMY = [
    # nouns
    ("entity", "n", ["entity"], [], []),
    ("physical_entity", "n", ["physical entity"], ["entity"], []),
    ("abstraction", "n", ["abstraction"], ["entity"], []),
    ("location", "n", ["location"], ["physical_entity"], []),
    ("object", "n", ["object"], ["physical_entity"], []),
    ("act", "n", ["act"], ["abstraction"], []),
    ("occupation", "n", ["job", "occupation"], ["abstraction"], []),
    ("region", "n", ["region"], ["location"], []),
    ("work", "n", ["work"], ["act"], []),
    ("geographical_area", "n", ["geographical area"], ["region"], []),
    ("district", "n", ["district"], ["region"], []),
    ("administrative_district", "n", ["administrative district"], ["region"], []),
    ("task", "n", ["task"], ["work"], []),
    ("job2", "n", ["job"], ["work"], []),
    ("urban_area", "n", ["urban area"], ["geographical_area"], []),
    ("neighborhood", "n", ["neighborhood"], ["district"], []),
    ("municipality", "n", ["municipality"],
     ["urban_area", "administrative_district"], []),
    ("city", "n", ["city"], ["municipality"], []),
    ("hartford", "n", ["Hartford"], [], ["city"]),
    ("tableware", "n", ["tableware"], ["entity"], []),
    ("cutlery", "n", ["cutlery"], ["tableware"], []),
    ("spoon", "n", ["spoon"], ["entity", "cutlery"], []),
    ("tool", "n", ["tool"], ["entity"], []),
    ("implement", "n", ["implement"], ["tool"], []),
    ("fork", "n", ["fork"], ["implement"], []),
    ("spork", "n", ["spork"], ["spoon", "fork"], []),
    ("splayd", "n", ["splayd"], ["spoon", "fork"], []),
    # verbs
    ("consume", "v", ["consume"], [], []),
    ("drink", "v", ["drink"], ["consume"], []),
    ("sip", "v", ["sip"], ["drink"], []),
    ("think", "v", ["think"], [], []),
    ("reason", "v", ["reason"], ["think"], []),
    # adjectives
    ("good", "a", ["good"], [], []),
    ("bad", "a", ["bad"], [], []),
    ("fine", "s", ["fine"], [], []),
]


def synset_id(key, pos="n", lexicon="test"):
    return f"{lexicon}-{key}-{pos}"


def build_resource(taxonomy=TAXONOMY, lexicon="test", version="1.0"):
    """Build an LMF-shaped LexicalResource dict from compact tuples."""
    pos_of = {key: pos for key, pos, *_ in taxonomy}
    entries = {}
    synsets = []
    for key, pos, lemmas, hypernyms, instance_of in taxonomy:
        sid = synset_id(key, pos, lexicon)
        members = []
        for lemma in lemmas:
            entry = entries.setdefault((lemma, pos), {
                "id": f"{lexicon}-{lemma.replace(' ', '_').lower()}-{pos}",
                "lemma": {"writtenForm": lemma, "partOfSpeech": pos},
                "senses": [],
            })
            sense_id = f"{entry['id']}-{len(entry['senses']) + 1}"
            entry["senses"].append({"id": sense_id, "synset": sid})
            members.append(sense_id)
        relations = [
            {"relType": "hypernym", "target": synset_id(h, pos_of[h], lexicon)}
            for h in hypernyms
        ] + [
            {"relType": "instance_hypernym",
             "target": synset_id(c, pos_of[c], lexicon)}
            for c in instance_of
        ]
        synsets.append({
            "id": sid,
            "partOfSpeech": pos,
            "definitions": [{"text": f"definition of {key.replace('_', ' ')}"}],
            "relations": relations,
            "members": members,
        })
    return {
        "lmf_version": "1.1",
        "lexicons": [{
            "id": lexicon,
            "label": "Test Taxonomy",
            "language": "en",
            "email": "test@test.com",
            "license": "https://opensource.org/licenses/MIT",
            "version": version,
            "entries": list(entries.values()),
            "synsets": synsets,
        }],
    }


@pytest.fixture(autouse=True)
def reset_depth_cache():
    """Every test starts with an empty process-wide depth cache."""
    DEPTH_CACHE.reset()
    yield
    DEPTH_CACHE.reset()


@pytest.fixture
def store():
    """Create an empty in-memory store for testing."""
    with SqliteDictionary(":memory:") as d:
        yield d


@pytest.fixture
def taxonomy(store):
    """Store loaded with the test taxonomy."""
    store.import_resource(build_resource())
    return store


class CountingDictionary:
    """Wraps a dictionary and counts calls per operation."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = {"resolve": 0, "words_of": 0, "related": 0, "all_senses": 0}

    def resolve(self, term):
        self.calls["resolve"] += 1
        return self.inner.resolve(term)

    def words_of(self, synset):
        self.calls["words_of"] += 1
        return self.inner.words_of(synset)

    def related(self, synset, relation_type):
        self.calls["related"] += 1
        return self.inner.related(synset, relation_type)

    def all_senses(self, pos):
        self.calls["all_senses"] += 1
        return self.inner.all_senses(pos)


@pytest.fixture
def counting(taxonomy):
    """Counting wrapper around the test taxonomy."""
    return CountingDictionary(taxonomy)
