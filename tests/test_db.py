import pytest
import sqlite3

from wordnet_similarity import db
from wordnet_similarity.exceptions import DatabaseError


@pytest.fixture
def db_conn():
    """Create an in-memory database connection for testing."""
    conn = db.connect(":memory:")
    db.init_db(conn)
    yield conn
    conn.close()


def _add_lexicon(conn):
    cur = conn.execute(
        "INSERT INTO lexicons (specifier, id, label, language, email, license, version) "
        "VALUES ('t:1', 't', 'T', 'en', '', '', '1')"
    )
    return cur.lastrowid


def _add_synset(conn, lex, synset_id, pos="n"):
    cur = conn.execute(
        "INSERT INTO synsets (id, lexicon_rowid, pos) VALUES (?, ?, ?)",
        (synset_id, lex, pos),
    )
    return cur.lastrowid


def _relate(conn, lex, source, target, rel_type):
    type_rowid = db.get_or_create_relation_type(conn, rel_type)
    conn.execute(
        "INSERT INTO synset_relations "
        "(lexicon_rowid, source_rowid, target_rowid, type_rowid) VALUES (?, ?, ?, ?)",
        (lex, source, target, type_rowid),
    )


def test_schema_version_recorded(db_conn):
    """A fresh database records the current schema version."""
    row = db_conn.execute(
        "SELECT value FROM meta WHERE key = 'schema_version'"
    ).fetchone()
    assert row[0] == db.SCHEMA_VERSION
    db.check_schema_version(db_conn)


def test_schema_version_mismatch(db_conn):
    """An incompatible schema version is rejected."""
    db_conn.execute("UPDATE meta SET value = '0.1' WHERE key = 'schema_version'")
    with pytest.raises(DatabaseError):
        db.check_schema_version(db_conn)


def test_uninitialized_database_passes_check():
    """A database without the meta table is accepted (it will be initialized)."""
    conn = sqlite3.connect(":memory:")
    db.check_schema_version(conn)
    conn.close()


def test_relation_type_created_once(db_conn):
    """get_or_create_relation_type returns a stable rowid."""
    first = db.get_or_create_relation_type(db_conn, "hypernym")
    second = db.get_or_create_relation_type(db_conn, "hypernym")
    assert first == second
    assert db.get_relation_type_rowid(db_conn, "hyponym") is None


def test_related_rows_read_forward_and_inverse(db_conn):
    """Edges stored in either direction answer the same query once."""
    lex = _add_lexicon(db_conn)
    dog = _add_synset(db_conn, lex, "dog")
    canine = _add_synset(db_conn, lex, "canine")
    pet = _add_synset(db_conn, lex, "pet")
    _relate(db_conn, lex, dog, canine, "hypernym")
    _relate(db_conn, lex, pet, dog, "hyponym")
    _relate(db_conn, lex, canine, dog, "hyponym")

    rows = db.get_related_synset_rows(db_conn, dog, "hypernym", "hyponym")
    assert [r["id"] for r in rows] == ["canine", "pet"]


def test_related_rows_without_inverse(db_conn):
    lex = _add_lexicon(db_conn)
    a = _add_synset(db_conn, lex, "a")
    b = _add_synset(db_conn, lex, "b")
    _relate(db_conn, lex, b, a, "hyponym")
    assert db.get_related_synset_rows(db_conn, a, "hypernym") == []


def test_synset_relation_types(db_conn):
    """Stored types come first, then inverses of incoming edges."""
    lex = _add_lexicon(db_conn)
    dog = _add_synset(db_conn, lex, "dog")
    canine = _add_synset(db_conn, lex, "canine")
    puppy = _add_synset(db_conn, lex, "puppy")
    other = _add_synset(db_conn, lex, "other")
    _relate(db_conn, lex, dog, canine, "hypernym")
    _relate(db_conn, lex, canine, dog, "hyponym")
    _relate(db_conn, lex, puppy, dog, "hypernym")
    _relate(db_conn, lex, other, dog, "made_up")
    assert db.get_synset_relation_types(db_conn, dog) == ["hypernym", "hyponym"]
    assert db.get_synset_relation_types(db_conn, other) == ["made_up"]


def test_synset_rows_by_pos(db_conn):
    lex = _add_lexicon(db_conn)
    _add_synset(db_conn, lex, "good", "a")
    _add_synset(db_conn, lex, "fine", "s")
    _add_synset(db_conn, lex, "dog", "n")
    rows = db.get_synset_rows_by_pos(db_conn, ("a", "s"))
    assert [r["id"] for r in rows] == ["good", "fine"]


def test_normalize_form():
    assert db.normalize_form("Hartford") == "hartford"
    assert db.normalize_form("STRASSE") == db.normalize_form("straße")
