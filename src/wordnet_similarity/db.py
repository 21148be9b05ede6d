"""Database connection, DDL, and low-level lookups for wordnet-similarity."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from pathlib import Path

from wordnet_similarity.exceptions import DatabaseError
from wordnet_similarity.relations import get_sense_inverse, get_synset_inverse

SCHEMA_VERSION = "1.0"

# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

_DDL = """
-- Meta table
CREATE TABLE IF NOT EXISTS meta (
    key TEXT NOT NULL,
    value TEXT,
    UNIQUE (key)
);

-- Lookup tables
CREATE TABLE IF NOT EXISTS relation_types (
    rowid INTEGER PRIMARY KEY,
    type TEXT NOT NULL,
    UNIQUE (type)
);
CREATE INDEX IF NOT EXISTS relation_type_index ON relation_types (type);

-- Lexicon tables
CREATE TABLE IF NOT EXISTS lexicons (
    rowid INTEGER PRIMARY KEY,
    specifier TEXT NOT NULL,
    id TEXT NOT NULL,
    label TEXT NOT NULL,
    language TEXT NOT NULL,
    email TEXT NOT NULL,
    license TEXT NOT NULL,
    version TEXT NOT NULL,
    url TEXT,
    UNIQUE (id, version),
    UNIQUE (specifier)
);
CREATE INDEX IF NOT EXISTS lexicon_specifier_index ON lexicons (specifier);

-- Entry tables
CREATE TABLE IF NOT EXISTS entries (
    rowid INTEGER PRIMARY KEY,
    id TEXT NOT NULL,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons (rowid) ON DELETE CASCADE,
    pos TEXT NOT NULL,
    UNIQUE (id, lexicon_rowid)
);
CREATE INDEX IF NOT EXISTS entry_id_index ON entries (id);

CREATE TABLE IF NOT EXISTS forms (
    rowid INTEGER PRIMARY KEY,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons(rowid) ON DELETE CASCADE,
    entry_rowid INTEGER NOT NULL REFERENCES entries(rowid) ON DELETE CASCADE,
    form TEXT NOT NULL,
    normalized_form TEXT,
    rank INTEGER DEFAULT 1,
    UNIQUE (entry_rowid, form)
);
CREATE INDEX IF NOT EXISTS form_entry_index ON forms (entry_rowid);
CREATE INDEX IF NOT EXISTS form_norm_index ON forms (normalized_form);

-- Synset tables
CREATE TABLE IF NOT EXISTS synsets (
    rowid INTEGER PRIMARY KEY,
    id TEXT NOT NULL,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons (rowid) ON DELETE CASCADE,
    pos TEXT,
    UNIQUE (id, lexicon_rowid)
);
CREATE INDEX IF NOT EXISTS synset_id_index ON synsets (id);
CREATE INDEX IF NOT EXISTS synset_pos_index ON synsets (pos);

CREATE TABLE IF NOT EXISTS synset_relations (
    rowid INTEGER PRIMARY KEY,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons (rowid) ON DELETE CASCADE,
    source_rowid INTEGER NOT NULL REFERENCES synsets(rowid) ON DELETE CASCADE,
    target_rowid INTEGER NOT NULL REFERENCES synsets(rowid) ON DELETE CASCADE,
    type_rowid INTEGER NOT NULL REFERENCES relation_types(rowid),
    UNIQUE (source_rowid, target_rowid, type_rowid)
);
CREATE INDEX IF NOT EXISTS synset_relation_source_index ON synset_relations (source_rowid);
CREATE INDEX IF NOT EXISTS synset_relation_target_index ON synset_relations (target_rowid);

CREATE TABLE IF NOT EXISTS definitions (
    rowid INTEGER PRIMARY KEY,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons(rowid) ON DELETE CASCADE,
    synset_rowid INTEGER NOT NULL REFERENCES synsets(rowid) ON DELETE CASCADE,
    definition TEXT,
    language TEXT
);
CREATE INDEX IF NOT EXISTS definition_rowid_index ON definitions (synset_rowid);

-- Sense tables
CREATE TABLE IF NOT EXISTS senses (
    rowid INTEGER PRIMARY KEY,
    id TEXT NOT NULL,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons(rowid) ON DELETE CASCADE,
    entry_rowid INTEGER NOT NULL REFERENCES entries(rowid) ON DELETE CASCADE,
    entry_rank INTEGER DEFAULT 1,
    synset_rowid INTEGER NOT NULL REFERENCES synsets(rowid) ON DELETE CASCADE,
    synset_rank INTEGER DEFAULT 1
);
CREATE INDEX IF NOT EXISTS sense_id_index ON senses(id);
CREATE INDEX IF NOT EXISTS sense_entry_rowid_index ON senses (entry_rowid);
CREATE INDEX IF NOT EXISTS sense_synset_rowid_index ON senses (synset_rowid);

CREATE TABLE IF NOT EXISTS sense_relations (
    rowid INTEGER PRIMARY KEY,
    lexicon_rowid INTEGER NOT NULL REFERENCES lexicons (rowid) ON DELETE CASCADE,
    source_rowid INTEGER NOT NULL REFERENCES senses(rowid) ON DELETE CASCADE,
    target_rowid INTEGER NOT NULL REFERENCES senses(rowid) ON DELETE CASCADE,
    type_rowid INTEGER NOT NULL REFERENCES relation_types(rowid),
    UNIQUE (source_rowid, target_rowid, type_rowid)
);
CREATE INDEX IF NOT EXISTS sense_relation_source_index ON sense_relations (source_rowid);
CREATE INDEX IF NOT EXISTS sense_relation_target_index ON sense_relations (target_rowid);
"""


def connect(db_path: str | Path = ":memory:") -> sqlite3.Connection:
    """Open a database connection with store PRAGMA settings.

    The connection may be used from any thread; callers serialize access.
    """
    db_path_str = str(db_path)
    conn = sqlite3.connect(db_path_str, check_same_thread=False)
    conn.execute("PRAGMA foreign_keys = ON")
    if db_path_str != ":memory:":
        conn.execute("PRAGMA journal_mode = WAL")
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Initialize all tables if they don't exist. Set schema version."""
    conn.executescript(_DDL)
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) VALUES ('schema_version', ?)",
        (SCHEMA_VERSION,),
    )
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) "
        "VALUES ('created_at', strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
    )
    conn.commit()


def check_schema_version(conn: sqlite3.Connection) -> None:
    """Verify the database schema version is compatible."""
    try:
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        # meta table doesn't exist - uninitialized DB
        return
    if row is None:
        return
    version = row[0]
    if version != SCHEMA_VERSION:
        raise DatabaseError(
            f"Incompatible schema version: {version} "
            f"(expected {SCHEMA_VERSION})"
        )


def normalize_form(form: str) -> str:
    """Normalized lookup key for a written form."""
    return form.casefold()


# ---------------------------------------------------------------------------
# Lookup table helpers
# ---------------------------------------------------------------------------

def get_or_create_relation_type(conn: sqlite3.Connection, rel_type: str) -> int:
    """Get the rowid for a relation type, inserting if needed."""
    conn.execute(
        "INSERT OR IGNORE INTO relation_types (type) VALUES (?)",
        (rel_type,),
    )
    row = conn.execute(
        "SELECT rowid FROM relation_types WHERE type = ?",
        (rel_type,),
    ).fetchone()
    return row[0]


def get_relation_type_rowid(conn: sqlite3.Connection, rel_type: str) -> int | None:
    """Get the rowid for a relation type, or None if it was never stored."""
    row = conn.execute(
        "SELECT rowid FROM relation_types WHERE type = ?",
        (rel_type,),
    ).fetchone()
    return row[0] if row else None


# ---------------------------------------------------------------------------
# Synset helpers
# ---------------------------------------------------------------------------

def get_synset_row(conn: sqlite3.Connection, synset_id: str) -> sqlite3.Row | None:
    """Get a full synset row by ID."""
    return conn.execute(
        "SELECT rowid, * FROM synsets WHERE id = ?",
        (synset_id,),
    ).fetchone()


def get_synset_gloss(conn: sqlite3.Connection, synset_rowid: int) -> str | None:
    """Get the first definition of a synset, or None."""
    row = conn.execute(
        "SELECT definition FROM definitions WHERE synset_rowid = ? "
        "ORDER BY rowid LIMIT 1",
        (synset_rowid,),
    ).fetchone()
    return row[0] if row else None


def get_synset_rows_by_pos(
    conn: sqlite3.Connection, pos_tags: tuple[str, ...]
) -> list[sqlite3.Row]:
    """Get all synset rows whose POS is one of ``pos_tags``."""
    marks = ", ".join("?" for _ in pos_tags)
    return conn.execute(
        f"SELECT rowid, * FROM synsets WHERE pos IN ({marks}) ORDER BY rowid",
        pos_tags,
    ).fetchall()


def _related_rows(
    conn: sqlite3.Connection,
    forward_sql: str,
    inverse_sql: str,
    rowid: int,
    rel_type: str,
    inverse_type: str | None,
) -> list[sqlite3.Row]:
    rows: list[sqlite3.Row] = []
    seen: set[int] = set()

    queries = [(forward_sql, rel_type)]
    if inverse_type is not None:
        queries.append((inverse_sql, inverse_type))
    for sql, type_name in queries:
        type_rowid = get_relation_type_rowid(conn, type_name)
        if type_rowid is None:
            continue
        for row in conn.execute(sql, (rowid, type_rowid)).fetchall():
            if row["rowid"] not in seen:
                seen.add(row["rowid"])
                rows.append(row)

    return rows


def _relation_types(
    conn: sqlite3.Connection,
    table: str,
    rowid: int,
    inverse_of: Callable[[str], str | None],
) -> list[str]:
    types: list[str] = []
    for row in conn.execute(
        f"SELECT rt.type FROM {table} r "
        "JOIN relation_types rt ON r.type_rowid = rt.rowid "
        "WHERE r.source_rowid = ? ORDER BY r.rowid",
        (rowid,),
    ).fetchall():
        if row[0] not in types:
            types.append(row[0])
    for row in conn.execute(
        f"SELECT rt.type FROM {table} r "
        "JOIN relation_types rt ON r.type_rowid = rt.rowid "
        "WHERE r.target_rowid = ? ORDER BY r.rowid",
        (rowid,),
    ).fetchall():
        inverse = inverse_of(row[0])
        if inverse is not None and inverse not in types:
            types.append(inverse)
    return types


def get_related_synset_rows(
    conn: sqlite3.Connection,
    synset_rowid: int,
    rel_type: str,
    inverse_type: str | None = None,
) -> list[sqlite3.Row]:
    """Get synsets related to a synset by ``rel_type``.

    Edges stored as ``source -rel_type-> target`` are read forward.  When
    ``inverse_type`` is given, edges stored as ``target -inverse_type-> source``
    answer the same question.  Results are de-duplicated, forward edges
    first, each group in insertion order.
    """
    return _related_rows(
        conn,
        "SELECT s.rowid, s.* FROM synset_relations r "
        "JOIN synsets s ON r.target_rowid = s.rowid "
        "WHERE r.source_rowid = ? AND r.type_rowid = ? "
        "ORDER BY r.rowid",
        "SELECT s.rowid, s.* FROM synset_relations r "
        "JOIN synsets s ON r.source_rowid = s.rowid "
        "WHERE r.target_rowid = ? AND r.type_rowid = ? "
        "ORDER BY r.rowid",
        synset_rowid, rel_type, inverse_type,
    )


def get_synset_relation_types(conn: sqlite3.Connection, synset_rowid: int) -> list[str]:
    """Relation types answerable for a synset: stored ones, then inverses."""
    return _relation_types(conn, "synset_relations", synset_rowid, get_synset_inverse)


# ---------------------------------------------------------------------------
# Word and sense helpers
# ---------------------------------------------------------------------------

def get_word_rows_for_synset(
    conn: sqlite3.Connection, synset_rowid: int
) -> list[sqlite3.Row]:
    """Get (sense id, lemma, pos) rows of a synset's members in member order."""
    return conn.execute(
        "SELECT s.id AS sense_id, f.form AS lemma, e.pos AS pos "
        "FROM senses s "
        "JOIN entries e ON s.entry_rowid = e.rowid "
        "JOIN forms f ON f.entry_rowid = e.rowid AND f.rank = 0 "
        "WHERE s.synset_rowid = ? "
        "ORDER BY s.synset_rank, s.rowid",
        (synset_rowid,),
    ).fetchall()


def get_sense_row(conn: sqlite3.Connection, sense_id: str) -> sqlite3.Row | None:
    """Get a full sense row by ID."""
    return conn.execute(
        "SELECT rowid, * FROM senses WHERE id = ?",
        (sense_id,),
    ).fetchone()


def find_sense_synset_ids(
    conn: sqlite3.Connection,
    lemma: str,
    pos_tags: tuple[str, ...] | None = None,
) -> list[str]:
    """Synset IDs of the senses of a lemma, in sense-rank order.

    Entries are matched on the normalized lemma form; with ``pos_tags`` only
    entries with one of those parts of speech are considered.  Entries whose
    written form equals ``lemma`` exactly are numbered before other case
    variants (``job`` before ``Job``).
    """
    sql = (
        "SELECT ss.id FROM forms f "
        "JOIN entries e ON f.entry_rowid = e.rowid "
        "JOIN senses s ON s.entry_rowid = e.rowid "
        "JOIN synsets ss ON s.synset_rowid = ss.rowid "
        "WHERE f.normalized_form = ? AND f.rank = 0"
    )
    params: list[str] = [normalize_form(lemma)]
    if pos_tags:
        sql += " AND e.pos IN ({})".format(", ".join("?" for _ in pos_tags))
        params.extend(pos_tags)
    sql += " ORDER BY f.form != ?, e.rowid, s.entry_rank, s.rowid"
    params.append(lemma)
    return [row[0] for row in conn.execute(sql, params).fetchall()]


_SENSE_WORD_COLUMNS = (
    "SELECT s.rowid, s.id AS sense_id, f.form AS lemma, e.pos AS pos, "
    "ss.id AS synset_id FROM sense_relations r "
)
_SENSE_WORD_JOINS = (
    "JOIN entries e ON s.entry_rowid = e.rowid "
    "JOIN forms f ON f.entry_rowid = e.rowid AND f.rank = 0 "
    "JOIN synsets ss ON s.synset_rowid = ss.rowid "
)


def get_related_sense_rows(
    conn: sqlite3.Connection,
    sense_rowid: int,
    rel_type: str,
    inverse_type: str | None = None,
) -> list[sqlite3.Row]:
    """Get (sense id, lemma, pos, synset id) rows of senses related by ``rel_type``.

    Same edge-direction rules as :func:`get_related_synset_rows`.
    """
    return _related_rows(
        conn,
        _SENSE_WORD_COLUMNS
        + "JOIN senses s ON r.target_rowid = s.rowid "
        + _SENSE_WORD_JOINS
        + "WHERE r.source_rowid = ? AND r.type_rowid = ? ORDER BY r.rowid",
        _SENSE_WORD_COLUMNS
        + "JOIN senses s ON r.source_rowid = s.rowid "
        + _SENSE_WORD_JOINS
        + "WHERE r.target_rowid = ? AND r.type_rowid = ? ORDER BY r.rowid",
        sense_rowid, rel_type, inverse_type,
    )


def get_sense_relation_types(conn: sqlite3.Connection, sense_rowid: int) -> list[str]:
    """Relation types answerable for a sense: stored ones, then inverses."""
    return _relation_types(conn, "sense_relations", sense_rowid, get_sense_inverse)
