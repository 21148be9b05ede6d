"""Dictionary providers consumed by the similarity engine.

The engine needs four operations from a lexical database: resolving a term
to a synset, listing a synset's words, following a typed relation, and
enumerating every synset of a part of speech.  :class:`Dictionary` states
that contract; :class:`SqliteDictionary` serves it from the package's own
store and :class:`WnDictionary` from a lexicon installed with ``wn``.

Both implementations serialize access to their backend behind one coarse
lock, so a single instance may be shared between threads.
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from wordnet_similarity import db as _db
from wordnet_similarity import importer as _importer
from wordnet_similarity.exceptions import (
    DatabaseError,
    EntityNotFoundError,
    SenseNotFoundError,
)
from wordnet_similarity.models import (
    COMMON_VERB_ROOT,
    POS_ORDER,
    LemmaQuery,
    PartOfSpeech,
    SenseRef,
    Synset,
    SynsetRef,
    TermDescriptor,
    Word,
    parse_term,
)
from wordnet_similarity.relations import get_sense_inverse, get_synset_inverse


class Dictionary(Protocol):
    """Lookup and traversal contract of a lexical database."""

    def resolve(self, term: str | TermDescriptor) -> Synset:
        """Return the synset a term denotes or raise SenseNotFoundError."""
        ...

    def words_of(self, synset: Synset) -> list[Word]:
        """Return the member words of a synset in order."""
        ...

    def related(self, synset: Synset, relation_type: str) -> list[Synset]:
        """Return synsets linked from ``synset`` by ``relation_type``."""
        ...

    def all_senses(self, pos: str | PartOfSpeech) -> Iterable[Synset]:
        """Return every synset of a part-of-speech category."""
        ...


class RelationalDictionary(Dictionary, Protocol):
    """A dictionary that can also enumerate relations and follow word-level ones."""

    def relation_types(self, synset: Synset) -> list[str]:
        """Return the relation types answerable for a synset."""
        ...

    def word_relation_types(self, word: Word) -> list[str]:
        """Return the relation types answerable for a word sense."""
        ...

    def related_words(self, word: Word, relation_type: str) -> list[Word]:
        """Return words linked from ``word`` by a lexical relation."""
        ...


def synset_pos(dictionary: Dictionary, synset: Synset) -> PartOfSpeech | None:
    """POS category of a synset, taken from its first word."""
    words = dictionary.words_of(synset)
    tag = words[0].pos if words else synset.pos
    if not tag:
        return None
    return PartOfSpeech.parse(tag).category()


def _pos_tags(pos: PartOfSpeech) -> tuple[str, ...]:
    if pos.category() is PartOfSpeech.ADJECTIVE:
        return (PartOfSpeech.ADJECTIVE.value, PartOfSpeech.ADJECTIVE_SATELLITE.value)
    return (pos.value,)


def _describe(query: LemmaQuery) -> str:
    parts = [query.lemma]
    if query.pos is not None:
        parts.append(query.pos.value)
    if query.sense_index is not None:
        parts.append(str(query.sense_index))
    return "#".join(parts)


# ---------------------------------------------------------------------------
# SQLite store
# ---------------------------------------------------------------------------

class SqliteDictionary:
    """A dictionary backed by the package's SQLite store."""

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._conn = _db.connect(db_path)
        try:
            _db.check_schema_version(self._conn)
            _db.init_db(self._conn)
        except (DatabaseError, sqlite3.Error):
            self._conn.close()
            raise
        self._lock = threading.Lock()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def __enter__(self) -> SqliteDictionary:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def import_lmf(self, source: str | Path) -> None:
        """Load a WN-LMF XML file into the store."""
        with self._lock:
            _importer.import_from_lmf(self._conn, source)

    def import_resource(self, resource: dict) -> None:
        """Load an LMF-shaped LexicalResource dict into the store."""
        with self._lock:
            _importer.import_resource(self._conn, resource)

    def import_wn(self, specifier: str) -> None:
        """Copy a lexicon installed with ``wn`` into the store."""
        with self._lock:
            _importer.import_from_wn(self._conn, specifier)

    # ------------------------------------------------------------------
    # Dictionary contract
    # ------------------------------------------------------------------

    def resolve(self, term: str | TermDescriptor) -> Synset:
        descriptor = parse_term(term)
        with self._lock:
            if isinstance(descriptor, SynsetRef):
                row = _db.get_synset_row(self._conn, descriptor.id)
                if row is None:
                    raise SenseNotFoundError(f"Synset not found: {descriptor.id!r}")
                return self._row_to_synset(row)
            if isinstance(descriptor, SenseRef):
                sense = _db.get_sense_row(self._conn, descriptor.id)
                if sense is None:
                    raise SenseNotFoundError(f"Sense not found: {descriptor.id!r}")
                row = self._conn.execute(
                    "SELECT rowid, * FROM synsets WHERE rowid = ?",
                    (sense["synset_rowid"],),
                ).fetchone()
                return self._row_to_synset(row)
            return self._resolve_lemma(descriptor)

    def words_of(self, synset: Synset) -> list[Word]:
        if synset.id == COMMON_VERB_ROOT:
            return []
        with self._lock:
            rowid = self._synset_rowid(synset)
            return [
                Word(
                    id=row["sense_id"],
                    lemma=row["lemma"],
                    pos=row["pos"],
                    synset_id=synset.id,
                    handle=row["sense_id"],
                )
                for row in _db.get_word_rows_for_synset(self._conn, rowid)
            ]

    def related(self, synset: Synset, relation_type: str) -> list[Synset]:
        if synset.id == COMMON_VERB_ROOT:
            return []
        with self._lock:
            rowid = self._synset_rowid(synset)
            rows = _db.get_related_synset_rows(
                self._conn, rowid, relation_type, get_synset_inverse(relation_type)
            )
            return [self._row_to_synset(row) for row in rows]

    def relation_types(self, synset: Synset) -> list[str]:
        if synset.id == COMMON_VERB_ROOT:
            return []
        with self._lock:
            return _db.get_synset_relation_types(self._conn, self._synset_rowid(synset))

    def word_relation_types(self, word: Word) -> list[str]:
        with self._lock:
            return _db.get_sense_relation_types(self._conn, self._sense_rowid(word))

    def related_words(self, word: Word, relation_type: str) -> list[Word]:
        with self._lock:
            rows = _db.get_related_sense_rows(
                self._conn,
                self._sense_rowid(word),
                relation_type,
                get_sense_inverse(relation_type),
            )
            return [
                Word(
                    id=row["sense_id"],
                    lemma=row["lemma"],
                    pos=row["pos"],
                    synset_id=row["synset_id"],
                    handle=row["sense_id"],
                )
                for row in rows
            ]

    def all_senses(self, pos: str | PartOfSpeech) -> list[Synset]:
        category = PartOfSpeech.parse(pos).category()
        with self._lock:
            rows = _db.get_synset_rows_by_pos(self._conn, _pos_tags(category))
            return [self._row_to_synset(row) for row in rows]

    # ------------------------------------------------------------------
    # Helpers (callers hold the lock)
    # ------------------------------------------------------------------

    def _resolve_lemma(self, query: LemmaQuery) -> Synset:
        categories = (query.pos,) if query.pos is not None else POS_ORDER
        synset_ids: list[str] = []
        for category in categories:
            synset_ids.extend(
                _db.find_sense_synset_ids(self._conn, query.lemma, _pos_tags(category))
            )
        index = query.sense_index or 1
        if len(synset_ids) < index:
            raise SenseNotFoundError(f"Sense not found: {_describe(query)!r}")
        row = _db.get_synset_row(self._conn, synset_ids[index - 1])
        return self._row_to_synset(row)

    def _synset_rowid(self, synset: Synset) -> int:
        if isinstance(synset.handle, int):
            return synset.handle
        row = _db.get_synset_row(self._conn, synset.id)
        if row is None:
            raise SenseNotFoundError(f"Synset not found: {synset.id!r}")
        return row["rowid"]

    def _sense_rowid(self, word: Word) -> int:
        row = _db.get_sense_row(self._conn, word.id)
        if row is None:
            raise SenseNotFoundError(f"Sense not found: {word.id!r}")
        return row["rowid"]

    def _row_to_synset(self, row: sqlite3.Row) -> Synset:
        return Synset(
            id=row["id"],
            pos=row["pos"],
            gloss=_db.get_synset_gloss(self._conn, row["rowid"]),
            handle=row["rowid"],
        )


# ---------------------------------------------------------------------------
# wn lexicon
# ---------------------------------------------------------------------------

class WnDictionary:
    """A dictionary over a lexicon installed with the ``wn`` package."""

    def __init__(self, lexicon: str | None = None, *, wordnet: Any = None) -> None:
        import wn

        if wordnet is None:
            try:
                wordnet = wn.Wordnet(lexicon)
            except wn.Error as e:
                raise EntityNotFoundError(
                    f"Lexicon not available in wn: {lexicon!r}"
                ) from e
        self._wn = wordnet
        self._lock = threading.Lock()

    def resolve(self, term: str | TermDescriptor) -> Synset:
        import wn

        descriptor = parse_term(term)
        with self._lock:
            if isinstance(descriptor, SynsetRef):
                try:
                    return self._to_synset(self._wn.synset(descriptor.id))
                except wn.Error as e:
                    raise SenseNotFoundError(
                        f"Synset not found: {descriptor.id!r}"
                    ) from e
            if isinstance(descriptor, SenseRef):
                try:
                    return self._to_synset(self._wn.sense(descriptor.id).synset())
                except wn.Error as e:
                    raise SenseNotFoundError(
                        f"Sense not found: {descriptor.id!r}"
                    ) from e
            return self._resolve_lemma(descriptor)

    def words_of(self, synset: Synset) -> list[Word]:
        if synset.id == COMMON_VERB_ROOT:
            return []
        with self._lock:
            handle = self._handle(synset)
            return [self._to_word(sense, synset.id) for sense in handle.senses()]

    def related(self, synset: Synset, relation_type: str) -> list[Synset]:
        if synset.id == COMMON_VERB_ROOT:
            return []
        with self._lock:
            handle = self._handle(synset)
            return [self._to_synset(s) for s in handle.get_related(relation_type)]

    def relation_types(self, synset: Synset) -> list[str]:
        if synset.id == COMMON_VERB_ROOT:
            return []
        with self._lock:
            return list(self._handle(synset).relations())

    def word_relation_types(self, word: Word) -> list[str]:
        with self._lock:
            return list(self._sense(word).relations())

    def related_words(self, word: Word, relation_type: str) -> list[Word]:
        with self._lock:
            return [
                self._to_word(sense, sense.synset().id)
                for sense in self._sense(word).get_related(relation_type)
            ]

    def all_senses(self, pos: str | PartOfSpeech) -> list[Synset]:
        category = PartOfSpeech.parse(pos).category()
        with self._lock:
            return [
                self._to_synset(s)
                for tag in _pos_tags(category)
                for s in self._wn.synsets(pos=tag)
            ]

    def _resolve_lemma(self, query: LemmaQuery) -> Synset:
        categories = (query.pos,) if query.pos is not None else POS_ORDER
        found = []
        for category in categories:
            for tag in _pos_tags(category):
                # exact written form before other case variants
                words = sorted(
                    self._wn.words(query.lemma, pos=tag),
                    key=lambda w: w.lemma() != query.lemma,
                )
                for word in words:
                    found.extend(sense.synset() for sense in word.senses())
        index = query.sense_index or 1
        if len(found) < index:
            raise SenseNotFoundError(f"Sense not found: {_describe(query)!r}")
        return self._to_synset(found[index - 1])

    def _handle(self, synset: Synset) -> Any:
        if synset.handle is not None:
            return synset.handle
        import wn

        try:
            return self._wn.synset(synset.id)
        except wn.Error as e:
            raise SenseNotFoundError(f"Synset not found: {synset.id!r}") from e

    def _sense(self, word: Word) -> Any:
        import wn

        if word.handle is not None:
            return word.handle
        try:
            return self._wn.sense(word.id)
        except wn.Error as e:
            raise SenseNotFoundError(f"Sense not found: {word.id!r}") from e

    @staticmethod
    def _to_word(sense: Any, synset_id: str) -> Word:
        word = sense.word()
        return Word(
            id=sense.id,
            lemma=word.lemma(),
            pos=word.pos,
            synset_id=synset_id,
            handle=sense,
        )

    @staticmethod
    def _to_synset(wn_synset: Any) -> Synset:
        return Synset(
            id=wn_synset.id,
            pos=wn_synset.pos,
            gloss=wn_synset.definition(),
            handle=wn_synset,
        )
