"""Import pipeline for wordnet-similarity."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Any

from wordnet_similarity import db as _db
from wordnet_similarity.exceptions import (
    DataImportError,
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)


def import_from_lmf(conn: sqlite3.Connection, source: str | Path) -> None:
    """Import data from a WN-LMF XML file into the store."""
    import wn.lmf

    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"File not found: {source}")

    try:
        resource = wn.lmf.load(str(source))
    except Exception as e:
        raise DataImportError(f"Failed to parse XML: {e}") from e

    import_resource(conn, resource)  # type: ignore[arg-type]


def import_from_wn(conn: sqlite3.Connection, specifier: str) -> None:
    """Import a lexicon installed in the wn library's database.

    The lexicon is exported to a temporary WN-LMF file and read back, so
    the store only depends on wn's public export format.
    """
    import wn
    import wn.lmf

    target = None
    for lex in wn.lexicons():
        if lex.specifier() == specifier or lex.id == specifier:
            target = lex
            break
    if target is None:
        raise EntityNotFoundError(f"Lexicon not found in wn: {specifier!r}")

    with tempfile.NamedTemporaryFile(suffix=".xml", delete=False) as tmp:
        tmp_path = tmp.name

    try:
        wn.export([target], tmp_path)
        resource = wn.lmf.load(tmp_path)
        import_resource(conn, resource)  # type: ignore[arg-type]
    finally:
        os.unlink(tmp_path)


def import_resource(conn: sqlite3.Connection, resource: dict) -> None:
    """Import a LexicalResource dict into the store."""
    with conn:
        for lex_data in resource.get("lexicons", []):
            _LexiconImporter(conn, lex_data).run()


class _LexiconImporter:
    """Helper class to import a lexicon."""

    def __init__(self, conn: sqlite3.Connection, lex: dict) -> None:
        self.conn = conn
        self.lex = lex
        self.lex_rowid: int = -1
        self.synset_id_to_rowid: dict[str, int] = {}
        self.sense_id_to_rowid: dict[str, int] = {}
        self.rel_type_map: dict[str, int] = {}

    def run(self) -> None:
        self._create_lexicon_record()
        self._ensure_relation_types()
        self._import_synsets()
        self._import_entries()
        self._import_relations()
        self._import_sense_relations()
        logger.info(
            "Imported lexicon %s:%s (%d synsets)",
            self.lex["id"], self.lex["version"], len(self.synset_id_to_rowid),
        )

    def _create_lexicon_record(self) -> None:
        lex_id = self.lex["id"]
        version = self.lex["version"]
        specifier = f"{lex_id}:{version}"

        existing = self.conn.execute(
            "SELECT 1 FROM lexicons WHERE id = ? AND version = ?",
            (lex_id, version),
        ).fetchone()
        if existing:
            raise DuplicateEntityError(
                f"Lexicon {lex_id}:{version} already exists"
            )

        cur = self.conn.execute(
            "INSERT INTO lexicons "
            "(specifier, id, label, language, email, license, version, url) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (specifier, lex_id, self.lex.get("label") or lex_id,
             self.lex.get("language") or "", self.lex.get("email") or "",
             self.lex.get("license") or "", version,
             self.lex.get("url") or None),
        )
        self.lex_rowid = cur.lastrowid

    def _ensure_relation_types(self) -> None:
        for syn in self.lex.get("synsets", []):
            for r in syn.get("relations", []):
                if r["relType"] not in self.rel_type_map:
                    self.rel_type_map[r["relType"]] = (
                        _db.get_or_create_relation_type(self.conn, r["relType"])
                    )

    def _import_synsets(self) -> None:
        entry_pos = self._member_pos_by_synset()
        for syn in self.lex.get("synsets", []):
            syn_id = syn["id"]
            pos = syn.get("partOfSpeech") or entry_pos.get(syn_id)
            cur = self.conn.execute(
                "INSERT INTO synsets (id, lexicon_rowid, pos) VALUES (?, ?, ?)",
                (syn_id, self.lex_rowid, pos),
            )
            rowid = cur.lastrowid
            self.synset_id_to_rowid[syn_id] = rowid

            definitions = [
                (self.lex_rowid, rowid, d.get("text", ""), d.get("language") or None)
                for d in syn.get("definitions", [])
            ]
            if definitions:
                self.conn.executemany(
                    "INSERT INTO definitions "
                    "(lexicon_rowid, synset_rowid, definition, language) "
                    "VALUES (?, ?, ?, ?)",
                    definitions,
                )

    def _member_pos_by_synset(self) -> dict[str, str]:
        """POS of the first entry pointing at each synset (LMF 1.0 fallback)."""
        result: dict[str, str] = {}
        for entry in self.lex.get("entries", []):
            pos = entry["lemma"].get("partOfSpeech")
            for sense in entry.get("senses", []):
                result.setdefault(sense["synset"], pos)
        return result

    def _import_entries(self) -> None:
        members = {
            syn["id"]: list(syn.get("members") or [])
            for syn in self.lex.get("synsets", [])
        }
        synset_fill: dict[str, int] = {}

        for entry in self.lex.get("entries", []):
            lemma = entry["lemma"]
            cur = self.conn.execute(
                "INSERT INTO entries (id, lexicon_rowid, pos) VALUES (?, ?, ?)",
                (entry["id"], self.lex_rowid, lemma["partOfSpeech"]),
            )
            entry_rowid = cur.lastrowid

            written = [lemma["writtenForm"]] + [
                f["writtenForm"] for f in entry.get("forms", [])
            ]
            seen_forms: set[str] = set()
            for rank, form in enumerate(written):
                if form in seen_forms:
                    continue
                seen_forms.add(form)
                self.conn.execute(
                    "INSERT INTO forms "
                    "(lexicon_rowid, entry_rowid, form, normalized_form, rank) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (self.lex_rowid, entry_rowid, form,
                     _db.normalize_form(form), rank),
                )

            for position, sense in enumerate(entry.get("senses", []), start=1):
                synset_id = sense["synset"]
                synset_rowid = self.synset_id_to_rowid.get(synset_id)
                if synset_rowid is None:
                    raise DataImportError(
                        f"Sense {sense['id']!r} points to unknown synset {synset_id!r}"
                    )
                entry_rank = sense.get("n") or position
                order = members.get(synset_id, [])
                if sense["id"] in order:
                    synset_rank = order.index(sense["id"]) + 1
                else:
                    synset_fill[synset_id] = synset_fill.get(synset_id, len(order)) + 1
                    synset_rank = synset_fill[synset_id]
                cur = self.conn.execute(
                    "INSERT INTO senses "
                    "(id, lexicon_rowid, entry_rowid, entry_rank, "
                    "synset_rowid, synset_rank) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (sense["id"], self.lex_rowid, entry_rowid, entry_rank,
                     synset_rowid, synset_rank),
                )
                self.sense_id_to_rowid[sense["id"]] = cur.lastrowid

    def _import_relations(self) -> None:
        params: list[tuple[Any, ...]] = []
        for syn in self.lex.get("synsets", []):
            source_rowid = self.synset_id_to_rowid[syn["id"]]
            for r in syn.get("relations", []):
                target_rowid = self.synset_id_to_rowid.get(r["target"])
                if target_rowid is None:
                    logger.warning(
                        "Skipping %s relation from %s to unknown synset %s",
                        r["relType"], syn["id"], r["target"],
                    )
                    continue
                params.append((
                    self.lex_rowid, source_rowid, target_rowid,
                    self.rel_type_map[r["relType"]],
                ))
        if params:
            self.conn.executemany(
                "INSERT OR IGNORE INTO synset_relations "
                "(lexicon_rowid, source_rowid, target_rowid, type_rowid) "
                "VALUES (?, ?, ?, ?)",
                params,
            )

    def _import_sense_relations(self) -> None:
        params: list[tuple[Any, ...]] = []
        for entry in self.lex.get("entries", []):
            for sense in entry.get("senses", []):
                source_rowid = self.sense_id_to_rowid[sense["id"]]
                for r in sense.get("relations", []):
                    target_rowid = self.sense_id_to_rowid.get(r["target"])
                    if target_rowid is None:
                        logger.warning(
                            "Skipping %s relation from %s to unknown sense %s",
                            r["relType"], sense["id"], r["target"],
                        )
                        continue
                    if r["relType"] not in self.rel_type_map:
                        self.rel_type_map[r["relType"]] = (
                            _db.get_or_create_relation_type(self.conn, r["relType"])
                        )
                    params.append((
                        self.lex_rowid, source_rowid, target_rowid,
                        self.rel_type_map[r["relType"]],
                    ))
        if params:
            self.conn.executemany(
                "INSERT OR IGNORE INTO sense_relations "
                "(lexicon_rowid, source_rowid, target_rowid, type_rowid) "
                "VALUES (?, ?, ?, ?)",
                params,
            )
