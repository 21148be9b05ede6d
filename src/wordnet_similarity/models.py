"""Domain model dataclasses, enums and term descriptors for wordnet-similarity."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from wordnet_similarity.exceptions import TermSyntaxError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PartOfSpeech(str, Enum):
    """Part-of-speech tags for words and synsets."""

    NOUN = "n"
    VERB = "v"
    ADJECTIVE = "a"
    ADVERB = "r"
    ADJECTIVE_SATELLITE = "s"

    def category(self) -> PartOfSpeech:
        """The taxonomy category; satellites belong to the adjectives."""
        if self is PartOfSpeech.ADJECTIVE_SATELLITE:
            return PartOfSpeech.ADJECTIVE
        return self

    @classmethod
    def parse(cls, value: str | PartOfSpeech) -> PartOfSpeech:
        """Accept a tag (``"n"``) or a name (``"noun"``)."""
        if isinstance(value, PartOfSpeech):
            return value
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            pass
        for member in cls:
            if member.name.lower() == text:
                return member
        raise TermSyntaxError(f"Unknown part of speech: {value!r}")


# Lookup order for lemma queries without a POS.
POS_ORDER: tuple[PartOfSpeech, ...] = (
    PartOfSpeech.NOUN,
    PartOfSpeech.VERB,
    PartOfSpeech.ADJECTIVE,
    PartOfSpeech.ADVERB,
)


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Synset:
    """A synset (set of synonymous words sharing one meaning)."""

    id: str
    pos: str | None
    gloss: str | None = None
    handle: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Word:
    """A word (lemma in one part of speech) belonging to a synset."""

    id: str
    lemma: str
    pos: str
    synset_id: str
    handle: Any = field(default=None, compare=False, repr=False)


# Verbs have no universal root; every verb taxonomy is hung under this node.
COMMON_VERB_ROOT = "common-verb-root"
VERB_ROOT = Synset(id=COMMON_VERB_ROOT, pos=PartOfSpeech.VERB.value)


# ---------------------------------------------------------------------------
# Term descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LemmaQuery:
    """A lemma, optionally narrowed to a POS and a 1-based sense index."""

    lemma: str
    pos: PartOfSpeech | None = None
    sense_index: int | None = None


@dataclass(frozen=True, slots=True)
class SynsetRef:
    """A synset addressed by its stable identifier."""

    id: str


@dataclass(frozen=True, slots=True)
class SenseRef:
    """A word sense addressed by its stable identifier."""

    id: str


TermDescriptor = Union[LemmaQuery, SynsetRef, SenseRef]

_SENSE_KEY = re.compile(r"^(.+)#([a-z])#(\d+)$")
_LEMMA_POS = re.compile(r"^(.+)#([a-z])$")


def parse_term(text: str | TermDescriptor) -> TermDescriptor:
    """Parse a textual term into a descriptor.

    Accepted shapes::

        job            LemmaQuery("job")
        job#n          LemmaQuery("job", NOUN)
        job#n#2        LemmaQuery("job", NOUN, 2)
        synset:<id>    SynsetRef(id)
        sense:<id>     SenseRef(id)
    """
    if isinstance(text, (LemmaQuery, SynsetRef, SenseRef)):
        return text
    if not isinstance(text, str):
        raise TermSyntaxError(f"Term must be a string, got {type(text).__name__}")
    term = text.strip()
    if not term:
        raise TermSyntaxError("Empty term")

    if term.startswith("synset:"):
        return SynsetRef(_require_id(term[len("synset:"):], text))
    if term.startswith("sense:"):
        return SenseRef(_require_id(term[len("sense:"):], text))

    m = _SENSE_KEY.match(term)
    if m:
        lemma, pos, index = m.groups()
        sense_index = int(index)
        if sense_index < 1:
            raise TermSyntaxError(f"Sense index must be >= 1: {text!r}")
        return LemmaQuery(lemma, _pos_letter(pos, text), sense_index)

    m = _LEMMA_POS.match(term)
    if m:
        lemma, pos = m.groups()
        return LemmaQuery(lemma, _pos_letter(pos, text))

    if "#" in term:
        raise TermSyntaxError(f"Malformed term: {text!r}")
    return LemmaQuery(term)


def _pos_letter(letter: str, text: str) -> PartOfSpeech:
    try:
        return PartOfSpeech(letter)
    except ValueError:
        raise TermSyntaxError(
            f"Unknown part of speech {letter!r} in {text!r}"
        ) from None


def _require_id(value: str, text: str) -> str:
    value = value.strip()
    if not value:
        raise TermSyntaxError(f"Missing identifier in {text!r}")
    return value
