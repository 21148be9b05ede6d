"""Custom exception hierarchy for wordnet-similarity."""


class WordnetSimilarityError(Exception):
    """Base exception for all wordnet-similarity errors."""


class EntityNotFoundError(WordnetSimilarityError):
    """Entity doesn't exist in the dictionary."""


class SenseNotFoundError(EntityNotFoundError):
    """A term could not be resolved to a sense."""


class TermSyntaxError(WordnetSimilarityError):
    """Malformed term descriptor (bad POS letter, sense index < 1)."""


class PartOfSpeechMismatchError(WordnetSimilarityError):
    """Both terms of a Leacock-Chodorow comparison must share a POS."""


class NoCommonSubsumerError(WordnetSimilarityError):
    """The two senses have no shared ancestor in the taxonomy."""


class TaxonomyError(WordnetSimilarityError):
    """Hypernym traversal exceeded the depth bound (malformed data)."""


class DuplicateEntityError(WordnetSimilarityError):
    """Entity with same ID already exists."""


class DataImportError(WordnetSimilarityError):
    """Failed to import data (malformed XML, etc.)."""


class DatabaseError(WordnetSimilarityError):
    """Schema version mismatch, connection failure."""
