"""
Taxonomic similarity of WordNet senses.

Example usage:
    from wordnet_similarity import SqliteDictionary, wup_similarity

    with SqliteDictionary("wordnet.db") as dictionary:
        print(wup_similarity(dictionary, "job#n#2", "task#n#1"))
"""

__version__ = "0.1.0"

from .exceptions import (
    WordnetSimilarityError as WordnetSimilarityError,
    EntityNotFoundError as EntityNotFoundError,
    SenseNotFoundError as SenseNotFoundError,
    TermSyntaxError as TermSyntaxError,
    PartOfSpeechMismatchError as PartOfSpeechMismatchError,
    NoCommonSubsumerError as NoCommonSubsumerError,
    TaxonomyError as TaxonomyError,
    DuplicateEntityError as DuplicateEntityError,
    DataImportError as DataImportError,
    DatabaseError as DatabaseError,
)

from .models import (
    PartOfSpeech as PartOfSpeech,
    Synset as Synset,
    Word as Word,
    LemmaQuery as LemmaQuery,
    SynsetRef as SynsetRef,
    SenseRef as SenseRef,
    COMMON_VERB_ROOT as COMMON_VERB_ROOT,
    VERB_ROOT as VERB_ROOT,
    parse_term as parse_term,
)

from .dictionary import (
    Dictionary as Dictionary,
    RelationalDictionary as RelationalDictionary,
    SqliteDictionary as SqliteDictionary,
    WnDictionary as WnDictionary,
)

from .depth import (
    DEPTH_CACHE as DEPTH_CACHE,
    TaxonomyDepthCache as TaxonomyDepthCache,
    taxonomy_max_depth as taxonomy_max_depth,
)

from .graph import (
    build_graph as build_graph,
    hypernym_paths as hypernym_paths,
    shortest_path_to_root as shortest_path_to_root,
)

from .semantic import (
    LCH_NO_PATH as LCH_NO_PATH,
    path_similarity as path_similarity,
    lch_similarity as lch_similarity,
    wup_similarity as wup_similarity,
    least_common_subsumer as least_common_subsumer,
)

from .traversal import (
    hypernyms as hypernyms,
    hypernym_instances as hypernym_instances,
    instances as instances,
    lexical_relations as lexical_relations,
    semantic_relations as semantic_relations,
    synonyms as synonyms,
)

# Batch module - import as submodule
from . import batch

__all__ = [
    "batch",
    # Exceptions
    "WordnetSimilarityError",
    "EntityNotFoundError",
    "SenseNotFoundError",
    "TermSyntaxError",
    "PartOfSpeechMismatchError",
    "NoCommonSubsumerError",
    "TaxonomyError",
    "DuplicateEntityError",
    "DataImportError",
    "DatabaseError",
    # Model
    "PartOfSpeech",
    "Synset",
    "Word",
    "LemmaQuery",
    "SynsetRef",
    "SenseRef",
    "COMMON_VERB_ROOT",
    "VERB_ROOT",
    "parse_term",
    # Dictionaries
    "Dictionary",
    "RelationalDictionary",
    "SqliteDictionary",
    "WnDictionary",
    # Depth cache
    "DEPTH_CACHE",
    "TaxonomyDepthCache",
    "taxonomy_max_depth",
    # Graphs and paths
    "build_graph",
    "hypernym_paths",
    "shortest_path_to_root",
    # Similarity
    "LCH_NO_PATH",
    "path_similarity",
    "lch_similarity",
    "wup_similarity",
    "least_common_subsumer",
    # Traversals
    "hypernyms",
    "hypernym_instances",
    "instances",
    "lexical_relations",
    "semantic_relations",
    "synonyms",
]
