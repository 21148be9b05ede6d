"""
Batch scoring of term pairs read from YAML files.

A batch file names the measures to compute, optional taxonomy depth seeds
and the pairs to score::

    measures: [path, lch, wup]
    depths: {n: 20, v: 14}
    pairs:
      - [job#n#2, task#n#1]
      - {term1: hartford#n#1, term2: city#n#1}
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from .config import parse_depth_seeds
from .depth import DEPTH_CACHE, TaxonomyDepthCache
from .dictionary import Dictionary
from .exceptions import WordnetSimilarityError
from .models import PartOfSpeech
from .semantic import lch_similarity, path_similarity, wup_similarity

logger = logging.getLogger(__name__)

MEASURES: Tuple[str, ...] = ("path", "lch", "wup")


class ParseError(Exception):
    """Error parsing a batch file."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(message)


# =============================================================================
# Data classes
# =============================================================================

@dataclass
class BatchRequest:
    """A parsed batch file."""
    pairs: List[Tuple[str, str]]
    measures: Tuple[str, ...] = MEASURES
    depths: Dict[PartOfSpeech, int] = field(default_factory=dict)
    source_file: Optional[Path] = None


@dataclass
class PairResult:
    """Scores of one pair; measures that failed are listed in ``errors``."""
    index: int
    term1: str
    term2: str
    scores: Dict[str, float] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass
class BatchResult:
    """Result of scoring a batch request."""
    results: List[PairResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.success)


# =============================================================================
# Parsing
# =============================================================================

def load_batch_request(
    source: Union[str, Path, Dict[str, Any]],
) -> BatchRequest:
    """Load a batch request from a YAML file, YAML string or dictionary.

    Args:
        source: Path to YAML file, YAML string, or parsed dictionary

    Returns:
        BatchRequest object

    Raises:
        ParseError: If the content cannot be parsed or is invalid
        FileNotFoundError: If the file does not exist
    """
    source_path: Optional[Path] = None

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and _is_file_path(source)):
        source_path = Path(source)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {source_path}")
        with open(source_path, "r", encoding="utf-8") as f:
            data = _load_yaml(f.read(), "Empty YAML file")
    else:
        data = _load_yaml(source, "Empty YAML content")

    return _parse_batch_request(data, source_path)


def _is_file_path(s: str) -> bool:
    """Check if a string looks like a file path."""
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _load_yaml(text: str, empty_message: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line_num = mark.line + 1 if mark else None
        raise ParseError(f"Invalid YAML: {e}", line=line_num) from e

    if data is None:
        raise ParseError(empty_message)
    if not isinstance(data, dict):
        raise ParseError("YAML root must be a mapping (dictionary)")
    return data


def _parse_batch_request(
    data: Dict[str, Any],
    source_path: Optional[Path] = None,
) -> BatchRequest:
    measures_data = data.get("measures", list(MEASURES))
    if isinstance(measures_data, str):
        measures_data = [measures_data]
    if not isinstance(measures_data, list) or not measures_data:
        raise ParseError("Field 'measures' must be a non-empty list")
    measures = []
    for name in measures_data:
        if name not in MEASURES:
            raise ParseError(
                f"Unknown measure {name!r} (expected one of {', '.join(MEASURES)})"
            )
        if name not in measures:
            measures.append(name)

    try:
        depths = parse_depth_seeds(data.get("depths"))
    except WordnetSimilarityError as e:
        raise ParseError(f"Field 'depths': {e}") from e

    pairs_data = data.get("pairs")
    if pairs_data is None:
        raise ParseError("Missing required field: 'pairs'")
    if not isinstance(pairs_data, list):
        raise ParseError("Field 'pairs' must be a list")
    if len(pairs_data) == 0:
        raise ParseError("Field 'pairs' cannot be empty")

    return BatchRequest(
        pairs=[_parse_pair(i, item) for i, item in enumerate(pairs_data)],
        measures=tuple(measures),
        depths=depths,
        source_file=source_path,
    )


def _parse_pair(index: int, item: Any) -> Tuple[str, str]:
    if isinstance(item, dict):
        missing = [k for k in ("term1", "term2") if not item.get(k)]
        if missing:
            raise ParseError(
                f"Pair #{index + 1}: Missing required field '{missing[0]}'"
            )
        terms = [item["term1"], item["term2"]]
    elif isinstance(item, list) and len(item) == 2:
        terms = item
    else:
        raise ParseError(
            f"Pair #{index + 1} must be a two-item list or a mapping "
            "with 'term1' and 'term2'"
        )
    if not all(isinstance(t, str) and t.strip() for t in terms):
        raise ParseError(f"Pair #{index + 1}: Terms must be non-empty strings")
    return terms[0].strip(), terms[1].strip()


# =============================================================================
# Scoring
# =============================================================================

def score_pairs(
    dictionary: Dictionary,
    request: BatchRequest,
    depth_cache: TaxonomyDepthCache = DEPTH_CACHE,
) -> BatchResult:
    """Score every pair of a batch request.

    Depth seeds of the request are stored in ``depth_cache`` first.  A
    failing measure is recorded on its pair and scoring carries on.

    Args:
        dictionary: Dictionary the terms are resolved against
        request: Parsed batch request
        depth_cache: Cache consulted by the Leacock-Chodorow measure

    Returns:
        BatchResult with one PairResult per pair, in request order
    """
    if request.depths:
        depth_cache.seed(request.depths)

    calculators: Dict[str, Callable[[Any, Any], float]] = {
        "path": lambda t1, t2: path_similarity(dictionary, t1, t2),
        "lch": lambda t1, t2: lch_similarity(
            dictionary, t1, t2, depth_cache=depth_cache
        ),
        "wup": lambda t1, t2: wup_similarity(dictionary, t1, t2),
    }

    start = time.monotonic()
    result = BatchResult()
    for index, (term1, term2) in enumerate(request.pairs):
        pair = PairResult(index=index, term1=term1, term2=term2)
        try:
            synset1 = dictionary.resolve(term1)
            synset2 = dictionary.resolve(term2)
        except WordnetSimilarityError as e:
            for measure in request.measures:
                pair.errors[measure] = str(e)
        else:
            for measure in request.measures:
                try:
                    pair.scores[measure] = calculators[measure](synset1, synset2)
                except WordnetSimilarityError as e:
                    pair.errors[measure] = str(e)
        if pair.errors:
            logger.warning("Pair #%d (%s, %s) failed: %s", index + 1, term1, term2, pair.errors)
        result.results.append(pair)

    result.duration_seconds = time.monotonic() - start
    return result
