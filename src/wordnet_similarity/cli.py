"""
Command-line interface for WordNet similarity scoring.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from . import __version__
from .batch import ParseError, load_batch_request, score_pairs
from .config import default_db_path, load_depth_seeds, parse_depth_seeds
from .depth import DEPTH_CACHE, taxonomy_max_depth
from .dictionary import SqliteDictionary, WnDictionary
from .exceptions import WordnetSimilarityError
from .models import PartOfSpeech
from .semantic import (
    lch_similarity,
    least_common_subsumer,
    path_similarity,
    wup_similarity,
)

_MEASURES = {
    "path": path_similarity,
    "lch": lch_similarity,
    "wup": wup_similarity,
}


def main(argv: Optional[list] = None) -> int:
    """Main entry point for wn-similarity CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        _seed_depths(args)
        return args.func(args)
    except ParseError as e:
        print(f"[PARSE ERROR] {e}")
        if e.line:
            print(f"              Line: {e.line}")
        return 1
    except (WordnetSimilarityError, FileNotFoundError) as e:
        print(f"[ERROR] {e}")
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wn-similarity",
        description="Taxonomic similarity of WordNet senses",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="SQLite store to read (default: $WN_SIMILARITY_DB or ~/.wn_similarity.db)",
    )
    parser.add_argument(
        "--lexicon",
        type=str,
        help="Use a lexicon installed with wn (e.g. omw-en:1.4) instead of the store",
    )
    parser.add_argument(
        "--depth",
        action="append",
        default=[],
        metavar="POS=N",
        help="Known taxonomy depth for a part of speech (repeatable)",
    )
    parser.add_argument(
        "--depths",
        type=Path,
        metavar="FILE",
        help="YAML mapping of part of speech to taxonomy depth",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    for name, help_text in (
        ("path", "Path distance similarity"),
        ("lch", "Leacock-Chodorow similarity"),
        ("wup", "Wu-Palmer similarity"),
        ("lcs", "Least common subsumer of two terms"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("term1", help="First term (e.g. job#n#2)")
        sub.add_argument("term2", help="Second term")
        sub.set_defaults(func=cmd_lcs if name == "lcs" else cmd_score)

    depth_parser = subparsers.add_parser(
        "depth",
        help="Maximum taxonomy depth of a part of speech",
    )
    depth_parser.add_argument("pos", help="Part of speech (n, v, a, r or a name)")
    depth_parser.set_defaults(func=cmd_depth)

    import_parser = subparsers.add_parser(
        "import",
        help="Load a WN-LMF file or an installed wn lexicon into the store",
    )
    source = import_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file", type=Path, nargs="?", help="WN-LMF XML file")
    source.add_argument(
        "--from-wn",
        metavar="LEXICON",
        help="Lexicon specifier installed with wn (e.g. oewn:2024)",
    )
    import_parser.set_defaults(func=cmd_import)

    batch_parser = subparsers.add_parser(
        "batch",
        help="Score the pairs listed in a YAML file",
    )
    batch_parser.add_argument(
        "file",
        type=Path,
        help="YAML file containing pairs",
    )
    batch_parser.set_defaults(func=cmd_batch)

    return parser


def _seed_depths(args: argparse.Namespace) -> None:
    seeds: Dict[PartOfSpeech, int] = {}
    if args.depths:
        seeds.update(load_depth_seeds(args.depths))
    for item in args.depth:
        pos, sep, value = item.partition("=")
        if not sep or not value.strip().isdigit():
            raise WordnetSimilarityError(f"Expected POS=N, got {item!r}")
        seeds.update(parse_depth_seeds({pos.strip(): int(value)}))
    if seeds:
        DEPTH_CACHE.seed(seeds)


def _open_dictionary(args: argparse.Namespace):
    if args.lexicon:
        return WnDictionary(args.lexicon)
    db_path = args.db or default_db_path()
    if str(db_path) != ":memory:" and not Path(db_path).exists():
        raise FileNotFoundError(
            f"Database not found: {db_path} (run 'wn-similarity import' first)"
        )
    return SqliteDictionary(db_path)


def _close(dictionary) -> None:
    if isinstance(dictionary, SqliteDictionary):
        dictionary.close()


def cmd_score(args: argparse.Namespace) -> int:
    """Handle path, lch and wup commands."""
    dictionary = _open_dictionary(args)
    try:
        score = _MEASURES[args.command](dictionary, args.term1, args.term2)
    finally:
        _close(dictionary)
    print(f"{score:.6f}")
    return 0


def cmd_lcs(args: argparse.Namespace) -> int:
    """Handle lcs command."""
    dictionary = _open_dictionary(args)
    try:
        lcs = least_common_subsumer(dictionary, args.term1, args.term2)
        lemmas = [w.lemma for w in dictionary.words_of(lcs)]
    finally:
        _close(dictionary)
    print(lcs.id)
    if lemmas:
        print(f"  Words: {', '.join(lemmas)}")
    if lcs.gloss:
        print(f"  Gloss: {lcs.gloss}")
    return 0


def cmd_depth(args: argparse.Namespace) -> int:
    """Handle depth command."""
    pos = PartOfSpeech.parse(args.pos).category()
    dictionary = _open_dictionary(args)
    try:
        depth = taxonomy_max_depth(dictionary, pos)
    finally:
        _close(dictionary)
    print(depth)
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """Handle import command."""
    if args.lexicon:
        print("[ERROR] --lexicon cannot be combined with import")
        return 1
    db_path = args.db or default_db_path()
    with SqliteDictionary(db_path) as dictionary:
        if args.from_wn:
            print(f"Importing {args.from_wn} from wn into {db_path}...")
            dictionary.import_wn(args.from_wn)
        else:
            print(f"Importing {args.file} into {db_path}...")
            dictionary.import_lmf(args.file)
    print("Done.")
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Handle batch command."""
    request = load_batch_request(args.file)
    dictionary = _open_dictionary(args)
    try:
        result = score_pairs(dictionary, request)
    finally:
        _close(dictionary)

    header = "  ".join(f"{m:>10}" for m in request.measures)
    print(f"{'#':<4} {'term1':<20} {'term2':<20} {header}")
    for pair in result.results:
        cells: List[str] = []
        for measure in request.measures:
            if measure in pair.scores:
                cells.append(f"{pair.scores[measure]:>10.6f}")
            else:
                cells.append(f"{'error':>10}")
        print(
            f"{pair.index + 1:<4} {pair.term1:<20} {pair.term2:<20} "
            + "  ".join(cells)
        )
        for measure, message in pair.errors.items():
            print(f"     [ERROR] {measure}: {message}")

    print(f"\nResults:")
    print(f"  Total:   {result.total_count}")
    print(f"  Success: {result.success_count}")
    print(f"  Failed:  {result.failure_count}")
    print(f"  Time:    {result.duration_seconds:.2f}s")

    return 1 if result.failure_count else 0


if __name__ == "__main__":
    sys.exit(main())
