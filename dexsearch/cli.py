"""
dexsearch.cli – command-line entry point.

Usage:
    dexsearch fire type, !uber
    dexsearch --broadcast mega, fire type
    dexsearch --catalog data/catalog.json --seed 7 lc, water type
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from dexsearch.catalog_loader import load_catalog
from dexsearch.commands import HELP_TEXT
from dexsearch.config import DEFAULT_CATALOG_PATH
from dexsearch.errors import CatalogError, DexSearchError
from dexsearch.search import dex_search

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_QUERY_ERROR = 1
EXIT_CATALOG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dexsearch",
        description="Search the Pokédex catalog with comma-separated parameters.",
        epilog=HELP_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "query",
        nargs="+",
        help="Search parameters, e.g. 'fire type, !uber, flamethrower'",
    )
    parser.add_argument(
        "--catalog", "-c",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help=f"Catalog JSON file (default: {DEFAULT_CATALOG_PATH})",
    )
    parser.add_argument(
        "--broadcast", "-b",
        action="store_true",
        help="Evaluate as a broadcast to a shared room ('all' is refused)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random sample shown when there are many results",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)
    except CatalogError as exc:
        logger.error("Could not load catalog: %s", exc.message)
        return EXIT_CATALOG_ERROR

    query = " ".join(args.query)
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        result = dex_search(catalog, query, broadcast=args.broadcast, rng=rng)
    except DexSearchError as exc:
        print(exc.message)
        return EXIT_QUERY_ERROR

    print(result.render())
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
