"""
search – the dexsearch engine end to end.

    classify → build predicates → broadcast gate → filter → assemble

Nothing here holds state between calls; the catalog is only read.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from dexsearch.catalog import Catalog
from dexsearch.errors import NotBroadcastableError
from dexsearch.filters import filter_catalog
from dexsearch.predicates import PredicateSet, build_predicates
from dexsearch.results import SearchResult, assemble_results
from dexsearch.tokens import TokenKind, classify_query

logger = logging.getLogger(__name__)


def parse_query(catalog: Catalog, query: str, broadcast: bool = False) -> PredicateSet:
    """Classify *query* and build its predicate set, applying the broadcast gate."""
    tokens = classify_query(catalog, query)
    if broadcast and any(t.kind is TokenKind.ALL for t in tokens):
        raise NotBroadcastableError()
    return build_predicates(tokens)


def dex_search(
    catalog: Catalog,
    query: str,
    broadcast: bool = False,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """Run *query* against *catalog*; raises a DexSearchError subclass on bad input."""
    predicates = parse_query(catalog, query, broadcast=broadcast)
    candidates = filter_catalog(catalog, predicates)
    result = assemble_results(catalog, candidates, show_all=predicates.show_all, rng=rng)
    logger.info("dexsearch %r: %d results (%d shown)", query, result.total, len(result.names))
    return result
