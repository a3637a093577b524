"""
results – turns filtered candidates into the bounded reply.

Evolutionary families are collapsed onto an already-present base form,
then the names are either sorted in full or sampled down to RESULT_LIMIT
with a note saying how many were left out.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from dexsearch.catalog import Catalog, Species
from dexsearch.config import NO_RESULTS_MESSAGE, RESULT_LIMIT


@dataclass
class SearchResult:
    names: List[str] = field(default_factory=list)   # displayed names
    total: int = 0                                   # names after dedup
    show_all: bool = False

    @property
    def omitted(self) -> int:
        return self.total - len(self.names)

    @property
    def truncated(self) -> bool:
        return self.omitted > 0

    def render(self) -> str:
        if not self.names:
            return NO_RESULTS_MESSAGE
        text = ", ".join(self.names)
        if self.truncated:
            text += (
                f", and {self.omitted} more. Redo the search with 'all' "
                "as a search parameter to show all results."
            )
        return text


def dedupe_families(catalog: Catalog, candidates: Iterable[Species]) -> List[str]:
    """
    Map candidates to display names, dropping any whose base species'
    name is also present.
    """
    candidates = list(candidates)
    names = [s.name for s in candidates]
    present = set(names)
    kept = []
    for species in candidates:
        base_name = catalog.base_species(species).name
        if species.name != base_name and base_name in present:
            continue
        kept.append(species.name)
    return kept


def assemble_results(
    catalog: Catalog,
    candidates: Iterable[Species],
    show_all: bool = False,
    rng: Optional[random.Random] = None,
    limit: int = RESULT_LIMIT,
) -> SearchResult:
    names = dedupe_families(catalog, candidates)
    if show_all or len(names) <= limit:
        return SearchResult(names=sorted(names), total=len(names), show_all=show_all)
    rng = rng or random.Random()
    return SearchResult(names=rng.sample(names, limit), total=len(names), show_all=show_all)
