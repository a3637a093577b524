"""
filters – reduces the catalog to the species matching a PredicateSet.

Stages, in order:
  1. base admissibility (Unreleased / Illegal never, CAP only on request)
  2. structural flags (mega, fully evolved)
  3. one reduction per active category: moves, types, ability, tier,
     generation, color

Every stage takes the current candidate list and returns a new one; no
stage mutates its input or sees another stage's work in progress.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Tuple

from dexsearch.catalog import Catalog, Move, Species
from dexsearch.config import (
    CAP_TIER,
    INADMISSIBLE_TIERS,
    LC_FORMAT_ID,
    LC_TIER,
    SKETCH_EXCLUDED_MOVES,
    SKETCH_SOURCE,
)
from dexsearch.errors import UnknownMoveError
from dexsearch.predicates import Category, Polarity, PredicateSet, Value

logger = logging.getLogger(__name__)

Candidates = List[Species]


# ── Legality helpers ────────────────────────────────────────────────────────

def is_lc_legal(catalog: Catalog, species: Species) -> bool:
    """
    Little Cup legality computed from evolution shape, not the stored tier.

    A species is LC-legal iff it can evolve, has no prevolution and is not
    on the LC format's ban list.
    """
    return (
        bool(species.evolutions)
        and not species.prevolution_id
        and not catalog.banlist_contains(LC_FORMAT_ID, species.id)
    )


def learning_link(catalog: Catalog, species: Species, move_id: str) -> Species:
    """
    Walk the prevolution chain from *species* until a link knows *move_id*.

    Formes without a learnset of their own (megas) start from their base
    species.  Returns the terminal link: the first whose learnset contains
    the move, whose learnset is missing, or which has no (known)
    prevolution.  Ids already visited end the walk, so malformed cyclic
    data cannot loop.
    """
    current = species if species.learnset is not None else catalog.base_species(species)
    seen = {current.id}
    while current.learnset is not None and move_id not in current.learnset:
        parent = catalog.get_species(current.prevolution_id)
        if parent is None or parent.id in seen:
            break
        seen.add(parent.id)
        current = parent
    return current


def can_learn(catalog: Catalog, species: Species, move: Move) -> bool:
    """True if *species* or one of its prevolutions can learn *move*."""
    learnset: Mapping[str, Tuple[str, ...]] = learning_link(catalog, species, move.id).learnset or {}
    if move.id in learnset:
        return True
    return SKETCH_SOURCE in learnset and move.id not in SKETCH_EXCLUDED_MOVES


# ── Stage 1 & 2 ─────────────────────────────────────────────────────────────

def admissible(species: Species, predicates: PredicateSet) -> bool:
    tier = species.tier.lower()
    if tier in INADMISSIBLE_TIERS:
        return False
    if tier == CAP_TIER:
        return predicates.values(Category.TIER).get(CAP_TIER) is Polarity.REQUIRED
    return True


def passes_structural(species: Species, predicates: PredicateSet) -> bool:
    if predicates.mega is not None and species.is_mega != predicates.mega:
        return False
    if predicates.fully_evolved is not None and species.is_fully_evolved != predicates.fully_evolved:
        return False
    return True


# ── Stage 3: per-category reductions ────────────────────────────────────────

def _whitelist_blacklist(
    candidates: Candidates,
    values: Dict[Value, Polarity],
    memberships: Callable[[Species], Dict[Value, bool]],
) -> Candidates:
    """
    Keep a species unless it matches an excluded value, or required values
    exist and it matches none of them.  *memberships* reports, per
    constrained value, whether the species belongs to it.
    """
    any_required = any(p is Polarity.REQUIRED for p in values.values())
    kept = []
    for species in candidates:
        member = memberships(species)
        if any(member[v] for v, p in values.items() if p is Polarity.EXCLUDED):
            continue
        if any_required and not any(member[v] for v, p in values.items() if p is Polarity.REQUIRED):
            continue
        kept.append(species)
    return kept


def filter_types(candidates: Candidates, predicates: PredicateSet, catalog: Catalog) -> Candidates:
    values = predicates.values(Category.TYPE)
    required = predicates.required(Category.TYPE)
    if len(required) == 2:
        return [
            s for s in candidates
            if len(s.types) == 2 and set(s.types) == required
        ]
    return _whitelist_blacklist(
        candidates, values, lambda s: {t: t in s.types for t in values})


def filter_tier(candidates: Candidates, predicates: PredicateSet, catalog: Catalog) -> Candidates:
    values = predicates.values(Category.TIER)

    def memberships(species: Species) -> Dict[Value, bool]:
        tier = species.tier.lower()
        return {
            v: is_lc_legal(catalog, species) if v == LC_TIER else tier == v
            for v in values
        }

    return _whitelist_blacklist(candidates, values, memberships)


def filter_generation(candidates: Candidates, predicates: PredicateSet, catalog: Catalog) -> Candidates:
    values = predicates.values(Category.GENERATION)
    return _whitelist_blacklist(
        candidates, values, lambda s: {g: s.generation == g for g in values})


def filter_color(candidates: Candidates, predicates: PredicateSet, catalog: Catalog) -> Candidates:
    values = predicates.values(Category.COLOR)
    return _whitelist_blacklist(
        candidates, values, lambda s: {c: s.color.lower() == c for c in values})


def filter_ability(candidates: Candidates, predicates: PredicateSet, catalog: Catalog) -> Candidates:
    values = predicates.values(Category.ABILITY)
    return [
        s for s in candidates
        if all(s.has_ability(a) == (p is Polarity.REQUIRED) for a, p in values.items())
    ]


def has_learn_data(catalog: Catalog, species: Species) -> bool:
    return species.learnset is not None or catalog.base_species(species).learnset is not None


def filter_moves(candidates: Candidates, predicates: PredicateSet, catalog: Catalog) -> Candidates:
    """Species without any learn data are left alone by move constraints."""
    wanted = []
    for name, polarity in predicates.values(Category.MOVE).items():
        move = catalog.lookup_move(str(name))
        if move is None:
            raise UnknownMoveError(str(name))
        wanted.append((move, polarity is Polarity.REQUIRED))
    return [
        s for s in candidates
        if not has_learn_data(catalog, s)
        or all(can_learn(catalog, s, move) == required for move, required in wanted)
    ]


CATEGORY_FILTERS: Tuple[Tuple[Category, Callable[[Candidates, PredicateSet, Catalog], Candidates]], ...] = (
    (Category.MOVE, filter_moves),
    (Category.TYPE, filter_types),
    (Category.ABILITY, filter_ability),
    (Category.TIER, filter_tier),
    (Category.GENERATION, filter_generation),
    (Category.COLOR, filter_color),
)


def filter_catalog(catalog: Catalog, predicates: PredicateSet) -> Candidates:
    """Return every species that survives all active stages."""
    candidates = [
        s for s in catalog.all_species()
        if admissible(s, predicates) and passes_structural(s, predicates)
    ]
    logger.debug("%d of %d species admissible", len(candidates), len(catalog))
    for category, reduce in CATEGORY_FILTERS:
        if not predicates.is_active(category):
            continue
        candidates = reduce(candidates, predicates, catalog)
        logger.debug("%d candidates after %s filter", len(candidates), category.value)
    return candidates
