"""
catalog – read-only reference data the search engine runs against.

Species, moves, abilities, the known elemental types and per-format ban
lists.  Evolution links are stored as id references into the catalog, so
walking a prevolution chain is a series of dictionary lookups and never
follows an owning pointer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

_NON_ID_CHARS = re.compile(r"[^a-z0-9]+")


def to_id(name: str) -> str:
    """Normalise a display name to its lookup id ("Magikarp's Revenge" → "magikarpsrevenge")."""
    return _NON_ID_CHARS.sub("", str(name).lower())


# ── Catalog records ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EvolutionEntry:
    """A single evolution path from a species."""
    target_id: str
    condition: str = ""               # level or free-form requirement


@dataclass(frozen=True)
class Species:
    """One catalog entry: a creature form, evolved forms and megas included."""
    id: str
    name: str
    types: Tuple[str, ...]            # 1-2 type names, slot order preserved
    tier: str
    color: str
    generation: int
    abilities: FrozenSet[str] = frozenset()
    is_mega: bool = False
    evolutions: Tuple[EvolutionEntry, ...] = ()
    prevolution_id: Optional[str] = None
    base_species_id: str = ""
    learnset: Optional[Mapping[str, Tuple[str, ...]]] = None

    @property
    def base_id(self) -> str:
        return self.base_species_id or self.id

    @property
    def is_fully_evolved(self) -> bool:
        return not self.evolutions

    def has_ability(self, ability: str) -> bool:
        wanted = to_id(ability)
        return any(to_id(a) == wanted for a in self.abilities)


@dataclass(frozen=True)
class Move:
    id: str
    name: str


@dataclass(frozen=True)
class Ability:
    id: str
    name: str


# ── Catalog ─────────────────────────────────────────────────────────────────

class Catalog:
    """
    Immutable lookup tables shared by every query.

    Nothing on this class mutates after construction, so one instance can
    serve any number of concurrent requests without locking.
    """

    def __init__(
        self,
        species: Iterable[Species],
        moves: Iterable[Move] = (),
        abilities: Iterable[Ability] = (),
        types: Iterable[str] = (),
        banlists: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> None:
        self._species: Mapping[str, Species] = MappingProxyType({s.id: s for s in species})
        self._moves: Mapping[str, Move] = MappingProxyType({m.id: m for m in moves})
        self._abilities: Mapping[str, Ability] = MappingProxyType({a.id: a for a in abilities})
        self._types: Mapping[str, str] = MappingProxyType({to_id(t): t for t in types})
        self._banlists: Mapping[str, FrozenSet[str]] = MappingProxyType({
            to_id(fmt): frozenset(to_id(name) for name in names)
            for fmt, names in (banlists or {}).items()
        })

    def __len__(self) -> int:
        return len(self._species)

    # Species
    def all_species(self) -> List[Species]:
        return list(self._species.values())

    def get_species(self, species_id: Optional[str]) -> Optional[Species]:
        if not species_id:
            return None
        return self._species.get(species_id)

    def lookup_species(self, name: str) -> Optional[Species]:
        return self._species.get(to_id(name))

    def base_species(self, species: Species) -> Species:
        """Return the species' base form, or the species itself if the base is missing."""
        return self._species.get(species.base_id, species)

    # Moves / abilities / types
    def lookup_move(self, name: str) -> Optional[Move]:
        return self._moves.get(to_id(name))

    def lookup_ability(self, name: str) -> Optional[Ability]:
        return self._abilities.get(to_id(name))

    def type_exists(self, name: str) -> bool:
        return to_id(name) in self._types

    def type_name(self, name: str) -> Optional[str]:
        return self._types.get(to_id(name))

    # Formats
    def banlist_contains(self, format_id: str, species_id: str) -> bool:
        return to_id(species_id) in self._banlists.get(to_id(format_id), frozenset())


def build_learnset(entries: Mapping[str, Iterable[str]]) -> Mapping[str, Tuple[str, ...]]:
    """Freeze a move → sources mapping, normalising move keys to ids."""
    frozen: Dict[str, Tuple[str, ...]] = {
        to_id(move): tuple(sources) for move, sources in entries.items()
    }
    return MappingProxyType(frozen)

