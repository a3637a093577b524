"""
catalog_loader – builds a Catalog from a JSON data file.

Document layout::

    {
      "types":     ["Normal", "Fire", ...],
      "abilities": ["Blaze", ...],
      "moves":     ["Flamethrower", ...],
      "formats":   {"lc": {"banlist": ["Sneasel", ...]}},
      "species": [
        {"name": "Charmander", "types": ["Fire"], "tier": "LC",
         "color": "Red", "gen": 1, "abilities": ["Blaze", "Solar Power"],
         "evos": ["Charmeleon"], "learnset": {"ember": ["6L7"]}},
        ...
      ]
    }

Optional species keys: ``mega``, ``evos``, ``prevo``, ``baseSpecies``,
``learnset``.  A missing ``prevo`` is filled in from the parent's ``evos``
and a missing ``baseSpecies`` defaults to the species itself.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from dexsearch.catalog import (
    Ability,
    Catalog,
    EvolutionEntry,
    Move,
    Species,
    build_learnset,
    to_id,
)
from dexsearch.config import DEFAULT_CATALOG_PATH
from dexsearch.errors import CatalogError

logger = logging.getLogger(__name__)

_REQUIRED_SPECIES_KEYS = ("name", "types", "tier", "color", "gen")


def _parse_evolutions(raw: Any) -> List[EvolutionEntry]:
    if raw is not None and not isinstance(raw, list):
        raise CatalogError(f"Evolutions must be a list, got {raw!r}")
    entries = []
    for evo in raw or []:
        if isinstance(evo, dict):
            if "target" not in evo:
                raise CatalogError(f"Evolution entry {evo!r} has no target")
            entries.append(EvolutionEntry(
                target_id=to_id(evo["target"]),
                condition=str(evo.get("condition", "")),
            ))
        else:
            entries.append(EvolutionEntry(target_id=to_id(evo)))
    return entries


def _parse_species(raw: Dict[str, Any], prevos: Dict[str, str]) -> Species:
    missing = [k for k in _REQUIRED_SPECIES_KEYS if k not in raw]
    if missing:
        raise CatalogError(
            f"Species entry {raw.get('name', '?')!r} is missing {', '.join(missing)}"
        )
    if not isinstance(raw["types"], list):
        raise CatalogError(f"Species {raw['name']!r} types must be a list")
    types = tuple(raw["types"])
    if not 1 <= len(types) <= 2:
        raise CatalogError(f"Species {raw['name']!r} must have one or two types, got {len(types)}")

    sid = to_id(raw["name"])
    prevo = raw.get("prevo")
    learnset = raw.get("learnset")
    if learnset is not None and not isinstance(learnset, dict):
        raise CatalogError(f"Species {raw['name']!r} learnset must be an object")
    try:
        generation = int(raw["gen"])
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Species {raw['name']!r} has a bad generation: {raw['gen']!r}") from exc

    return Species(
        id=sid,
        name=raw["name"],
        types=types,
        tier=str(raw["tier"]),
        color=str(raw["color"]),
        generation=generation,
        abilities=frozenset(raw.get("abilities", [])),
        is_mega=bool(raw.get("mega", False)),
        evolutions=tuple(_parse_evolutions(raw.get("evos"))),
        prevolution_id=to_id(prevo) if prevo else prevos.get(sid),
        base_species_id=to_id(raw.get("baseSpecies") or sid),
        learnset=build_learnset(learnset) if learnset is not None else None,
    )


def catalog_from_dict(data: Dict[str, Any]) -> Catalog:
    """Build a Catalog from an already-decoded data document."""
    if not isinstance(data, dict) or not isinstance(data.get("species"), list):
        raise CatalogError("Catalog data must be an object with a 'species' list")

    raw_species = data["species"]
    for raw in raw_species:
        if not isinstance(raw, dict):
            raise CatalogError(f"Species entry {raw!r} is not an object")

    # Derive prevolution back-references from forward evolution edges
    prevos: Dict[str, str] = {}
    for raw in raw_species:
        for evo in _parse_evolutions(raw.get("evos")):
            prevos.setdefault(evo.target_id, to_id(raw.get("name", "")))

    species = [_parse_species(raw, prevos) for raw in raw_species]
    known = {s.id for s in species}
    for s in species:
        if s.prevolution_id and s.prevolution_id not in known:
            logger.warning("%s has prevolution %r missing from the catalog", s.name, s.prevolution_id)
        for evo in s.evolutions:
            if evo.target_id not in known:
                logger.warning("%s evolves into %r missing from the catalog", s.name, evo.target_id)

    banlists = {
        fmt: (entry or {}).get("banlist", [])
        for fmt, entry in (data.get("formats") or {}).items()
    }

    catalog = Catalog(
        species=species,
        moves=(Move(id=to_id(m), name=m) for m in data.get("moves", [])),
        abilities=(Ability(id=to_id(a), name=a) for a in data.get("abilities", [])),
        types=data.get("types", []),
        banlists=banlists,
    )
    logger.info(
        "Catalog loaded: %d species, %d moves, %d abilities, %d formats",
        len(species), len(data.get("moves", [])), len(data.get("abilities", [])), len(banlists),
    )
    return catalog


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """Read and build the catalog stored at *path* (default: bundled sample data)."""
    path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise CatalogError(f"Catalog file not found: {path}") from exc
    except OSError as exc:
        raise CatalogError(f"Catalog file {path} could not be read: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogError(f"Catalog file {path} is not valid JSON: {exc}") from exc
    logger.debug("Parsing catalog from %s", path)
    return catalog_from_dict(data)
