"""
Shared fixtures for the test suite.
"""
import random
import sys
from pathlib import Path

import pytest

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dexsearch.catalog import EvolutionEntry, Species, build_learnset, to_id  # noqa: E402


def _make_species(name, types, tier="OU", color="Red", generation=1, abilities=(),
                  is_mega=False, evos=(), prevo=None, base_species=None, learnset=None):
    """Build a Species from display names, the way catalog files spell them."""
    sid = to_id(name)
    return Species(
        id=sid,
        name=name,
        types=tuple(types),
        tier=tier,
        color=color,
        generation=generation,
        abilities=frozenset(abilities),
        is_mega=is_mega,
        evolutions=tuple(EvolutionEntry(target_id=to_id(e)) for e in evos),
        prevolution_id=to_id(prevo) if prevo else None,
        base_species_id=to_id(base_species) if base_species else sid,
        learnset=build_learnset(learnset) if learnset is not None else None,
    )


@pytest.fixture
def make_species():
    """Factory for hand-built species in small inline catalogs."""
    return _make_species


@pytest.fixture
def catalog():
    """The bundled sample catalog."""
    from dexsearch.catalog_loader import load_catalog
    return load_catalog()


@pytest.fixture
def rng():
    """A seeded RNG so sampled result sets are reproducible."""
    return random.Random(1234)


@pytest.fixture
def search(catalog):
    """Run a private query against the sample catalog and return the names."""
    from dexsearch.search import dex_search

    def _search(query: str, **kwargs):
        return dex_search(catalog, query, **kwargs).names
    return _search
