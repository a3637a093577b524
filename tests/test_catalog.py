"""Unit tests for dexsearch.catalog and dexsearch.catalog_loader."""
import json

import pytest

from dexsearch.catalog import Catalog, to_id
from dexsearch.catalog_loader import catalog_from_dict, load_catalog
from dexsearch.errors import CatalogError


class TestToId:
    def test_strips_punctuation_and_case(self):
        assert to_id("Magikarp's Revenge") == "magikarpsrevenge"
        assert to_id("Charizard-Mega-Y") == "charizardmegay"
        assert to_id("  Volt Tackle ") == "volttackle"


class TestSampleCatalog:
    def test_size(self, catalog):
        assert len(catalog) == 27

    def test_lookups(self, catalog):
        assert catalog.lookup_species("pikachu").name == "Pikachu"
        assert catalog.lookup_move("magikarp's revenge").name == "Magikarp's Revenge"
        assert catalog.lookup_ability("lightning rod").name == "Lightning Rod"
        assert catalog.lookup_species("NotAPokemon") is None
        assert catalog.lookup_move("notamove") is None

    def test_type_exists(self, catalog):
        assert catalog.type_exists("Fire")
        assert catalog.type_exists("fire")
        assert not catalog.type_exists("Sound")

    def test_prevolution_derived_from_evos(self, catalog):
        assert catalog.lookup_species("Ivysaur").prevolution_id == "bulbasaur"
        assert catalog.lookup_species("Raichu").prevolution_id == "pikachu"
        assert catalog.lookup_species("Bulbasaur").prevolution_id is None

    def test_evolution_conditions(self, catalog):
        evo = catalog.lookup_species("Bulbasaur").evolutions[0]
        assert evo.target_id == "ivysaur"
        assert evo.condition == "16"
        assert catalog.lookup_species("Squirtle").evolutions[0].condition == ""

    def test_base_species(self, catalog):
        mega = catalog.lookup_species("Venusaur-Mega")
        assert catalog.base_species(mega).name == "Venusaur"
        pichu = catalog.lookup_species("Pichu")
        assert catalog.base_species(pichu) is pichu

    def test_banlist(self, catalog):
        assert catalog.banlist_contains("lc", "sneasel")
        assert catalog.banlist_contains("LC", "Sneasel")
        assert not catalog.banlist_contains("lc", "murkrow")
        assert not catalog.banlist_contains("ou", "sneasel")

    def test_learnset_is_read_only(self, catalog):
        learnset = catalog.lookup_species("Charmander").learnset
        with pytest.raises(TypeError):
            learnset["surf"] = ("6M",)


class TestSpecies:
    def test_defaults(self, make_species):
        s = make_species("Eevee", ["Normal"], evos=["Vaporeon"])
        assert s.id == "eevee"
        assert s.base_id == "eevee"
        assert s.learnset is None
        assert not s.is_fully_evolved

    def test_has_ability_normalises(self, make_species):
        s = make_species("Gengar", ["Ghost", "Poison"], abilities=["Cursed Body"])
        assert s.has_ability("cursed body")
        assert not s.has_ability("Levitate")


class TestLoader:
    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_missing_species_list(self):
        with pytest.raises(CatalogError):
            catalog_from_dict({"types": ["Fire"]})

    def test_missing_required_key(self):
        with pytest.raises(CatalogError, match="tier"):
            catalog_from_dict({"species": [{"name": "Foo", "types": ["Fire"], "color": "Red", "gen": 1}]})

    def test_too_many_types(self):
        raw = {"name": "Foo", "types": ["Fire", "Water", "Grass"], "tier": "OU", "color": "Red", "gen": 1}
        with pytest.raises(CatalogError):
            catalog_from_dict({"species": [raw]})

    def test_bad_generation(self):
        raw = {"name": "Foo", "types": ["Fire"], "tier": "OU", "color": "Red", "gen": "six"}
        with pytest.raises(CatalogError):
            catalog_from_dict({"species": [raw]})

    def test_round_trip_file(self, tmp_path):
        doc = {
            "types": ["Fire"],
            "moves": ["Ember"],
            "species": [
                {"name": "Fooling", "types": ["Fire"], "tier": "LC", "color": "Red", "gen": 1,
                 "evos": ["Foolord"], "learnset": {"Ember": ["6L1"]}},
                {"name": "Foolord", "types": ["Fire"], "tier": "OU", "color": "Red", "gen": 1},
            ],
        }
        path = tmp_path / "cat.json"
        path.write_text(json.dumps(doc))
        cat = load_catalog(path)
        assert isinstance(cat, Catalog)
        assert cat.lookup_species("Foolord").prevolution_id == "fooling"
        assert "ember" in cat.lookup_species("Fooling").learnset

    def test_dangling_prevolution_is_logged(self, caplog):
        raw = {"name": "Orphan", "types": ["Fire"], "tier": "OU", "color": "Red", "gen": 1, "prevo": "Ghostmon"}
        with caplog.at_level("WARNING"):
            cat = catalog_from_dict({"species": [raw]})
        assert cat.lookup_species("Orphan").prevolution_id == "ghostmon"
        assert "missing from the catalog" in caplog.text

    def test_species_entry_must_be_object(self):
        with pytest.raises(CatalogError, match="not an object"):
            catalog_from_dict({"species": ["Bulbasaur"]})

    def test_evolution_without_target(self):
        raw = {"name": "Foo", "types": ["Fire"], "tier": "LC", "color": "Red", "gen": 1,
               "evos": [{"condition": "16"}]}
        with pytest.raises(CatalogError, match="no target"):
            catalog_from_dict({"species": [raw]})

    def test_evolutions_must_be_a_list(self):
        raw = {"name": "Foo", "types": ["Fire"], "tier": "LC", "color": "Red", "gen": 1, "evos": 3}
        with pytest.raises(CatalogError):
            catalog_from_dict({"species": [raw]})

    def test_learnset_must_be_object(self):
        raw = {"name": "Foo", "types": ["Fire"], "tier": "LC", "color": "Red", "gen": 1,
               "learnset": ["ember"]}
        with pytest.raises(CatalogError, match="learnset"):
            catalog_from_dict({"species": [raw]})

    def test_directory_path(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(tmp_path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"species": ["\xff"]}')
        with pytest.raises(CatalogError):
            load_catalog(path)
