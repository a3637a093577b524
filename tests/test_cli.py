"""Tests for the dexsearch command-line entry point."""
import pytest

from dexsearch.cli import EXIT_CATALOG_ERROR, EXIT_OK, EXIT_QUERY_ERROR, build_parser, main


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["ou"])
        assert args.query == ["ou"]
        assert args.broadcast is False
        assert args.seed is None

    def test_query_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_search(self, capsys):
        assert main(["fire", "type,", "!water", "type"]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "Charizard, Charmander, Charmeleon"

    def test_query_error(self, capsys):
        assert main(["fire type, !fire type"]) == EXIT_QUERY_ERROR
        assert "cannot both exclude and include" in capsys.readouterr().out

    def test_broadcast_flag(self, capsys):
        assert main(["--broadcast", "all, !mega"]) == EXIT_QUERY_ERROR
        assert "cannot be broadcast" in capsys.readouterr().out

    def test_seeded_sample_is_stable(self, capsys):
        main(["--seed", "5", "!mega"])
        first = capsys.readouterr().out
        main(["--seed", "5", "!mega"])
        assert capsys.readouterr().out == first
        assert ", and 11 more." in first

    def test_missing_catalog(self, tmp_path, capsys):
        assert main(["--catalog", str(tmp_path / "none.json"), "ou"]) == EXIT_CATALOG_ERROR
        assert capsys.readouterr().out == ""

    def test_catalog_is_a_directory(self, tmp_path, capsys):
        assert main(["--catalog", str(tmp_path), "ou"]) == EXIT_CATALOG_ERROR
        assert capsys.readouterr().out == ""

    def test_malformed_catalog(self, tmp_path):
        path = tmp_path / "cat.json"
        path.write_text('{"species": ["Bulbasaur"]}')
        assert main(["--catalog", str(path), "ou"]) == EXIT_CATALOG_ERROR
