"""Tests for the doctree CLI."""

import json
from pathlib import Path

import pytest

from doctree_core.cli import _parse_order, main
from doctree_core.settings import SortPolicy
from tests.support.helpers import make_comment, write_comments


@pytest.fixture
def comments_file(tmp_path: Path) -> Path:
    return write_comments(
        tmp_path / "app.json",
        [
            make_comment("Foo", kind="class", access="public"),
            make_comment("bar", kind="function", member_of="Foo", scope="instance", access="private", line=3),
            make_comment("_util", kind="function", line=8),
            make_comment("baz", kind="function", line=10),
            make_comment("lost", kind="function", member_of="Nowhere", line=12),
        ],
    )


def _roots(text: str) -> list[str]:
    return [root["name"] for root in json.loads(text)]


class TestParseOrder:
    """Test --order parsing."""

    def test_policy_name(self):
        assert _parse_order("alpha") is SortPolicy.ALPHA

    def test_comma_separated_list(self):
        """Blank entries are ignored."""
        assert _parse_order("Foo, bar,,") == ("Foo", "bar")


class TestMain:
    """Test the doctree entry point."""

    def test_writes_forest_to_stdout(self, comments_file: Path, capsys) -> None:
        assert main([str(comments_file)]) == 0
        assert _roots(capsys.readouterr().out) == ["Foo", "_util", "baz"]

    def test_options_shape_output(self, comments_file: Path, capsys) -> None:
        code = main(
            [str(comments_file), "--order", "alpha", "--infer-private", "^_", "--access", "public,undefined,private"]
        )
        assert code == 0
        roots = json.loads(capsys.readouterr().out)
        assert [root["name"] for root in roots] == ["_util", "baz", "Foo"]
        util, _, foo = roots
        assert util["access"] == "private"
        assert foo["members"]["instance"][0]["name"] == "bar"

    def test_writes_output_file(self, comments_file: Path, tmp_path: Path, capsys) -> None:
        output = tmp_path / "out" / "tree.json"
        output.parent.mkdir()
        assert main([str(comments_file), "-o", str(output), "--access", "public"]) == 0
        assert _roots(output.read_text()) == ["Foo"]
        assert "wrote" in capsys.readouterr().out

    def test_diagnostics_printed(self, comments_file: Path, capsys) -> None:
        """--diagnostics reports problems on stderr."""
        assert main([str(comments_file), "--diagnostics"]) == 0
        err = capsys.readouterr().err
        assert "dangling_reference" in err
        assert "Nowhere" in err


class TestMainFailures:
    """Test exit codes for bad configuration and input."""

    def test_invalid_configuration(self, comments_file: Path, capsys) -> None:
        assert main([str(comments_file), "--infer-private", "("]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_unreadable_input(self, tmp_path: Path, capsys) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        assert main([str(bad)]) == 1
        assert "FAIL" in capsys.readouterr().err
