"""Tests for the property file parser and loader."""

import logging
from pathlib import Path

import pytest

from shaderpack.pack.properties import ShaderProperties, load_properties, parse_properties


class TestParseProperties:
    """Test key/value text parsing."""

    def test_separators(self) -> None:
        """Test '=', ':' and whitespace all separate key from value."""
        table = parse_properties("a=1\nb:2\nc 3\nd = 4\n")
        assert table == {"a": "1", "b": "2", "c": "3", "d": "4"}

    def test_comments_and_blank_lines(self) -> None:
        """Test '#' and '!' lines are ignored."""
        table = parse_properties("# comment\n! also comment\n\n   \nkey=value\n")
        assert table == {"key": "value"}

    def test_line_continuation(self) -> None:
        """Test a trailing backslash joins the next line without its indent."""
        table = parse_properties("program.list=a \\\n    b \\\n    c\nnext=1\n")
        assert table["program.list"] == "a b c"
        assert table["next"] == "1"

    def test_escaped_backslash_does_not_continue(self) -> None:
        """Test an even number of trailing backslashes ends the line."""
        table = parse_properties("path=C:\\\\\nother=2\n")
        assert table == {"path": "C:\\", "other": "2"}

    def test_escapes(self) -> None:
        """Test character and unicode escapes in keys and values."""
        table = parse_properties("key\\=with\\:sep=tab\\there\nsnow=\\u2603\n")
        assert table["key=with:sep"] == "tab\there"
        assert table["snow"] == "\u2603"

    def test_key_without_value(self) -> None:
        """Test a bare key maps to an empty string."""
        assert parse_properties("flag\n") == {"flag": ""}

    def test_only_cr_lf_end_lines(self) -> None:
        """Test form feed and NEL are content, not line breaks."""
        assert parse_properties("a=b\x0cc\n") == {"a": "b\x0cc"}
        assert parse_properties("a=1\r\nb=2\rc=3") == {"a": "1", "b": "2", "c": "3"}

    def test_duplicate_key_last_wins(self) -> None:
        """Test later duplicates replace earlier entries."""
        assert parse_properties("a=1\na=2\n") == {"a": "2"}


class TestLoadProperties:
    """Test loading property files from a pack root."""

    def test_absent_root(self) -> None:
        """Test a missing root yields no table."""
        assert load_properties(None, "shaders.properties") is None

    def test_missing_file_logs_debug(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test a missing file is not an error."""
        with caplog.at_level(logging.DEBUG, logger="shaderpack"):
            assert load_properties(tmp_path, "shaders.properties") is None
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    def test_legacy_encoding(self, tmp_path: Path) -> None:
        """Test files are decoded as ISO-8859-1 by default."""
        (tmp_path / "shaders.properties").write_bytes(b"name=caf\xe9\n")
        assert load_properties(tmp_path, "shaders.properties") == {"name": "caf\u00e9"}

    def test_latin1_nel_byte_stays_in_comment(self, tmp_path: Path) -> None:
        """Test a 0x85 byte inside a comment does not start a new entry."""
        (tmp_path / "block.properties").write_bytes(b"# Settings\x85 more text\nblock.1=stone\n")
        assert load_properties(tmp_path, "block.properties") == {"block.1": "stone"}

    def test_unreadable_file_logs_error(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a path that cannot be opened degrades to None with an error."""
        (tmp_path / "shaders.properties").mkdir()
        with caplog.at_level(logging.DEBUG, logger="shaderpack"):
            assert load_properties(tmp_path, "shaders.properties") is None
        assert any(r.levelno == logging.ERROR for r in caplog.records)


class TestShaderProperties:
    """Test the typed shaders.properties view."""

    def test_empty(self) -> None:
        """Test the empty view has no noise texture."""
        props = ShaderProperties.empty()
        assert props.noise_texture_path is None
        assert len(props) == 0

    def test_noise_texture_path(self) -> None:
        """Test texture.noise is exposed, blank values count as unset."""
        assert ShaderProperties({"texture.noise": "tex/noise.png"}).noise_texture_path == "tex/noise.png"
        assert ShaderProperties({"texture.noise": "  "}).noise_texture_path is None

    def test_get_bool(self) -> None:
        """Test boolean accessor."""
        props = ShaderProperties({"oldLighting": "false", "underwaterOverlay": "true"})
        assert props.get_bool("underwaterOverlay") is True
        assert props.get_bool("oldLighting", True) is False
        assert props.get_bool("missing", True) is True
