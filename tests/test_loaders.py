"""Tests for the language table and custom texture loaders."""

import logging
from pathlib import Path

import orjson
import pytest
from PIL import Image

from shaderpack.pack.loaders import CustomTextureLoader, LanguageTableLoader

from .helpers import write_file


class TestLanguageCode:
    """Test language code derivation from file names."""

    @pytest.mark.parametrize(
        "file_name, code",
        [
            ("En_US.lang", "en_us"),
            ("fr_fr.json", "fr_fr"),
            ("de_de.backup.lang", "de_de.backup"),
            ("README", "readme"),
        ],
    )
    def test_language_code(self, file_name: str, code: str) -> None:
        """Test lower-casing and stripping the final extension."""
        assert LanguageTableLoader.language_code(file_name) == code


class TestLanguageTableLoader:
    """Test scanning the lang directory."""

    def test_absent_root(self) -> None:
        """Test no root yields an empty table."""
        assert LanguageTableLoader().scan(None) == {}

    def test_missing_lang_directory(self, tmp_path: Path) -> None:
        """Test a pack without lang/ yields an empty table."""
        assert LanguageTableLoader().scan(tmp_path) == {}

    def test_reads_utf8_files(self, tmp_path: Path) -> None:
        """Test language files are read as UTF-8 property text."""
        write_file(tmp_path, "lang/en_US.lang", "option.SHADOWS=Shadows\n")
        write_file(tmp_path, "lang/ja_jp.lang", "option.SHADOWS=影\n")

        languages = LanguageTableLoader().scan(tmp_path)
        assert languages == {
            "en_us": {"option.SHADOWS": "Shadows"},
            "ja_jp": {"option.SHADOWS": "影"},
        }

    def test_subdirectories_are_ignored(self, tmp_path: Path) -> None:
        """Test only files directly inside lang/ are read."""
        write_file(tmp_path, "lang/en_us.lang", "a=1\n")
        write_file(tmp_path, "lang/extra/fr_fr.lang", "a=2\n")
        (tmp_path / "lang" / "nested.dir").mkdir()

        assert set(LanguageTableLoader().scan(tmp_path)) == {"en_us"}

    def test_invalid_utf8_is_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a file that fails to decode is logged and skipped."""
        write_file(tmp_path, "lang/en_us.lang", "a=1\n")
        write_file(tmp_path, "lang/broken.lang", b"a=\xff\xfe\xfa\n")

        with caplog.at_level(logging.DEBUG, logger="shaderpack"):
            languages = LanguageTableLoader().scan(tmp_path)

        assert set(languages) == {"en_us"}
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "broken.lang" in errors[0].getMessage()

    def test_collision_resolves_in_name_order(self, tmp_path: Path) -> None:
        """Test names differing only in case collide; the later sorted name wins."""
        write_file(tmp_path, "lang/en_US.lang", "source=optifine\n")
        write_file(tmp_path, "lang/en_us.json", "source=vanilla\n")

        languages = LanguageTableLoader().scan(tmp_path)
        # 'en_US.lang' sorts before 'en_us.json'
        assert languages == {"en_us": {"source": "vanilla"}}


class TestCustomTextureLoader:
    """Test reading the custom noise texture."""

    def test_no_path(self, tmp_path: Path) -> None:
        """Test an unset path yields no texture."""
        assert CustomTextureLoader().load(tmp_path, None) is None

    def test_reads_bytes_with_default_flags(self, tmp_path: Path) -> None:
        """Test the payload is read verbatim with blur on and clamp off."""
        write_file(tmp_path, "tex/noise.png", b"\x89PNG fake")

        texture = CustomTextureLoader().load(tmp_path, "tex/noise.png")
        assert texture is not None
        assert texture.content == b"\x89PNG fake"
        assert texture.blur is True
        assert texture.clamp is False

    def test_mcmeta_overrides_flags(self, tmp_path: Path) -> None:
        """Test sampling flags from the sibling .mcmeta file."""
        write_file(tmp_path, "tex/noise.png", b"data")
        write_file(
            tmp_path,
            "tex/noise.png.mcmeta",
            orjson.dumps({"texture": {"blur": False, "clamp": True}}),
        )

        texture = CustomTextureLoader().load(tmp_path, "tex/noise.png")
        assert texture is not None
        assert (texture.blur, texture.clamp) == (False, True)

    def test_non_boolean_mcmeta_flags_are_ignored(self, tmp_path: Path) -> None:
        """Test string flags such as "false" keep the defaults."""
        write_file(tmp_path, "noise.png", b"data")
        write_file(
            tmp_path,
            "noise.png.mcmeta",
            orjson.dumps({"texture": {"blur": "false", "clamp": 1}}),
        )

        texture = CustomTextureLoader().load(tmp_path, "noise.png")
        assert texture is not None
        assert (texture.blur, texture.clamp) == (True, False)

    def test_malformed_mcmeta_is_ignored(self, tmp_path: Path) -> None:
        """Test broken metadata keeps the default flags."""
        write_file(tmp_path, "noise.png", b"data")
        write_file(tmp_path, "noise.png.mcmeta", "{not json")

        texture = CustomTextureLoader().load(tmp_path, "noise.png")
        assert texture is not None
        assert (texture.blur, texture.clamp) == (True, False)

    def test_missing_file_logs_error(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test an unreadable path is logged and yields no texture."""
        with caplog.at_level(logging.DEBUG, logger="shaderpack"):
            assert CustomTextureLoader().load(tmp_path, "missing.png") is None
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors and "missing.png" in errors[0].getMessage()

    def test_path_outside_root_is_refused(self, tmp_path: Path) -> None:
        """Test the texture path may not escape the pack root."""
        root = tmp_path / "pack"
        root.mkdir()
        write_file(tmp_path, "secret.png", b"secret")

        assert CustomTextureLoader().load(root, "../secret.png") is None

    def test_to_image(self, tmp_path: Path) -> None:
        """Test the payload decodes to an RGBA image."""
        Image.new("RGB", (4, 2), (255, 0, 0)).save(tmp_path / "noise.png")

        texture = CustomTextureLoader().load(tmp_path, "noise.png")
        assert texture is not None
        image = texture.to_image()
        assert image.size == (4, 2)
        assert image.mode == "RGBA"
