"""
Loaders for auxiliary shader pack resources.

Handles the per-language translation tables under ``lang/`` and the custom
noise texture referenced from ``shaders.properties``. Both are optional:
anything absent or unreadable degrades to an empty value instead of failing
the pack.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import orjson

from .models import CustomTexture, LanguageTable
from .properties import parse_properties

LANG_FOLDER = "lang"
MCMETA_SUFFIX = ".mcmeta"


def _json_flag(section: dict, key: str, default: bool) -> bool:
    """Boolean flag from parsed JSON; non-boolean values keep the default."""
    value = section.get(key, default)
    return value if isinstance(value, bool) else default


class LanguageTableLoader:
    """Builds the language table from the flat ``lang`` directory."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def language_code(file_name: str) -> str:
        """Derive a language code from a file name.

        Some packs use OptiFine's naming ('en_US.lang') and others the
        vanilla one ('en_us.json'); both normalize to 'en_us'.
        """
        lowered = file_name.lower()
        stem, dot, _ = lowered.rpartition(".")
        return stem if dot else lowered

    def scan(self, root: Optional[Path]) -> LanguageTable:
        """Read every regular file directly inside ``root/lang``.

        Files are processed in file name order, so when two names normalize
        to the same code the lexicographically later one wins. Files that are
        not valid UTF-8 are logged and skipped.
        """
        languages: LanguageTable = {}
        if root is None:
            return languages

        lang_path = root / LANG_FOLDER
        if not lang_path.is_dir():
            self.logger.debug(f"No language folder found at {lang_path}")
            return languages

        # Immediate files only, subdirectories are not descended into
        entries = sorted(
            (p for p in lang_path.iterdir() if p.is_file()), key=lambda p: p.name
        )

        for path in entries:
            code = self.language_code(path.name)
            try:
                text = path.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError):
                self.logger.error(
                    f"Error while parsing languages for shaderpacks! Expected file path: {path}",
                    exc_info=True,
                )
                continue

            if code in languages:
                self.logger.debug(f"Language file {path.name} replaces earlier '{code}' entry")
            languages[code] = parse_properties(text)

        self.logger.debug(f"Loaded {len(languages)} language tables")
        return languages


class CustomTextureLoader:
    """Reads the custom noise texture named by ``shaders.properties``."""

    DEFAULT_BLUR = True
    DEFAULT_CLAMP = False

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def _is_within(path: Path, root: Path) -> bool:
        try:
            path.resolve().relative_to(root.resolve())
        except ValueError:
            return False
        return True

    def _read_sampling_flags(
        self, texture_path: Path, blur: bool, clamp: bool
    ) -> tuple[bool, bool]:
        """Apply the optional ``<texture>.mcmeta`` sampling overrides."""
        meta_path = texture_path.with_name(texture_path.name + MCMETA_SUFFIX)
        if not meta_path.is_file():
            return blur, clamp

        try:
            with meta_path.open("rb") as f:
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            self.logger.error(f"Ignoring unreadable texture metadata {meta_path}: {e}")
            return blur, clamp

        section: Any = data.get("texture") if isinstance(data, dict) else None
        if not isinstance(section, dict):
            return blur, clamp

        return _json_flag(section, "blur", blur), _json_flag(section, "clamp", clamp)

    def load(
        self,
        root: Optional[Path],
        relative_path: Optional[str],
        blur: bool = DEFAULT_BLUR,
        clamp: bool = DEFAULT_CLAMP,
    ) -> Optional[CustomTexture]:
        """Load the texture bytes, or None when there is nothing usable.

        Args:
            root: Pack root the path is relative to
            relative_path: Path from shaders.properties, None if not set
            blur: Default blur flag
            clamp: Default clamp flag

        Returns:
            CustomTexture or None
        """
        if relative_path is None or root is None:
            return None

        texture_path = root / relative_path
        if not self._is_within(texture_path, root):
            self.logger.error(
                f"Refusing custom noise texture outside the shaderpack: {relative_path}"
            )
            return None

        try:
            content = texture_path.read_bytes()
        except OSError:
            self.logger.error(
                f"Unable to read the custom noise texture at {relative_path}",
                exc_info=True,
            )
            return None

        blur, clamp = self._read_sampling_flags(texture_path, blur, clamp)
        self.logger.debug(
            f"Loaded custom noise texture {relative_path} ({len(content)} bytes, "
            f"blur={blur}, clamp={clamp})"
        )
        return CustomTexture(content=content, blur=blur, clamp=clamp)
