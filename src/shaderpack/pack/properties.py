"""
Key/value property files.

Parses the classic ``key=value`` property text format used by shader packs
(``shaders.properties``, ``block.properties``, language files) and wraps
the top-level ``shaders.properties`` in a small typed accessor.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .models import PropertiesTable

logger = logging.getLogger(__name__)

# Encoding mandated for shaders.properties and the id map files
LEGACY_ENCODING = "iso-8859-1"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
# Only CR, LF and CRLF terminate a line; other Unicode breaks are content
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _logical_lines(text: str) -> Iterator[str]:
    """Yield logical lines, joining backslash continuations and dropping comments."""
    pending: Optional[str] = None

    for raw in _LINE_BREAK_RE.split(text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue

        pending = None
        yield line

    if pending is not None:
        yield pending


def _unescape(value: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\" or i + 1 >= len(value):
            out.append(ch)
            i += 1
            continue

        nxt = value[i + 1]
        if nxt == "u" and i + 6 <= len(value):
            try:
                out.append(chr(int(value[i + 2:i + 6], 16)))
                i += 6
                continue
            except ValueError:
                # Malformed \u escape, keep it as-is
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw key and raw value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> PropertiesTable:
    """Parse property text into an ordered dict.

    Malformed lines are parsed on a best-effort basis; a later duplicate key
    replaces the earlier value.
    """
    table: PropertiesTable = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        table[_unescape(key)] = _unescape(value)
    return table


def load_properties(
    root: Optional[Path], name: str, encoding: str = LEGACY_ENCODING
) -> Optional[PropertiesTable]:
    """Load ``root/name`` as a property table.

    Returns None when there is no root, the file does not exist, or it cannot
    be read. Decoding errors propagate since the file is present but unusable.

    Args:
        root: Pack root directory, may be None for a pack with no backing files
        name: File name relative to the root
        encoding: Text encoding of the file

    Returns:
        Parsed table or None
    """
    if root is None:
        return None

    path = root / name
    try:
        with path.open("r", encoding=encoding) as f:
            text = f.read()
    except FileNotFoundError:
        logger.debug(f"A {name} file was not found in the current shaderpack")
        return None
    except OSError:
        logger.error(f"Unable to read {path}", exc_info=True)
        return None

    return parse_properties(text)


class ShaderProperties:
    """Typed view over ``shaders.properties``."""

    NOISE_TEXTURE_KEY = "texture.noise"

    def __init__(self, table: Optional[PropertiesTable] = None):
        self._table: Dict[str, str] = dict(table or {})

    @classmethod
    def empty(cls) -> "ShaderProperties":
        return cls()

    @property
    def noise_texture_path(self) -> Optional[str]:
        """Relative path of the custom noise texture, if the pack names one."""
        value = self._table.get(self.NOISE_TEXTURE_KEY, "").strip()
        return value or None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._table.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval."""
        value = self._table.get(key)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "yes", "on")

    def as_dict(self) -> PropertiesTable:
        """Return a copy of the underlying table."""
        return dict(self._table)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)
