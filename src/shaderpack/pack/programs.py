"""
Program layers and their composition.

A pack has one base layer rooted at the pack root and up to three override
layers rooted at the per-dimension subfolders. Requesting the programs for a
dimension merges the base with that dimension's override layer slot by slot:
an override only replaces the programs it actually defines.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple

from .models import (
    COMPOSITE_PROGRAMS,
    DEFERRED_PROGRAMS,
    PROGRAM_SLOTS,
    IncludeError,
    ProgramSource,
    ShaderPackError,
)

logger = logging.getLogger(__name__)

VERTEX_EXTENSION = ".vsh"
GEOMETRY_EXTENSION = ".gsh"
FRAGMENT_EXTENSION = ".fsh"

_INCLUDE_RE = re.compile(r'^\s*#include\s+"([^"]+)"\s*$')
_VALUE_OPTION_RE = re.compile(
    r"^\s*#define\s+(\w+)\s+(\S+)\s*//.*\[([^\]]*)\]"
)
_BOOLEAN_OPTION_RE = re.compile(r"^\s*(//)?\s*#define\s+(\w+)\s*(//.*)?$")
_CONDITIONAL_RE = re.compile(r"#\s*(?:ifdef|ifndef)\s+(\w+)|defined\s*\(?\s*(\w+)")


@dataclass(frozen=True)
class ShaderOption:
    """A user-configurable ``#define`` discovered in program sources."""
    name: str
    default: str
    allowed_values: Tuple[str, ...] = ()

    @property
    def is_boolean(self) -> bool:
        return self.default in ("true", "false") and not self.allowed_values


class SourcePreprocessor:
    """Expands ``#include`` directives in program sources.

    Absolute include paths ('/lib/common.glsl') resolve against the pack
    root so override layers can share code with the base layer; relative
    paths resolve against the including file's directory.
    """

    def __init__(self, pack_root: Path):
        self.pack_root = pack_root

    def _resolve(self, target: str, including_file: Path) -> Path:
        if target.startswith("/"):
            return self.pack_root / target.lstrip("/")
        return including_file.parent / target

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ShaderPackError(f"Unable to read program source {path}: {e}") from e

    def process(self, path: Path) -> str:
        """Read ``path`` and return it with all includes expanded."""
        return self._expand(path, [])

    def _expand(self, path: Path, stack: List[Path]) -> str:
        resolved = path.resolve()
        if resolved in stack:
            chain = " -> ".join(str(p) for p in stack + [resolved])
            raise IncludeError(f"Include cycle detected: {chain}")

        text = self._read(path)
        stack.append(resolved)
        lines: List[str] = []
        for line in text.splitlines():
            match = _INCLUDE_RE.match(line)
            if not match:
                lines.append(line)
                continue

            target = self._resolve(match.group(1), path)
            if not target.is_file():
                raise IncludeError(
                    f"{path} includes {match.group(1)}, which was not found at {target}"
                )
            lines.append(self._expand(target, stack))
        stack.pop()

        return "\n".join(lines)


def discover_options(*sources: str) -> Dict[str, ShaderOption]:
    """Find configurable options declared across preprocessed sources.

    A toggle declared in one source counts when any of the sources
    branches on it, so a vertex-stage define tested in the fragment stage
    is still an option.
    """
    options: Dict[str, ShaderOption] = {}
    candidates: Dict[str, bool] = {}

    for line in (line for source in sources for line in source.splitlines()):
        value_match = _VALUE_OPTION_RE.match(line)
        if value_match:
            name, default, allowed = value_match.groups()
            options[name] = ShaderOption(name, default, tuple(allowed.split()))
            continue

        bool_match = _BOOLEAN_OPTION_RE.match(line)
        if bool_match:
            commented, name, _ = bool_match.groups()
            candidates.setdefault(name, commented is None)

    # A bare #define only counts as a toggle when some source branches on it
    referenced = set()
    for source in sources:
        for match in _CONDITIONAL_RE.finditer(source):
            referenced.add(match.group(1) or match.group(2))

    for name, enabled in candidates.items():
        if name in referenced and name not in options:
            options[name] = ShaderOption(name, "true" if enabled else "false")

    return options


class ProgramLayer:
    """Program definitions found in one directory of a shader pack.

    A layer constructed without a directory is a valid, empty layer: it is
    what a pack with no backing files produces.
    """

    def __init__(self, directory: Optional[Path], pack_root: Optional[Path]):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.directory = directory
        self.pack_root = pack_root
        self._programs: Dict[str, ProgramSource] = {}
        self._options: Dict[str, ShaderOption] = {}

        if directory is not None:
            self._load(directory, pack_root or directory)

    def _load(self, directory: Path, pack_root: Path) -> None:
        preprocessor = SourcePreprocessor(pack_root)
        sources: List[str] = []

        for slot in PROGRAM_SLOTS:
            program = self._load_program(preprocessor, directory, slot)
            if program is None:
                continue
            if not program.is_valid:
                self.logger.debug(
                    f"Ignoring incomplete program {slot} in {directory}: "
                    f"both vertex and fragment stages are required"
                )
                continue

            self._programs[slot] = program
            sources.extend(
                stage
                for stage in (program.vertex, program.geometry, program.fragment)
                if stage
            )

        self._options = discover_options(*sources)

        self.logger.debug(
            f"Loaded {len(self._programs)} programs from {directory}"
        )

    @staticmethod
    def _load_program(
        preprocessor: SourcePreprocessor, directory: Path, slot: str
    ) -> Optional[ProgramSource]:
        stages: Dict[str, Optional[str]] = {}
        for stage, extension in (
            ("vertex", VERTEX_EXTENSION),
            ("geometry", GEOMETRY_EXTENSION),
            ("fragment", FRAGMENT_EXTENSION),
        ):
            path = directory / f"{slot}{extension}"
            stages[stage] = preprocessor.process(path) if path.is_file() else None

        if not any(stages.values()):
            return None
        return ProgramSource(name=slot, **stages)

    def get(self, slot: str) -> Optional[ProgramSource]:
        """Return the program defined for ``slot`` in this layer, if any."""
        return self._programs.get(slot)

    @property
    def programs(self) -> Mapping[str, ProgramSource]:
        """Read-only view of the defined programs."""
        return MappingProxyType(self._programs)

    @property
    def options(self) -> Mapping[str, ShaderOption]:
        """Options declared by this layer's sources."""
        return MappingProxyType(self._options)

    @property
    def is_empty(self) -> bool:
        return not self._programs

    def __contains__(self, slot: object) -> bool:
        return slot in self._programs

    def __repr__(self) -> str:
        return f"ProgramLayer(directory={self.directory!r}, programs={len(self._programs)})"


class ComposedProgramSet(Mapping):
    """Read-only merge of a base layer and an optional override layer.

    Behaves as a mapping from slot name to ProgramSource containing only the
    defined slots, in pipeline order.
    """

    def __init__(self, programs: Dict[str, ProgramSource]):
        self._programs = dict(programs)

    def __getitem__(self, slot: str) -> ProgramSource:
        return self._programs[slot]

    def __iter__(self) -> Iterator[str]:
        return iter(self._programs)

    def __len__(self) -> int:
        return len(self._programs)

    @property
    def shadow(self) -> Optional[ProgramSource]:
        return self._programs.get("shadow")

    @property
    def final(self) -> Optional[ProgramSource]:
        return self._programs.get("final")

    @property
    def deferred(self) -> List[Optional[ProgramSource]]:
        """Deferred passes by index; undefined passes are None."""
        return [self._programs.get(slot) for slot in DEFERRED_PROGRAMS]

    @property
    def composite(self) -> List[Optional[ProgramSource]]:
        """Composite passes by index; undefined passes are None."""
        return [self._programs.get(slot) for slot in COMPOSITE_PROGRAMS]

    def __repr__(self) -> str:
        return f"ComposedProgramSet({list(self._programs)})"


def discover_layer(root: Optional[Path], subfolder: str) -> Optional[ProgramLayer]:
    """Locate the override layer stored in ``root/subfolder``.

    Args:
        root: Pack root, or None for a pack with no backing files
        subfolder: Override directory name such as 'world0'

    Returns:
        A degenerate empty layer when root is None, None when the subfolder
        does not exist, otherwise the loaded layer
    """
    if root is None:
        return ProgramLayer(None, None)

    sub = root / subfolder
    if not sub.is_dir():
        logger.debug(f"No {subfolder} overrides in {root}")
        return None

    logger.debug(f"Loading {subfolder} overrides from {sub}")
    return ProgramLayer(sub, root)


def merge_layers(
    base: ProgramLayer, override: Optional[ProgramLayer]
) -> ComposedProgramSet:
    """Merge two layers slot by slot, override definitions winning."""
    merged: Dict[str, ProgramSource] = {}
    for slot in PROGRAM_SLOTS:
        program = override.get(slot) if override is not None else None
        if program is None:
            program = base.get(slot)
        if program is not None:
            merged[slot] = program
    return ComposedProgramSet(merged)
