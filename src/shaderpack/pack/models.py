"""
Data models for shader packs.

Contains the type aliases, enums and lightweight dataclasses shared by the
loaders. No file-system logic lives here.
"""

import io
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, TypeAlias

from PIL import Image

PropertiesTable: TypeAlias = Dict[str, str]
"""Parsed key/value property file."""

LanguageTable: TypeAlias = Dict[str, PropertiesTable]
"""Maps a normalized language code (e.g. 'en_us') to its translations."""


# =============================================================================
# Program slots
# =============================================================================

GBUFFERS_PROGRAMS: Tuple[str, ...] = (
    "gbuffers_basic",
    "gbuffers_textured",
    "gbuffers_textured_lit",
    "gbuffers_skybasic",
    "gbuffers_skytextured",
    "gbuffers_clouds",
    "gbuffers_terrain",
    "gbuffers_damagedblock",
    "gbuffers_block",
    "gbuffers_beaconbeam",
    "gbuffers_item",
    "gbuffers_entities",
    "gbuffers_entities_glowing",
    "gbuffers_armor_glint",
    "gbuffers_spidereyes",
    "gbuffers_hand",
    "gbuffers_weather",
    "gbuffers_water",
    "gbuffers_hand_water",
)

DEFERRED_PROGRAMS: Tuple[str, ...] = ("deferred",) + tuple(
    f"deferred{i}" for i in range(1, 16)
)

COMPOSITE_PROGRAMS: Tuple[str, ...] = ("composite",) + tuple(
    f"composite{i}" for i in range(1, 16)
)

PROGRAM_SLOTS: Tuple[str, ...] = (
    ("shadow",) + GBUFFERS_PROGRAMS + DEFERRED_PROGRAMS + COMPOSITE_PROGRAMS + ("final",)
)
"""Every queryable program slot, in pipeline order."""


class DimensionId(Enum):
    """Composition contexts a program set can be requested for.

    The value is the override subfolder name; BASE has none.
    """
    BASE = ""
    OVERWORLD = "world0"
    NETHER = "world-1"
    END = "world1"

    @property
    def subfolder(self) -> Optional[str]:
        """Override directory name, or None for the base context."""
        return self.value or None


OVERRIDE_DIMENSIONS: Tuple[DimensionId, ...] = (
    DimensionId.OVERWORLD,
    DimensionId.NETHER,
    DimensionId.END,
)


@dataclass(frozen=True)
class ProgramSource:
    """Preprocessed stage sources for one program slot.

    ``vertex`` and ``fragment`` are required for the program to be usable;
    ``geometry`` is optional.
    """
    name: str
    vertex: Optional[str] = None
    geometry: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.vertex is not None and self.fragment is not None


@dataclass(frozen=True)
class CustomTexture:
    """Raw custom texture payload with its sampling flags."""
    content: bytes
    blur: bool
    clamp: bool

    def to_image(self) -> Image.Image:
        """Decode the payload into an RGBA image."""
        with Image.open(io.BytesIO(self.content)) as img:
            return img.convert("RGBA")


# =============================================================================
# Errors
# =============================================================================

class ShaderPackError(Exception):
    """Raised when a shader pack cannot be constructed."""
    pass


class IncludeError(ShaderPackError):
    """Raised when a program source includes a missing file or itself."""
    pass
