"""
Shader pack aggregate.

Opens a pack directory and builds everything the renderer later queries:
the program layers, the identifier map, the language table, the custom
noise texture, the parsed ``shaders.properties`` and the option store.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Optional, Union

from .config import ShaderPackConfig
from .id_map import IdMap
from .loaders import CustomTextureLoader, LanguageTableLoader
from .models import (
    OVERRIDE_DIMENSIONS,
    CustomTexture,
    DimensionId,
    LanguageTable,
    ShaderPackError,
)
from .programs import ComposedProgramSet, ProgramLayer, discover_layer, merge_layers
from .properties import ShaderProperties, load_properties

SHADERS_FOLDER = "shaders"
PROPERTIES_FILE = "shaders.properties"


class ShaderPack:
    """A fully loaded shader pack.

    Construction is all-or-nothing: recoverable problems (missing optional
    files, unreadable language files, a bad texture path) degrade to empty
    values, while structural failures raise and no pack is returned.
    """

    def __init__(
        self,
        root: Union[str, Path],
        pack_name: Optional[str] = None,
        config_dir: Optional[Path] = None,
    ):
        """Load the pack rooted at ``root``.

        Args:
            root: The pack's shader directory
            pack_name: Name the option store is keyed by. Defaults to the
                directory name of the pack.
            config_dir: Directory for the option store, see ShaderPackConfig

        Raises:
            TypeError: If root is None
            ShaderPackError: If root is not a directory, no pack name can be
                derived, or a program cannot be built
        """
        # A null path is not allowed
        if root is None:
            raise TypeError("A shaderpack root path is required")

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.root = Path(root)
        if not self.root.is_dir():
            raise ShaderPackError(f"Shaderpack root is not a directory: {self.root}")

        self.pack_name = pack_name or self.default_pack_name(self.root.resolve())
        if not self.pack_name:
            raise ShaderPackError(
                f"Cannot derive a pack name from {self.root}, pass pack_name explicitly"
            )
        self.logger.info(f"Loading shaderpack '{self.pack_name}' from {self.root}")

        self._properties = ShaderProperties(load_properties(self.root, PROPERTIES_FILE))

        self._config = ShaderPackConfig(self.pack_name, config_dir)
        self._config.load()

        self._base = ProgramLayer(self.root, self.root)
        self._overrides = self._load_overrides(self.root)

        self._id_map = IdMap(self.root)
        self._lang_map = LanguageTableLoader().scan(self.root)
        self._custom_noise_texture = CustomTextureLoader().load(
            self.root, self._properties.noise_texture_path
        )

        self._apply_option_defaults()
        self._config.save()

        self.logger.info(
            f"Shaderpack '{self.pack_name}' loaded: {len(self._base.programs)} base programs, "
            f"overrides for {[d.value for d, layer in self._overrides.items() if layer]}"
        )

    @staticmethod
    def default_pack_name(root: Path) -> str:
        """Name of the pack a root belongs to ('<pack>/shaders' -> '<pack>')."""
        if root.name == SHADERS_FOLDER and root.parent.name:
            return root.parent.name
        return root.name

    @staticmethod
    def _load_overrides(root: Path) -> Dict[DimensionId, Optional[ProgramLayer]]:
        """Load the per-dimension override layers in parallel.

        Any exception raised while building a layer propagates here, so the
        pack is never returned with a half-built override.
        """
        with ThreadPoolExecutor(max_workers=len(OVERRIDE_DIMENSIONS)) as executor:
            futures = {
                dimension: executor.submit(discover_layer, root, dimension.subfolder)
                for dimension in OVERRIDE_DIMENSIONS
            }
            return {dimension: future.result() for dimension, future in futures.items()}

    def _apply_option_defaults(self) -> None:
        """Register every option the sources declare, keeping loaded values."""
        layers = [self._base] + [layer for layer in self._overrides.values() if layer]
        for layer in layers:
            self._config.apply_defaults(
                {name: option.default for name, option in layer.options.items()}
            )

    # === PUBLIC API ===

    def get_program_set(self, dimension: Union[DimensionId, str]) -> ComposedProgramSet:
        """Return the base programs merged with the dimension's overrides.

        Args:
            dimension: A DimensionId or its subfolder name ('world0', ...)

        Raises:
            ValueError: For an unknown dimension
        """
        if not isinstance(dimension, DimensionId):
            try:
                dimension = DimensionId(dimension)
            except ValueError:
                raise ValueError(f"Unknown dimension {dimension!r}") from None

        if dimension is DimensionId.BASE:
            return merge_layers(self._base, None)
        return merge_layers(self._base, self._overrides[dimension])

    def get_override_layer(self, dimension: DimensionId) -> Optional[ProgramLayer]:
        """Return the raw override layer, None when the pack has none."""
        return self._overrides.get(dimension)

    @property
    def base_layer(self) -> ProgramLayer:
        return self._base

    @property
    def id_map(self) -> IdMap:
        return self._id_map

    @property
    def lang_map(self) -> LanguageTable:
        return self._lang_map

    @property
    def custom_noise_texture(self) -> Optional[CustomTexture]:
        return self._custom_noise_texture

    @property
    def shader_properties(self) -> ShaderProperties:
        return self._properties

    @property
    def config(self) -> ShaderPackConfig:
        return self._config

    def __repr__(self) -> str:
        return f"ShaderPack(name={self.pack_name!r}, root={str(self.root)!r})"
