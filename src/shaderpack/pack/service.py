"""
High-level service for installed shader packs.

Discovers packs under a shaderpacks directory and opens them, passing the
pack name and option store location explicitly to each ShaderPack.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING

from .models import ShaderPackError
from .shader_pack import SHADERS_FOLDER, ShaderPack

if TYPE_CHECKING:
    from ..settings import AppSettings


class ShaderPackService:
    """Facade for finding and opening shader packs.

    A pack is a subdirectory of the shaderpacks directory that contains a
    ``shaders`` folder.
    """

    def __init__(
        self,
        shaderpacks_path: Union[str, Path],
        config_dir: Optional[Path] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.shaderpacks_path = Path(shaderpacks_path)
        self.config_dir = config_dir

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "ShaderPackService":
        """Create a service from the configured paths."""
        if settings.shaderpacks_path is None:
            raise ShaderPackError("Shaderpacks path is not configured")
        return cls(settings.shaderpacks_path, settings.pack_config_path)

    @staticmethod
    def _is_valid_pack_dir(pack_dir: Path) -> bool:
        return (pack_dir / SHADERS_FOLDER).is_dir()

    def get_available_packs(self) -> List[str]:
        """Return the names of installed packs, sorted."""
        if not self.shaderpacks_path.is_dir():
            self.logger.warning(f"Shaderpacks path not found: {self.shaderpacks_path}")
            return []

        all_dirs = [d for d in self.shaderpacks_path.iterdir() if d.is_dir()]
        pack_dirs = [d for d in all_dirs if self._is_valid_pack_dir(d)]

        skipped = len(all_dirs) - len(pack_dirs)
        if skipped > 0:
            self.logger.debug(f"Skipped {skipped} non-shaderpack directories")

        return sorted(d.name for d in pack_dirs)

    def load_pack(self, name: str) -> ShaderPack:
        """Open the installed pack called ``name``.

        Raises:
            ShaderPackError: If no such pack is installed or it fails to load
        """
        pack_dir = self.shaderpacks_path / name
        if not self._is_valid_pack_dir(pack_dir):
            raise ShaderPackError(f"Shaderpack not found: {name}")

        return ShaderPack(
            pack_dir / SHADERS_FOLDER, pack_name=name, config_dir=self.config_dir
        )

    def load_active_pack(self, settings: "AppSettings") -> Optional[ShaderPack]:
        """Open the pack selected in settings, None when none is selected."""
        name = settings.active_pack
        if name is None:
            self.logger.info("No shaderpack selected")
            return None
        return self.load_pack(name)
