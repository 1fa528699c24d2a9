"""
Path-related settings for shaderpack.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_path(self, key: str) -> Optional[Path]:
        value = self.settings.value(key, "")
        path_str = str(value) if value is not None else ""
        return Path(path_str) if path_str else None

    def _set_path(self, key: str, value: Optional[Path]) -> None:
        self.settings.setValue(key, str(value) if value else "")
        self.settings.sync()

    @property
    def shaderpacks_path(self) -> Optional[Path]:
        """Get the directory holding installed shader packs."""
        return self._get_path("paths/shaderpacks")

    @shaderpacks_path.setter
    def shaderpacks_path(self, value: Optional[Path]) -> None:
        """Set the directory holding installed shader packs."""
        self._set_path("paths/shaderpacks", value)

    @property
    def pack_config_path(self) -> Optional[Path]:
        """Get the directory for per-pack option stores (None = per-user default)."""
        return self._get_path("paths/pack_config")

    @pack_config_path.setter
    def pack_config_path(self, value: Optional[Path]) -> None:
        """Set the directory for per-pack option stores."""
        self._set_path("paths/pack_config", value)
