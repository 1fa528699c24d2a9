"""
Shader pack selection settings.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class PackSettings:
    """Manages which shader pack is active."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    @property
    def active_pack(self) -> Optional[str]:
        """Get the active pack name, None when shaders are disabled."""
        value = self.settings.value("packs/active", "")
        name = str(value) if value is not None else ""
        return name or None

    @active_pack.setter
    def active_pack(self, value: Optional[str]) -> None:
        """Set the active pack name."""
        self.settings.setValue("packs/active", value or "")
        self.settings.sync()
