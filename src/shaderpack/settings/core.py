"""
Core settings management for shaderpack.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .packs import PackSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "shaderpack"
APPLICATION = "shaderpack"


class AppSettings:
    """
    Application configuration backed by QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self, profile: str = "default", file_path: Optional[Union[str, Path]] = None
    ):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            file_path: Optional INI file to use instead of the platform store
        """
        if file_path is not None:
            self.settings = QSettings(str(file_path), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(ORGANIZATION, APPLICATION)
        self.profile = profile

        # Use profile as a group to create hierarchy: shaderpack/shaderpack/default/...
        self.settings.beginGroup(profile)

        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._packs = PackSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def packs(self) -> PackSettings:
        """Access pack selection subsystem."""
        return self._packs

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def shaderpacks_path(self) -> Optional[Path]:
        """Get the shaderpacks directory."""
        return self._paths.shaderpacks_path

    @shaderpacks_path.setter
    def shaderpacks_path(self, value: Optional[Path]) -> None:
        self._paths.shaderpacks_path = value

    @property
    def pack_config_path(self) -> Optional[Path]:
        """Get the per-pack option store directory."""
        return self._paths.pack_config_path

    @pack_config_path.setter
    def pack_config_path(self, value: Optional[Path]) -> None:
        self._paths.pack_config_path = value

    # === PACK SETTINGS (DELEGATED) ===

    @property
    def active_pack(self) -> Optional[str]:
        """Get the active shaderpack name."""
        return self._packs.active_pack

    @active_pack.setter
    def active_pack(self, value: Optional[str]) -> None:
        self._packs.active_pack = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path (read-only)."""
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
