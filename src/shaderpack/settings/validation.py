"""
Settings validation for shaderpack.
"""

import logging
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        packs_path = self.settings.shaderpacks_path
        if packs_path:
            if not packs_path.is_dir():
                errors.append(f"Shaderpacks path does not exist: {packs_path}")
            elif self.settings.active_pack and not (
                packs_path / self.settings.active_pack
            ).is_dir():
                warnings.append(
                    f"Active shaderpack not found: {self.settings.active_pack}"
                )
        else:
            warnings.append("Shaderpacks path not set")

        config_path = self.settings.pack_config_path
        if config_path and config_path.exists() and not config_path.is_dir():
            errors.append(f"Pack config path is not a directory: {config_path}")

        result = ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
        logger.debug(f"Settings validated: {result}")
        return result
