"""
Settings package for shaderpack.

Provides a modular configuration system using Qt's QSettings for
cross-platform storage.

Usage:
    from shaderpack.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigError, ValidationResult
from .paths import PathSettings
from .packs import PackSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "PackSettings",
    "LoggingSettings",
]
