"""
shaderpack: loader for layered shader packs.

Reads a shader pack directory into query-ready program sets, identifier
maps, language tables and persisted per-pack options.
"""

__version__ = "0.1.0"
__author__ = "shaderpack contributors"

from .pack import (
    ShaderPack,
    ShaderPackService,
    ShaderPackConfig,
    ShaderPackError,
    DimensionId,
)
from .utils.logging_config import setup_logging

__all__ = [
    "ShaderPack",
    "ShaderPackService",
    "ShaderPackConfig",
    "ShaderPackError",
    "DimensionId",
    "setup_logging",
]
