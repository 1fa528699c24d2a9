"""
Shader pack loading.

Turns a shader pack directory into an in-memory object graph: layered
program definitions composed per dimension, identifier maps, language
tables, the custom noise texture and the persisted option store.
"""

from .shader_pack import ShaderPack
from .service import ShaderPackService
from .config import ShaderPackConfig, ConfigState
from .models import (
    PROGRAM_SLOTS,
    CustomTexture,
    DimensionId,
    IncludeError,
    LanguageTable,
    ProgramSource,
    PropertiesTable,
    ShaderPackError,
)
from .programs import (
    ComposedProgramSet,
    ProgramLayer,
    ShaderOption,
    discover_layer,
    merge_layers,
)
from .properties import ShaderProperties, load_properties, parse_properties
from .loaders import CustomTextureLoader, LanguageTableLoader
from .id_map import Identifier, IdMap, InvalidIdentifierError

__all__ = [
    # Main classes
    "ShaderPack",
    "ShaderPackService",
    "ShaderPackConfig",
    "ConfigState",
    # Data models
    "PROGRAM_SLOTS",
    "CustomTexture",
    "DimensionId",
    "LanguageTable",
    "ProgramSource",
    "PropertiesTable",
    "ShaderOption",
    # Errors
    "ShaderPackError",
    "IncludeError",
    "InvalidIdentifierError",
    # Components
    "ComposedProgramSet",
    "ProgramLayer",
    "discover_layer",
    "merge_layers",
    "ShaderProperties",
    "load_properties",
    "parse_properties",
    "CustomTextureLoader",
    "LanguageTableLoader",
    "Identifier",
    "IdMap",
]
