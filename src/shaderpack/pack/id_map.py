"""
Identifier remapping tables.

Shader packs assign numeric ids to blocks, items and entities through
``block.properties``, ``item.properties`` and ``entity.properties``. Each
entry looks like ``block.31=minecraft:grass tall_grass fern`` and maps every
listed identifier to the number after the category prefix.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .models import PropertiesTable
from .properties import load_properties

DEFAULT_NAMESPACE = "minecraft"

_NAMESPACE_RE = re.compile(r"^[a-z0-9_.-]+$")
_PATH_RE = re.compile(r"^[a-z0-9_./-]+$")


class InvalidIdentifierError(ValueError):
    """Raised when a string is not a valid namespaced identifier."""
    pass


@dataclass(frozen=True)
class Identifier:
    """Namespaced resource identifier such as ``minecraft:stone``."""
    namespace: str
    path: str

    def __post_init__(self):
        if not _NAMESPACE_RE.match(self.namespace):
            raise InvalidIdentifierError(
                f"Non [a-z0-9_.-] character in namespace of identifier: {self}"
            )
        if not _PATH_RE.match(self.path):
            raise InvalidIdentifierError(
                f"Non [a-z0-9/._-] character in path of identifier: {self}"
            )

    @classmethod
    def parse(cls, value: str) -> "Identifier":
        """Parse 'namespace:path', defaulting the namespace to minecraft."""
        namespace, sep, path = value.partition(":")
        if not sep:
            return cls(DEFAULT_NAMESPACE, namespace)
        return cls(namespace, path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"


IdentifierLike = Union[Identifier, str]


class IdMap:
    """Numeric id assignments read from a pack root.

    An absent root or missing files simply produce empty maps.
    """

    CATEGORIES = ("block", "item", "entity")

    def __init__(self, root: Optional[Path]):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._maps: Dict[str, Dict[Identifier, int]] = {}

        for category in self.CATEGORIES:
            table = load_properties(root, f"{category}.properties")
            self._maps[category] = self._parse_id_map(table, category)

        self.logger.debug(
            "Id map loaded: "
            + ", ".join(f"{len(m)} {c} ids" for c, m in self._maps.items())
        )

    def _parse_id_map(
        self, table: Optional[PropertiesTable], category: str
    ) -> Dict[Identifier, int]:
        result: Dict[Identifier, int] = {}
        if not table:
            return result

        prefix = f"{category}."
        for key, value in table.items():
            if not key.startswith(prefix):
                self.logger.warning(
                    f"Expected {category}.properties key to start with '{prefix}': {key}"
                )
                continue

            try:
                numeric_id = int(key[len(prefix):])
            except ValueError:
                self.logger.warning(f"Failed to parse the numeric id in {category}.properties: {key}")
                continue

            for alias in value.split():
                try:
                    identifier = Identifier.parse(alias)
                except InvalidIdentifierError as e:
                    self.logger.warning(f"Skipping invalid identifier in {category}.properties: {e}")
                    continue
                result[identifier] = numeric_id

        return result

    def _lookup(self, category: str, identifier: IdentifierLike) -> Optional[int]:
        if isinstance(identifier, str):
            try:
                identifier = Identifier.parse(identifier)
            except InvalidIdentifierError:
                return None
        return self._maps[category].get(identifier)

    def get_block_id(self, identifier: IdentifierLike) -> Optional[int]:
        return self._lookup("block", identifier)

    def get_item_id(self, identifier: IdentifierLike) -> Optional[int]:
        return self._lookup("item", identifier)

    def get_entity_id(self, identifier: IdentifierLike) -> Optional[int]:
        return self._lookup("entity", identifier)

    @property
    def block_ids(self) -> Mapping[Identifier, int]:
        return MappingProxyType(self._maps["block"])

    @property
    def item_ids(self) -> Mapping[Identifier, int]:
        return MappingProxyType(self._maps["item"])

    @property
    def entity_ids(self) -> Mapping[Identifier, int]:
        return MappingProxyType(self._maps["entity"])
