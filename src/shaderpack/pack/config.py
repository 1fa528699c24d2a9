"""
Persisted per-pack option overrides.

Each shader pack gets its own INI store, keyed by the pack name, holding the
options the user changed plus the defaults the pack declared. The store has
an explicit lifecycle: ``load()`` once, mutate in memory, ``save()`` once all
pack-derived defaults are known.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from PySide6.QtCore import QSettings

from ..settings.types import ConfigError

ORGANIZATION = "shaderpack"
OPTIONS_GROUP = "options"
PACK_NAME_KEY = "pack/name"


class ConfigState(Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    SAVED = "saved"


class ShaderPackConfig:
    """Option override store for a single shader pack.

    The pack name is supplied by the caller; nothing here consults the
    application settings.
    """

    def __init__(self, pack_name: str, config_dir: Optional[Path] = None):
        """Create an unloaded store.

        Args:
            pack_name: Name of the pack the options belong to
            config_dir: Directory holding '<pack_name>.ini'. If None, the
                per-user INI location for the pack name is used.
        """
        if not pack_name:
            raise ConfigError("A shaderpack config needs a non-empty pack name")

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.pack_name = pack_name
        self.config_dir = Path(config_dir) if config_dir is not None else None
        self.state = ConfigState.UNLOADED
        self._options: Dict[str, str] = {}

    def _open_store(self) -> QSettings:
        if self.config_dir is not None:
            return QSettings(
                str(self.config_dir / f"{self.pack_name}.ini"),
                QSettings.Format.IniFormat,
            )
        return QSettings(
            QSettings.Format.IniFormat,
            QSettings.Scope.UserScope,
            ORGANIZATION,
            self.pack_name,
        )

    @property
    def file_name(self) -> str:
        """Path of the backing INI file."""
        return self._open_store().fileName()

    def _require_loaded(self) -> None:
        if self.state is ConfigState.UNLOADED:
            raise ConfigError(
                f"Config for shaderpack '{self.pack_name}' used before load()"
            )

    # === LIFECYCLE ===

    def load(self) -> None:
        """Read the persisted overrides, starting empty if there are none."""
        store = self._open_store()
        store.beginGroup(OPTIONS_GROUP)
        keys = store.childKeys()
        options = {key: str(store.value(key, "")) for key in keys}
        store.endGroup()

        if store.status() == QSettings.Status.FormatError:
            self.logger.warning(
                f"Config for shaderpack '{self.pack_name}' at {store.fileName()} "
                f"is corrupt, starting from an empty option set"
            )
            options = {}

        self._options = options
        self.state = ConfigState.LOADED
        self.logger.debug(
            f"Loaded {len(options)} options for shaderpack '{self.pack_name}'"
        )

    def save(self) -> None:
        """Persist the current options, replacing what was stored before."""
        self._require_loaded()

        store = self._open_store()
        store.remove(OPTIONS_GROUP)
        store.setValue(PACK_NAME_KEY, self.pack_name)
        store.beginGroup(OPTIONS_GROUP)
        for key, value in self._options.items():
            store.setValue(key, value)
        store.endGroup()
        store.sync()

        if store.status() != QSettings.Status.NoError:
            self.logger.error(
                f"Failed to save config for shaderpack '{self.pack_name}' "
                f"to {store.fileName()}: {store.status()}"
            )
            return

        self.state = ConfigState.SAVED
        self.logger.debug(f"Saved config for shaderpack '{self.pack_name}'")

    # === OPTIONS ===

    def get_option(self, name: str, default: Optional[str] = None) -> Optional[str]:
        self._require_loaded()
        return self._options.get(name, default)

    def set_option(self, name: str, value: str) -> None:
        """Set an option in memory; durable only after save()."""
        self._require_loaded()
        self._options[name] = str(value)
        self.state = ConfigState.LOADED

    def remove_option(self, name: str) -> None:
        self._require_loaded()
        if self._options.pop(name, None) is not None:
            self.state = ConfigState.LOADED

    def set_default(self, name: str, value: str) -> str:
        """Record a pack default unless a value is already present.

        Returns:
            The effective value for the option
        """
        self._require_loaded()
        if name not in self._options:
            self._options[name] = str(value)
            self.state = ConfigState.LOADED
        return self._options[name]

    def apply_defaults(self, defaults: Mapping[str, str]) -> None:
        """set_default() for every entry, never overriding loaded values."""
        for name, value in defaults.items():
            self.set_default(name, value)

    @property
    def options(self) -> Dict[str, str]:
        """Copy of the current in-memory options."""
        self._require_loaded()
        return dict(self._options)
