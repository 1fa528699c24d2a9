"""Shared fixtures for shaderpack tests."""

import logging
from pathlib import Path
from typing import Iterator

import pytest


@pytest.fixture
def pack_root(tmp_path: Path) -> Path:
    """Empty shader directory laid out as '<packs>/testpack/shaders'."""
    root = tmp_path / "shaderpacks" / "testpack" / "shaders"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Directory for per-pack option stores."""
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
