"""File-writing helpers for building pack trees in tests."""

from pathlib import Path
from typing import Union

VERTEX_SOURCE = "#version 120\nvoid main() { gl_Position = ftransform(); }"
FRAGMENT_SOURCE = "#version 120\nvoid main() { gl_FragColor = vec4(1.0); }"


def write_file(root: Path, relative: str, content: Union[str, bytes]) -> Path:
    """Write a file under root, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def write_program(
    root: Path, name: str, vertex: str = VERTEX_SOURCE, fragment: str = FRAGMENT_SOURCE
) -> None:
    """Write a vertex/fragment pair for a program slot."""
    write_file(root, f"{name}.vsh", vertex)
    write_file(root, f"{name}.fsh", fragment)
