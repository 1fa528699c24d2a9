"""
Command-line entry point for shaderpack.
Usage: python -m shaderpack [PACK_ROOT]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .pack import DimensionId, ShaderPack, ShaderPackError, ShaderPackService
from .settings import AppSettings
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shaderpack", description="Load a shader pack and summarize its contents."
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        help="pack shader directory; defaults to the active pack from settings",
    )
    parser.add_argument("--name", help="pack name used for the option store")
    parser.add_argument("--profile", default="default", help="settings profile")
    parser.add_argument("--settings-file", type=Path, help="INI settings file to use")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def summarize(pack: ShaderPack) -> List[str]:
    """Human-readable summary lines for a loaded pack."""
    lines = [f"Shaderpack: {pack.pack_name} ({pack.root})"]
    for dimension in DimensionId:
        programs = pack.get_program_set(dimension)
        label = dimension.name.lower()
        override = "override" if pack.get_override_layer(dimension) else "base only"
        lines.append(f"  {label:<10} {len(programs):>3} programs ({override})")

    id_map = pack.id_map
    lines.append(
        f"  ids: {len(id_map.block_ids)} blocks, {len(id_map.item_ids)} items, "
        f"{len(id_map.entity_ids)} entities"
    )
    lines.append(f"  languages: {', '.join(sorted(pack.lang_map)) or 'none'}")
    texture = pack.custom_noise_texture
    lines.append(
        "  noise texture: "
        + (f"{len(texture.content)} bytes" if texture else "none")
    )
    lines.append(f"  options: {len(pack.config.options)} ({pack.config.file_name})")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    settings = AppSettings(args.profile, args.settings_file)
    setup_logging(settings)

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")

    try:
        if args.root is not None:
            pack = ShaderPack(
                args.root, pack_name=args.name, config_dir=settings.pack_config_path
            )
        else:
            if not validation.is_valid:
                for error in validation.errors:
                    logger.error(f"  {error}")
                return 1
            pack = ShaderPackService.from_settings(settings).load_active_pack(settings)
            if pack is None:
                print("No shaderpack selected")
                return 0
    except ShaderPackError as e:
        logger.error(f"Failed to load shaderpack: {e}")
        return 1

    print("\n".join(summarize(pack)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
