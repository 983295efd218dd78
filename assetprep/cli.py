"""Command-line entry point for converting single textures and meshes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .builder import convert_mesh, convert_texture
from .errors import AssetError


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Suppress progress output (only show errors)",
    )

    parser = argparse.ArgumentParser(
        prog="asset-prep",
        description="Convert PNG/OBJ assets to RP2350 firmware format (debug CLI)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress progress output (only show errors)"
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    texture = commands.add_parser(
        "texture", parents=[common], help="Convert a PNG image to RGBA8888 texture format"
    )
    texture.add_argument("input", type=Path, help="Input PNG file path")
    texture.add_argument(
        "-o", "--output", type=Path, required=True,
        help="Output directory for generated .rs and .bin files",
    )

    mesh = commands.add_parser("mesh", parents=[common], help="Convert an OBJ mesh to patch format")
    mesh.add_argument("input", type=Path, help="Input OBJ file path")
    mesh.add_argument(
        "-o", "--output", type=Path, required=True, help="Output directory for generated files"
    )
    mesh.add_argument("--patch-size", type=int, default=16, help="Maximum vertices per patch")
    mesh.add_argument("--index-limit", type=int, default=32, help="Maximum indices per patch")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the converter; return 0 on success and 1 on failure."""
    args = _build_parser().parse_args(argv)
    quiet = args.quiet

    if not quiet:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "texture":
            texture = convert_texture(args.input, args.output)
            if not quiet:
                print(
                    f"Success: Texture converted — {texture.identifier} "
                    f"({texture.width}×{texture.height}, {texture.size_bytes() // 1024} KB)",
                    file=sys.stderr,
                )
        else:
            mesh = convert_mesh(args.input, args.output, args.patch_size, args.index_limit)
            if not quiet:
                print(
                    f"Success: Mesh converted — {mesh.identifier} "
                    f"({mesh.original_vertex_count} vertices -> {mesh.patch_count()} patches)",
                    file=sys.stderr,
                )
    except AssetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: I/O error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())