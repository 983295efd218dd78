"""Whole-directory asset builds and single-file conversions."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path

from . import obj_converter, output_gen, png_converter
from .identifier import check_collisions
from .types import AssetBuildConfig, GeneratedAsset, MeshAsset, TextureAsset

log = logging.getLogger(__name__)


def collect_files(directory: str | PathLike, extension: str) -> list[Path]:
    """Files directly inside ``directory`` whose extension matches, ignoring case.

    A missing directory yields an empty list.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    wanted = "." + extension.lower().lstrip(".")
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []
    return [path for path in entries if path.is_file() and path.suffix.lower() == wanted]


def build_assets(config: AssetBuildConfig) -> list[GeneratedAsset]:
    """Convert every texture and mesh under ``config.source_dir`` into ``config.out_dir``.

    PNG files are taken from ``textures/`` and OBJ files from ``meshes/``.
    A source directory without assets still produces an empty ``mod.rs``.
    """
    config.out_dir.mkdir(parents=True, exist_ok=True)

    png_files = sorted(collect_files(config.source_dir / "textures", "png"))
    obj_files = sorted(collect_files(config.source_dir / "meshes", "obj"))

    check_collisions([*png_files, *obj_files])

    generated: list[GeneratedAsset] = []

    for png_path in png_files:
        log.info("Converting texture: %s", png_path)
        texture = png_converter.load_and_convert(png_path)
        generated.extend(output_gen.write_texture_output(texture, config.out_dir))

    for obj_path in obj_files:
        log.info("Converting mesh: %s", obj_path)
        mesh = obj_converter.load_and_convert(obj_path, config.patch_size, config.index_limit)
        log.info(
            "  %d vertices, %d triangles -> %d patches",
            mesh.original_vertex_count,
            mesh.original_triangle_count,
            mesh.patch_count(),
        )
        generated.extend(output_gen.write_mesh_output(mesh, config.out_dir))

    output_gen.write_mod_rs(generated, config.out_dir)
    return generated


def convert_texture(input_path: str | PathLike, out_dir: str | PathLike) -> TextureAsset:
    """Convert one PNG texture and write its output files into ``out_dir``."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    texture = png_converter.load_and_convert(input_path)
    output_gen.write_texture_output(texture, out_dir)
    return texture


def convert_mesh(
    input_path: str | PathLike,
    out_dir: str | PathLike,
    patch_size: int,
    index_limit: int,
) -> MeshAsset:
    """Convert one OBJ mesh and write its output files into ``out_dir``."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    mesh = obj_converter.load_and_convert(input_path, patch_size, index_limit)
    output_gen.write_mesh_output(mesh, out_dir)
    return mesh