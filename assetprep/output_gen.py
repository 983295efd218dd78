"""Generation of wrapper source files and binary blobs for converted assets."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from decimal import Decimal
from os import PathLike
from pathlib import Path

from .types import GeneratedAsset, MeshAsset, MeshPatch, TextureAsset

_F32 = struct.Struct("<f")

_MOD_HEADER = "// Auto-generated by asset_build_tool - do not edit\n\n"

_DESCRIPTOR_STRUCT = (
    "#[derive(Copy, Clone)]\n"
    "pub struct MeshPatchDescriptor {\n"
    "    pub data: &'static [u8],\n"
    "    pub aabb_min: [f32; 3],\n"
    "    pub aabb_max: [f32; 3],\n"
    "    pub vertex_count: usize,\n"
    "    pub entry_count: usize,\n"
    "}\n"
    "\n"
)


def _shortest_f32(value: float) -> str:
    """Shortest plain decimal text that reads back as the same single-precision value."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    packed = _F32.pack(value)
    single = _F32.unpack(packed)[0]
    if single == 0.0:
        return "-0" if math.copysign(1.0, single) < 0 else "0"
    for precision in range(1, 18):
        text = f"{single:.{precision}g}"
        if _F32.pack(float(text)) == packed:
            break
    return format(Decimal(text), "f")


def f32_literal(value: float) -> str:
    """Format a float as a single-precision literal that always has a decimal point."""
    text = _shortest_f32(value)
    if "." in text or "inf" in text or "NaN" in text:
        return text
    return f"{text}.0"


def _vec3(values) -> str:
    return ", ".join(f32_literal(v) for v in values)


def write_texture_output(texture: TextureAsset, out_dir: str | PathLike) -> list[GeneratedAsset]:
    """Write a texture's .bin pixel data and .rs wrapper; return the generated asset."""
    out_dir = Path(out_dir)
    lower_id = texture.identifier.lower()
    rs_filename = f"{lower_id}.rs"
    bin_filename = f"{lower_id}.bin"

    (out_dir / bin_filename).write_bytes(bytes(texture.data))

    size = len(texture.data)
    ident = texture.identifier
    source = (
        f"// Generated from: {texture.source}\n"
        f"// Dimensions: {texture.width}×{texture.height} RGBA8\n"
        f"// Size: {size} bytes ({size / 1024.0:.1f} KB)\n"
        f"// GPU Requirements: 4K-aligned base address\n"
        f"\n"
        f"pub const {ident}_WIDTH: u32 = {texture.width};\n"
        f"pub const {ident}_HEIGHT: u32 = {texture.height};\n"
        f'pub const {ident}_DATA: &[u8] = include_bytes!("{bin_filename}");\n'
    )
    (out_dir / rs_filename).write_bytes(source.encode("utf-8"))

    return [
        GeneratedAsset(
            module_name=lower_id,
            identifier=ident,
            rs_path=Path(rs_filename),
            source_path=texture.source,
        )
    ]


def _patch_source(mesh: MeshAsset, patch: MeshPatch, const_name: str, bin_filename: str) -> str:
    amin = _vec3(patch.aabb_min)
    amax = _vec3(patch.aabb_max)
    return (
        f"// Generated from: {mesh.source} (patch {patch.patch_index} of {len(mesh.patches)})\n"
        f"// Vertices: {patch.vertex_count}, Entries: {patch.entry_count}\n"
        f"// Patch AABB: ({amin}) to ({amax})\n"
        f"// Data size: {len(patch.data)} bytes "
        f"(SoA blob: u16 pos + i16 norm + i16 uv + u16 idx)\n"
        f"\n"
        f"pub const {const_name}_VERTEX_COUNT: usize = {patch.vertex_count};\n"
        f"pub const {const_name}_ENTRY_COUNT: usize = {patch.entry_count};\n"
        f"pub const {const_name}_AABB_MIN: [f32; 3] = [{amin}];\n"
        f"pub const {const_name}_AABB_MAX: [f32; 3] = [{amax}];\n"
        f'pub const {const_name}_DATA: &[u8] = include_bytes!("{bin_filename}");\n'
    )


def _descriptor(patch: MeshPatch, const_name: str) -> str:
    return (
        "    MeshPatchDescriptor {\n"
        f"        data: {const_name}_DATA,\n"
        f"        aabb_min: [{_vec3(patch.aabb_min)}],\n"
        f"        aabb_max: [{_vec3(patch.aabb_max)}],\n"
        f"        vertex_count: {patch.vertex_count},\n"
        f"        entry_count: {patch.entry_count},\n"
        "    },\n"
    )


def write_mesh_output(mesh: MeshAsset, out_dir: str | PathLike) -> list[GeneratedAsset]:
    """Write per-patch .bin/.rs files plus a per-mesh wrapper; return the generated assets."""
    out_dir = Path(out_dir)
    generated: list[GeneratedAsset] = []
    lower_id = mesh.identifier.lower()

    for patch in mesh.patches:
        base_name = f"{lower_id}_patch{patch.patch_index}"
        rs_filename = f"{base_name}.rs"
        bin_filename = f"{base_name}.bin"
        const_name = f"{mesh.identifier}_PATCH{patch.patch_index}"

        (out_dir / bin_filename).write_bytes(bytes(patch.data))
        (out_dir / rs_filename).write_bytes(
            _patch_source(mesh, patch, const_name, bin_filename).encode("utf-8")
        )
        generated.append(
            GeneratedAsset(
                module_name=base_name,
                identifier=const_name,
                rs_path=Path(rs_filename),
                source_path=mesh.source,
            )
        )

    ident = mesh.identifier
    count = len(mesh.patches)
    parts = [
        f"// Generated from: {mesh.source}\n"
        f"// Patches: {count}\n"
        f"// Total vertices: {mesh.total_vertices()}, Total entries: {mesh.total_entries()}\n"
        f"\n"
        f"/// Overall mesh bounding box (model space).\n"
        f"/// Also serves as quantization AABB for u16 position encoding.\n"
        f"pub const {ident}_AABB_MIN: [f32; 3] = [{_vec3(mesh.aabb_min)}];\n"
        f"pub const {ident}_AABB_MAX: [f32; 3] = [{_vec3(mesh.aabb_max)}];\n"
        f"pub const {ident}_PATCH_COUNT: usize = {count};\n"
        f"\n"
        f"/// Per-patch descriptors.\n"
        f"pub const {ident}_PATCHES: [MeshPatchDescriptor; {count}] = [\n"
    ]
    parts.extend(
        _descriptor(patch, f"{ident}_PATCH{patch.patch_index}") for patch in mesh.patches
    )
    parts.append("];\n")

    mesh_rs_filename = f"{lower_id}.rs"
    (out_dir / mesh_rs_filename).write_bytes("".join(parts).encode("utf-8"))
    generated.append(
        GeneratedAsset(
            module_name=lower_id,
            identifier=ident,
            rs_path=Path(mesh_rs_filename),
            source_path=mesh.source,
        )
    )
    return generated


def write_mod_rs(generated: Iterable[GeneratedAsset], out_dir: str | PathLike) -> None:
    """Write the master mod.rs that includes every generated wrapper, sorted by file name."""
    generated = list(generated)
    parts = [_MOD_HEADER]
    if any("PATCH" in asset.identifier for asset in generated):
        parts.append(_DESCRIPTOR_STRUCT)
    rs_files = sorted(str(asset.rs_path) for asset in generated)
    parts.extend(f'include!("{name}");\n' for name in rs_files if name and name != ".")
    (Path(out_dir) / "mod.rs").write_bytes("".join(parts).encode("utf-8"))