"""Mesh splitting into GPU-sized patches and SoA quantized blob packing."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Sequence

from .types import RawMeshPatch, Vec3, VertexData

_ZERO3: Vec3 = (0.0, 0.0, 0.0)
_F32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round a Python float to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _quantize(value: float, low: float, high: float) -> int:
    """Round, clamp to [low, high] and truncate to an integer (NaN maps to 0)."""
    if math.isnan(value):
        return 0
    return int(min(max(_round_half_away(value), low), high))


def split_into_patches(
    vertices: Sequence[VertexData],
    indices: Sequence[int],
    max_vertices: int,
    max_indices: int,
) -> list[RawMeshPatch]:
    """Greedily split an indexed triangle list into patches.

    Each patch holds at most ``max_vertices`` vertices and ``max_indices``
    indices (a lone triangle that exceeds them still gets a patch of its own).
    Trailing indices that do not form a whole triangle are ignored.
    """
    patches: list[RawMeshPatch] = []
    current_verts: list[VertexData] = []
    current_indices: list[int] = []
    vertex_map: dict[int, int] = {}

    triangle_count = len(indices) // 3
    for triangle in zip(*[iter(indices[: triangle_count * 3])] * 3):
        new_verts = sum(1 for idx in set(triangle) if idx not in vertex_map)
        would_have_verts = len(current_verts) + new_verts
        would_have_indices = len(current_indices) + 3

        if (would_have_verts > max_vertices or would_have_indices > max_indices) and current_verts:
            patches.append(
                RawMeshPatch(
                    vertices=current_verts,
                    indices=current_indices,
                    patch_index=len(patches),
                )
            )
            current_verts = []
            current_indices = []
            vertex_map = {}

        for global_idx in triangle:
            local_idx = vertex_map.get(global_idx)
            if local_idx is None:
                local_idx = len(current_verts)
                current_verts.append(vertices[global_idx])
                vertex_map[global_idx] = local_idx
            current_indices.append(local_idx)

    if current_verts:
        patches.append(
            RawMeshPatch(
                vertices=current_verts,
                indices=current_indices,
                patch_index=len(patches),
            )
        )
    return patches


def _bounds(vertices: Iterable[VertexData]) -> tuple[Vec3, Vec3]:
    positions = [v.position for v in vertices]
    if not positions:
        return _ZERO3, _ZERO3
    axes = list(zip(*positions))
    return (
        tuple(min(axis) for axis in axes),  # type: ignore[return-value]
        tuple(max(axis) for axis in axes),
    )


def compute_aabb(vertices: Iterable[VertexData]) -> tuple[Vec3, Vec3]:
    """Axis-aligned bounding box of the vertices; all zeros when empty."""
    return _bounds(vertices)


def compute_mesh_aabb(patches: Iterable[RawMeshPatch]) -> tuple[Vec3, Vec3]:
    """Bounding box over every vertex of every patch; all zeros when empty."""
    return _bounds(v for patch in patches for v in patch.vertices)


def quantize_position(pos: float, aabb_min: float, aabb_max: float) -> int:
    """Map ``[aabb_min, aabb_max]`` to ``[0, 65535]``; a degenerate axis maps to 0."""
    extent = _f32(_f32(aabb_max) - _f32(aabb_min))
    if not extent > 0.0:
        return 0
    t = _f32(_f32(_f32(pos) - _f32(aabb_min)) / extent)
    return _quantize(_f32(t * 65535.0), 0.0, 65535.0)


def quantize_normal(normal: float) -> int:
    """Quantize a normal component to signed 1:15 fixed point."""
    return _quantize(_f32(_f32(normal) * 32767.0), -32768.0, 32767.0)


def quantize_uv(uv: float) -> int:
    """Quantize a texture coordinate to signed 1:2:13 fixed point."""
    return _quantize(_f32(_f32(uv) * 8192.0), -32768.0, 32767.0)


def pack_soa_blob(
    vertices: Sequence[VertexData],
    indices: Sequence[int],
    aabb_min: Sequence[float],
    aabb_max: Sequence[float],
) -> bytes:
    """Pack vertices and indices into one little-endian SoA blob.

    Layout: pos_x, pos_y, pos_z (u16), norm_x, norm_y, norm_z (i16),
    uv_u, uv_v (i16), then the indices (u16): N*16 + M*2 bytes.
    """
    n = len(vertices)
    unsigned = struct.Struct(f"<{n}H")
    signed = struct.Struct(f"<{n}h")

    parts = [
        unsigned.pack(
            *(quantize_position(v.position[axis], aabb_min[axis], aabb_max[axis]) for v in vertices)
        )
        for axis in range(3)
    ]
    parts.extend(
        signed.pack(*(quantize_normal(v.normal[axis]) for v in vertices)) for axis in range(3)
    )
    parts.extend(signed.pack(*(quantize_uv(v.uv[axis]) for v in vertices)) for axis in range(2))
    parts.append(struct.pack(f"<{len(indices)}H", *indices))
    return b"".join(parts)