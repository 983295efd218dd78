"""Wavefront OBJ loading and conversion into patched, quantized meshes."""

from __future__ import annotations

import logging
import struct
from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .errors import ObjParseError, ValidationError
from .identifier import generate_identifier
from . import mesh_patcher
from .types import MeshAsset, MeshPatch, Vec2, Vec3, VertexData

log = logging.getLogger(__name__)

_DEFAULT_NAME = "unnamed_object"
_F32 = struct.Struct("<f")

Corner = tuple[int, "int | None", "int | None"]


@dataclass
class ObjModel:
    """One object or group of an OBJ file, triangulated with a single index per vertex."""

    name: str = _DEFAULT_NAME
    positions: list[Vec3] = field(default_factory=list)
    texcoords: list[Vec2] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


def _f32(value: float) -> float:
    return _F32.unpack(_F32.pack(value))[0]


class _ObjReader:
    """Line-by-line OBJ reader that collects models as it goes."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.positions: list[Vec3] = []
        self.texcoords: list[Vec2] = []
        self.normals: list[Vec3] = []
        self.name = _DEFAULT_NAME
        self.material: str | None = None
        self.faces: list[list[Corner]] = []
        self.models: list[ObjModel] = []

    def fail(self, line_no: int, message: str) -> ObjParseError:
        return ObjParseError(self.path, f"line {line_no}: {message}")

    def floats(self, line_no: int, tokens: Sequence[str], needed: int) -> list[float]:
        if len(tokens) < needed:
            raise self.fail(line_no, f"expected {needed} values, got {len(tokens)}")
        try:
            return [_f32(float(tok)) for tok in tokens]
        except (ValueError, OverflowError) as exc:
            raise self.fail(line_no, f"invalid number: {exc}") from exc

    def resolve(self, line_no: int, token: str, count: int, kind: str) -> int:
        try:
            raw = int(token)
        except ValueError as exc:
            raise self.fail(line_no, f"invalid {kind} index {token!r}") from exc
        resolved = raw - 1 if raw > 0 else count + raw
        if raw == 0 or not 0 <= resolved < count:
            raise self.fail(line_no, f"{kind} index {raw} out of range")
        return resolved

    def corner(self, line_no: int, token: str) -> Corner:
        parts = token.split("/")
        if len(parts) > 3 or not parts[0]:
            raise self.fail(line_no, f"invalid face vertex {token!r}")
        vi = self.resolve(line_no, parts[0], len(self.positions), "position")
        ti = None
        ni = None
        if len(parts) > 1 and parts[1]:
            ti = self.resolve(line_no, parts[1], len(self.texcoords), "texcoord")
        if len(parts) > 2 and parts[2]:
            ni = self.resolve(line_no, parts[2], len(self.normals), "normal")
        return vi, ti, ni

    def flush(self) -> None:
        if not self.faces:
            return
        has_tex = any(c[1] is not None for face in self.faces for c in face)
        has_norm = any(c[2] is not None for face in self.faces for c in face)
        model = ObjModel(name=self.name)
        local: dict[Corner, int] = {}

        def index_of(corner: Corner) -> int:
            found = local.get(corner)
            if found is None:
                vi, ti, ni = corner
                found = len(model.positions)
                local[corner] = found
                model.positions.append(self.positions[vi])
                if has_tex:
                    model.texcoords.append(self.texcoords[ti] if ti is not None else (0.0, 0.0))
                if has_norm:
                    model.normals.append(
                        self.normals[ni] if ni is not None else (0.0, 0.0, 0.0)
                    )
            return found

        for face in self.faces:
            first = face[0]
            for second, third in zip(face[1:], face[2:]):
                model.indices.extend(index_of(c) for c in (first, second, third))
        self.models.append(model)
        self.faces = []

    def feed(self, line_no: int, line: str) -> None:
        line = line.split("#", 1)[0]
        tokens = line.split()
        if not tokens:
            return
        keyword, args = tokens[0], tokens[1:]
        if keyword == "v":
            x, y, z = self.floats(line_no, args, 3)[:3]
            self.positions.append((x, y, z))
        elif keyword == "vt":
            values = self.floats(line_no, args, 1)
            self.texcoords.append((values[0], values[1] if len(values) > 1 else 0.0))
        elif keyword == "vn":
            x, y, z = self.floats(line_no, args, 3)[:3]
            self.normals.append((x, y, z))
        elif keyword == "f":
            corners = [self.corner(line_no, tok) for tok in args]
            if len(corners) >= 3:
                self.faces.append(corners)
        elif keyword in ("o", "g"):
            self.flush()
            self.name = " ".join(args) or _DEFAULT_NAME
        elif keyword == "usemtl":
            material = " ".join(args)
            if material != self.material:
                self.flush()
                self.material = material


def _logical_lines(text: str):
    """Yield (line number, line) pairs with backslash continuations joined."""
    pending = ""
    start = 0
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not pending:
            start = line_no
        stripped = line.rstrip()
        if stripped.endswith("\\"):
            pending += stripped[:-1] + " "
            continue
        yield start, pending + line
        pending = ""
    if pending:
        yield start, pending


def parse_obj(text: str, path: str | PathLike = "<string>") -> list[ObjModel]:
    """Parse OBJ text into triangulated models; objects, groups and material changes split models."""
    reader = _ObjReader(Path(path))
    for line_no, line in _logical_lines(text):
        reader.feed(line_no, line)
    reader.flush()
    return reader.models


def merge_models(models: Sequence[ObjModel]) -> tuple[list[VertexData], list[int], int]:
    """Merge models into one vertex list and one index list.

    Returns ``(vertices, indices, original_vertex_count)``. Missing UVs and
    normals default to zero.
    """
    vertices: list[VertexData] = []
    indices: list[int] = []

    for model in models:
        if not model.positions:
            continue
        offset = len(vertices)
        if not model.texcoords:
            log.warning("Mesh '%s' has no UV coordinates, using default (0.0, 0.0)", model.name)
        if not model.normals:
            log.warning("Mesh '%s' has no normals, using default (0.0, 0.0, 0.0)", model.name)

        for i, position in enumerate(model.positions):
            uv = model.texcoords[i] if i < len(model.texcoords) else (0.0, 0.0)
            normal = model.normals[i] if i < len(model.normals) else (0.0, 0.0, 0.0)
            vertices.append(VertexData(position=tuple(position), uv=tuple(uv), normal=tuple(normal)))
        indices.extend(idx + offset for idx in model.indices)

    return vertices, indices, len(vertices)


def load_and_convert(path: str | PathLike, patch_size: int, index_limit: int) -> MeshAsset:
    """Load an OBJ file, merge all its geometry, split it into patches and quantize them."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ObjParseError(path, f"Unable to open file: {exc}") from exc

    models = parse_obj(text, path)
    if not models:
        raise ValidationError(f"OBJ file has no geometry: {path}")
    if len(models) > 1:
        log.warning("OBJ contains %d objects/groups, all geometry will be merged", len(models))

    vertices, indices, original_vertex_count = merge_models(models)
    original_triangle_count = len(indices) // 3
    if not vertices or not indices:
        raise ValidationError(f"Mesh has no vertices or faces: {path}")

    raw_patches = mesh_patcher.split_into_patches(vertices, indices, patch_size, index_limit)
    aabb_min, aabb_max = mesh_patcher.compute_mesh_aabb(raw_patches)

    patches = []
    for raw in raw_patches:
        patch_min, patch_max = mesh_patcher.compute_aabb(raw.vertices)
        patches.append(
            MeshPatch(
                data=mesh_patcher.pack_soa_blob(raw.vertices, raw.indices, aabb_min, aabb_max),
                aabb_min=patch_min,
                aabb_max=patch_max,
                vertex_count=len(raw.vertices),
                entry_count=len(raw.indices),
                patch_index=raw.patch_index,
            )
        )

    return MeshAsset(
        source=path,
        patches=patches,
        identifier=generate_identifier(path),
        original_vertex_count=original_vertex_count,
        original_triangle_count=original_triangle_count,
        aabb_min=aabb_min,
        aabb_max=aabb_max,
    )