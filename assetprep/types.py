"""Data types shared by the asset converters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

Vec3 = tuple[float, float, float]
Vec2 = tuple[float, float]


@dataclass
class AssetBuildConfig:
    """Settings for a full asset build."""

    source_dir: Path
    out_dir: Path
    patch_size: int = 16
    index_limit: int = 32

    def __post_init__(self) -> None:
        self.source_dir = Path(self.source_dir)
        self.out_dir = Path(self.out_dir)


@dataclass
class GeneratedAsset:
    """Metadata about one generated wrapper file."""

    module_name: str
    identifier: str
    rs_path: Path
    source_path: Path

    def __post_init__(self) -> None:
        self.rs_path = Path(self.rs_path)
        self.source_path = Path(self.source_path)


@dataclass
class TextureAsset:
    """A converted texture holding row-major RGBA8888 pixels."""

    source: Path
    width: int
    height: int
    data: bytes
    identifier: str

    def size_bytes(self) -> int:
        """Size of the pixel data in bytes."""
        return len(self.data)


@dataclass(frozen=True)
class VertexData:
    """Per-vertex attributes: position, texture coordinates and normal."""

    position: Vec3 = (0.0, 0.0, 0.0)
    uv: Vec2 = (0.0, 0.0)
    normal: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class RawMeshPatch:
    """A patch straight out of the splitter, before quantization."""

    vertices: list[VertexData] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    patch_index: int = 0


@dataclass
class MeshPatch:
    """A quantized patch packed as a single SoA blob."""

    data: bytes
    aabb_min: Vec3
    aabb_max: Vec3
    vertex_count: int
    entry_count: int
    patch_index: int


@dataclass
class MeshAsset:
    """A complete mesh made of one or more patches."""

    source: Path
    patches: list[MeshPatch]
    identifier: str
    original_vertex_count: int
    original_triangle_count: int
    aabb_min: Vec3
    aabb_max: Vec3

    def total_vertices(self) -> int:
        """Vertices summed over all patches."""
        return sum(p.vertex_count for p in self.patches)

    def total_entries(self) -> int:
        """Index entries summed over all patches."""
        return sum(p.entry_count for p in self.patches)

    def patch_count(self) -> int:
        """Number of patches."""
        return len(self.patches)