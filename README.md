# assetprep

Prepare textures and meshes for a small embedded GPU.

- **Textures**: an image opened with Pillow (normally a PNG) must have
  power-of-two sides between 8 and 1024 pixels. It is converted to raw
  RGBA8888 bytes in row-major order.
- **Meshes**: a Wavefront OBJ file is read and its polygons are triangulated
  as fans. All objects and groups are merged into one mesh. The mesh is split
  greedily into patches of at most 16 vertices and 32 indices each by default.
  Each patch is then packed as one structure-of-arrays blob of N×16 + M×2
  bytes, all little-endian:
  - u16 positions over the mesh-wide bounding box
  - i16 1:15 normals
  - i16 1:2:13 UVs
  - u16 indices

Each texture gets a `.bin` data file and a `.rs` wrapper. The wrapper declares
the width, height and an `include_bytes!` reference to the data file.

Each mesh gets a `.bin` and a `.rs` file for every patch, plus a per-mesh `.rs`
wrapper. The per-mesh wrapper holds:

- the mesh bounding box
- the patch count
- a `MeshPatchDescriptor` array

A full build also writes `mod.rs`. It includes every generated wrapper, sorted
by file name. When meshes are present it also declares the
`MeshPatchDescriptor` struct.

## Installation

```
pip install .
```

## Command line

Convert one texture:

```
asset-prep texture textures/player.png --output build/assets
```

Convert one mesh, with optional patch limits:

```
asset-prep mesh meshes/cube.obj --output build/assets --patch-size 16 --index-limit 32
```

The output directory is created if it does not exist. `-q`/`--quiet` shows
errors only, and `-V`/`--version` prints the version. On success a summary line
is printed to standard error. On failure the command prints `Error: ...` and
exits with status 1.

## Library use

Build a whole asset tree. PNG files are taken from `textures/` and OBJ files
from `meshes/`, directly under the source directory; the extension match
ignores case:

```python
from pathlib import Path

from assetprep.builder import build_assets
from assetprep.types import AssetBuildConfig

config = AssetBuildConfig(
    source_dir=Path("assets/source"),
    out_dir=Path("build/assets"),
    patch_size=16,
    index_limit=32,
)
for asset in build_assets(config):
    print(asset.identifier, asset.rs_path)
```

A source directory with no assets still produces an empty `mod.rs`.

### Identifiers

Identifiers are built from the file stem and its immediate parent directory,
upper-cased. For example, `textures/player.png` becomes `TEXTURES_PLAYER`.
Characters that are not letters, digits or underscores become underscores, and
a leading digit gets an underscore in front. Two sources that produce the same
identifier raise `IdentifierCollisionError`.

### OBJ support

The reader handles these statements:

- `v`, `vt` and `vn`
- `f`, with negative (relative) indices allowed
- `o` and `g`
- `usemtl`

It also handles `#` comments and backslash line continuations. Other statements
are ignored. Missing UVs or normals default to zero, with a logged warning.

### Modules

- `assetprep.builder`: `build_assets`, `convert_texture`, `convert_mesh`,
  `collect_files`
- `assetprep.png_converter`: `load_and_convert`, `validate_dimensions`,
  `is_power_of_two`
- `assetprep.obj_converter`: `parse_obj`, `merge_models`, `load_and_convert`,
  `ObjModel`
- `assetprep.mesh_patcher`: `split_into_patches`, `compute_aabb`,
  `compute_mesh_aabb`, `quantize_position`, `quantize_normal`, `quantize_uv`,
  `pack_soa_blob`
- `assetprep.identifier`: `sanitize_identifier`, `generate_identifier`,
  `check_collisions`
- `assetprep.output_gen`: `write_texture_output`, `write_mesh_output`,
  `write_mod_rs`, `f32_literal`
- `assetprep.types`: `AssetBuildConfig`, `GeneratedAsset`, `TextureAsset`,
  `VertexData`, `RawMeshPatch`, `MeshPatch`, `MeshAsset`

Conversion failures raise subclasses of `assetprep.errors.AssetError`:

- `ImageDecodeError`
- `ObjParseError`
- `ValidationError`
- `IdentifierCollisionError`
- `CodeGenError`

## Limitations

- The `asset-prep` command converts single files only. To build a whole tree,
  call `build_assets` from Python.
- Material libraries (`mtllib`, `.mtl` files) are not read. `usemtl` only
  starts a new model.
- Nothing is rebuilt incrementally. Every call converts all of its inputs again.