import struct
from pathlib import Path

import pytest

from assetprep import mesh_patcher
from assetprep.output_gen import (
    f32_literal,
    write_mesh_output,
    write_mod_rs,
    write_texture_output,
)
from assetprep.types import GeneratedAsset, MeshAsset, MeshPatch, TextureAsset, VertexData


def make_test_mesh(verts, indices, aabb_min, aabb_max):
    data = mesh_patcher.pack_soa_blob(verts, indices, aabb_min, aabb_max)
    patch_min, patch_max = mesh_patcher.compute_aabb(verts)
    return MeshAsset(
        source=Path("meshes/cube.obj"),
        patches=[
            MeshPatch(
                data=data,
                aabb_min=patch_min,
                aabb_max=patch_max,
                vertex_count=len(verts),
                entry_count=len(indices),
                patch_index=0,
            )
        ],
        identifier="MESHES_CUBE",
        original_vertex_count=len(verts),
        original_triangle_count=len(indices) // 3,
        aabb_min=aabb_min,
        aabb_max=aabb_max,
    )


def triangle_vertices():
    return [
        VertexData(position=(0.0, 0.0, 0.0), uv=(0.0, 0.0), normal=(0.0, 1.0, 0.0)),
        VertexData(position=(1.0, 0.0, 0.0), uv=(1.0, 0.0), normal=(0.0, 1.0, 0.0)),
        VertexData(position=(0.0, 1.0, 0.0), uv=(0.0, 1.0), normal=(0.0, 1.0, 0.0)),
    ]


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.0, "1.0"),
        (0.0, "0.0"),
        (-0.0, "-0.0"),
        (0.5, "0.5"),
        (-2.0, "-2.0"),
        (0.1, "0.1"),
        (1e20, "100000000000000000000.0"),
        (1e-7, "0.0000001"),
        (float("inf"), "inf"),
        (float("-inf"), "-inf"),
        (float("nan"), "NaN"),
    ],
)
def test_f32_literal(value, expected):
    assert f32_literal(value) == expected


def test_f32_literal_round_trips_single_precision():
    single = struct.unpack("<f", struct.pack("<f", 3.14159))[0]
    text = f32_literal(single)
    assert struct.unpack("<f", struct.pack("<f", float(text)))[0] == single
    assert text == "3.14159"


def test_write_texture_output(tmp_path):
    texture = TextureAsset(
        source=Path("textures/test.png"),
        width=8,
        height=8,
        data=bytes(8 * 8 * 4),
        identifier="TEXTURES_TEST",
    )
    generated = write_texture_output(texture, tmp_path)
    assert len(generated) == 1
    assert generated[0].identifier == "TEXTURES_TEST"
    assert generated[0].module_name == "textures_test"
    assert generated[0].rs_path == Path("textures_test.rs")

    assert (tmp_path / "textures_test.rs").exists()
    assert (tmp_path / "textures_test.bin").exists()
    assert len((tmp_path / "textures_test.bin").read_bytes()) == 8 * 8 * 4

    rs_content = (tmp_path / "textures_test.rs").read_text(encoding="utf-8")
    assert "TEXTURES_TEST_WIDTH" in rs_content
    assert "TEXTURES_TEST_HEIGHT" in rs_content
    assert "TEXTURES_TEST_DATA" in rs_content
    assert "include_bytes!" in rs_content
    assert "pub const TEXTURES_TEST_WIDTH: u32 = 8;" in rs_content
    assert 'include_bytes!("textures_test.bin")' in rs_content
    assert "Size: 256 bytes" in rs_content


def test_write_mesh_output(tmp_path):
    mesh = make_test_mesh(triangle_vertices(), [0, 1, 2], (0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    generated = write_mesh_output(mesh, tmp_path)
    assert len(generated) == 2

    assert (tmp_path / "meshes_cube_patch0.rs").exists()
    assert (tmp_path / "meshes_cube_patch0.bin").exists()
    assert len((tmp_path / "meshes_cube_patch0.bin").read_bytes()) == 3 * 16 + 3 * 2

    rs_content = (tmp_path / "meshes_cube_patch0.rs").read_text(encoding="utf-8")
    for name in (
        "MESHES_CUBE_PATCH0_VERTEX_COUNT",
        "MESHES_CUBE_PATCH0_ENTRY_COUNT",
        "MESHES_CUBE_PATCH0_AABB_MIN",
        "MESHES_CUBE_PATCH0_AABB_MAX",
        "MESHES_CUBE_PATCH0_DATA",
        "include_bytes!",
    ):
        assert name in rs_content
    assert "pub const MESHES_CUBE_PATCH0_AABB_MAX: [f32; 3] = [1.0, 1.0, 0.0];" in rs_content

    assert (tmp_path / "meshes_cube.rs").exists()
    mesh_rs = (tmp_path / "meshes_cube.rs").read_text(encoding="utf-8")
    for name in (
        "MESHES_CUBE_AABB_MIN",
        "MESHES_CUBE_AABB_MAX",
        "MESHES_CUBE_PATCH_COUNT",
        "MESHES_CUBE_PATCHES",
        "MeshPatchDescriptor",
    ):
        assert name in mesh_rs
    assert "pub const MESHES_CUBE_AABB_MAX: [f32; 3] = [1.0, 1.0, 1.0];" in mesh_rs
    assert "        data: MESHES_CUBE_PATCH0_DATA,\n" in mesh_rs
    assert mesh_rs.endswith("    },\n];\n")


def test_write_mesh_output_generated_metadata(tmp_path):
    mesh = make_test_mesh(triangle_vertices(), [0, 1, 2], (0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    generated = write_mesh_output(mesh, tmp_path)
    assert [g.identifier for g in generated] == ["MESHES_CUBE_PATCH0", "MESHES_CUBE"]
    assert [g.rs_path for g in generated] == [Path("meshes_cube_patch0.rs"), Path("meshes_cube.rs")]
    assert all(g.source_path == Path("meshes/cube.obj") for g in generated)


def test_write_mod_rs(tmp_path):
    generated = [
        GeneratedAsset(
            module_name="textures_player",
            identifier="TEXTURES_PLAYER",
            rs_path="textures_player.rs",
            source_path=Path("textures/player.png"),
        ),
        GeneratedAsset(
            module_name="meshes_cube_patch0",
            identifier="MESHES_CUBE_PATCH0",
            rs_path="meshes_cube_patch0.rs",
            source_path=Path("meshes/cube.obj"),
        ),
    ]
    write_mod_rs(generated, tmp_path)
    content = (tmp_path / "mod.rs").read_text(encoding="utf-8")
    assert "Auto-generated" in content
    assert 'include!("meshes_cube_patch0.rs")' in content
    assert 'include!("textures_player.rs")' in content
    assert "pub struct MeshPatchDescriptor {" in content
    assert content.index('include!("meshes_cube_patch0.rs")') < content.index(
        'include!("textures_player.rs")'
    )


def test_write_mod_rs_without_meshes_omits_descriptor(tmp_path):
    generated = [
        GeneratedAsset(
            module_name="textures_player",
            identifier="TEXTURES_PLAYER",
            rs_path="textures_player.rs",
            source_path=Path("textures/player.png"),
        )
    ]
    write_mod_rs(generated, tmp_path)
    content = (tmp_path / "mod.rs").read_text(encoding="utf-8")
    assert "MeshPatchDescriptor" not in content
    assert 'include!("textures_player.rs");' in content


def test_write_mod_rs_empty(tmp_path):
    write_mod_rs([], tmp_path)
    content = (tmp_path / "mod.rs").read_text(encoding="utf-8")
    assert "Auto-generated" in content
    assert "include!" not in content
    assert content == "// Auto-generated by asset_build_tool - do not edit\n\n"