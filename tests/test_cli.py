from pathlib import Path

import pytest
from PIL import Image

from assetprep.cli import main

TWO_TRIANGLES_OBJ = "v 0 0 0\nv 1 0 0\nv 0 1 0\nv 2 0 0\nv 0 2 0\nv 0 0 3\nf 1 2 3\nf 4 5 6\n"


def _png(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (8, 8), (1, 2, 3, 4)).save(path)
    return path


def _obj(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(TWO_TRIANGLES_OBJ)
    return path


def test_texture_command_succeeds(tmp_path, capsys):
    png = _png(tmp_path / "textures" / "player.png")
    out = tmp_path / "out"
    assert main(["texture", str(png), "-o", str(out)]) == 0
    err = capsys.readouterr().err
    assert "Success: Texture converted" in err
    assert "TEXTURES_PLAYER" in err
    assert (out / "textures_player.bin").exists()


def test_texture_command_quiet(tmp_path, capsys):
    png = _png(tmp_path / "textures" / "player.png")
    assert main(["-q", "texture", str(png), "-o", str(tmp_path / "out")]) == 0
    assert "Success" not in capsys.readouterr().err


def test_mesh_command_with_limits(tmp_path, capsys):
    obj = _obj(tmp_path / "meshes" / "pair.obj")
    out = tmp_path / "out"
    code = main(["mesh", str(obj), "--output", str(out), "--patch-size", "3"])
    assert code == 0
    err = capsys.readouterr().err
    assert "Success: Mesh converted" in err
    assert "MESHES_PAIR" in err
    assert (out / "meshes_pair_patch1.rs").exists()


def test_mesh_command_quiet_after_subcommand(tmp_path, capsys):
    obj = _obj(tmp_path / "meshes" / "pair.obj")
    out = tmp_path / "out"
    assert main(["mesh", str(obj), "-o", str(out), "--quiet"]) == 0
    assert "Success" not in capsys.readouterr().err
    assert (out / "meshes_pair_patch0.bin").exists()


def test_missing_input_reports_error(tmp_path, capsys):
    code = main(["texture", str(tmp_path / "missing.png"), "-o", str(tmp_path / "out")])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_invalid_dimensions_report_validation_error(tmp_path, capsys):
    png = tmp_path / "textures" / "bad.png"
    png.parent.mkdir(parents=True)
    Image.new("RGBA", (12, 8)).save(png)
    assert main(["texture", str(png), "-o", str(tmp_path / "out")]) == 1
    assert "Validation error" in capsys.readouterr().err


def test_subcommand_required():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_output_option_required(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["mesh", str(tmp_path / "a.obj")])
    assert info.value.code == 2