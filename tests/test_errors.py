from pathlib import Path

import pytest

from assetprep.errors import (
    AssetError,
    CodeGenError,
    IdentifierCollisionError,
    ImageDecodeError,
    ObjParseError,
    ValidationError,
)


def test_image_decode_message_and_fields():
    err = ImageDecodeError("textures/a.png", "bad header")
    assert str(err) == f"Image decode error for {Path('textures/a.png')}: bad header"
    assert err.path == Path("textures/a.png")
    assert err.message == "bad header"


def test_obj_parse_message_and_fields():
    err = ObjParseError(Path("meshes/cube.obj"), "unexpected token")
    assert str(err) == f"OBJ parse error for {Path('meshes/cube.obj')}: unexpected token"
    assert err.path == Path("meshes/cube.obj")


def test_validation_message():
    assert str(ValidationError("too small")) == "Validation error: too small"


def test_codegen_message():
    assert str(CodeGenError("disk full")) == "Code generation error: disk full"


def test_collision_message_and_fields():
    err = IdentifierCollisionError("TEXTURES_FOO_BAR", "textures/foo-bar.png", "textures/foo_bar.png")
    assert err.identifier == "TEXTURES_FOO_BAR"
    assert err.path_a == Path("textures/foo-bar.png")
    assert err.path_b == Path("textures/foo_bar.png")
    assert str(err) == (
        f"Identifier collision: TEXTURES_FOO_BAR is produced by both "
        f"{Path('textures/foo-bar.png')} and {Path('textures/foo_bar.png')}"
    )


@pytest.mark.parametrize(
    "err, expected_message",
    [
        (ImageDecodeError("a.png", "x"), f"Image decode error for {Path('a.png')}: x"),
        (ObjParseError("a.obj", "x"), f"OBJ parse error for {Path('a.obj')}: x"),
        (ValidationError("x"), "Validation error: x"),
        (
            IdentifierCollisionError("A", "a", "b"),
            f"Identifier collision: A is produced by both {Path('a')} and {Path('b')}",
        ),
        (CodeGenError("x"), "Code generation error: x"),
    ],
)
def test_all_errors_caught_as_asset_error(err, expected_message):
    with pytest.raises(AssetError) as excinfo:
        raise err
    assert excinfo.value is err
    assert str(excinfo.value) == expected_message