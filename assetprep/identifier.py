"""Constant identifiers derived from asset file paths."""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from .errors import IdentifierCollisionError, ValidationError

_NO_NAME = ("", ".", "..")


def sanitize_identifier(text: str) -> str:
    """Turn text into a valid identifier component."""
    chars = []
    for position, ch in enumerate(text):
        if position == 0:
            if ch.isalpha() or ch == "_":
                chars.append(ch)
            elif ch.isnumeric():
                chars.append("_" + ch)
            else:
                chars.append("_")
        elif ch.isalnum() or ch == "_":
            chars.append(ch)
        else:
            chars.append("_")
    return "".join(chars) or "ASSET"


def generate_identifier(path: str | PathLike) -> str:
    """Build an upper-case identifier from a file's parent directory and stem.

    ``textures/player.png`` becomes ``TEXTURES_PLAYER``.
    """
    path = Path(path)
    if path.name in _NO_NAME:
        raise ValidationError(f"Invalid filename: {path}")
    identifier = sanitize_identifier(path.stem)
    parent_name = path.parent.name
    if parent_name not in _NO_NAME:
        identifier = f"{sanitize_identifier(parent_name)}_{identifier}"
    return identifier.upper()


def check_collisions(paths: Iterable[str | PathLike]) -> None:
    """Raise IdentifierCollisionError on the first pair of paths sharing an identifier."""
    seen: dict[str, Path] = {}
    for raw in paths:
        path = Path(raw)
        ident = generate_identifier(path)
        if ident in seen:
            raise IdentifierCollisionError(ident, seen[ident], path)
        seen[ident] = path