"""Exceptions raised while converting assets."""

from __future__ import annotations

from pathlib import Path


class AssetError(Exception):
    """Base class for every asset conversion failure."""


class ImageDecodeError(AssetError):
    """A PNG image could not be decoded."""

    def __init__(self, path, message):
        self.path = Path(path)
        self.message = str(message)
        super().__init__(f"Image decode error for {self.path}: {self.message}")


class ObjParseError(AssetError):
    """An OBJ mesh file could not be parsed."""

    def __init__(self, path, message):
        self.path = Path(path)
        self.message = str(message)
        super().__init__(f"OBJ parse error for {self.path}: {self.message}")


class ValidationError(AssetError):
    """Input failed validation (dimensions, empty mesh, bad filename, ...)."""

    def __str__(self) -> str:
        return f"Validation error: {super().__str__()}"


class IdentifierCollisionError(AssetError):
    """Two source files map to the same generated identifier."""

    def __init__(self, identifier, path_a, path_b):
        self.identifier = identifier
        self.path_a = Path(path_a)
        self.path_b = Path(path_b)
        super().__init__(
            f"Identifier collision: {identifier} is produced by both "
            f"{self.path_a} and {self.path_b}"
        )


class CodeGenError(AssetError):
    """Output files could not be generated."""

    def __str__(self) -> str:
        return f"Code generation error: {super().__str__()}"