"""PNG loading, dimension validation and RGBA8888 conversion."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path

from PIL import Image

from .errors import ImageDecodeError, ValidationError
from .identifier import generate_identifier
from .types import TextureAsset

log = logging.getLogger(__name__)

MIN_DIMENSION = 8
MAX_DIMENSION = 1024


def is_power_of_two(n: int) -> bool:
    """True when n is a positive power of two."""
    return n > 0 and n & (n - 1) == 0


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def validate_dimensions(width: int, height: int) -> None:
    """Raise ValidationError unless both sides are powers of two within GPU limits."""
    if not is_power_of_two(width) or not is_power_of_two(height):
        next_w = _next_power_of_two(width)
        next_h = _next_power_of_two(height)
        raise ValidationError(
            f"Expected power-of-two dimensions, got {width}×{height}. "
            f"Try {next_w}×{next_h} or {next_w // 2}×{next_h // 2}."
        )
    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise ValidationError(
            f"Dimensions {width}×{height} below GPU minimum "
            f"({MIN_DIMENSION}×{MIN_DIMENSION})"
        )
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise ValidationError(
            f"Dimensions {width}×{height} exceed GPU maximum "
            f"({MAX_DIMENSION}×{MAX_DIMENSION})"
        )


def load_and_convert(path: str | PathLike) -> TextureAsset:
    """Load a PNG, validate its size and return its pixels as RGBA8888."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            width, height = img.size
            validate_dimensions(width, height)
            data = img.convert("RGBA").tobytes()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(path, exc) from exc

    identifier = generate_identifier(path)
    log.info(
        "  Dimensions: %d×%d RGBA8, Size: %d bytes (%.1f KB), Identifier: %s",
        width,
        height,
        len(data),
        len(data) / 1024.0,
        identifier,
    )
    return TextureAsset(
        source=path,
        width=width,
        height=height,
        data=data,
        identifier=identifier,
    )