# shaderpass/graphics/resources/texture.py
from __future__ import annotations

import array
import numbers
from enum import Enum
from pathlib import Path
from typing import Any, Tuple

import moderngl
import numpy as np
from PIL import Image


class TextureFormat(str, Enum):
    """Storage formats for 4-channel 2D textures (ModernGL dtype strings)."""

    RGBA8 = "f1"
    RGBA32F = "f4"


TEXTURE_COMPONENTS = 4


def is_float_data(data: Any) -> bool:
    """
    True when `data` carries floating-point samples.

    numpy float arrays, `array('f')`/`array('d')` and lists/tuples that
    hold at least one float qualify. Bytes-like data and integer
    sequences do not.
    """
    if data is None or isinstance(data, (bytes, bytearray, memoryview)):
        return False
    if isinstance(data, np.ndarray):
        return np.issubdtype(data.dtype, np.floating)
    if isinstance(data, array.array):
        return data.typecode in ("f", "d")
    if isinstance(data, (list, tuple)):
        return any(
            isinstance(v, numbers.Real) and not isinstance(v, numbers.Integral)
            for v in data
        )
    return False


def choose_format(data: Any) -> TextureFormat:
    return TextureFormat.RGBA32F if is_float_data(data) else TextureFormat.RGBA8


def texture_payload(data: Any, fmt: TextureFormat) -> bytes | None:
    """Convert caller data into the bytes ModernGL expects for `fmt`."""
    if data is None:
        return None
    if fmt is TextureFormat.RGBA32F:
        return np.asarray(data, dtype="<f4").ravel().tobytes()
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return np.asarray(data, dtype=np.uint8).ravel().tobytes()


def allocate_texture(
    ctx: moderngl.Context,
    width: int,
    height: int,
    data: Any = None,
    fmt: TextureFormat | None = None,
) -> moderngl.Texture:
    """
    Allocate a 4-channel data texture.

    Sampling is fixed to clamp-to-edge and nearest filtering with no
    mipmaps, so texel values are read back exactly.

    Raises:
        ValueError: If the dimensions are not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Texture dimensions must be positive")

    fmt = fmt or choose_format(data)

    tex = ctx.texture(
        size=(width, height),
        components=TEXTURE_COMPONENTS,
        data=texture_payload(data, fmt),
        dtype=fmt.value,
    )
    tex.repeat_x = False
    tex.repeat_y = False
    tex.filter = (moderngl.NEAREST, moderngl.NEAREST)
    return tex


def read_image_rgba(path: str | Path) -> Tuple[bytes, int, int]:
    """Load an image file as RGBA8 bytes. Returns (data, width, height)."""
    with Image.open(path) as img:
        converted = img.convert("RGBA")
        width, height = converted.size
        data = converted.tobytes()
    return data, width, height
