# shaderpass/graphics/resources/buffer.py
from typing import Sequence

import moderngl
import numpy as np


def as_float32_bytes(data: Sequence[float] | np.ndarray) -> bytes:
    """Flatten `data` into tightly packed little-endian float32."""
    arr = np.asarray(data, dtype="<f4")
    return arr.ravel().tobytes()


def create_vertex_buffer(
    ctx: moderngl.Context, data: Sequence[float] | np.ndarray
) -> moderngl.Buffer:
    """
    Upload vertex data once.

    The buffer is created static (`dynamic=False`); its contents are not
    expected to change after upload.
    """
    return ctx.buffer(as_float32_bytes(data), dynamic=False)
