# shaderpass/graphics/readback.py
from __future__ import annotations

import logging

import moderngl
import numpy as np

from shaderpass.errors import IncompleteTargetError

logger = logging.getLogger(__name__)


def read_data(
    ctx: moderngl.Context,
    texture: moderngl.Texture,
    width: int,
    height: int,
    surface: moderngl.Framebuffer | None = None,
) -> np.ndarray:
    """
    Read a texture back to the CPU as RGBA float32.

    WARNING: this stalls until every pending GPU command on the context has
    finished. Use it for tests and debugging, never per frame.

    The texture is attached to a temporary framebuffer which is released
    before returning; `surface` (the default framebuffer, if any) is bound
    again afterwards.

    Returns:
        np.ndarray: float32 array of length width * height * 4, rows bottom
        to top.

    Raises:
        IncompleteTargetError: If the texture cannot be attached for reading.
    """
    try:
        fbo = ctx.framebuffer(color_attachments=[texture])
    except moderngl.Error as e:
        raise IncompleteTargetError(
            f"Framebuffer is not complete for reading data: {e}"
        ) from e

    try:
        fbo.use()
        raw = fbo.read(
            viewport=(0, 0, width, height), components=4, dtype="f4"
        )
    finally:
        fbo.release()
        if surface is not None:
            surface.use()

    logger.debug("Read back %dx%d texels", width, height)
    return np.frombuffer(raw, dtype=np.float32).copy()
