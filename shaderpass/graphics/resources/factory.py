# shaderpass/graphics/resources/factory.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import moderngl
import numpy as np

from shaderpass.errors import IncompleteTargetError
from shaderpass.graphics.resources.buffer import create_vertex_buffer
from shaderpass.graphics.resources.texture import (
    TextureFormat,
    allocate_texture,
    read_image_rgba,
)

logger = logging.getLogger(__name__)


class ResourceFactory:
    """
    Allocates buffers, textures and off-screen targets on one context.

    Holds no state besides the context: handles are returned to the caller,
    who reuses them across draw calls.
    """

    def __init__(self, ctx: moderngl.Context):
        self.ctx = ctx

    def create_buffer(self, data: Sequence[float] | np.ndarray) -> moderngl.Buffer:
        return create_vertex_buffer(self.ctx, data)

    def create_texture(
        self,
        width: int,
        height: int,
        data: Any = None,
        fmt: TextureFormat | None = None,
    ) -> moderngl.Texture:
        """
        Create a 4-channel 2D texture.

        Floating-point `data` selects RGBA32F; anything else (including no
        data) selects RGBA8 unless `fmt` says otherwise.
        """
        tex = allocate_texture(self.ctx, width, height, data=data, fmt=fmt)
        logger.debug("Created %dx%d texture (%s)", width, height, tex.dtype)
        return tex

    def create_render_target(self, texture: moderngl.Texture) -> moderngl.Framebuffer:
        """
        Wrap `texture` in a framebuffer usable as a draw call output.

        Raises:
            IncompleteTargetError: If the driver rejects the attachment.
        """
        try:
            return self.ctx.framebuffer(color_attachments=[texture])
        except moderngl.Error as e:
            raise IncompleteTargetError(f"Render target is not complete: {e}") from e

    def load_texture(self, path: str | Path) -> moderngl.Texture:
        """Create an RGBA8 texture from an image file."""
        data, width, height = read_image_rgba(path)
        return self.create_texture(width, height, data, fmt=TextureFormat.RGBA8)
