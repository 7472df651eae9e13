# shaderpass/graphics/helpers/fullscreen.py
from __future__ import annotations

from typing import Tuple

import moderngl

from shaderpass.graphics.resources.buffer import create_vertex_buffer

# Clip-space corners in triangle-strip order: BL, BR, TL, TR.
FULLSCREEN_QUAD: Tuple[float, ...] = (-1.0, -1.0, 1.0, -1.0, -1.0, 1.0, 1.0, 1.0)
FULLSCREEN_QUAD_VERTICES = 4


def create_fullscreen_quad(ctx: moderngl.Context) -> moderngl.Buffer:
    """
    Create a vertex buffer for a quad covering the whole viewport.

    4 vec2 positions (float32), drawn as a TRIANGLE_STRIP.
    """
    return create_vertex_buffer(ctx, FULLSCREEN_QUAD)
