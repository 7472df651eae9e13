# shaderpass/graphics/passes/display.py
from __future__ import annotations

from typing import Callable

import moderngl

from shaderpass.graphics.helpers.fullscreen import FULLSCREEN_QUAD_VERTICES
from shaderpass.graphics.renderer.draw_call import AttributeBinding, DrawCallConfig
from shaderpass.graphics.renderer.executor import DrawCallExecutor, ExecutionReport
from shaderpass.graphics.shaders.program_types import ShaderSourcePair
from shaderpass.types import DEFAULT_SURFACE, Primitive

DISPLAY_VERTEX_SHADER = """#version 330 core
in vec2 a_position;
out vec2 v_texCoord;
void main() {
    v_texCoord = a_position * 0.5 + 0.5;
    gl_Position = vec4(a_position, 0.0, 1.0);
}
"""

DISPLAY_FRAGMENT_SHADER = """#version 330 core
in vec2 v_texCoord;
out vec4 fragColor;
uniform sampler2D u_texture;
void main() {
    fragColor = texture(u_texture, v_texCoord);
}
"""

DISPLAY_SHADERS = ShaderSourcePair(DISPLAY_VERTEX_SHADER, DISPLAY_FRAGMENT_SHADER)


class DisplayPass:
    """
    Debug shortcut that shows a texture full-screen on the default surface.

    Goes through the regular DrawCallExecutor with fixed shaders and a quad
    buffer created on first use.
    """

    def __init__(
        self,
        executor: DrawCallExecutor,
        quad_factory: Callable[[], moderngl.Buffer],
    ):
        self._executor = executor
        self._quad_factory = quad_factory
        self._quad: moderngl.Buffer | None = None

    def config_for(self, texture: moderngl.Texture) -> DrawCallConfig:
        if self._quad is None:
            self._quad = self._quad_factory()

        return DrawCallConfig(
            shaders=DISPLAY_SHADERS,
            attributes={"a_position": AttributeBinding(self._quad, 2)},
            textures=[("u_texture", texture)],
            count=FULLSCREEN_QUAD_VERTICES,
            primitive=Primitive.TRIANGLE_STRIP,
            output=DEFAULT_SURFACE,
        )

    def execute(self, texture: moderngl.Texture) -> ExecutionReport:
        return self._executor.execute(self.config_for(texture))

    def release(self) -> None:
        if self._quad is not None:
            self._quad.release()
            self._quad = None
