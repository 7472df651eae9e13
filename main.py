import logging
import sys

import pygame

from shaderpass import AttributeBinding, DrawCallConfig, GLSLContext, Primitive, TextureFormat
from shaderpass.graphics.core.settings import WindowSettings
from shaderpass.graphics.core.window import Window

VERTEX_SHADER = """#version 330 core
in vec2 a_position;
out vec2 v_uv;
void main() {
    v_uv = a_position * 0.5 + 0.5;
    gl_Position = vec4(a_position, 0.0, 1.0);
}
"""

PLASMA_SHADER = """#version 330 core
in vec2 v_uv;
out vec4 fragColor;
uniform float u_time;
uniform vec2 u_resolution;
void main() {
    vec2 p = v_uv * vec2(u_resolution.x / u_resolution.y, 1.0) * 4.0;
    float v = sin(p.x + u_time) + sin(p.y + u_time * 0.7)
            + sin(length(p - 2.0) * 2.0 - u_time * 1.3);
    fragColor = vec4(0.5 + 0.5 * sin(v), 0.5 + 0.5 * sin(v + 2.094),
                     0.5 + 0.5 * sin(v + 4.188), 1.0);
}
"""

QUAD = [-1.0, -1.0, 1.0, -1.0, -1.0, 1.0, 1.0, 1.0]


def _handle_pygame_events(window: Window) -> bool:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        if event.type == pygame.VIDEORESIZE:
            window.handle_resize(event)
    return True


def main() -> None:
    """Render an animated plasma off-screen and present it every frame."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    window = Window(WindowSettings(width=960, height=540, title="shaderpass demo"))
    glsl = GLSLContext(window.ctx, resolution=lambda: window.size)

    quad = glsl.create_buffer(QUAD)

    # Off-screen pass at a fixed internal resolution, presented with display().
    w, h = 480, 270
    canvas = glsl.create_texture(w, h, fmt=TextureFormat.RGBA32F)
    target = glsl.create_render_target(canvas)

    clock = pygame.time.Clock()
    running = True
    while running:
        running = _handle_pygame_events(window)

        glsl.execute(
            DrawCallConfig.from_sources(
                VERTEX_SHADER,
                PLASMA_SHADER,
                attributes={"a_position": AttributeBinding(quad, 2)},
                uniforms={"u_resolution": (float(w), float(h))},
                count=4,
                primitive=Primitive.TRIANGLE_STRIP,
                output=target,
            )
        )
        glsl.display(canvas)

        window.present()
        clock.tick(60)

    glsl.release()
    window.destroy()


if __name__ == "__main__":
    main()
    sys.exit(0)
