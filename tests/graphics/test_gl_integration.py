"""
Draw calls against a real headless OpenGL context.

Skipped when the machine cannot create one (no GPU / no EGL / no display).
"""

import numpy as np
import pytest

from shaderpass.errors import ShaderCompileError
from shaderpass.graphics.renderer.draw_call import AttributeBinding, DrawCallConfig
from shaderpass.graphics.resources.texture import TextureFormat
from shaderpass.types import Primitive

QUAD = [-1.0, -1.0, 1.0, -1.0, -1.0, 1.0, 1.0, 1.0]

VERTEX = """#version 330 core
in vec2 a_position;
void main() {
    gl_Position = vec4(a_position, 0.0, 1.0);
}
"""

COORDS_FRAGMENT = """#version 330 core
out vec4 fragColor;
uniform float u_time;
uniform vec2 u_resolution;
void main() {
    fragColor = vec4(gl_FragCoord.xy / u_resolution, u_time, 1.0);
}
"""

TINT_FRAGMENT = """#version 330 core
out vec4 fragColor;
uniform vec3 u_tint;
void main() {
    fragColor = vec4(u_tint, 1.0);
}
"""


def quad_config(gl, fragment, **kwargs):
    quad = gl.create_buffer(QUAD)
    return DrawCallConfig.from_sources(
        VERTEX,
        fragment,
        attributes={"a_position": AttributeBinding(quad, 2)},
        count=4,
        primitive=Primitive.TRIANGLE_STRIP,
        **kwargs,
    )


def float_target(gl, w=4, h=4):
    tex = gl.create_texture(w, h, fmt=TextureFormat.RGBA32F)
    return tex, gl.create_render_target(tex)


def test_float_texture_round_trip(gl):
    data = np.random.default_rng(7).random(3 * 2 * 4, dtype=np.float32)
    tex = gl.create_texture(3, 2, data)

    out = gl.read_data(tex, 3, 2)

    assert out.shape == (24,)
    np.testing.assert_allclose(out, data, rtol=1e-6)


def test_quad_into_float_target_matches_shader(gl):
    tex, target = float_target(gl)

    gl.execute(quad_config(gl, COORDS_FRAGMENT, output=target))
    out = gl.read_data(tex, 4, 4).reshape(4, 4, 4)

    for y in range(4):
        for x in range(4):
            expected = ((x + 0.5) / 4.0, (y + 0.5) / 4.0, 0.0, 1.0)
            np.testing.assert_allclose(out[y, x], expected, atol=1e-6)


def test_vec3_uniform_reaches_the_shader(gl):
    tex, target = float_target(gl, 2, 2)

    gl.execute(quad_config(gl, TINT_FRAGMENT, output=target, uniforms={"u_tint": (0.25, 0.5, 0.75)}))
    out = gl.read_data(tex, 2, 2).reshape(-1, 4)

    np.testing.assert_allclose(out, [[0.25, 0.5, 0.75, 1.0]] * 4, atol=1e-6)


def test_offscreen_draw_leaves_surface_untouched(gl):
    surface_tex = gl.surface.color_attachments[0]
    gl.surface.clear(0.0, 0.0, 0.0, 0.0)

    tex, target = float_target(gl)
    gl.execute(quad_config(gl, TINT_FRAGMENT, output=target, uniforms={"u_tint": (1.0, 1.0, 1.0)}))

    assert np.all(gl.read_data(surface_tex, 4, 4) == 0.0)
    assert np.all(gl.read_data(tex, 4, 4) == 1.0)


def test_default_output_draws_to_surface(gl):
    surface_tex = gl.surface.color_attachments[0]
    gl.surface.clear(0.0, 0.0, 0.0, 0.0)

    gl.execute(quad_config(gl, TINT_FRAGMENT, uniforms={"u_tint": (1.0, 0.0, 1.0)}))
    out = gl.read_data(surface_tex, 4, 4).reshape(-1, 4)

    np.testing.assert_allclose(out, [[1.0, 0.0, 1.0, 1.0]] * 16, atol=1 / 255)


def test_display_shows_texture_on_surface(gl):
    data = np.tile(np.array([0.0, 1.0, 0.0, 1.0], dtype=np.float32), 4 * 4)
    gl.display(gl.create_texture(4, 4, data))

    out = gl.read_data(gl.surface.color_attachments[0], 4, 4).reshape(-1, 4)
    np.testing.assert_allclose(out, [[0.0, 1.0, 0.0, 1.0]] * 16, atol=1 / 255)


def test_compile_error_names_the_stage(gl):
    broken = "#version 330 core\nout vec4 fragColor;\nvoid main() { fragColor = oops; }\n"

    with pytest.raises(ShaderCompileError) as exc:
        gl.execute(quad_config(gl, broken))

    assert exc.value.stage == "fragment_shader"
    assert exc.value.log
    assert len(gl.programs) == 0
