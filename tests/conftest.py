import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import moderngl
import pytest

from shaderpass.core.timing import frozen_clock
from shaderpass.graphics.context import GLSLContext

_ATTRIBUTE_RE = re.compile(r"^\s*(?:layout\s*\([^)]*\)\s*)?in\s+\w+\s+(\w+)\s*;", re.M)
_UNIFORM_RE = re.compile(r"^\s*uniform\s+\w+\s+(\w+)\s*;", re.M)


@dataclass
class FakeUniform:
    name: str
    value: Any = None
    writes: List[bytes] = field(default_factory=list)

    def write(self, data: bytes) -> None:
        self.writes.append(bytes(data))


@dataclass
class FakeAttribute:
    name: str
    location: int


class FakeProgram:
    """Declares the `in` attributes of the vertex stage and every uniform."""

    def __init__(self, vertex_shader: str, fragment_shader: str):
        self.vertex_shader = vertex_shader
        self.fragment_shader = fragment_shader
        self.released = False
        self.members: Dict[str, Any] = {}

        for i, name in enumerate(_ATTRIBUTE_RE.findall(vertex_shader)):
            self.members[name] = FakeAttribute(name, i)
        for src in (vertex_shader, fragment_shader):
            for name in _UNIFORM_RE.findall(src):
                self.members[name] = FakeUniform(name)

    def get(self, name: str, default: Any = None) -> Any:
        return self.members.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.members[name]

    def __contains__(self, name: str) -> bool:
        return name in self.members

    def __iter__(self):
        return iter(self.members)

    def release(self) -> None:
        self.released = True


@dataclass(eq=False)
class FakeBuffer:
    data: bytes
    dynamic: bool = False
    released: bool = False

    def release(self) -> None:
        self.released = True


@dataclass(eq=False)
class FakeTexture:
    ctx: "FakeContext"
    size: Tuple[int, int]
    components: int
    data: Optional[bytes]
    dtype: str
    repeat_x: bool = True
    repeat_y: bool = True
    filter: Tuple[int, int] = (moderngl.LINEAR, moderngl.LINEAR)
    incomplete: bool = False

    def use(self, location: int = 0) -> None:
        self.ctx.log.append(("texture", location, self))


class FakeFramebuffer:
    def __init__(self, ctx: "FakeContext", color_attachments, size=None):
        self.ctx = ctx
        self.color_attachments = tuple(color_attachments)
        self.size = size or self.color_attachments[0].size
        self.viewport = (0, 0, *self.size)
        self.released = False

    def use(self) -> None:
        self.ctx.bound = self
        self.ctx.log.append(("use", self))

    def read(self, viewport=None, components=3, dtype="f1") -> bytes:
        self.ctx.log.append(("read", viewport, components, dtype))
        tex = self.color_attachments[0]
        if tex.data is not None and tex.dtype == dtype:
            return tex.data
        w, h = viewport[2], viewport[3]
        return bytes(w * h * components * 4)

    def release(self) -> None:
        self.released = True


class FakeVertexArray:
    def __init__(self, ctx: "FakeContext", program: FakeProgram, content):
        self.ctx = ctx
        self.program = program
        self.content = list(content)
        self.released = False

    def render(self, mode: int, vertices: int = -1, first: int = 0) -> None:
        self.ctx.log.append(("render", mode, vertices, first, self.ctx.bound))

    def release(self) -> None:
        self.released = True


class FakeContext:
    """
    Records calls made through the subset of the moderngl.Context API the
    engine uses.
    """

    version_code = 330
    info = {"GL_VENDOR": "fake", "GL_RENDERER": "fake"}
    viewport = (0, 0, 640, 480)

    def __init__(self):
        self.log: List[Tuple[Any, ...]] = []
        self.programs: List[FakeProgram] = []
        self.vertex_arrays: List[FakeVertexArray] = []
        self.framebuffers: List[FakeFramebuffer] = []
        self.program_error: Optional[str] = None
        self.screen = FakeFramebuffer(self, (), size=(640, 480))
        self.bound: Optional[FakeFramebuffer] = None

    @property
    def fbo(self):
        return self.bound

    def program(self, vertex_shader: str, fragment_shader: str) -> FakeProgram:
        if self.program_error is not None:
            raise moderngl.Error(self.program_error)
        prog = FakeProgram(vertex_shader, fragment_shader)
        self.programs.append(prog)
        return prog

    def buffer(self, data: bytes, dynamic: bool = False) -> FakeBuffer:
        return FakeBuffer(data, dynamic=dynamic)

    def texture(self, size, components, data=None, dtype="f1") -> FakeTexture:
        return FakeTexture(self, tuple(size), components, data, dtype)

    def framebuffer(self, color_attachments=()) -> FakeFramebuffer:
        if any(getattr(t, "incomplete", False) for t in color_attachments):
            raise moderngl.Error("the framebuffer is not complete")
        fbo = FakeFramebuffer(self, color_attachments)
        self.framebuffers.append(fbo)
        return fbo

    def vertex_array(self, program, content) -> FakeVertexArray:
        vao = FakeVertexArray(self, program, content)
        self.vertex_arrays.append(vao)
        return vao

    def renders(self) -> List[Tuple[Any, ...]]:
        return [entry for entry in self.log if entry[0] == "render"]


VERTEX = """#version 330 core
in vec2 a_position;
void main() {
    gl_Position = vec4(a_position, 0.0, 1.0);
}
"""

FRAGMENT = """#version 330 core
out vec4 fragColor;
uniform float u_time;
uniform vec2 u_resolution;
uniform vec3 u_tint;
uniform mat4 u_transform;
uniform sampler2D u_first;
uniform sampler2D u_second;
void main() {
    fragColor = vec4(u_tint, u_time);
}
"""


@pytest.fixture
def fake_gl():
    """A fresh recording fake of the moderngl context."""
    return FakeContext()


@pytest.fixture
def glsl(fake_gl):
    """GLSLContext on the fake context with u_time frozen at 1.5s."""
    return GLSLContext(fake_gl, clock=frozen_clock(1.5))


@pytest.fixture
def gl():
    """A GLSLContext on a real headless OpenGL context, if one can be made."""
    context = None
    errors = []
    for backend in ("egl", None):
        try:
            context = GLSLContext.standalone(
                size=(4, 4), backend=backend, clock=frozen_clock(0.0)
            )
            break
        except Exception as e:
            errors.append(f"{backend or 'default'}: {e}")
    if context is None:
        pytest.skip(f"No headless OpenGL context available ({'; '.join(errors)})")
    yield context
    context.release()
    context.ctx.release()
