# shaderpass/graphics/renderer/executor.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Sequence, Tuple

import moderngl

from shaderpass.graphics.core.settings import ContextSettings
from shaderpass.graphics.renderer.draw_call import (
    AttributeBinding,
    DrawCallConfig,
    TextureBinding,
    merge_uniforms,
)
from shaderpass.graphics.shaders.program_cache import ShaderProgramCache
from shaderpass.graphics.shaders.program_types import CompiledProgram
from shaderpass.graphics.utils.uniforms import UniformDispatcher, set_sampler
from shaderpass.types import Primitive, UniformKind

VaoLayout = Tuple[Tuple[str, int, int], ...]


class _CachedVertexArray(NamedTuple):
    layout: VaoLayout
    vao: moderngl.VertexArray
    buffers: Tuple[moderngl.Buffer, ...]


@dataclass(frozen=True, slots=True)
class ExecutionReport:
    """
    What a single `execute()` bound and submitted.

    Attributes:
        program: The program the draw used.
        attributes: Attribute names that were bound (declared by the program).
        texture_units: Sampler name -> texture unit, in unit order.
        uniforms: Uniform name -> shape for every uniform written.
        primitive: Topology submitted.
        count: Vertex count submitted.
        target: Framebuffer the draw rendered into.
    """

    program: CompiledProgram
    attributes: Tuple[str, ...]
    texture_units: Dict[str, int]
    uniforms: Dict[str, UniformKind]
    primitive: Primitive
    count: int
    target: Any


def find_attribute(program: moderngl.Program, name: str) -> Any | None:
    """Return the vertex attribute `name`, or None if not an active input."""
    member = program.get(name, None)
    if member is None or hasattr(member, "write") or not hasattr(member, "location"):
        return None
    return member


class DrawCallExecutor:
    """
    Realizes a DrawCallConfig as binding operations plus one draw.

    State contract: each call binds everything it needs (program, vertex
    inputs, texture units, uniforms, target) and nothing is unbound or
    restored afterwards. No GL state is guaranteed preserved or cleared
    between calls.
    """

    def __init__(
        self,
        ctx: moderngl.Context,
        programs: ShaderProgramCache,
        *,
        builtin_uniforms: Callable[[], Mapping[str, Any]],
        surface: moderngl.Framebuffer | None = None,
        settings: ContextSettings | None = None,
        dispatcher: UniformDispatcher | None = None,
    ):
        self.ctx = ctx
        self.programs = programs
        self.settings = settings or ContextSettings()
        self.dispatcher = dispatcher or UniformDispatcher()

        self._builtin_uniforms = builtin_uniforms
        self._surface = surface

        # One vertex array per program, rebuilt when the binding layout changes.
        # The buffers are kept alongside so their ids stay unique while the
        # entry lives.
        self._vaos: Dict[int, _CachedVertexArray] = {}

    @property
    def surface(self) -> moderngl.Framebuffer:
        """The default (on-screen) framebuffer."""
        if self._surface is not None:
            return self._surface
        return self.ctx.screen

    def execute(self, config: DrawCallConfig) -> ExecutionReport:
        """
        Run one draw call.

        Raises:
            ShaderCompileError: A stage of `config.shaders` failed to compile.
            ProgramLinkError: The program failed to link.
        """
        compiled = self.programs.resolve(config.shaders)
        program = compiled.program

        uniforms = merge_uniforms(self._builtin_uniforms(), config.uniforms)

        vao, bound = self._vertex_array(program, config.attributes)
        units = self._bind_textures(program, config.textures)
        written = self.dispatcher.dispatch_all(program, uniforms)

        target = self._select_target(config)
        target.use()

        primitive = config.primitive or self.settings.default_primitive
        vao.render(mode=primitive.gl_mode, vertices=config.count, first=0)

        return ExecutionReport(
            program=compiled,
            attributes=bound,
            texture_units=units,
            uniforms=written,
            primitive=primitive,
            count=config.count,
            target=target,
        )

    def _vertex_array(
        self, program: moderngl.Program, attributes: Mapping[str, AttributeBinding]
    ) -> Tuple[moderngl.VertexArray, Tuple[str, ...]]:
        active: List[Tuple[str, AttributeBinding]] = [
            (name, binding)
            for name, binding in attributes.items()
            if find_attribute(program, name) is not None
        ]

        layout: VaoLayout = tuple(
            (name, id(b.buffer), b.components) for name, b in active
        )
        names = tuple(name for name, _ in active)

        cached = self._vaos.get(id(program))
        if cached is not None:
            if cached.layout == layout:
                return cached.vao, names
            cached.vao.release()

        content = [(b.buffer, b.format, name) for name, b in active]
        vao = self.ctx.vertex_array(program, content)
        self._vaos[id(program)] = _CachedVertexArray(
            layout, vao, tuple(b.buffer for _, b in active)
        )
        return vao, names

    def _bind_textures(
        self, program: moderngl.Program, textures: Sequence[TextureBinding]
    ) -> Dict[str, int]:
        units: Dict[str, int] = {}
        for unit, (name, texture) in enumerate(textures):
            texture.use(location=unit)
            set_sampler(program, name, unit)
            units[name] = unit
        return units

    def _select_target(self, config: DrawCallConfig) -> moderngl.Framebuffer:
        if config.targets_default_surface:
            return self.surface
        return config.output

    def forget(self, compiled: CompiledProgram) -> None:
        """Release the vertex array built for `compiled`."""
        cached = self._vaos.pop(id(compiled.program), None)
        if cached is not None:
            cached.vao.release()

    def release(self) -> None:
        for cached in self._vaos.values():
            cached.vao.release()
        self._vaos.clear()
