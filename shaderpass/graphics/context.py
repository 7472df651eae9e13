# shaderpass/graphics/context.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Sequence

import moderngl
import numpy as np

from shaderpass.core.timing import ElapsedClock
from shaderpass.graphics.core.settings import ContextSettings
from shaderpass.graphics.helpers.fullscreen import create_fullscreen_quad
from shaderpass.graphics.passes.display import DisplayPass
from shaderpass.graphics.readback import read_data
from shaderpass.graphics.renderer.draw_call import DrawCallConfig
from shaderpass.graphics.renderer.executor import DrawCallExecutor, ExecutionReport
from shaderpass.graphics.resources.factory import ResourceFactory
from shaderpass.graphics.resources.texture import TextureFormat
from shaderpass.graphics.shaders.program_cache import ShaderProgramCache
from shaderpass.graphics.shaders.program_types import ShaderSourcePair
from shaderpass.types import Resolution

logger = logging.getLogger(__name__)


class GLSLContext:
    """
    Shader-first front end over one ModernGL context.

    Owns the program cache, the creation-time clock behind `u_time` and the
    draw-call executor. Single-threaded: every call must come from the
    thread that owns the GL context.
    """

    def __init__(
        self,
        ctx: moderngl.Context,
        *,
        settings: ContextSettings | None = None,
        surface: moderngl.Framebuffer | None = None,
        clock: ElapsedClock | None = None,
        resolution: Callable[[], Resolution] | None = None,
    ):
        """
        :param ctx: The ModernGL context to draw with.
        :param surface: Framebuffer standing in for the default surface.
            Defaults to `ctx.screen`.
        :param clock: Source of `u_time`. Starts now if not given.
        :param resolution: Source of `u_resolution`. Defaults to the size of
            the default surface viewport.
        """
        self.ctx = ctx
        self.settings = settings or ContextSettings()
        self.clock = clock or ElapsedClock()

        self._surface = surface
        self._resolution = resolution or self._surface_size

        self.resources = ResourceFactory(ctx)
        self.programs = ShaderProgramCache(
            ctx, concatenated_keys=self.settings.concatenated_cache_keys
        )
        self.executor = DrawCallExecutor(
            ctx,
            self.programs,
            builtin_uniforms=self.builtin_uniforms,
            surface=surface,
            settings=self.settings,
        )
        self._display = DisplayPass(
            self.executor, quad_factory=lambda: create_fullscreen_quad(ctx)
        )

    @classmethod
    def standalone(
        cls,
        size: Resolution = (256, 256),
        *,
        backend: str | None = None,
        **kwargs: Any,
    ) -> GLSLContext:
        """
        Create a headless context.

        Standalone contexts have no window framebuffer, so an RGBA8
        off-screen target of `size` acts as the default surface.

        :param backend: ModernGL context backend, e.g. "egl" on machines
            without a display. The platform default when None.
        """
        if backend is None:
            ctx = moderngl.create_standalone_context()
        else:
            ctx = moderngl.create_standalone_context(backend=backend)
        tex = ctx.texture(size, 4)
        surface = ctx.framebuffer(color_attachments=[tex])
        logger.debug("Standalone context with %dx%d surface", size[0], size[1])
        return cls(ctx, surface=surface, **kwargs)

    @property
    def surface(self) -> moderngl.Framebuffer:
        return self.executor.surface

    def _surface_size(self) -> Resolution:
        # The viewport follows window resizes; the framebuffer size does not.
        _, _, w, h = self.surface.viewport
        return (w, h)

    def builtin_uniforms(self) -> Dict[str, Any]:
        w, h = self._resolution()
        return {
            self.settings.time_uniform: float(self.clock.elapsed),
            self.settings.resolution_uniform: (float(w), float(h)),
        }

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def create_buffer(self, data: Sequence[float] | np.ndarray) -> moderngl.Buffer:
        return self.resources.create_buffer(data)

    def create_texture(
        self,
        width: int,
        height: int,
        data: Any = None,
        fmt: TextureFormat | None = None,
    ) -> moderngl.Texture:
        return self.resources.create_texture(width, height, data, fmt=fmt)

    def create_render_target(self, texture: moderngl.Texture) -> moderngl.Framebuffer:
        return self.resources.create_render_target(texture)

    def load_texture(self, path: str | Path) -> moderngl.Texture:
        return self.resources.load_texture(path)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def execute(self, config: DrawCallConfig) -> ExecutionReport:
        """
        Execute a draw call described by `config`.

        `u_time` and `u_resolution` are supplied unless `config.uniforms`
        sets them. Bindings made by the call are left in place afterwards.
        """
        return self.executor.execute(config)

    draw = execute

    def display(self, texture: moderngl.Texture) -> ExecutionReport:
        """Draw `texture` over the whole default surface (debug helper)."""
        return self._display.execute(texture)

    def read_data(
        self, texture: moderngl.Texture, width: int, height: int
    ) -> np.ndarray:
        """
        Read `texture` back as RGBA float32.

        Blocks until the GPU has finished all pending work; not for per-frame
        use.
        """
        return read_data(self.ctx, texture, width, height, surface=self.surface)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def invalidate_program(self, sources: ShaderSourcePair) -> bool:
        """Drop one cached program so the next draw recompiles it."""
        compiled = self.programs.get(sources)
        if compiled is not None:
            self.executor.forget(compiled)
        return self.programs.invalidate(sources)

    def clear_programs(self) -> None:
        """Evict every cached program (and the vertex arrays built on them)."""
        self.executor.release()
        self.programs.clear()

    def release(self) -> None:
        self._display.release()
        self.clear_programs()

    def __enter__(self) -> GLSLContext:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.release()
