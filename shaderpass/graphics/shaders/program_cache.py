# shaderpass/graphics/shaders/program_cache.py
from __future__ import annotations

import logging
from typing import Dict, Hashable, Tuple

import moderngl

from shaderpass.errors import ProgramLinkError, ShaderCompileError
from shaderpass.graphics.shaders.program_types import CompiledProgram, ShaderSourcePair

logger = logging.getLogger(__name__)

_STAGE_NAMES = (
    "vertex_shader",
    "fragment_shader",
    "geometry_shader",
    "tess_control_shader",
    "tess_evaluation_shader",
)


def _split_gl_error(message: str) -> Tuple[str, str, str]:
    """
    Split a ModernGL program error into (header, title, log).

    ModernGL formats these as:

        GLSL Compiler failed

        fragment_shader
        ===============
        0:3(1): error: ...
    """
    lines = message.strip().splitlines()
    header = lines[0] if lines else ""
    body = lines[1:]

    while body and not body[0].strip():
        body.pop(0)

    title = ""
    if body and body[0].strip().lower() in _STAGE_NAMES + ("program",):
        title = body.pop(0).strip()
    if body and set(body[0].strip()) == {"="}:
        body.pop(0)

    log = "\n".join(body).strip() or message.strip()
    return header, title, log


def translate_program_error(error: moderngl.Error) -> ShaderCompileError | ProgramLinkError:
    header, title, log = _split_gl_error(str(error))
    if "compiler" in header.lower():
        return ShaderCompileError(title or "shader", log)
    return ProgramLinkError(log)


class ShaderProgramCache:
    """
    Compiles vertex/fragment pairs into linked programs and memoizes them.

    Entries are created on first use and live until `clear()` or
    `invalidate()`; there is no automatic eviction.

    With `concatenated_keys=True` the key is the plain `vertex + fragment`
    text, so two pairs that only differ in where the text is split resolve
    to the same program. The default keys on the pair itself.
    """

    def __init__(self, ctx: moderngl.Context, *, concatenated_keys: bool = False):
        self.ctx = ctx
        self.concatenated_keys = concatenated_keys
        self._programs: Dict[Hashable, CompiledProgram] = {}
        self._compiled_count = 0

    def key_for(self, sources: ShaderSourcePair) -> Hashable:
        if self.concatenated_keys:
            return sources.concatenated
        return sources

    def resolve(self, sources: ShaderSourcePair) -> CompiledProgram:
        """
        Return the program for `sources`, compiling and linking on a miss.

        Raises:
            ShaderCompileError: A stage failed to compile; carries its log.
            ProgramLinkError: The stages failed to link; carries the log.
        """
        key = self.key_for(sources)

        cached = self._programs.get(key)
        if cached is not None:
            return cached

        try:
            program = self.ctx.program(
                vertex_shader=sources.vertex, fragment_shader=sources.fragment
            )
        except moderngl.Error as e:
            err = translate_program_error(e)
            logger.debug("Program build failed: %s", err)
            raise err from e

        compiled = CompiledProgram(
            program=program, sources=sources, label=f"program#{self._compiled_count}"
        )
        self._compiled_count += 1
        self._programs[key] = compiled
        logger.debug("Compiled %s", compiled.label)
        return compiled

    def get(self, sources: ShaderSourcePair) -> CompiledProgram | None:
        """The cached program for `sources`, without compiling."""
        return self._programs.get(self.key_for(sources))

    def invalidate(self, sources: ShaderSourcePair) -> bool:
        """Drop and release one entry. Returns False if it was not cached."""
        compiled = self._programs.pop(self.key_for(sources), None)
        if compiled is None:
            return False
        compiled.program.release()
        return True

    def clear(self) -> None:
        """Release every cached program."""
        count = len(self._programs)
        for compiled in self._programs.values():
            compiled.program.release()
        self._programs.clear()
        if count:
            logger.info("Released %d cached program(s)", count)

    def __len__(self) -> int:
        return len(self._programs)

    def __contains__(self, sources: ShaderSourcePair) -> bool:
        return self.key_for(sources) in self._programs

    def __iter__(self):
        return iter(self._programs.values())
