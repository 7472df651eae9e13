# shaderpass/graphics/shaders/program_types.py
from __future__ import annotations

from dataclasses import dataclass

import moderngl


@dataclass(frozen=True, slots=True)
class ShaderSourcePair:
    """
    Vertex and fragment source text for one program.

    Equality and hashing use both fields separately.
    """

    vertex: str
    fragment: str

    @property
    def concatenated(self) -> str:
        return self.vertex + self.fragment


@dataclass(frozen=True, eq=False)
class CompiledProgram:
    """
    A linked program owned by a ShaderProgramCache.

    Compared by identity: two handles are the same program only if they
    are the same object.
    """

    program: moderngl.Program
    sources: ShaderSourcePair
    label: str = ""
