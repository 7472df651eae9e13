from shaderpass.graphics.shaders.program_cache import ShaderProgramCache
from shaderpass.graphics.shaders.program_types import CompiledProgram, ShaderSourcePair

__all__ = [
    "ShaderProgramCache",
    "CompiledProgram",
    "ShaderSourcePair",
]
