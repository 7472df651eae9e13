from shaderpass.errors import (
    IncompleteTargetError,
    ProgramLinkError,
    ShaderCompileError,
    ShaderPassError,
)
from shaderpass.graphics import (
    AttributeBinding,
    ContextSettings,
    DrawCallConfig,
    ExecutionReport,
    GLSLContext,
    ShaderSourcePair,
    TextureBinding,
    TextureFormat,
)
from shaderpass.types import DEFAULT_SURFACE, Primitive, UniformKind, UniformValue

__version__ = "0.1.0"

__all__ = [
    "GLSLContext",
    "ContextSettings",
    "DrawCallConfig",
    "AttributeBinding",
    "TextureBinding",
    "TextureFormat",
    "ShaderSourcePair",
    "ExecutionReport",
    "Primitive",
    "UniformKind",
    "UniformValue",
    "DEFAULT_SURFACE",
    "ShaderPassError",
    "ShaderCompileError",
    "ProgramLinkError",
    "IncompleteTargetError",
]
