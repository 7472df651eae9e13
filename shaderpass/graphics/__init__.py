from shaderpass.graphics.context import GLSLContext
from shaderpass.graphics.core.settings import ContextSettings
from shaderpass.graphics.renderer.draw_call import (
    AttributeBinding,
    DrawCallConfig,
    TextureBinding,
)
from shaderpass.graphics.renderer.executor import DrawCallExecutor, ExecutionReport
from shaderpass.graphics.resources.texture import TextureFormat
from shaderpass.graphics.shaders.program_types import ShaderSourcePair

__all__ = [
    "GLSLContext",
    "ContextSettings",
    "DrawCallConfig",
    "DrawCallExecutor",
    "ExecutionReport",
    "AttributeBinding",
    "TextureBinding",
    "TextureFormat",
    "ShaderSourcePair",
]
