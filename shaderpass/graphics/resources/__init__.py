from shaderpass.graphics.resources.factory import ResourceFactory
from shaderpass.graphics.resources.texture import TextureFormat

__all__ = [
    "ResourceFactory",
    "TextureFormat",
]
