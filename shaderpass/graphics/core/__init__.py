from shaderpass.graphics.core.settings import ContextSettings, WindowSettings

__all__ = [
    "ContextSettings",
    "WindowSettings",
]
