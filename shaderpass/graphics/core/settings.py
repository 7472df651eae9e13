# shaderpass/graphics/core/settings.py
from dataclasses import dataclass
from typing import Tuple

from shaderpass.types import Primitive


@dataclass(slots=True)
class ContextSettings:
    """
    Per-context behaviour of the draw-call engine.
    """

    time_uniform: str = "u_time"
    resolution_uniform: str = "u_resolution"
    default_primitive: Primitive = Primitive.TRIANGLES

    # Key the program cache on `vertex + fragment` text instead of the
    # (vertex, fragment) pair. Sources that only differ in where the split
    # falls then share one program.
    concatenated_cache_keys: bool = False


@dataclass(slots=True)
class WindowSettings:
    """
    Controls the optional pygame window that provides the default surface.
    """

    width: int = 1280
    height: int = 720
    title: str = "shaderpass"
    gl_version: Tuple[int, int] = (3, 3)
    resizable: bool = True
    vsync: bool = True
