# shaderpass/graphics/renderer/draw_call.py
from __future__ import annotations

from dataclasses import dataclass, field
from collections import abc
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Sequence, Tuple

import moderngl

from shaderpass.graphics.shaders.program_types import ShaderSourcePair
from shaderpass.types import DEFAULT_SURFACE, OutputTarget, Primitive, Surface, UniformValue


@dataclass(frozen=True, slots=True)
class AttributeBinding:
    """
    A vertex buffer feeding one attribute.

    Data is always tightly packed float32 starting at offset zero, so only
    the component count is described.
    """

    buffer: moderngl.Buffer
    components: int

    def __post_init__(self) -> None:
        if not 1 <= self.components <= 4:
            raise ValueError(
                f"Attribute component count must be 1-4, got {self.components}"
            )

    @property
    def format(self) -> str:
        """ModernGL buffer format string, e.g. "2f"."""
        return f"{self.components}f"


class TextureBinding(NamedTuple):
    """A sampler uniform name and the texture it samples."""

    name: str
    texture: moderngl.Texture


def ordered_textures(
    textures: Sequence[TextureBinding | Tuple[str, moderngl.Texture]]
    | Mapping[str, moderngl.Texture],
) -> Tuple[TextureBinding, ...]:
    """
    Normalize texture bindings into unit order.

    Mappings are taken in insertion order.
    """
    items: Iterable[Tuple[str, moderngl.Texture]]
    if isinstance(textures, abc.Mapping):
        items = textures.items()
    else:
        items = textures
    return tuple(TextureBinding(name, tex) for name, tex in items)


@dataclass(slots=True)
class DrawCallConfig:
    """
    Declarative description of one draw call.

    Attributes:
        shaders: Vertex and fragment source.
        attributes: Attribute name -> buffer binding. Names the program does
            not declare are ignored.
        uniforms: Uniform name -> value. Overrides built-in uniforms of the
            same name.
        textures: (sampler name, texture) pairs; the i-th pair is bound to
            texture unit i.
        count: Number of vertices to draw. Not checked against buffer sizes.
        primitive: Topology of the vertex stream. None uses the context
            default (triangles unless configured otherwise).
        output: DEFAULT_SURFACE (or None) for the default framebuffer,
            otherwise an off-screen framebuffer.
    """

    shaders: ShaderSourcePair
    count: int
    attributes: Mapping[str, AttributeBinding] = field(default_factory=dict)
    uniforms: Mapping[str, UniformValue | Any] = field(default_factory=dict)
    textures: Sequence[TextureBinding] | Mapping[str, moderngl.Texture] = ()
    primitive: Primitive | str | None = None
    output: OutputTarget = DEFAULT_SURFACE

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Vertex count must be >= 0, got {self.count}")
        if self.primitive is not None:
            self.primitive = Primitive.parse(self.primitive)
        self.textures = ordered_textures(self.textures)

    @classmethod
    def from_sources(
        cls, vertex_shader: str, fragment_shader: str, **kwargs: Any
    ) -> DrawCallConfig:
        return cls(shaders=ShaderSourcePair(vertex_shader, fragment_shader), **kwargs)

    @property
    def targets_default_surface(self) -> bool:
        return self.output is None or self.output is Surface.DEFAULT


def merge_uniforms(
    builtins: Mapping[str, Any], overrides: Mapping[str, Any]
) -> Dict[str, Any]:
    """Built-in uniforms first, caller values winning on name clashes."""
    merged: Dict[str, Any] = dict(builtins)
    merged.update(overrides)
    return merged
