# shaderpass/graphics/utils/uniforms.py
import logging
import struct
from typing import Any, Callable, Dict, Mapping, Sequence

import moderngl

from shaderpass.types import UniformKind, UniformValue

logger = logging.getLogger(__name__)


def pack_float(val: float) -> bytes:
    return struct.pack("f", val)


def pack_vec2(x: float, y: float) -> bytes:
    return struct.pack("2f", x, y)


def pack_vec3(x: float, y: float, z: float) -> bytes:
    return struct.pack("3f", x, y, z)


def pack_vec4(x: float, y: float, z: float, w: float) -> bytes:
    return struct.pack("4f", x, y, z, w)


def pack_mat3(values: Sequence[float]) -> bytes:
    """Packs 9 floats, already in column-major order."""
    if len(values) != 9:
        raise ValueError("Matrix must have 9 elements")
    return struct.pack("9f", *values)


def pack_mat4(values: Sequence[float]) -> bytes:
    """Packs 16 floats, already in column-major order."""
    if len(values) != 16:
        raise ValueError("Matrix must have 16 elements")
    return struct.pack("16f", *values)


_PACKERS: Dict[UniformKind, Callable[[Sequence[float]], bytes]] = {
    UniformKind.SCALAR: lambda d: pack_float(d[0]),
    UniformKind.VEC2: lambda d: pack_vec2(*d),
    UniformKind.VEC3: lambda d: pack_vec3(*d),
    UniformKind.VEC4: lambda d: pack_vec4(*d),
    UniformKind.MAT3: pack_mat3,
    UniformKind.MAT4: pack_mat4,
}


def find_uniform(program: moderngl.Program | None, name: str) -> Any | None:
    """
    Look up a uniform member by name.

    Returns None for names the program does not declare (or the linker
    optimized out) and for members that are not plain uniforms, such as
    attributes.
    """
    if program is None:
        return None
    member = program.get(name, None)
    if member is None or not hasattr(member, "write"):
        return None
    return member


def set_sampler(program: moderngl.Program | None, name: str, unit: int) -> bool:
    """Point sampler `name` at texture unit `unit`. False if undeclared."""
    member = find_uniform(program, name)
    if member is None:
        return False
    member.value = unit
    return True


class UniformDispatcher:
    """
    Uploads float uniforms by shape.

    Accepts `UniformValue`s or raw values (float, flat sequences of
    length 2/3/4/9/16, (3, 3)/(4, 4) arrays). Raw values of any other
    shape are reported with a warning and left unset.
    """

    def dispatch(
        self, program: moderngl.Program, name: str, value: UniformValue | Any
    ) -> UniformKind | None:
        """
        Upload one uniform.

        Returns the shape used for the upload, or None when the uniform was
        skipped (undeclared name or unsupported shape).
        """
        member = find_uniform(program, name)
        if member is None:
            return None

        uniform = value if isinstance(value, UniformValue) else UniformValue.infer(value)
        if uniform is None:
            logger.warning(
                "Uniform '%s' has an unsupported shape: %s", name, _describe(value)
            )
            return None

        member.write(_PACKERS[uniform.kind](uniform.data))
        return uniform.kind

    def dispatch_all(
        self, program: moderngl.Program, uniforms: Mapping[str, UniformValue | Any]
    ) -> Dict[str, UniformKind]:
        """Upload every entry; returns the uniforms actually written."""
        written: Dict[str, UniformKind] = {}
        for name, value in uniforms.items():
            kind = self.dispatch(program, name, value)
            if kind is not None:
                written[name] = kind
        return written


def _describe(value: Any) -> str:
    shape = getattr(value, "shape", None)
    if shape is not None:
        return f"shape {tuple(shape)}"
    try:
        return f"length {len(value)}"
    except TypeError:
        return type(value).__name__
