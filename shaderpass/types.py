# shaderpass/types.py
from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, Tuple, TypeAlias

import moderngl
import numpy as np

Resolution = Tuple[int, int]

RawUniform: TypeAlias = float | Sequence[float] | np.ndarray


class Primitive(str, Enum):
    """Primitive topologies accepted by a draw call."""

    POINTS = "points"
    LINES = "lines"
    LINE_LOOP = "line_loop"
    LINE_STRIP = "line_strip"
    TRIANGLES = "triangles"
    TRIANGLE_STRIP = "triangle_strip"
    TRIANGLE_FAN = "triangle_fan"

    @classmethod
    def parse(cls, value: Primitive | str) -> Primitive:
        """
        Accept enum members as well as "TRIANGLE_STRIP", "triangle_strip"
        and "triangle-strip" spellings.
        """
        if isinstance(value, Primitive):
            return value
        key = str(value).strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown primitive topology: {value!r}") from None

    @property
    def gl_mode(self) -> int:
        return _GL_MODES[self]


_GL_MODES = {
    Primitive.POINTS: moderngl.POINTS,
    Primitive.LINES: moderngl.LINES,
    Primitive.LINE_LOOP: moderngl.LINE_LOOP,
    Primitive.LINE_STRIP: moderngl.LINE_STRIP,
    Primitive.TRIANGLES: moderngl.TRIANGLES,
    Primitive.TRIANGLE_STRIP: moderngl.TRIANGLE_STRIP,
    Primitive.TRIANGLE_FAN: moderngl.TRIANGLE_FAN,
}


class Surface(Enum):
    """Marker for the context's default (on-screen) framebuffer."""

    DEFAULT = "default"


DEFAULT_SURFACE = Surface.DEFAULT

OutputTarget: TypeAlias = "moderngl.Framebuffer | Surface | None"


class UniformKind(str, Enum):
    SCALAR = "scalar"
    VEC2 = "vec2"
    VEC3 = "vec3"
    VEC4 = "vec4"
    MAT3 = "mat3"
    MAT4 = "mat4"

    @property
    def size(self) -> int:
        return _KIND_SIZES[self]


_KIND_SIZES = {
    UniformKind.SCALAR: 1,
    UniformKind.VEC2: 2,
    UniformKind.VEC3: 3,
    UniformKind.VEC4: 4,
    UniformKind.MAT3: 9,
    UniformKind.MAT4: 16,
}

# Flat sequences are classified by length alone. 1 is not listed: a one
# element sequence is not a scalar.
_KIND_BY_LENGTH = {
    2: UniformKind.VEC2,
    3: UniformKind.VEC3,
    4: UniformKind.VEC4,
    9: UniformKind.MAT3,
    16: UniformKind.MAT4,
}


@dataclass(frozen=True, slots=True)
class UniformValue:
    """
    A uniform value with an explicit shape.

    Matrices are stored column-major, the order GLSL expects.
    """

    kind: UniformKind
    data: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.data) != self.kind.size:
            raise ValueError(
                f"{self.kind.value} uniform needs {self.kind.size} floats, "
                f"got {len(self.data)}"
            )

    @staticmethod
    def scalar(x: float) -> UniformValue:
        return UniformValue(UniformKind.SCALAR, (float(x),))

    @staticmethod
    def vec2(x: float, y: float) -> UniformValue:
        return UniformValue(UniformKind.VEC2, (float(x), float(y)))

    @staticmethod
    def vec3(x: float, y: float, z: float) -> UniformValue:
        return UniformValue(UniformKind.VEC3, (float(x), float(y), float(z)))

    @staticmethod
    def vec4(x: float, y: float, z: float, w: float) -> UniformValue:
        return UniformValue(
            UniformKind.VEC4, (float(x), float(y), float(z), float(w))
        )

    @staticmethod
    def mat3(values: Sequence[float] | np.ndarray) -> UniformValue:
        return UniformValue(UniformKind.MAT3, _column_major(values, 3))

    @staticmethod
    def mat4(values: Sequence[float] | np.ndarray) -> UniformValue:
        return UniformValue(UniformKind.MAT4, _column_major(values, 4))

    @staticmethod
    def infer(value: Any) -> UniformValue | None:
        """
        Classify a raw value by its shape.

        Returns None when the shape is not one of scalar, vec2-4, mat3
        or mat4. 2-D arrays of shape (3, 3) / (4, 4) are read as matrices
        in math convention and stored column-major; flat sequences are
        taken to be column-major already.
        """
        if isinstance(value, UniformValue):
            return value

        if value is None or isinstance(value, (bool, str, bytes)):
            return None

        if isinstance(value, numbers.Real):
            return UniformValue.scalar(float(value))

        try:
            arr = np.asarray(value, dtype=np.float64)
        except (TypeError, ValueError):
            return None

        if arr.ndim == 0:
            return UniformValue.scalar(float(arr))

        if arr.ndim == 2:
            if arr.shape == (3, 3):
                return UniformValue.mat3(arr)
            if arr.shape == (4, 4):
                return UniformValue.mat4(arr)
            return None

        if arr.ndim != 1:
            return None

        kind = _KIND_BY_LENGTH.get(arr.shape[0])
        if kind is None:
            return None
        return UniformValue(kind, tuple(float(v) for v in arr))


def _column_major(values: Sequence[float] | np.ndarray, n: int) -> Tuple[float, ...]:
    arr = np.asarray(values, dtype=np.float64)
    if arr.shape == (n, n):
        arr = arr.T
    return tuple(float(v) for v in arr.ravel())
