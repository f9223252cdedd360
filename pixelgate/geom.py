"""Two-dimensional vectors, matrices and affine transformations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Union

_ROUNDING_EPSILON = 1e-7


@dataclass(frozen=True)
class Vec2:
    """A 2D Cartesian vector."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> Vec2:
        return cls(0.0, 0.0)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(scalar * self.x, scalar * self.y)

    __rmul__ = __mul__


@dataclass(frozen=True)
class Mat2:
    """A general 2x2 matrix ``[[a, b], [c, d]]``."""

    a: float
    b: float
    c: float
    d: float

    @classmethod
    def identity(cls) -> Mat2:
        return cls(1.0, 0.0, 0.0, 1.0)

    @classmethod
    def rotation(cls, angle: float) -> Mat2:
        """Counter-clockwise rotation by ``angle`` radians, snapping near-axis angles."""
        sin, cos = math.sin(angle), math.cos(angle)
        if abs(sin) < _ROUNDING_EPSILON or abs(cos) < _ROUNDING_EPSILON:
            sin, cos = float(round(sin)), float(round(cos))
        return cls(cos, -sin, sin, cos)

    def col_0(self) -> Vec2:
        return Vec2(self.a, self.c)

    def col_1(self) -> Vec2:
        return Vec2(self.b, self.d)

    def scaled(self, scalar: float) -> Mat2:
        return Mat2(scalar * self.a, scalar * self.b, scalar * self.c, scalar * self.d)

    def _times_diag(self, x: float, y: float) -> Mat2:
        return Mat2(self.a * x, self.b * y, self.c * x, self.d * y)

    def _diag_times(self, x: float, y: float) -> Mat2:
        return Mat2(x * self.a, x * self.b, y * self.c, y * self.d)

    def __matmul__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.a * other.x + self.b * other.y, self.c * other.x + self.d * other.y)
        if isinstance(other, Mat2):
            return Mat2(
                self.a * other.a + self.b * other.c,
                self.a * other.b + self.b * other.d,
                self.c * other.a + self.d * other.c,
                self.c * other.b + self.d * other.d,
            )
        return NotImplemented


Point = Union[Vec2, Sequence[float]]


@dataclass(frozen=True)
class Affine:
    """An affine transformation in 2D space."""

    mat: Mat2
    offset: Vec2

    @classmethod
    def id(cls) -> Affine:
        """Identity transformation."""
        return cls(Mat2.identity(), Vec2.zero())

    @classmethod
    def translate(cls, x_offset: float, y_offset: float) -> Affine:
        return cls(Mat2.identity(), Vec2(x_offset, y_offset))

    @classmethod
    def rotate(cls, angle: float) -> Affine:
        """Counter-clockwise rotation by ``angle`` radians."""
        return cls(Mat2.rotation(angle), Vec2.zero())

    @classmethod
    def scale_axes(cls, scale_x: float, scale_y: float) -> Affine:
        return cls(Mat2(scale_x, 0.0, 0.0, scale_y), Vec2.zero())

    @classmethod
    def scale(cls, scale: float) -> Affine:
        return cls.scale_axes(scale, scale)

    def pre_transform(self, rhs: Affine) -> Affine:
        """``self`` composed with ``rhs``: ``rhs`` is applied first."""
        return Affine(self.mat @ rhs.mat, self.offset + self.mat @ rhs.offset)

    def pre_scale_axes(self, scale_x: float, scale_y: float) -> Affine:
        return Affine(self.mat._times_diag(scale_x, scale_y), self.offset)

    def pre_scale(self, scale: float) -> Affine:
        return Affine(self.mat.scaled(scale), self.offset)

    def pre_rotate(self, angle: float) -> Affine:
        return Affine(self.mat @ Mat2.rotation(angle), self.offset)

    def pre_translate(self, x_offset: float, y_offset: float) -> Affine:
        return Affine(self.mat, self.offset + self.mat @ Vec2(x_offset, y_offset))

    def post_scale_axes(self, scale_x: float, scale_y: float) -> Affine:
        return Affine(
            self.mat._diag_times(scale_x, scale_y),
            Vec2(scale_x * self.offset.x, scale_y * self.offset.y),
        )

    def post_scale(self, scale: float) -> Affine:
        return Affine(self.mat.scaled(scale), scale * self.offset)

    def post_rotate(self, angle: float) -> Affine:
        rotation = Mat2.rotation(angle)
        return Affine(rotation @ self.mat, rotation @ self.offset)

    def post_translate(self, x_offset: float, y_offset: float) -> Affine:
        return Affine(self.mat, self.offset + Vec2(x_offset, y_offset))

    def apply(self, point: Point):
        """Transform a point; returns a ``Vec2`` for a ``Vec2`` and a tuple otherwise."""
        if isinstance(point, Vec2):
            return self.mat @ point + self.offset
        x, y = point
        result = self.mat @ Vec2(float(x), float(y)) + self.offset
        return (result.x, result.y)