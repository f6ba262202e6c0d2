"""Immutable two-dimensional vector."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator

from .math_util import approx_zero, lerp as _lerp


@dataclass(frozen=True, slots=True)
class Vector2:
    """A 2D vector with the usual arithmetic."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_polar(cls, radius: float, theta: float) -> Vector2:
        """Build a vector from a length and a direction."""
        return cls(radius * math.cos(theta), radius * math.sin(theta))

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2) -> float:
        """Return the z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def norm_sq(self) -> float:
        return self.dot(self)

    def norm(self) -> float:
        return math.sqrt(self.norm_sq())

    def angle(self) -> float:
        """Return the direction of the vector in radians."""
        return math.atan2(self.y, self.x)

    def normalized(self) -> Vector2:
        """Return a unit vector with the same direction."""
        return self / self.norm()

    def rotated(self, theta: float) -> Vector2:
        """Return the vector rotated counter-clockwise by ``theta``."""
        c, s = math.cos(theta), math.sin(theta)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def is_zero(self) -> bool:
        return approx_zero(self.x) and approx_zero(self.y)

    def has_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)

    def yx(self) -> Vector2:
        return Vector2(self.y, self.x)

    def nyx(self) -> Vector2:
        return Vector2(-self.y, self.x)

    def ynx(self) -> Vector2:
        return Vector2(self.y, -self.x)

    def nxy(self) -> Vector2:
        return Vector2(-self.x, self.y)

    def xny(self) -> Vector2:
        return Vector2(self.x, -self.y)

    def lerp(self, other: Vector2, t: float) -> Vector2:
        """Interpolate between this vector and ``other``."""
        return Vector2(_lerp(self.x, other.x, t), _lerp(self.y, other.y, t))

    @staticmethod
    def angle_between(a: Vector2, b: Vector2) -> float:
        """Return the unsigned angle between two vectors."""
        value = a.dot(b) / (a.norm() * b.norm())
        return math.acos(max(-1.0, min(1.0, value)))

    @staticmethod
    def distance(a: Vector2, b: Vector2) -> float:
        return (b - a).norm()

    @classmethod
    def zero(cls) -> Vector2:
        return cls(0.0, 0.0)

    @classmethod
    def up(cls) -> Vector2:
        return cls(0.0, 1.0)

    @classmethod
    def down(cls) -> Vector2:
        return cls(0.0, -1.0)

    @classmethod
    def right(cls) -> Vector2:
        return cls(1.0, 0.0)

    @classmethod
    def left(cls) -> Vector2:
        return cls(-1.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        raise IndexError(f"Vector2 index out of range: {index}")

    def __pos__(self) -> Vector2:
        return self

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __add__(self, other: object) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other: object) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __mul__(self, scalar: object) -> Vector2:
        if isinstance(scalar, Real):
            s = float(scalar)
            return Vector2(self.x * s, self.y * s)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar: object) -> Vector2:
        if isinstance(scalar, Real):
            s = float(scalar)
            return Vector2(self.x / s, self.y / s)
        return NotImplemented