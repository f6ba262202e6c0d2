"""Planar pose: position and heading."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator

from .math_util import approx_zero, lerp as _lerp
from .vector2 import Vector2


@dataclass(frozen=True, slots=True)
class Transform:
    """Position ``(x, y)`` and heading ``theta`` in a 2D frame."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    @classmethod
    def from_vector2(cls, xy: Vector2, theta: float) -> Transform:
        return cls(xy.x, xy.y, theta)

    @classmethod
    def from_polar(cls, radius: float, angle: float, theta: float) -> Transform:
        """Place the position at ``radius`` along ``angle`` with heading ``theta``."""
        return cls(radius * math.cos(angle), radius * math.sin(angle), theta)

    def to_vector2(self) -> Vector2:
        return Vector2(self.x, self.y)

    def distance(self) -> float:
        """Return the distance of the position from the origin."""
        return self.to_vector2().norm()

    def rotated(self, theta: float, center: Vector2 | None = None) -> Transform:
        """Rotate the position about ``center``; the heading is kept."""
        if center is None:
            center = Vector2.zero()
        p = (self.to_vector2() - center).rotated(theta) + center
        return Transform(p.x, p.y, self.theta)

    def is_zero(self) -> bool:
        return approx_zero(self.x) and approx_zero(self.y) and approx_zero(self.theta)

    def is_zero_pos(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def is_zero_angle(self) -> bool:
        return self.theta == 0.0

    def has_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.theta)

    @staticmethod
    def angle_between(a: Transform, b: Transform) -> float:
        """Return the heading change from ``a`` to ``b``."""
        return b.theta - a.theta

    @staticmethod
    def distance_between(a: Transform, b: Transform) -> float:
        return (b - a).distance()

    @staticmethod
    def lerp(a: Transform, b: Transform, t: float) -> Transform:
        return Transform(
            _lerp(a.x, b.x, t), _lerp(a.y, b.y, t), _lerp(a.theta, b.theta, t)
        )

    @classmethod
    def origin(cls) -> Transform:
        return cls(0.0, 0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.theta

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.theta
        raise IndexError(f"Transform index out of range: {index}")

    def __add__(self, other: object) -> Transform:
        if isinstance(other, Transform):
            return Transform(self.x + other.x, self.y + other.y, self.theta + other.theta)
        if isinstance(other, Vector2):
            return Transform(self.x + other.x, self.y + other.y, self.theta)
        if isinstance(other, Real):
            return Transform(self.x, self.y, self.theta + float(other))
        return NotImplemented

    def __sub__(self, other: object) -> Transform:
        if isinstance(other, Transform):
            return Transform(self.x - other.x, self.y - other.y, self.theta - other.theta)
        if isinstance(other, Vector2):
            return Transform(self.x - other.x, self.y - other.y, self.theta)
        if isinstance(other, Real):
            return Transform(self.x, self.y, self.theta - float(other))
        return NotImplemented

    def __mul__(self, value: object) -> Transform:
        if isinstance(value, Real):
            v = float(value)
            return Transform(self.x * v, self.y * v, self.theta * v)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, value: object) -> Transform:
        if isinstance(value, Real):
            v = float(value)
            return Transform(self.x / v, self.y / v, self.theta / v)
        return NotImplemented