"""Numeric helpers and constants for planar robotics."""

from __future__ import annotations

import math

PI = 3.1415926535897932384626433832795
HALF_PI = PI / 2.0
TWO_PI = PI * 2.0
DEG_TO_RAD = PI / 180.0
RAD_TO_DEG = 180.0 / PI
EULER = 2.718281828459045235360287471352
GRAVITY = 9.807
NM_TO_GFM = 1.0 / GRAVITY
GFM_TO_NM = GRAVITY
MNM_TO_GFCM = NM_TO_GFM * 100
GFCM_TO_MNM = GFM_TO_NM / 100

_EPSILON = 1e-12


def in_range_open(x, low, high) -> bool:
    """Return True if ``low < x < high``."""
    return low < x < high


def in_range(x, low, high) -> bool:
    """Return True if ``low <= x <= high``."""
    return low <= x <= high


def sgn(x) -> int:
    """Return the sign of ``x`` as -1, 0 or 1."""
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def radians(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * DEG_TO_RAD


def degrees(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * RAD_TO_DEG


def normalize_angle_positive(angle: float) -> float:
    """Wrap an angle into the range [0, 2*pi)."""
    return math.fmod(math.fmod(angle, TWO_PI) + TWO_PI, TWO_PI)


def normalize_angle(angle: float) -> float:
    """Wrap an angle into the range (-pi, pi]."""
    a = normalize_angle_positive(angle)
    if a > PI:
        a -= TWO_PI
    return a


def shortest_angular_distance(start: float, end: float) -> float:
    """Return the signed smallest rotation from ``start`` to ``end``."""
    return normalize_angle(end - start)


def square(x: float) -> float:
    """Return ``x`` squared."""
    return x * x


def cubic(x: float) -> float:
    """Return ``x`` cubed."""
    return x * x * x


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate between ``a`` and ``b`` by ratio ``t``."""
    return a + (b - a) * t


def approx_eq(a: float, b: float) -> bool:
    """Return True if ``a`` and ``b`` differ by less than 1e-12."""
    return abs(a - b) < _EPSILON


def approx_zero(a: float) -> bool:
    """Return True if ``a`` is within 1e-12 of zero."""
    return abs(a) < _EPSILON