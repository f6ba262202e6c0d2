"""Planar pose and velocity values and conversions between them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from collections.abc import Sequence

import numpy as np

from .transform import Transform


@dataclass(frozen=True, slots=True)
class Quaternion:
    """Rotation quaternion ``(x, y, z, w)``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass(frozen=True, slots=True)
class Pose:
    """Position and orientation in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    orientation: Quaternion = field(default_factory=Quaternion)


@dataclass(frozen=True, slots=True)
class Twist:
    """Planar velocity: linear ``x``, ``y`` and angular rate about z."""

    linear_x: float = 0.0
    linear_y: float = 0.0
    angular_z: float = 0.0


def yaw_from_quaternion(q: Quaternion) -> float:
    """Return the yaw angle of a quaternion, handling gimbal lock."""
    sqx, sqy, sqz, sqw = q.x * q.x, q.y * q.y, q.z * q.z, q.w * q.w
    sarg = -2.0 * (q.x * q.z - q.w * q.y) / (sqx + sqy + sqz + sqw)
    if sarg <= -0.99999:
        return -2.0 * math.atan2(q.y, q.x)
    if sarg >= 0.99999:
        return 2.0 * math.atan2(q.y, q.x)
    return math.atan2(2.0 * (q.x * q.y + q.w * q.z), sqw + sqx - sqy - sqz)


def quaternion_from_yaw(theta: float) -> Quaternion:
    """Return the quaternion for a rotation of ``theta`` about z."""
    return Quaternion(0.0, 0.0, math.sin(theta / 2), math.cos(theta / 2))


def make_pose(x: float, y: float, theta: float) -> Pose:
    """Build a planar pose at ``(x, y)`` with heading ``theta``."""
    return Pose(x, y, 0.0, quaternion_from_yaw(theta))


def make_twist(x: float, y: float, theta: float) -> Twist:
    """Build a planar velocity."""
    return Twist(x, y, theta)


def pose_to_vector(pose: Pose) -> np.ndarray:
    """Return ``[x, y, yaw]`` of a pose."""
    return np.array([pose.x, pose.y, yaw_from_quaternion(pose.orientation)])


def twist_to_vector(twist: Twist) -> np.ndarray:
    """Return ``[vx, vy, omega]`` of a twist."""
    return np.array([twist.linear_x, twist.linear_y, twist.angular_z])


def pose_to_transform(pose: Pose) -> Transform:
    """Return the planar transform of a pose."""
    return Transform(pose.x, pose.y, yaw_from_quaternion(pose.orientation))


def rotate_2d(vec: Sequence[float] | np.ndarray, theta: float) -> np.ndarray:
    """Rotate a 2D vector counter-clockwise by ``theta``."""
    v = np.asarray(vec, dtype=float)
    if v.shape != (2,):
        raise ValueError("rotate_2d expects a vector of length 2")
    c, s = math.cos(theta), math.sin(theta)
    rot = np.array([[c, -s], [s, c]])
    return rot @ v