"""PI velocity controller for a planar mobile base."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .geometry import Twist, make_twist, twist_to_vector

_STOP_THRESHOLD = 0.01


def _as_velocity(value: Twist | Sequence[float] | np.ndarray) -> np.ndarray:
    if isinstance(value, Twist):
        return twist_to_vector(value)
    vec = np.asarray(value, dtype=float)
    if vec.shape != (3,):
        raise ValueError("a velocity needs exactly three components (vx, vy, omega)")
    return vec


class VelocityController:
    """Adds PI feedback on the velocity error to a velocity command."""

    def __init__(
        self,
        dt: float = 0.01,
        xy_kp: float = 0.5,
        xy_ki: float = 0.0,
        yaw_kp: float = 0.5,
        yaw_ki: float = 0.0,
    ) -> None:
        self.dt = dt
        self.xy_kp = xy_kp
        self.xy_ki = xy_ki
        self.yaw_kp = yaw_kp
        self.yaw_ki = yaw_ki
        self.integral_error = np.zeros(3)

    def reset(self) -> None:
        """Clear the accumulated error."""
        self.integral_error = np.zeros(3)

    def command(self, target, current) -> Twist:
        """Return the velocity to command for ``target`` given the measured ``current``.

        A target slower than 0.01 is passed through and clears the integral.
        """
        target_v = _as_velocity(target)
        current_v = _as_velocity(current)
        if np.linalg.norm(target_v) < _STOP_THRESHOLD:
            self.reset()
            return make_twist(*(float(v) for v in target_v))
        error = target_v - current_v
        self.integral_error = self.integral_error + error * self.dt
        vel = target_v.copy()
        vel[:2] += error[:2] * self.xy_kp + self.integral_error[:2] * self.xy_ki
        vel[2] += error[2] * self.yaw_kp + self.integral_error[2] * self.yaw_ki
        return make_twist(*(float(v) for v in vel))