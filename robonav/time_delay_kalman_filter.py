"""Kalman filter that accepts measurements delayed by whole steps."""

from __future__ import annotations

import numpy as np

from .kalman_filter import KalmanFilter, KalmanFilterError, as_matrix


class TimeDelayKalmanFilter(KalmanFilter):
    """Keeps the last ``max_delay_step`` states stacked in one extended state."""

    def __init__(self) -> None:
        super().__init__()
        self.max_delay_step = 0
        self.dim_x = 0
        self.dim_x_ex = 0

    def init_delayed(self, x, P0, max_delay_step: int) -> None:
        """Fill every delay slot with ``x`` and ``P0``."""
        x_m, p_m = as_matrix(x), as_matrix(P0)
        if max_delay_step < 1:
            raise KalmanFilterError("max_delay_step must be at least 1")
        self.max_delay_step = max_delay_step
        self.dim_x = x_m.shape[0]
        self.dim_x_ex = self.dim_x * max_delay_step
        self.x = np.tile(x_m, (max_delay_step, 1))
        self.P = np.kron(np.eye(max_delay_step), p_m)

    def latest_x(self) -> np.ndarray:
        """Return the most recent state estimate."""
        return self.x[: self.dim_x, :1].copy()

    def latest_p(self) -> np.ndarray:
        """Return the covariance of the most recent state estimate."""
        return self.P[: self.dim_x, : self.dim_x].copy()

    def predict_with_delay(self, x_next, A, Q) -> None:
        """Shift the states back one step and predict the newest one."""
        x_n, A_m, Q_m = as_matrix(x_next), as_matrix(A), as_matrix(Q)
        n, d = self.dim_x, self.dim_x_ex - self.dim_x

        x_tmp = np.zeros((self.dim_x_ex, 1))
        x_tmp[:n] = x_n
        x_tmp[n:] = self.x[:d]
        self.x = x_tmp

        p = self.P
        p_tmp = np.zeros((self.dim_x_ex, self.dim_x_ex))
        p_tmp[:n, :n] = A_m @ p[:n, :n] @ A_m.T + Q_m
        p_tmp[:n, n:] = A_m @ p[:n, :d]
        p_tmp[n:, :n] = p[:d, :n] @ A_m.T
        p_tmp[n:, n:] = p[:d, :d]
        self.P = p_tmp

    def update_with_delay(self, y, C, R, delay_step: int) -> None:
        """Correct with a measurement of the state ``delay_step`` steps ago."""
        if delay_step >= self.max_delay_step:
            raise KalmanFilterError("delay step is larger than max_delay_step")
        if delay_step < 0:
            raise KalmanFilterError("delay step must not be negative")
        y_m, C_m = as_matrix(y), as_matrix(C)
        dim_y = y_m.shape[0]
        c_ex = np.zeros((dim_y, self.dim_x_ex))
        start = self.dim_x * delay_step
        c_ex[:, start : start + self.dim_x] = C_m
        self.update(y_m, c_ex, R)