"""Linear Kalman filter with support for variable (EKF-style) matrices."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


class KalmanFilterError(ValueError):
    """Raised when matrix shapes do not fit or the gain cannot be computed."""


def as_matrix(value: ArrayLike) -> np.ndarray:
    """Return ``value`` as a 2D float array; 1D input becomes a column."""
    arr = np.array(value, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1, 1)
    if arr.ndim == 1:
        return arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise KalmanFilterError(f"expected a matrix, got {arr.ndim} dimensions")
    return arr


def _empty() -> np.ndarray:
    return np.zeros((0, 0))


class KalmanFilter:
    """Kalman filter for ``x[k+1] = A x[k] + B u[k]`` and ``y[k] = C x[k]``.

    The state ``x`` and covariance ``P`` are read from the attributes of the
    same name; the model matrices ``A``, ``B``, ``C``, ``Q`` and ``R`` may be
    assigned directly.
    """

    def __init__(
        self,
        x: ArrayLike | None = None,
        A: ArrayLike | None = None,
        B: ArrayLike | None = None,
        C: ArrayLike | None = None,
        Q: ArrayLike | None = None,
        R: ArrayLike | None = None,
        P: ArrayLike | None = None,
    ) -> None:
        self.x = _empty()
        self.A = _empty()
        self.B = _empty()
        self.C = _empty()
        self.Q = _empty()
        self.R = _empty()
        self.P = _empty()
        given = (x, A, B, C, Q, R, P)
        if any(m is not None for m in given):
            if any(m is None for m in given):
                raise KalmanFilterError("either all or none of x, A, B, C, Q, R, P must be given")
            self.init(x, A, B, C, Q, R, P)

    def init(self, x, A, B, C, Q, R, P) -> None:
        """Set the initial state, the model matrices and the initial covariance."""
        mats = [as_matrix(m) for m in (x, A, B, C, Q, R, P)]
        if any(0 in m.shape for m in mats):
            raise KalmanFilterError("matrices must not be empty")
        self.x, self.A, self.B, self.C, self.Q, self.R, self.P = mats

    def init_state(self, x, P) -> None:
        """Set only the initial state and covariance."""
        x_m, p_m = as_matrix(x), as_matrix(P)
        if 0 in x_m.shape or 0 in p_m.shape:
            raise KalmanFilterError("state and covariance must not be empty")
        self.x, self.P = x_m, p_m

    def predict(self, u, A=None, B=None, Q=None) -> None:
        """Propagate with ``x = A x + B u``; missing matrices use the stored ones."""
        u_m = as_matrix(u)
        A_m = self.A if A is None else as_matrix(A)
        B_m = self.B if B is None else as_matrix(B)
        Q_m = self.Q if Q is None else as_matrix(Q)
        if A_m.shape[1] != self.x.shape[0] or B_m.shape[1] != u_m.shape[0]:
            raise KalmanFilterError("A or B does not fit the state or the input")
        self.predict_state(A_m @ self.x + B_m @ u_m, A_m, Q_m)

    def predict_state(self, x_next, A, Q=None) -> None:
        """Accept an externally predicted state and propagate the covariance."""
        x_n = as_matrix(x_next)
        A_m = as_matrix(A)
        Q_m = self.Q if Q is None else as_matrix(Q)
        if (
            self.x.shape[0] != x_n.shape[0]
            or A_m.shape[1] != self.P.shape[0]
            or Q_m.shape[1] != Q_m.shape[0]
            or A_m.shape[0] != Q_m.shape[1]
        ):
            raise KalmanFilterError("predicted state, A or Q has the wrong shape")
        self.x = x_n
        self.P = A_m @ self.P @ A_m.T + Q_m

    def update(self, y, C=None, R=None) -> None:
        """Correct with measurement ``y`` using ``y_pred = C x``."""
        C_m = self.C if C is None else as_matrix(C)
        R_m = self.R if R is None else as_matrix(R)
        if C_m.shape[1] != self.x.shape[0]:
            raise KalmanFilterError("C does not fit the state")
        self.update_with_prediction(y, C_m @ self.x, C_m, R_m)

    def update_with_prediction(self, y, y_pred, C, R) -> None:
        """Correct with measurement ``y`` against an expected output ``y_pred``."""
        y_m, yp_m, C_m, R_m = (as_matrix(m) for m in (y, y_pred, C, R))
        if (
            self.P.shape[1] != C_m.shape[1]
            or R_m.shape[0] != R_m.shape[1]
            or R_m.shape[0] != C_m.shape[0]
            or y_m.shape[0] != yp_m.shape[0]
            or y_m.shape[0] != C_m.shape[0]
        ):
            raise KalmanFilterError("measurement, C or R has the wrong shape")
        pct = self.P @ C_m.T
        try:
            gain = pct @ np.linalg.inv(R_m + C_m @ pct)
        except np.linalg.LinAlgError as exc:
            raise KalmanFilterError("innovation covariance is singular") from exc
        if not np.all(np.isfinite(gain)):
            raise KalmanFilterError("Kalman gain is not finite")
        self.x = self.x + gain @ (y_m - yp_m)
        self.P = self.P - gain @ (C_m @ self.P)