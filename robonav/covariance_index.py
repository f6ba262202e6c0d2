"""Indices into a row-major 6x6 pose covariance (x, y, z, roll, pitch, yaw)."""

from __future__ import annotations

from enum import IntEnum

_AXES = ("X", "Y", "Z", "ROLL", "PITCH", "YAW")

CovIndex = IntEnum(
    "CovIndex",
    {
        f"{row}_{col}": r * len(_AXES) + c
        for r, row in enumerate(_AXES)
        for c, col in enumerate(_AXES)
    },
    module=__name__,
)
CovIndex.__doc__ = "Flat index of each entry of a 6x6 pose covariance matrix."