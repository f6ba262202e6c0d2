"""Golden-section search for the minimum of a unimodal function."""

from __future__ import annotations

import math
from typing import Callable

_PHI = (1.0 + math.sqrt(5.0)) / 2.0


def golden_search(
    f: Callable[[float], float], low: float, high: float, loop_num: int = 5
) -> float:
    """Return the point in ``[low, high]`` approximately minimising ``f``."""
    left, right = low, high
    p0 = (_PHI * left + right) / (1.0 + _PHI)
    f0 = f(p0)
    p1 = (left + _PHI * right) / (1.0 + _PHI)
    f1 = f(p1)

    for _ in range(loop_num):
        if f0 < f1:
            right = p1
            p1, f1 = p0, f0
            p0 = (_PHI * left + right) / (1.0 + _PHI)
            f0 = f(p0)
        else:
            left = p0
            p0, f0 = p1, f1
            p1 = (left + _PHI * right) / (1.0 + _PHI)
            f1 = f(p1)
        if left == right:
            return left

    return 0.5 * (left + right)