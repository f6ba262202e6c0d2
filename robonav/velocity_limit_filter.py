"""Filters that follow an input while limiting the rate of change."""

from __future__ import annotations


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class DiffPair:
    """Bilinear pseudo-differentiator paired with a matching low-pass filter."""

    def __init__(self, ts: float, gpd: float) -> None:
        self.ts = ts
        self.gpd = gpd
        self.reset()

    def reset(self, u: float = 0.0) -> None:
        self._u1 = u
        self._y1_diff = 0.0
        self._y1_pass = 0.0

    def step(self, u: float) -> tuple[float, float]:
        """Return the filtered derivative and the low-passed value of ``u``."""
        g, ts = self.gpd, self.ts
        diff = (2.0 * g * (u - self._u1) + (2.0 - ts * g) * self._y1_diff) / (2.0 + ts * g)
        passed = (g * ts * (u + self._u1) + (2.0 - g * ts) * self._y1_pass) / (2.0 + ts * g)
        self._u1 = u
        self._y1_diff = diff
        self._y1_pass = passed
        return diff, passed


class Integrator:
    """Trapezoidal integrator."""

    def __init__(self, ts: float) -> None:
        self.ts = ts
        self.value = 0.0
        self._u1 = 0.0

    def reset(self, u: float = 0.0) -> None:
        self.value = u
        self._u1 = 0.0

    def step(self, u: float) -> float:
        self.value += (self._u1 + u) * self.ts * 0.5
        self._u1 = u
        return self.value


class VelocityLimitFilter:
    """Tracks the input with its rate of change bounded by ``v_max``.

    ``gpd`` defaults to ``1 / ts`` and ``fb_gain`` to ``0.5 / ts``.  When
    ``limit`` is a ``(low, high)`` pair, input and output are clamped to it.
    """

    def __init__(
        self,
        v_max: float,
        ts: float,
        gpd: float | None = None,
        fb_gain: float | None = None,
        limit: tuple[float, float] | None = None,
    ) -> None:
        self.ts = ts
        self.v_max = v_max
        self.gpd = 1.0 / ts if gpd is None else gpd
        self.fb_gain = 0.5 / ts if fb_gain is None else fb_gain
        self.limit = limit
        self._dp = DiffPair(ts, self.gpd)
        self._intr = Integrator(ts)
        self._u1 = 0.0
        self._y1 = 0.0
        VelocityLimitFilter.reset(self, 0.0)

    def reset(self, u: float = 0.0) -> None:
        self._u1 = u
        self._y1 = u
        self._dp.reset(u)
        self._intr.reset(u)

    def filtering(self, u: float) -> float:
        """Advance one step with input ``u`` and return the output."""
        if self.limit is not None:
            u = _clamp(u, *self.limit)
        diff, passed = self._dp.step(u)
        v = diff - self.fb_gain * (self._y1 - passed)
        v = _clamp(v, -self.v_max, self.v_max)
        y = self._intr.step(v)
        if self.limit is not None:
            y = _clamp(y, *self.limit)
        self._u1 = u
        self._y1 = y
        return y


class StateHeldVelocityLimitFilter(VelocityLimitFilter):
    """Velocity limit filter that keeps its last input ``u`` and output ``y``."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.u = 0.0
        self.y = 0.0

    def set_input(self, u: float) -> None:
        self.u = u

    def step(self) -> float:
        """Filter the held input and return the new output."""
        self.y = self.filtering(self.u)
        return self.y

    def reset(self, u: float = 0.0) -> None:
        self.u = u
        self.y = u
        super().reset(u)


class ClampVelLimitFilter(StateHeldVelocityLimitFilter):
    """State-held filter whose input is clamped to ``[low, high]``."""

    def __init__(self, low: float, high: float, v_max: float, ts: float) -> None:
        super().__init__(v_max, ts)
        self.low = low
        self.high = high
        self.u = low
        self.y = low

    def set_input(self, u: float) -> None:
        self.u = _clamp(u, self.low, self.high)

    def reset(self, u: float | None = None) -> None:
        """Reset to ``u`` clamped to the range, or to ``low`` when omitted."""
        value = _clamp(self.low if u is None else u, self.low, self.high)
        super().reset(value)