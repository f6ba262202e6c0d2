"""Named stopwatch timers."""

from __future__ import annotations

import time
from typing import Callable

DEFAULT_NAME = "__auto__"


class StopWatch:
    """Measures elapsed time for any number of named timers.

    Durations are measured at microsecond resolution and reported in
    multiples of ``unit`` seconds.  ``clock`` returns nanoseconds.
    """

    def __init__(
        self,
        unit: float = 1.0,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self._unit = unit
        self._clock = clock
        self._starts: dict[str, int] = {}
        self.tic()

    def tic(self, name: str = DEFAULT_NAME) -> None:
        """Start (or restart) the timer ``name``."""
        self._starts[name] = self._clock()

    def toc(self, name: str = DEFAULT_NAME, reset: bool = False) -> float:
        """Return the time elapsed since ``tic(name)``, optionally restarting it."""
        try:
            start = self._starts[name]
        except KeyError:
            raise KeyError(f"no timer named {name!r}") from None
        end = self._clock()
        elapsed_us = (end - start) // 1000
        if reset:
            self._starts[name] = self._clock()
        one_unit_us = int(self._unit * 1_000_000)
        return elapsed_us / one_unit_us