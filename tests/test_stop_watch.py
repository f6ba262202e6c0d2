import pytest

from robonav.stop_watch import StopWatch


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def test_default_timer_starts_on_construction():
    clock = FakeClock(1_000)
    sw = StopWatch(clock=clock)
    clock.now += 2_000_000_000
    assert sw.toc() == pytest.approx(2.0)


def test_sub_microsecond_durations_truncate_to_zero():
    clock = FakeClock()
    sw = StopWatch(clock=clock)
    clock.now = 999
    assert sw.toc() == 0.0


def test_named_timers_are_independent():
    clock = FakeClock()
    sw = StopWatch(clock=clock)
    clock.now = 1_000_000_000
    sw.tic("lap")
    clock.now = 3_000_000_000
    assert sw.toc("lap") < sw.toc()
    assert sw.toc() - sw.toc("lap") == pytest.approx(1.0)


def test_reset_restarts_timer():
    clock = FakeClock()
    sw = StopWatch(clock=clock)
    clock.now = 5_000_000_000
    first = sw.toc(reset=True)
    assert first == pytest.approx(5.0)
    assert sw.toc() == 0.0


def test_without_reset_keeps_start():
    clock = FakeClock()
    sw = StopWatch(clock=clock)
    clock.now = 1_000_000_000
    a = sw.toc()
    clock.now = 2_000_000_000
    assert sw.toc() == pytest.approx(2 * a)


def test_unit_scaling():
    clock = FakeClock()
    seconds = StopWatch(clock=clock)
    millis = StopWatch(unit=1e-3, clock=clock)
    clock.now = 1_234_567_000
    assert millis.toc() == pytest.approx(seconds.toc() * 1000)


def test_unknown_timer_raises_key_error():
    sw = StopWatch(clock=FakeClock())
    with pytest.raises(KeyError):
        sw.toc("missing")


def test_real_clock_is_non_negative_and_monotonic():
    sw = StopWatch()
    first = sw.toc()
    second = sw.toc()
    assert 0.0 <= first <= second