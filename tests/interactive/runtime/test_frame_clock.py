import time

import pytest

from shapedrift.interactive.runtime.frame_clock import FrameTimer


class _FakeNow:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


def test_frame_timer_returns_elapsed_since_previous_tick():
    now = _FakeNow(10.0)
    timer = FrameTimer(now=now)
    timer.start()

    now.t = 10.016
    tick = timer.tick()
    assert tick.delta_seconds == pytest.approx(0.016)

    now.t = 10.050
    assert timer.tick().delta_seconds == pytest.approx(0.034)


def test_frame_timer_does_not_catch_up_missed_frames():
    # 予算超過はそのまま次の delta に現れるだけで、分割や補償はしない。
    now = _FakeNow(0.0)
    timer = FrameTimer(now=now)
    timer.start()
    now.t = 0.5
    assert timer.tick().delta_seconds == pytest.approx(0.5)


def test_first_tick_without_start_is_zero():
    timer = FrameTimer(now=_FakeNow(3.0))
    assert timer.tick().delta_seconds == 0.0


def test_clock_going_backwards_is_clamped_to_zero():
    now = _FakeNow(5.0)
    timer = FrameTimer(now=now)
    timer.start()
    now.t = 4.0
    assert timer.tick().delta_seconds == 0.0


def test_real_timer_measures_wall_clock():
    timer = FrameTimer()
    timer.start()
    time.sleep(0.01)
    assert 0.005 < timer.tick().delta_seconds < 1.0
