"""AnimationLoop の 1 tick（経過秒 → 更新 → 再描画）をディスプレイ無しで検証するテスト群。"""

from __future__ import annotations

import pyglet
import pytest

from shapedrift.core.motion import RandomMove
from shapedrift.core.random_source import RandomSource
from shapedrift.interactive.runtime.animation_loop import AnimationLoop
from shapedrift.interactive.runtime.frame_clock import FrameTick, FrameTimer


class _FakeNow:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


class _FakeWindow:
    """`draw(dt)` の呼び出しだけを記録する pyglet.window.Window の代役。"""

    def __init__(self, calls: list[tuple[str, float]]) -> None:
        self._calls = calls

    def draw(self, dt: float) -> None:
        self._calls.append(("draw", float(dt)))


def _make_loop(
    calls: list[tuple[str, float]], window: _FakeWindow, now: _FakeNow, *, fps: float = 60.0
) -> AnimationLoop:
    def on_update(frame_tick: FrameTick) -> None:
        calls.append(("update", frame_tick.delta_seconds))

    timer = FrameTimer(now=now)
    timer.start()
    return AnimationLoop(window, fps=fps, on_update=on_update, on_draw=lambda: None, timer=timer)


def test_tick_updates_then_draws_with_timer_delta(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, float]] = []
    window = _FakeWindow(calls)
    monkeypatch.setattr(pyglet.app, "windows", {window})
    now = _FakeNow(0.0)
    loop = _make_loop(calls, window, now)

    # scheduler から渡る dt ではなく、FrameTimer が測った実時間差で進む。
    now.t = 0.1
    loop.tick(0.0)

    assert [name for name, _ in calls] == ["update", "draw"]
    assert calls[0][1] == pytest.approx(0.1)
    assert calls[1][1] == pytest.approx(0.1)


def test_tick_skips_draw_for_closed_window(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, float]] = []
    window = _FakeWindow(calls)
    monkeypatch.setattr(pyglet.app, "windows", set())
    now = _FakeNow(0.0)
    loop = _make_loop(calls, window, now)

    now.t = 0.02
    loop.tick(1.0 / 60.0)

    assert calls == [("update", pytest.approx(0.02))]


def test_tick_advances_motion_by_measured_delta(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, float]] = []
    window = _FakeWindow(calls)
    monkeypatch.setattr(pyglet.app, "windows", {window})
    move = RandomMove(
        (0.0, 0.0),
        (100.0, 100.0),
        speed=100.0,
        rotation_speed=90.0,
        rng=RandomSource(seed=1),
        position=(0.0, 0.0),
        destination=(100.0, 0.0),
    )
    now = _FakeNow(0.0)
    timer = FrameTimer(now=now)
    timer.start()
    loop = AnimationLoop(
        window,
        fps=60.0,
        on_update=lambda frame_tick: move.advance(frame_tick.delta_seconds),
        on_draw=lambda: None,
        timer=timer,
    )

    now.t = 0.5
    loop.tick(1.0 / 60.0)

    assert move.position == pytest.approx((50.0, 0.0))
    assert move.angle == pytest.approx(45.0)
    assert calls == [("draw", pytest.approx(0.5))]


def test_period_is_inverse_of_fps() -> None:
    loop = AnimationLoop(_FakeWindow([]), fps=60.0, on_update=lambda _t: None, on_draw=lambda: None)
    assert loop.period_seconds == pytest.approx(1.0 / 60.0)


@pytest.mark.parametrize("fps", [0.0, -30.0])
def test_non_positive_fps_is_rejected(fps: float) -> None:
    with pytest.raises(ValueError):
        AnimationLoop(_FakeWindow([]), fps=fps, on_update=lambda _t: None, on_draw=lambda: None)
