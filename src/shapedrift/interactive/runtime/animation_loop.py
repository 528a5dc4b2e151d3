# どこで: `src/shapedrift/interactive/runtime/animation_loop.py`。
# 何を: 固定周期 tick（更新 → 再描画）を pyglet の app loop 上で回すランナーを提供する。
# なぜ: 更新と描画を同一スレッドで逐次実行し、スレッド間の共有状態を持たないため。

from __future__ import annotations

import logging
from typing import Any, Callable

import pyglet

from shapedrift.interactive.runtime.frame_clock import FrameTick, FrameTimer

_logger = logging.getLogger(__name__)


class AnimationLoop:
    """1 つのウィンドウを固定周期で更新・描画する。

    1 tick は「FrameTimer で経過秒を測る → on_update(tick) → Window.draw（on_draw→flip）」の順で進む。
    """

    def __init__(
        self,
        window: Any,
        *,
        fps: float,
        on_update: Callable[[FrameTick], None],
        on_draw: Callable[[], None],
        timer: FrameTimer | None = None,
    ) -> None:
        """ループを初期化する。

        Parameters
        ----------
        window : pyglet.window.Window
            描画対象のウィンドウ。
        fps : float
            目標フレームレート。tick 周期は `1/fps` 秒。
        on_update : Callable[[FrameTick], None]
            各 tick の冒頭で経過秒を受け取り、シーンを進めるコールバック。
        on_draw : Callable[[], None]
            back buffer へ描くだけの描画処理（`flip()` は pyglet が行う）。
        timer : FrameTimer | None
            経過秒の計測器。None なら実時間タイマーを使う。
        """

        if float(fps) <= 0:
            raise ValueError(f"fps は正の値である必要がある: got={fps!r}")
        self._window = window
        self._fps = float(fps)
        self._on_update = on_update
        self._on_draw = on_draw
        self._timer = timer if timer is not None else FrameTimer()

    @property
    def period_seconds(self) -> float:
        return 1.0 / self._fps

    def tick(self, _dt: float = 0.0) -> None:
        """1 tick 分の更新と描画を行う。

        pyglet から渡される dt は使わず、FrameTimer の実時間差で進める。
        """
        frame_tick = self._timer.tick()
        self._on_update(frame_tick)

        # 閉じられたウィンドウへ draw すると例外になり得るため、開いているときだけ描く。
        if self._window in pyglet.app.windows:
            self._window.draw(frame_tick.delta_seconds)

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        window = self._window

        def request_exit(*_: object) -> None:
            # on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        window.push_handlers(on_close=request_exit, on_draw=self._on_draw)

        self._timer.start()
        pyglet.clock.schedule_interval(self.tick, self.period_seconds)
        try:
            pyglet.app.run(interval=None)
        except KeyboardInterrupt:
            # 割り込みはエラーではなく通常終了として扱う。
            _logger.info("animation loop interrupted; stopping")
        finally:
            pyglet.clock.unschedule(self.tick)
