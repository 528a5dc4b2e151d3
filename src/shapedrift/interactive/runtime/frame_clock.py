# どこで: `src/shapedrift/interactive/runtime/frame_clock.py`。
# 何を: tick ごとの経過秒（前回 tick からの実時間差）を測るフレームタイマーを提供する。
# なぜ: 「何秒進めるか」の決定を描画バックエンドのスケジューラから切り離し、テスト可能にするため。

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class FrameTick:
    """1 tick 分の時間差。"""

    delta_seconds: float


class FrameTimer:
    """前回 tick からの実時間差を返すタイマー。

    Notes
    -----
    取りこぼしたフレームの補償（catch-up）は行わない。
    更新が遅れた分は次の tick の delta が大きくなるだけで吸収される。
    """

    def __init__(self, *, now: Callable[[], float] = time.perf_counter) -> None:
        self._now = now
        self._last: float | None = None

    def start(self) -> None:
        """基準時刻をリセットする。ループ開始直前に呼ぶ。"""
        self._last = float(self._now())

    def tick(self) -> FrameTick:
        """前回 tick（または start）からの経過秒を返し、基準時刻を進める。"""
        now = float(self._now())
        last = self._last
        self._last = now
        if last is None:
            # start 前の最初の tick は時間を進めない。
            delta = 0.0
        else:
            # 時刻が巻き戻るケース（時計の差し替え等）は 0 とみなす。
            delta = max(0.0, now - last)
        return FrameTick(delta_seconds=delta)
