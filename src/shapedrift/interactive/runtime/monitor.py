# どこで: `src/shapedrift/interactive/runtime/monitor.py`。
# 何を: 実行中の軽量メトリクス（FPS/CPU/RSS/頂点/ライン）を計測し、オーバーレイ表示用の文字列を提供する。
# なぜ: 画面左上の FPS 表示と、必要時の負荷確認を 1 箇所で扱うため。

from __future__ import annotations

import os
import time
from dataclasses import dataclass


def format_fps(delta_seconds: float) -> str:
    """直近 tick の経過秒から `FPS:60.00` 形式の文字列を作る。"""
    dt = float(delta_seconds)
    if dt <= 0.0:
        return "FPS:--"
    return f"FPS:{1.0 / dt:.2f}"


@dataclass(frozen=True, slots=True)
class MonitorSnapshot:
    """オーバーレイに表示する監視値のスナップショット。"""

    fps: float
    cpu_percent: float
    rss_mb: float
    vertices: int
    lines: int

    def stats_text(self) -> str:
        return (
            f"CPU:{self.cpu_percent:.1f}% RSS:{self.rss_mb:.1f}MB "
            f"V:{self.vertices} L:{self.lines}"
        )


class RuntimeMonitor:
    """実行中のメトリクスを軽量に集計する。"""

    def __init__(
        self,
        *,
        cpu_mem_sample_interval_s: float = 0.5,
        fps_sample_interval_s: float = 0.5,
    ) -> None:
        """監視を初期化する。

        Parameters
        ----------
        cpu_mem_sample_interval_s : float
            cpu/memory を psutil でサンプリングする最小間隔（秒）。
        fps_sample_interval_s : float
            平均 FPS を更新する最小間隔（秒）。
        """

        self._cpu_mem_sample_interval_s = float(cpu_mem_sample_interval_s)

        self._fps_sample_interval_s = float(fps_sample_interval_s)
        self._fps = 0.0
        self._fps_window_t0: float | None = None
        self._fps_window_frames = 0

        self._last_sample_t: float | None = None
        self._last_cpu_total_s: float | None = None
        self._cpu_percent = 0.0
        self._rss_mb = 0.0

        self._vertices = 0
        self._lines = 0

        try:
            import psutil  # type: ignore[import-untyped]
        except Exception as exc:
            raise RuntimeError("RuntimeMonitor には psutil が必要です") from exc

        self._process = psutil.Process(int(os.getpid()))

    def tick_frame(self) -> None:
        """フレーム境界を通知し、FPS/CPU/Mem を更新する。"""

        now = time.perf_counter()

        # --- FPS（区間平均）---
        if self._fps_window_t0 is None:
            self._fps_window_t0 = float(now)
            self._fps_window_frames = 0

        self._fps_window_frames += 1
        dt = float(now - float(self._fps_window_t0))
        if dt >= float(self._fps_sample_interval_s) and dt > 0.0:
            self._fps = float(self._fps_window_frames) / float(dt)
            self._fps_window_t0 = float(now)
            self._fps_window_frames = 0

        # --- CPU / Mem（一定周期）---
        last = self._last_sample_t
        if last is None:
            self._last_sample_t = float(now)
            self._last_cpu_total_s = float(self._cpu_total_s())
            self._rss_mb = float(self._rss_bytes()) / (1024.0 * 1024.0)
            return

        if float(now - last) < float(self._cpu_mem_sample_interval_s):
            return

        cpu_total_s = float(self._cpu_total_s())
        prev_cpu_total_s = float(self._last_cpu_total_s or 0.0)
        wall_dt = float(now - last)
        if wall_dt > 0.0 and cpu_total_s >= prev_cpu_total_s:
            self._cpu_percent = 100.0 * (cpu_total_s - prev_cpu_total_s) / wall_dt

        self._rss_mb = float(self._rss_bytes()) / (1024.0 * 1024.0)
        self._last_sample_t = float(now)
        self._last_cpu_total_s = float(cpu_total_s)

    def set_draw_counts(self, *, vertices: int, lines: int) -> None:
        """描画対象の頂点数/ライン数（輪郭 polyline 本数）を設定する。"""

        self._vertices = int(vertices)
        self._lines = int(lines)

    def snapshot(self) -> MonitorSnapshot:
        """現在の監視値をスナップショットとして返す。"""

        return MonitorSnapshot(
            fps=float(self._fps),
            cpu_percent=float(self._cpu_percent),
            rss_mb=float(self._rss_mb),
            vertices=int(self._vertices),
            lines=int(self._lines),
        )

    def _cpu_total_s(self) -> float:
        t = self._process.cpu_times()
        return float(getattr(t, "user", 0.0)) + float(getattr(t, "system", 0.0))

    def _rss_bytes(self) -> int:
        return int(self._process.memory_info().rss)
