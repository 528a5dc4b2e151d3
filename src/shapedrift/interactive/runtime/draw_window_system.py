# どこで: `src/shapedrift/interactive/runtime/draw_window_system.py`。
# 何を: Scene の更新と、輪郭 + FPS 表示の描画ウィンドウへの描画を行うサブシステムを提供する。
# なぜ: `src/shapedrift/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging

import pyglet

from shapedrift.core.scene import Scene
from shapedrift.interactive.draw_window import create_draw_window
from shapedrift.interactive.gl.draw_renderer import DrawRenderer
from shapedrift.interactive.gl.index_buffer import build_line_indices_and_stats
from shapedrift.interactive.render_settings import RenderSettings
from shapedrift.interactive.runtime.frame_clock import FrameTick
from shapedrift.interactive.runtime.monitor import RuntimeMonitor, format_fps
from shapedrift.interactive.runtime.perf import PerfCollector

_logger = logging.getLogger(__name__)

# FPS 表示のベースライン位置（左上原点）。
FPS_TEXT_POS = (10, 20)


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        scene: Scene,
        *,
        settings: RenderSettings,
        monitor: RuntimeMonitor | None = None,
        perf: PerfCollector | None = None,
    ) -> None:
        """描画用の window/renderer/FPS ラベルを初期化する。"""

        self._scene = scene
        self._settings = settings
        self._monitor = monitor
        self._perf = perf if perf is not None else PerfCollector.from_env()
        self._last_delta_seconds = 0.0

        # 描画用の pyglet window を作成し、その window の OpenGL コンテキストに紐づく renderer を作る。
        self.window = create_draw_window(settings)
        self._renderer = DrawRenderer(self.window, settings)

        text_x, text_y = FPS_TEXT_POS
        self._fps_label = pyglet.text.Label(
            format_fps(0.0),
            font_size=10,
            x=text_x,
            # pyglet は左下原点なので上端からの距離に変換する。
            y=int(self.window.height) - text_y,
            anchor_x="left",
            anchor_y="baseline",
            color=(*settings.text_color, 255),
        )
        self._stats_label: pyglet.text.Label | None = None
        if settings.show_stats and monitor is not None:
            self._stats_label = pyglet.text.Label(
                "",
                font_size=10,
                x=text_x,
                y=int(self.window.height) - text_y * 2,
                anchor_x="left",
                anchor_y="baseline",
                color=(*settings.text_color, 255),
            )

    @property
    def scene(self) -> Scene:
        return self._scene

    def update(self, frame_tick: FrameTick) -> None:
        """tick の経過秒だけシーンを進める。"""

        self._last_delta_seconds = float(frame_tick.delta_seconds)
        with self._perf.section("update"):
            self._scene.update(frame_tick.delta_seconds)

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        perf = self._perf
        with perf.frame():
            # --- 1) ビューポート更新 ---
            # HiDPI ではフレームバッファが論理解像度より大きいため、毎フレーム実サイズを参照する。
            fb_w, fb_h = self._framebuffer_size()
            self._renderer.viewport(fb_w, fb_h)

            # --- 2) 背景クリア ---
            self._renderer.clear(self._settings.background_color)

            # --- 3) 輪郭生成 + 描画 ---
            with perf.section("realize"):
                realized = self._scene.realize()
            with perf.section("indices"):
                indices, stats = build_line_indices_and_stats(realized.offsets)
            with perf.section("render"):
                self._renderer.render(realized, indices)

            # --- 4) FPS 表示 ---
            self._fps_label.text = format_fps(self._last_delta_seconds)
            self._fps_label.draw()

            monitor = self._monitor
            if monitor is not None:
                monitor.set_draw_counts(vertices=int(stats.draw_vertices), lines=int(stats.draw_lines))
                monitor.tick_frame()
                if self._stats_label is not None:
                    self._stats_label.text = monitor.snapshot().stats_text()
                    self._stats_label.draw()

            if perf.enabled and perf.gpu_finish:
                with perf.section("gpu_finish"):
                    self._renderer.finish()

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        try:
            # renderer が保持している GPU リソースを破棄してから window を閉じる。
            self._renderer.release()
        except Exception:
            _logger.exception("Failed to release GPU resources")
        finally:
            self.window.close()
