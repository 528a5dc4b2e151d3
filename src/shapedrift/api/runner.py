"""
どこで: `src/shapedrift/api/runner.py`。公開 API のランナー実装。
何を: 設定をロードしてシーンを組み立て、pyglet + ModernGL のウィンドウで固定周期アニメーションを実行する。
なぜ: `python -m shapedrift` / `main.py` から 1 関数でデモを起動できる経路を用意するため。
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import pyglet

from shapedrift.core.random_source import RandomSource
from shapedrift.core.runtime_config import runtime_config, set_config_path
from shapedrift.core.scene import build_scene
from shapedrift.interactive.render_settings import RenderSettings
from shapedrift.interactive.runtime.animation_loop import AnimationLoop
from shapedrift.interactive.runtime.draw_window_system import DrawWindowSystem
from shapedrift.interactive.runtime.monitor import RuntimeMonitor

_logger = logging.getLogger(__name__)


def run(
    *,
    config_path: str | Path | None = None,
    seed: int | None = None,
) -> None:
    """ウィンドウを生成し、ランダムに漂う図形のアニメーションを描画する。

    Parameters
    ----------
    config_path : str | Path | None
        明示 config.yaml のパス。同梱既定値と探索された config を上書きする。
    seed : int | None
        シーン生成の乱数シード。None なら config の `scene.seed` を使う。

    Returns
    -------
    None
        ウィンドウを閉じる（または割り込む）と制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()
    _logger.info("config loaded: %s", cfg.config_path or "<packaged defaults>")

    scene_settings = cfg.scene
    if seed is not None:
        scene_settings = dataclasses.replace(scene_settings, seed=int(seed))

    settings = RenderSettings.from_window_config(cfg.window)

    # vsync は固定周期 tick と二重に待つことになるため切る（Window 作成前に設定する）。
    pyglet.options["vsync"] = False

    rng = RandomSource(scene_settings.seed)
    scene = build_scene(settings.canvas_size, scene_settings, rng)
    _logger.info(
        "scene built: objects=%d canvas=%dx%d fps=%.1f seed=%s",
        len(scene),
        settings.canvas_size[0],
        settings.canvas_size[1],
        settings.fps,
        scene_settings.seed,
    )

    monitor = RuntimeMonitor() if settings.show_stats else None
    draw_window = DrawWindowSystem(scene, settings=settings, monitor=monitor)

    loop = AnimationLoop(
        draw_window.window,
        fps=settings.fps,
        on_update=draw_window.update,
        on_draw=draw_window.draw_frame,
    )
    try:
        loop.run()
    finally:
        # 例外でも確実に後始末する。
        draw_window.close()
        _logger.info("window closed")
