# どこで: `src/shapedrift/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

from shapedrift.core.runtime_config import WindowConfig
from shapedrift.core.shapes import rgb255_to_rgb01


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    canvas_size: tuple[int, int] = (1280, 720)
    caption: str = "graphics"
    fps: float = 60.0
    background_color: tuple[float, float, float] = (238 / 255, 238 / 255, 238 / 255)
    text_color: tuple[int, int, int] = (0, 0, 0)
    show_stats: bool = False

    @classmethod
    def from_window_config(cls, window: WindowConfig) -> "RenderSettings":
        return cls(
            canvas_size=window.size,
            caption=window.title,
            fps=float(window.fps),
            background_color=rgb255_to_rgb01(window.background_color),
            text_color=window.text_color,
            show_stats=bool(window.show_stats),
        )
