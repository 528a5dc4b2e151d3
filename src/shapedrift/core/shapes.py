"""
どこで: `src/shapedrift/core/shapes.py`。図形（四角形/円）の定義と輪郭生成。
何を: 図形種別・色・サイズを束ねる Shape と、位置・角度から輪郭ポリラインを作る関数を提供する。
なぜ: 描画バックエンドに依存しない純粋関数として輪郭座標を決め、テスト可能にするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from shapedrift.core.random_source import RGB255, Point, RandomSource

DEFAULT_COLOR_MIN: RGB255 = (50, 50, 50)
DEFAULT_COLOR_MAX: RGB255 = (200, 200, 200)
DEFAULT_SIZE_RANGE = (30, 80)
DEFAULT_CIRCLE_SEGMENTS = 48


class ShapeKind(str, Enum):
    SQUARE = "square"
    CIRCLE = "circle"


def rgb255_to_rgb01(rgb: RGB255) -> tuple[float, float, float]:
    r, g, b = rgb
    return (float(r) / 255.0, float(g) / 255.0, float(b) / 255.0)


@dataclass(frozen=True, slots=True)
class Shape:
    """輪郭のみで描く図形。

    Parameters
    ----------
    kind : ShapeKind
        図形種別。
    color : RGB255
        線色（0-255）。
    size : int
        一辺の長さ（四角形）/ 直径（円）[px]。
    """

    kind: ShapeKind
    color: RGB255
    size: int

    def __post_init__(self) -> None:
        if int(self.size) <= 0:
            raise ValueError(f"size は正の値である必要がある: got={self.size!r}")

    @classmethod
    def random(
        cls,
        kind: ShapeKind,
        rng: RandomSource,
        *,
        color_min: RGB255 = DEFAULT_COLOR_MIN,
        color_max: RGB255 = DEFAULT_COLOR_MAX,
        size_range: tuple[int, int] = DEFAULT_SIZE_RANGE,
    ) -> "Shape":
        color = rng.random_color(color_min, color_max)
        size = rng.random_between(*size_range)
        return cls(kind=kind, color=color, size=int(size))

    @property
    def color_rgb01(self) -> tuple[float, float, float]:
        return rgb255_to_rgb01(self.color)


def square_outline(center: Point, size: float, angle_deg: float) -> np.ndarray:
    """中心まわりに angle_deg 回転した正方形の閉ポリライン（5 点）を返す。"""
    half = float(size) / 2.0
    corners = np.array(
        [[-half, -half], [half, -half], [half, half], [-half, half]],
        dtype=np.float64,
    )
    theta = math.radians(float(angle_deg))
    c, s = math.cos(theta), math.sin(theta)
    # y 下向きの画面座標では、角度が増えると画面上で時計回りに回る。
    rot = np.array([[c, -s], [s, c]], dtype=np.float64)
    pts = corners @ rot.T + np.array([float(center[0]), float(center[1])])
    pts = np.concatenate([pts, pts[:1]], axis=0)
    return pts.astype(np.float32)


def circle_outline(
    center: Point, size: float, *, segments: int = DEFAULT_CIRCLE_SEGMENTS
) -> np.ndarray:
    """直径 size の円を近似する閉ポリライン（segments+1 点）を返す。"""
    n = max(3, int(segments))
    angles = np.linspace(0.0, 2.0 * math.pi, num=n, endpoint=False)
    radius = float(size) / 2.0
    x = float(center[0]) + radius * np.cos(angles)
    y = float(center[1]) + radius * np.sin(angles)
    pts = np.stack([x, y], axis=1)
    pts = np.concatenate([pts, pts[:1]], axis=0)
    return pts.astype(np.float32)


def shape_outline(
    shape: Shape,
    position: Point,
    angle_deg: float,
    *,
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
) -> np.ndarray:
    """図形種別に応じた輪郭を返す。円は回転させない。"""
    if shape.kind is ShapeKind.SQUARE:
        return square_outline(position, shape.size, angle_deg)
    if shape.kind is ShapeKind.CIRCLE:
        return circle_outline(position, shape.size, segments=circle_segments)
    raise ValueError(f"未知の図形種別: {shape.kind!r}")


__all__ = [
    "DEFAULT_CIRCLE_SEGMENTS",
    "DEFAULT_COLOR_MAX",
    "DEFAULT_COLOR_MIN",
    "DEFAULT_SIZE_RANGE",
    "Shape",
    "ShapeKind",
    "circle_outline",
    "rgb255_to_rgb01",
    "shape_outline",
    "square_outline",
]
