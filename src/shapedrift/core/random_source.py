# どこで: `src/shapedrift/core/random_source.py`。
# 何を: 整数乱数・ランダム座標・ランダム色を返す乱数源を提供する。
# なぜ: グローバルな乱数状態を持たず、各コンポーネントへ明示的に渡して再現性を確保するため。

from __future__ import annotations

import numpy as np

Point = tuple[float, float]
RGB255 = tuple[int, int, int]


class RandomSource:
    """numpy Generator を包む乱数源。

    Parameters
    ----------
    seed : int | None
        乱数シード。None の場合は OS エントロピーから初期化する。
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def random_between(self, lo: int, hi: int) -> int:
        """[lo, hi) の一様整数を返す。

        lo == hi なら lo をそのまま返し、lo > hi なら引数を入れ替える。
        """
        lo_i = int(lo)
        hi_i = int(hi)
        if lo_i == hi_i:
            return lo_i
        if lo_i > hi_i:
            lo_i, hi_i = hi_i, lo_i
        return int(self._rng.integers(lo_i, hi_i))

    def random_point(self, lo: Point, hi: Point) -> Point:
        """lo/hi を対角とする矩形内のランダム座標を返す。"""
        x = self.random_between(int(lo[0]), int(hi[0]))
        y = self.random_between(int(lo[1]), int(hi[1]))
        return (float(x), float(y))

    def random_color(self, dark: RGB255, light: RGB255) -> RGB255:
        """チャンネルごとに dark..light の範囲で RGB(0-255) を返す。"""
        r = self.random_between(dark[0], light[0])
        g = self.random_between(dark[1], light[1])
        b = self.random_between(dark[2], light[2])
        return (r, g, b)


__all__ = ["Point", "RGB255", "RandomSource"]
