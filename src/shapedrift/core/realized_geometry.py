# src/shapedrift/core/realized_geometry.py
# 1 フレーム分の輪郭ポリライン配列（座標・頂点色・offsets）のモデルと検証ロジック。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class RealizedGeometry:
    """描画直前の実体配列を表現する。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 2) のピクセル座標配列（原点は左上、y は下向き）。
    colors : np.ndarray
        float32 型 shape (N, 3) の頂点色配列（RGB 0-1）。
    offsets : np.ndarray
        int32 型 shape (M+1,) のポリライン開始インデックス配列。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で返す。
    coords/colors/offsets の整合性はコンストラクタ内で検証する。
    """

    coords: np.ndarray
    colors: np.ndarray
    offsets: np.ndarray

    def __post_init__(self) -> None:
        """配列形状と整合性を検証し、不変条件を満たす形に固定する。"""
        coords = np.asarray(self.coords)
        colors = np.asarray(self.colors)
        offsets = np.asarray(self.offsets)

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError("coords は shape (N,2) の 2 次元配列である必要がある")
        if coords.dtype != np.float32:
            coords = coords.astype(np.float32, copy=False)

        if colors.ndim != 2 or colors.shape[1] != 3:
            raise ValueError("colors は shape (N,3) の 2 次元配列である必要がある")
        if colors.shape[0] != coords.shape[0]:
            raise ValueError("colors の行数は coords と一致する必要がある")
        if colors.dtype != np.float32:
            colors = colors.astype(np.float32, copy=False)

        if offsets.ndim != 1:
            raise ValueError("offsets は 1 次元配列である必要がある")
        if offsets.dtype != np.int32:
            offsets = offsets.astype(np.int32, copy=False)
        if offsets.size == 0:
            raise ValueError("offsets は少なくとも 1 要素を含む必要がある")
        if offsets[0] != 0:
            raise ValueError("offsets[0] は 0 である必要がある")
        if offsets[-1] != coords.shape[0]:
            raise ValueError("offsets[-1] は coords 行数と一致する必要がある")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        coords.setflags(write=False)
        colors.setflags(write=False)
        offsets.setflags(write=False)

        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "offsets", offsets)

    @property
    def n_polylines(self) -> int:
        return int(self.offsets.shape[0] - 1)


def empty_realized_geometry() -> RealizedGeometry:
    return RealizedGeometry(
        coords=np.zeros((0, 2), dtype=np.float32),
        colors=np.zeros((0, 3), dtype=np.float32),
        offsets=np.zeros((1,), dtype=np.int32),
    )


def polyline_geometry(
    coords: np.ndarray, color_rgb01: tuple[float, float, float]
) -> RealizedGeometry:
    """単一ポリラインを単色の RealizedGeometry にする。"""
    coords_f32 = np.asarray(coords, dtype=np.float32)
    colors = np.empty((coords_f32.shape[0], 3), dtype=np.float32)
    colors[:] = np.asarray(color_rgb01, dtype=np.float32)
    offsets = np.array([0, coords_f32.shape[0]], dtype=np.int32)
    return RealizedGeometry(coords=coords_f32, colors=colors, offsets=offsets)


def concat_realized_geometries(*geometries: RealizedGeometry) -> RealizedGeometry:
    """複数の RealizedGeometry を連結して 1 つにまとめる。

    Parameters
    ----------
    geometries : RealizedGeometry
        連結対象のジオメトリ列。

    Returns
    -------
    RealizedGeometry
        結合後の実体ジオメトリ。1 draw call で描けるよう offsets を通し番号にする。
    """
    if not geometries:
        return empty_realized_geometry()

    total_coords = np.concatenate([g.coords for g in geometries], axis=0)
    total_colors = np.concatenate([g.colors for g in geometries], axis=0)

    new_offsets: list[int] = [0]
    offset_base = 0
    for g in geometries:
        # 先頭 0 を除いた部分だけをシフトして足し込む。
        shifted = g.offsets[1:].astype(np.int64) + offset_base
        new_offsets.extend(shifted.tolist())
        offset_base += int(g.offsets[-1])

    return RealizedGeometry(
        coords=total_coords,
        colors=total_colors,
        offsets=np.asarray(new_offsets, dtype=np.int32),
    )


__all__ = [
    "RealizedGeometry",
    "concat_realized_geometries",
    "empty_realized_geometry",
    "polyline_geometry",
]
