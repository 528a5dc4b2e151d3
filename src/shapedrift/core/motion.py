"""
どこで: `src/shapedrift/core/motion.py`。図形の移動モデル。
何を: ランダムな経由点（waypoint）間を一定速度で直線移動しつつ回転する RandomMove を提供する。
なぜ: 描画と切り離した純粋な状態更新として、時間経過に対する位置と角度を決めるため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from shapedrift.core.random_source import Point, RandomSource

EPSILON = 1e-5

DEFAULT_SPEED_RANGE = (300, 450)
DEFAULT_ROTATION_SPEED_RANGE = (40, 70)


def is_zero(value: float) -> bool:
    """|value| < EPSILON を 0 とみなす。"""
    return abs(float(value)) < EPSILON


def distance(a: Point, b: Point) -> float:
    return math.hypot(float(b[0]) - float(a[0]), float(b[1]) - float(a[1]))


def lerp_point(src: Point, dst: Point, r: float) -> Point:
    """src→dst を r でパラメータ化した点を返す（r>=1 は dst そのもの）。"""
    if r >= 1.0:
        return (float(dst[0]), float(dst[1]))
    x = float(src[0]) + (float(dst[0]) - float(src[0])) * r
    y = float(src[1]) + (float(dst[1]) - float(src[1])) * r
    return (x, y)


@dataclass(frozen=True, slots=True)
class MotionState:
    """RandomMove の瞬間状態スナップショット。"""

    position: Point
    source: Point
    destination: Point
    speed: float
    elapsed_seconds: float
    travel_seconds: float
    angle: float
    rotation_speed: float


class RandomMove:
    """矩形範囲内のランダム経由点を巡回する移動モデル。

    Parameters
    ----------
    bounds_min, bounds_max : Point
        経由点を選ぶ矩形の対角。
    speed : float
        移動速度 [px/s]。0 の場合は位置を固定し、回転のみ行う。
    rotation_speed : float
        回転速度 [deg/s]。
    rng : RandomSource
        経由点の選択に使う乱数源。
    position : Point | None
        初期位置。None なら範囲内からランダムに選ぶ。
    destination : Point | None
        最初の目的地。None なら範囲内からランダムに選ぶ。
    """

    def __init__(
        self,
        bounds_min: Point,
        bounds_max: Point,
        *,
        speed: float,
        rotation_speed: float,
        rng: RandomSource,
        position: Point | None = None,
        destination: Point | None = None,
    ) -> None:
        self._bounds_min = (float(bounds_min[0]), float(bounds_min[1]))
        self._bounds_max = (float(bounds_max[0]), float(bounds_max[1]))
        self._speed = float(speed)
        self._rotation_speed = float(rotation_speed)
        self._rng = rng

        self._angle = 0.0
        self._elapsed_seconds = 0.0
        self._travel_seconds = 0.0

        if position is None:
            position = rng.random_point(self._bounds_min, self._bounds_max)
        self._position: Point = (float(position[0]), float(position[1]))
        self._source: Point = self._position
        self._destination: Point = self._position
        self._next_waypoint(destination)

    @classmethod
    def random(
        cls,
        bounds_min: Point,
        bounds_max: Point,
        rng: RandomSource,
        *,
        speed_range: tuple[int, int] = DEFAULT_SPEED_RANGE,
        rotation_speed_range: tuple[int, int] = DEFAULT_ROTATION_SPEED_RANGE,
    ) -> "RandomMove":
        """速度・回転速度を範囲からランダムに決めて生成する。"""
        speed = rng.random_between(*speed_range)
        rotation_speed = rng.random_between(*rotation_speed_range)
        return cls(
            bounds_min,
            bounds_max,
            speed=float(speed),
            rotation_speed=float(rotation_speed),
            rng=rng,
        )

    @property
    def position(self) -> Point:
        return self._position

    @property
    def angle(self) -> float:
        """現在の回転角 [deg]。[0, 360) に正規化済み。"""
        return self._angle

    @property
    def source(self) -> Point:
        return self._source

    @property
    def destination(self) -> Point:
        return self._destination

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def rotation_speed(self) -> float:
        return self._rotation_speed

    @property
    def travel_seconds(self) -> float:
        return self._travel_seconds

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed_seconds

    def state(self) -> MotionState:
        """現在の状態をスナップショットとして返す。"""
        return MotionState(
            position=self._position,
            source=self._source,
            destination=self._destination,
            speed=self._speed,
            elapsed_seconds=self._elapsed_seconds,
            travel_seconds=self._travel_seconds,
            angle=self._angle,
            rotation_speed=self._rotation_speed,
        )

    def _next_waypoint(self, destination: Point | None = None) -> None:
        # 現在位置を新しい区間の始点にし、目的地と所要時間を決め直す。
        self._source = self._position
        if destination is None:
            destination = self._rng.random_point(self._bounds_min, self._bounds_max)
        self._destination = (float(destination[0]), float(destination[1]))
        if not is_zero(self._speed):
            self._travel_seconds = distance(self._source, self._destination) / self._speed
            self._elapsed_seconds = 0.0

    def advance(self, delta_seconds: float) -> None:
        """delta_seconds だけ時間を進め、角度と位置を更新する。"""
        dt = float(delta_seconds)
        self._angle = (self._angle + dt * self._rotation_speed) % 360.0

        if is_zero(self._speed):
            return

        if is_zero(distance(self._position, self._destination)):
            self._next_waypoint()

        # 始点と目的地が同一点なら 0 除算になるため直接スナップする。
        if is_zero(self._travel_seconds):
            self._position = self._destination
            return

        self._elapsed_seconds += dt
        r = min(1.0, self._elapsed_seconds / self._travel_seconds)
        self._position = lerp_point(self._source, self._destination, r)


__all__ = [
    "DEFAULT_ROTATION_SPEED_RANGE",
    "DEFAULT_SPEED_RANGE",
    "EPSILON",
    "MotionState",
    "RandomMove",
    "distance",
    "is_zero",
    "lerp_point",
]
