"""
どこで: `src/shapedrift/core/scene.py`。
何を: 図形と移動モデルの組（SceneObject）と、その固定長の列（Scene）を定義する。
なぜ: 起動時に一度だけシーンを組み立て、毎フレームの更新と輪郭生成を 1 箇所にまとめるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from shapedrift.core.motion import (
    DEFAULT_ROTATION_SPEED_RANGE,
    DEFAULT_SPEED_RANGE,
    RandomMove,
)
from shapedrift.core.random_source import RGB255, RandomSource
from shapedrift.core.realized_geometry import (
    RealizedGeometry,
    concat_realized_geometries,
    polyline_geometry,
)
from shapedrift.core.shapes import (
    DEFAULT_CIRCLE_SEGMENTS,
    DEFAULT_COLOR_MAX,
    DEFAULT_COLOR_MIN,
    DEFAULT_SIZE_RANGE,
    Shape,
    ShapeKind,
    shape_outline,
)

DEFAULT_OBJECT_COUNT = 50


@dataclass(frozen=True, slots=True)
class SceneSettings:
    """シーン生成に使う乱数範囲と個数。"""

    object_count: int = DEFAULT_OBJECT_COUNT
    seed: int | None = None
    speed_range: tuple[int, int] = DEFAULT_SPEED_RANGE
    rotation_speed_range: tuple[int, int] = DEFAULT_ROTATION_SPEED_RANGE
    size_range: tuple[int, int] = DEFAULT_SIZE_RANGE
    color_min: RGB255 = DEFAULT_COLOR_MIN
    color_max: RGB255 = DEFAULT_COLOR_MAX
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS


@dataclass(frozen=True, slots=True)
class SceneObject:
    """描画する図形と、その位置・角度を決める移動モデルの組。"""

    shape: Shape
    motion: RandomMove

    def update(self, delta_seconds: float) -> None:
        self.motion.advance(delta_seconds)

    def realize(self, *, circle_segments: int = DEFAULT_CIRCLE_SEGMENTS) -> RealizedGeometry:
        coords = shape_outline(
            self.shape,
            self.motion.position,
            self.motion.angle,
            circle_segments=circle_segments,
        )
        return polyline_geometry(coords, self.shape.color_rgb01)


class Scene:
    """固定長の SceneObject 列。生成後に増減しない。"""

    def __init__(
        self,
        objects: list[SceneObject] | tuple[SceneObject, ...],
        *,
        circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
    ) -> None:
        self._objects = tuple(objects)
        self._circle_segments = int(circle_segments)

    @property
    def objects(self) -> tuple[SceneObject, ...]:
        return self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def update(self, delta_seconds: float) -> None:
        """全オブジェクトの移動モデルを delta_seconds だけ進める。"""
        for obj in self._objects:
            obj.update(delta_seconds)

    def realize(self) -> RealizedGeometry:
        """全オブジェクトの輪郭を 1 つの RealizedGeometry に連結する。"""
        return concat_realized_geometries(
            *(obj.realize(circle_segments=self._circle_segments) for obj in self._objects)
        )


def build_scene(
    canvas_size: tuple[int, int],
    settings: SceneSettings,
    rng: RandomSource,
) -> Scene:
    """キャンバス全域を移動範囲とするシーンを生成する。

    偶数番目は四角形、奇数番目は円になる。
    """
    count = int(settings.object_count)
    if count < 0:
        raise ValueError(f"object_count は 0 以上である必要がある: got={count}")

    bounds_min = (0.0, 0.0)
    bounds_max = (float(canvas_size[0]), float(canvas_size[1]))

    objects: list[SceneObject] = []
    for i in range(count):
        move = RandomMove.random(
            bounds_min,
            bounds_max,
            rng,
            speed_range=settings.speed_range,
            rotation_speed_range=settings.rotation_speed_range,
        )
        kind = ShapeKind.SQUARE if i % 2 == 0 else ShapeKind.CIRCLE
        shape = Shape.random(
            kind,
            rng,
            color_min=settings.color_min,
            color_max=settings.color_max,
            size_range=settings.size_range,
        )
        objects.append(SceneObject(shape=shape, motion=move))

    return Scene(objects, circle_segments=settings.circle_segments)


__all__ = ["DEFAULT_OBJECT_COUNT", "Scene", "SceneObject", "SceneSettings", "build_scene"]
