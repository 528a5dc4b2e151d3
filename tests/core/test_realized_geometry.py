"""core.realized_geometry の検証と連結のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from shapedrift.core.realized_geometry import (
    RealizedGeometry,
    concat_realized_geometries,
    polyline_geometry,
)


def _line(n: int, color: tuple[float, float, float]) -> RealizedGeometry:
    coords = np.arange(n * 2, dtype=np.float64).reshape(n, 2)
    return polyline_geometry(coords, color)


def test_arrays_are_read_only_and_cast() -> None:
    g = _line(3, (0.5, 0.5, 0.5))
    assert g.coords.dtype == np.float32
    assert g.colors.dtype == np.float32
    assert g.offsets.dtype == np.int32
    with pytest.raises(ValueError):
        g.coords[0, 0] = 1.0


@pytest.mark.parametrize(
    ("coords", "colors", "offsets"),
    [
        (np.zeros((2, 3)), np.zeros((2, 3)), [0, 2]),
        (np.zeros((2, 2)), np.zeros((3, 3)), [0, 2]),
        (np.zeros((2, 2)), np.zeros((2, 3)), [1, 2]),
        (np.zeros((2, 2)), np.zeros((2, 3)), [0, 3]),
        (np.zeros((2, 2)), np.zeros((2, 3)), []),
        (np.zeros((3, 2)), np.zeros((3, 3)), [0, 2, 1, 3]),
    ],
)
def test_invalid_arrays_raise(coords, colors, offsets) -> None:
    with pytest.raises(ValueError):
        RealizedGeometry(coords=coords, colors=colors, offsets=np.asarray(offsets))


def test_concat_shifts_offsets() -> None:
    a = _line(3, (1.0, 0.0, 0.0))
    b = _line(2, (0.0, 1.0, 0.0))
    merged = concat_realized_geometries(a, b)
    assert merged.offsets.tolist() == [0, 3, 5]
    assert merged.coords.shape == (5, 2)
    np.testing.assert_array_equal(merged.colors[3], [0.0, 1.0, 0.0])


def test_concat_of_nothing_is_empty() -> None:
    merged = concat_realized_geometries()
    assert merged.coords.shape == (0, 2)
    assert merged.colors.shape == (0, 3)
    assert merged.offsets.tolist() == [0]
