"""core.motion.RandomMove の経由点移動と回転に関するテスト群。"""

from __future__ import annotations

import math

import pytest

from shapedrift.core.motion import RandomMove, distance, is_zero, lerp_point
from shapedrift.core.random_source import RandomSource


def _move(**kwargs) -> RandomMove:
    params = {
        "bounds_min": (0.0, 0.0),
        "bounds_max": (100.0, 100.0),
        "speed": 100.0,
        "rotation_speed": 0.0,
        "rng": RandomSource(seed=0),
    }
    params.update(kwargs)
    bounds_min = params.pop("bounds_min")
    bounds_max = params.pop("bounds_max")
    return RandomMove(bounds_min, bounds_max, **params)


def test_reaches_destination_after_travel_time() -> None:
    """speed=100, (0,0)→(100,0) は 1 秒後に (100,0) に着く。"""
    move = _move(position=(0.0, 0.0), destination=(100.0, 0.0))
    assert move.travel_seconds == pytest.approx(1.0)

    move.advance(1.0)

    assert move.position == pytest.approx((100.0, 0.0))


def test_halfway_position_is_linear_interpolation() -> None:
    move = _move(position=(0.0, 0.0), destination=(100.0, 0.0))
    move.advance(0.25)
    move.advance(0.25)
    assert move.position == pytest.approx((50.0, 0.0))
    assert move.elapsed_seconds == pytest.approx(0.5)


def test_rotation_speed_accumulates_angle() -> None:
    """90°/s で 2 秒後は 180°。"""
    move = _move(speed=0.0, rotation_speed=90.0)
    move.advance(1.0)
    move.advance(1.0)
    assert move.angle == pytest.approx(180.0)


def test_angle_wraps_into_0_360() -> None:
    move = _move(speed=0.0, rotation_speed=90.0)
    for _ in range(5):
        move.advance(1.0)
    assert move.angle == pytest.approx(90.0)
    assert 0.0 <= move.angle < 360.0


def test_zero_speed_freezes_position_but_keeps_rotating() -> None:
    move = _move(speed=0.0, rotation_speed=50.0, position=(30.0, 40.0))
    initial = move.position
    prev_angle = move.angle
    for _ in range(100):
        move.advance(0.1)
        assert move.position == initial
        step = (move.angle - prev_angle) % 360.0
        assert step == pytest.approx(5.0)
        prev_angle = move.angle


def test_does_not_overshoot_destination() -> None:
    move = _move(position=(0.0, 0.0), destination=(100.0, 0.0))
    move.advance(5.0)
    assert move.position == (100.0, 0.0)


def test_new_destination_is_chosen_when_reached() -> None:
    move = _move(position=(0.0, 0.0), destination=(100.0, 0.0))
    move.advance(1.0)
    assert move.position == (100.0, 0.0)

    move.advance(0.0)

    # 新しい区間は到着点から始まり、所要時間は距離/速度で再計算される。
    assert move.source == (100.0, 0.0)
    assert move.destination != (100.0, 0.0)
    expected = distance(move.source, move.destination) / move.speed
    assert move.travel_seconds == pytest.approx(expected)
    assert move.elapsed_seconds == pytest.approx(0.0)
    x, y = move.destination
    assert 0.0 <= x < 100.0
    assert 0.0 <= y < 100.0


def test_zero_travel_time_snaps_to_destination() -> None:
    """移動範囲が 1 点に潰れていても 0 除算せず目的地に留まる。"""
    move = _move(
        bounds_min=(10.0, 10.0),
        bounds_max=(10.0, 10.0),
        position=(10.0, 10.0),
    )
    assert move.travel_seconds == 0.0
    for _ in range(3):
        move.advance(0.5)
        assert move.position == (10.0, 10.0)


def test_position_stays_within_segment_bounding_box() -> None:
    rng = RandomSource(seed=2024)
    move = RandomMove.random((0.0, 0.0), (1280.0, 720.0), rng)
    for _ in range(2000):
        move.advance(1.0 / 60.0)
        state = move.state()
        (sx, sy), (dx, dy) = state.source, state.destination
        x, y = state.position
        assert min(sx, dx) - 1e-9 <= x <= max(sx, dx) + 1e-9
        assert min(sy, dy) - 1e-9 <= y <= max(sy, dy) + 1e-9
        assert 0.0 <= x <= 1280.0
        assert 0.0 <= y <= 720.0


def test_random_draws_speed_and_rotation_from_ranges() -> None:
    rng = RandomSource(seed=3)
    for _ in range(50):
        move = RandomMove.random(
            (0.0, 0.0),
            (1280.0, 720.0),
            rng,
            speed_range=(300, 450),
            rotation_speed_range=(40, 70),
        )
        assert 300 <= move.speed < 450
        assert 40 <= move.rotation_speed < 70


def test_state_snapshot_matches_properties() -> None:
    move = _move(position=(0.0, 0.0), destination=(100.0, 0.0), rotation_speed=10.0)
    move.advance(0.5)
    state = move.state()
    assert state.position == move.position
    assert state.angle == move.angle
    assert state.travel_seconds == move.travel_seconds
    assert state.elapsed_seconds == pytest.approx(0.5)


def test_helpers() -> None:
    assert is_zero(0.0)
    assert is_zero(5e-6)
    assert not is_zero(1e-4)
    assert distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)
    assert lerp_point((0.0, 0.0), (10.0, 20.0), 0.5) == pytest.approx((5.0, 10.0))
    assert lerp_point((0.1, 0.2), (0.7, 0.3), 1.0) == (0.7, 0.3)
    assert math.isclose(lerp_point((0.0, 0.0), (10.0, 0.0), 0.0)[0], 0.0)
