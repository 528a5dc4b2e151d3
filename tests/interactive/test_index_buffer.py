"""interactive.gl.index_buffer の `build_line_indices_and_stats` をテスト。"""

from __future__ import annotations

import numpy as np

from shapedrift.interactive.gl.index_buffer import build_line_indices_and_stats
from shapedrift.interactive.gl.line_mesh import LineMesh


def test_build_line_indices_empty() -> None:
    offsets = np.array([0], dtype=np.int32)
    indices, _ = build_line_indices_and_stats(offsets)
    assert indices.dtype == np.uint32
    assert indices.size == 0


def test_build_line_indices_single_square_outline() -> None:
    # 閉じた四角形は 5 頂点 => 5 indices
    offsets = np.array([0, 5], dtype=np.int32)
    indices, _ = build_line_indices_and_stats(offsets)
    assert indices.tolist() == [0, 1, 2, 3, 4]


def test_build_line_indices_multiple_outlines_with_restart() -> None:
    offsets = np.array([0, 3, 5], dtype=np.int32)
    indices, _ = build_line_indices_and_stats(offsets)
    assert indices.tolist() == [0, 1, 2, LineMesh.PRIMITIVE_RESTART_INDEX, 3, 4]


def test_build_line_indices_skips_short_polylines() -> None:
    # [0, 1) は 1 頂点なのでスキップし、[1, 4) のみ出力される
    offsets = np.array([0, 1, 4], dtype=np.int32)
    indices, stats = build_line_indices_and_stats(offsets)
    assert indices.tolist() == [1, 2, 3]
    assert stats.draw_vertices == 3
    assert stats.draw_lines == 1


def test_indices_are_cached_by_offsets_content() -> None:
    # 図形数が固定なので毎フレーム同じ offsets になり、2 回目以降はキャッシュが返る。
    indices1, _ = build_line_indices_and_stats(np.array([0, 5, 54], dtype=np.int32))
    indices2, _ = build_line_indices_and_stats(np.array([0, 5, 54], dtype=np.int32))
    assert indices1 is indices2
    assert not indices1.flags.writeable


def test_stats_count_vertices_and_lines() -> None:
    offsets = np.array([0, 5, 54, 59], dtype=np.int32)
    indices, stats = build_line_indices_and_stats(offsets)
    assert stats.draw_vertices == 59
    assert stats.draw_lines == 3
    assert indices.size == 59 + 2
