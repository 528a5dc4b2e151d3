"""
どこで: `src/shapedrift/interactive/gl/line_mesh.py`。
何を: VBO/IBO/VAO の確保・更新・解放を担当し、描画可能な LineMesh を管理。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from shapedrift.interactive.gl.shader import Shader


def interleave_vertices(coords: np.ndarray, colors: np.ndarray) -> np.ndarray:
    """(N,2) 座標と (N,3) 色を (N,5) float32 の interleave 配列にする。"""
    coords_f32 = np.asarray(coords, dtype=np.float32)
    colors_f32 = np.asarray(colors, dtype=np.float32)
    if coords_f32.shape[0] != colors_f32.shape[0]:
        raise ValueError("coords と colors の行数が一致しない")
    return np.ascontiguousarray(np.concatenate([coords_f32, colors_f32], axis=1))


class LineMesh:
    """
    GPU に輪郭ポリラインの頂点（座標+色）とインデックスを送り込む作業を管理
    """

    PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 50 図形 × 49 頂点程度なので小さめに確保し、必要に応じて自動拡張する。
        initial_reserve: int = 256 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: Shader.create_shader で作ったプログラム
        VBO: (x, y, r, g, b) の interleave 頂点
        IBO: LINE_STRIP 用インデックス（ポリライン間に Primitive Restart Index を挟む）
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0
        self.ctx.primitive_restart = True  # type: ignore
        self.ctx.primitive_restart_index = self.PRIMITIVE_RESTART_INDEX  # type: ignore

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [(self.vbo, Shader.VERTEX_FORMAT, *Shader.VERTEX_ATTRIBUTES)],
            index_buffer=self.ibo,
            index_element_size=4,
        )

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int, ibo_size: int) -> None:
        """データが大きくなったら GPU のバッファを再確保"""
        vao_needs_rebuild = False
        if vbo_size > self.vbo.size:
            self.vbo.release()
            self.vbo = self.ctx.buffer(
                reserve=max(vbo_size, self.initial_reserve), dynamic=True
            )
            vao_needs_rebuild = True

        if ibo_size > self.ibo.size:
            self.ibo.release()
            self.ibo = self.ctx.buffer(
                reserve=max(ibo_size, self.initial_reserve), dynamic=True
            )
            vao_needs_rebuild = True

        # VAO は VBO/IBO が差し替わるときだけ張り直す。
        if vao_needs_rebuild:
            self.vao.release()
            self.vao = self._build_vao()

    def upload(self, coords: np.ndarray, colors: np.ndarray, indices: np.ndarray) -> None:
        """頂点とインデックスを GPU へ送り込む"""
        vertices = interleave_vertices(coords, colors)
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)
        self._ensure_capacity(vertices.nbytes, indices_u32.nbytes)

        self.vbo.orphan()
        self.vbo.write(vertices)

        self.ibo.orphan()
        self.ibo.write(indices_u32)

        self.index_count = len(indices_u32)

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.ibo.release()
        self.vao.release()
