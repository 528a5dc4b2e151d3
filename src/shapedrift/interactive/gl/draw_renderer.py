# どこで: `src/shapedrift/interactive/gl/draw_renderer.py`。
# 何を: アニメーション描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送を runtime から分離し、責務を明確にするため。

from __future__ import annotations

import moderngl
import numpy as np
from pyglet.window import Window

from shapedrift.core.realized_geometry import RealizedGeometry
from shapedrift.interactive.gl import utils as render_utils
from shapedrift.interactive.gl.line_mesh import LineMesh
from shapedrift.interactive.gl.shader import Shader
from shapedrift.interactive.render_settings import RenderSettings


class DrawRenderer:
    """全図形の輪郭を 1 draw call で描くレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        # pyglet が作った現在の GL コンテキストを ModernGL から使う。
        self.ctx = moderngl.create_context(require=330)
        self.program = Shader.create_shader(self.ctx)
        # 図形数が固定なので毎フレーム同じメッシュを使い回す。
        self._mesh = LineMesh(self.ctx, self.program)
        canvas_w, canvas_h = settings.canvas_size
        # 射影行列はキャンバス寸法にのみ依存するため初期化時に一度設定する。
        projection = render_utils.build_projection(float(canvas_w), float(canvas_h))
        self.program["projection"].write(projection.tobytes())

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをフレームバッファサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def render(self, realized: RealizedGeometry, indices: np.ndarray) -> None:
        """RealizedGeometry を LINE_STRIP で描画する。"""
        if indices.size == 0:
            return
        mesh = self._mesh
        mesh.upload(coords=realized.coords, colors=realized.colors, indices=indices)
        mesh.vao.render(mode=self.ctx.LINE_STRIP, vertices=mesh.index_count)

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._mesh.release()
        self.program.release()
        self.ctx.release()

    def finish(self) -> None:
        """GPU の完了を待つ（計測用）。"""
        self.ctx.finish()
