# どこで: `src/shapedrift/interactive/gl/shader.py`。
# 何を: 頂点色付きポリライン描画用の GLSL ソースとプログラム生成を提供する。
# なぜ: シェーダ文字列を renderer から分離し、頂点フォーマットとの対応を一箇所で管理するため。

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330

uniform mat4 projection;

in vec2 in_vert;
in vec3 in_color;

out vec3 v_color;

void main() {
    v_color = in_color;
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
}
"""

FRAGMENT_SHADER = """
#version 330

in vec3 v_color;

out vec4 frag_color;

void main() {
    frag_color = vec4(v_color, 1.0);
}
"""


class Shader:
    """シェーダプログラムの生成窓口。"""

    # LineMesh の interleave 形式と一致させる（x, y, r, g, b）。
    VERTEX_FORMAT = "2f 3f"
    VERTEX_ATTRIBUTES = ("in_vert", "in_color")

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """ctx 上にライン描画用プログラムを生成して返す。"""
        return ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
