# どこで: `src/shapedrift/interactive/__init__.py`。
# 何を: pyglet/ModernGL に依存する描画ウィンドウ・ループ実装をまとめるパッケージ定義。
# なぜ: GUI 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

__all__ = []
