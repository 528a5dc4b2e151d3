# どこで: `src/shapedrift/core/__init__.py`。
# 何を: ヘッドレスなシーン/移動モデル/設定の実装をまとめるパッケージ定義。
# なぜ: pyglet/moderngl に依存しない層を分離し、テスト容易性を保つため。

from __future__ import annotations

__all__ = []
