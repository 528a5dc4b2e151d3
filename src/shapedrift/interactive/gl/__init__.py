# どこで: `src/shapedrift/interactive/gl/__init__.py`。
# 何を: ModernGL による輪郭線描画（シェーダ・バッファ・レンダラー）をまとめるパッケージ定義。
# なぜ: GPU 転送の詳細を runtime 側から切り離すため。

from __future__ import annotations

__all__ = []
