# どこで: `src/shapedrift/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/shapedrift/api/runner.py` の肥大化を防ぎ、責務ごとに分けておくため。

from __future__ import annotations

__all__ = []
