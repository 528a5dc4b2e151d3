# どこで: `src/shapedrift/__init__.py`。
# 何を: ルート `shapedrift` パッケージを定義する。
# なぜ: import 起点を `shapedrift` に統一するため。

from __future__ import annotations

from shapedrift.api import run

__all__ = ["run"]
