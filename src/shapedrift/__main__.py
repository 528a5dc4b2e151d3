# どこで: `src/shapedrift/__main__.py`。
# 何を: `python -m shapedrift` でデモウィンドウを起動する。
# なぜ: インストール後にスクリプトを書かずに動作確認できるようにするため。

from __future__ import annotations

import logging

from shapedrift import run


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run()


if __name__ == "__main__":
    main()
