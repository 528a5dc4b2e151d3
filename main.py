"""
どこで: リポジトリ直下 `main.py`。
何を: 1280x720 のウィンドウで図形が漂うデモを起動する。
なぜ: インストールせずに動作確認できる最小エントリポイントとして利用するため。
"""

import sys

sys.path.append("src")

import logging

from shapedrift import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
