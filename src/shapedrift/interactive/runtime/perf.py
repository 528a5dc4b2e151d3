"""
どこで: `src/shapedrift/interactive/runtime/perf.py`。
何を: tick 内の区間計測（update / realize / render の集計 + 周期出力）を提供する。
なぜ: フレーム予算を超えたときに、移動更新・輪郭生成・GPU 転送のどこが重いかを切り分けるため。
"""

from __future__ import annotations

import contextlib
import os
import time
from collections.abc import Iterator
from typing import Callable, Mapping


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    value = env.get(name)
    if value is None:
        return False
    return str(value).strip().lower() not in {"", "0", "false", "no", "off"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None:
        return int(default)
    try:
        return int(value)
    except ValueError:
        return int(default)


class _PerfSection:
    def __init__(self, perf: "PerfCollector", name: str) -> None:
        self._perf = perf
        self._name = str(name)
        self._t0_ns = 0

    def __enter__(self) -> None:
        self._t0_ns = time.perf_counter_ns()

    def __exit__(self, _exc_type: object, _exc: object, _tb: object) -> None:
        dt = time.perf_counter_ns() - self._t0_ns
        self._perf._add(self._name, int(dt))


class PerfCollector:
    """tick 区間計測の集計器。

    Notes
    -----
    無効時は全メソッドが軽量 no-op として振る舞う。
    """

    def __init__(
        self,
        *,
        enabled: bool,
        print_every: int = 60,
        gpu_finish: bool = False,
        emit: Callable[[str], None] | None = None,
    ) -> None:
        self.enabled = bool(enabled)
        self.print_every = int(print_every) if int(print_every) > 0 else 60
        self.gpu_finish = bool(gpu_finish)
        self._emit = emit if emit is not None else print

        self._window_frames = 0
        self._sum_ns: dict[str, int] = {}

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "PerfCollector":
        """環境変数から設定して作成する。

        - `SHAPEDRIFT_PERF=1` で有効化する。
        - `SHAPEDRIFT_PERF_EVERY=60` で何フレームごとに出力するかを指定する。
        - `SHAPEDRIFT_PERF_GPU_FINISH=1` で `ctx.finish()` を含む GPU 同期計測を有効化する。
        """
        src = os.environ if env is None else env
        return cls(
            enabled=_env_flag(src, "SHAPEDRIFT_PERF"),
            print_every=_env_int(src, "SHAPEDRIFT_PERF_EVERY", 60),
            gpu_finish=_env_flag(src, "SHAPEDRIFT_PERF_GPU_FINISH"),
        )

    def section(self, name: str) -> contextlib.AbstractContextManager[None]:
        """`with` で囲った区間の時間を加算する。"""
        if not self.enabled:
            return contextlib.nullcontext()
        return _PerfSection(self, str(name))

    @contextlib.contextmanager
    def frame(self) -> Iterator[None]:
        """1 tick 全体の計測と周期出力を行う。"""
        if not self.enabled:
            yield
            return

        t0 = time.perf_counter_ns()
        try:
            yield
        finally:
            self._add("frame", int(time.perf_counter_ns() - t0))
            self._window_frames += 1
            if self._window_frames % self.print_every == 0:
                self._print_and_reset()

    def _add(self, name: str, dt_ns: int) -> None:
        self._sum_ns[name] = int(self._sum_ns.get(name, 0)) + int(dt_ns)

    def _print_and_reset(self) -> None:
        frames = int(self._window_frames)
        if frames <= 0:
            return

        def _ms(total_ns: int) -> float:
            return float(total_ns) / float(frames) / 1_000_000.0

        parts: list[str] = [f"frame={_ms(int(self._sum_ns.get('frame', 0))):.3f}ms"]
        for name in sorted(k for k in self._sum_ns.keys() if k != "frame"):
            parts.append(f"{name}={_ms(int(self._sum_ns[name])):.3f}ms")

        self._emit("[shapedrift-perf] " + " ".join(parts))

        self._window_frames = 0
        self._sum_ns.clear()
