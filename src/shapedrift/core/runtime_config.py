# どこで: `src/shapedrift/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・検証・キャッシュ）を提供する。
# なぜ: ウィンドウ寸法やシーンの乱数範囲を、コードを触らずにユーザーが指定できるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from shapedrift.core.random_source import RGB255
from shapedrift.core.scene import SceneSettings


@dataclass(frozen=True, slots=True)
class WindowConfig:
    """描画ウィンドウの設定。"""

    size: tuple[int, int]
    title: str
    fps: float
    background_color: RGB255
    text_color: RGB255
    show_stats: bool


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """shapedrift の実行時設定。"""

    config_path: Path | None
    window: WindowConfig
    scene: SceneSettings


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".shapedrift" / "config.yaml",
        home / ".config" / "shapedrift" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [a, b] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [a, b] の配列である必要があります: got={value!r}")
    try:
        return (int(seq[0]), int(seq[1]))
    except Exception as exc:
        raise RuntimeError(f"{key} は [a, b] の整数配列である必要があります: got={value!r}") from exc


def _as_range(value: Any, *, key: str) -> tuple[int, int]:
    lo, hi = _as_int_pair(value, key=key)
    if lo > hi:
        raise ValueError(f"{key} は [min, max] の順である必要があります: got={value!r}")
    return (lo, hi)


def _as_rgb255(value: Any, *, key: str) -> RGB255:
    try:
        seq = [int(v) for v in value]
    except Exception as exc:
        raise RuntimeError(f"{key} は [r, g, b] の整数配列である必要があります: got={value!r}") from exc
    if len(seq) != 3:
        raise RuntimeError(f"{key} は [r, g, b] の整数配列である必要があります: got={value!r}")
    if any(v < 0 or v > 255 for v in seq):
        raise ValueError(f"{key} の各要素は 0..255 である必要があります: got={value!r}")
    return (seq[0], seq[1], seq[2])


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise RuntimeError(f"{key} は true/false である必要があります: got={value!r}")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping 同士は再帰的に、それ以外は override 側で上書きする。"""
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("shapedrift")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="shapedrift/resource/default_config.yaml")


def _parse_window(payload: dict[str, Any]) -> WindowConfig:
    window = _as_mapping(payload.get("window"), key="window")

    size = _as_int_pair(window.get("size"), key="window.size")
    if size[0] <= 0 or size[1] <= 0:
        raise ValueError(f"window.size は正の値である必要があります: got={size}")

    fps = _as_float(window.get("fps"), key="window.fps")
    if fps <= 0:
        raise ValueError(f"window.fps は正の値である必要があります: got={fps}")

    return WindowConfig(
        size=size,
        title=str(window.get("title", "")),
        fps=fps,
        background_color=_as_rgb255(window.get("background_color"), key="window.background_color"),
        text_color=_as_rgb255(window.get("text_color"), key="window.text_color"),
        show_stats=_as_bool(window.get("show_stats", False), key="window.show_stats"),
    )


def _parse_scene(payload: dict[str, Any]) -> SceneSettings:
    scene = _as_mapping(payload.get("scene"), key="scene")

    object_count = _as_int(scene.get("object_count"), key="scene.object_count")
    if object_count < 0:
        raise ValueError(f"scene.object_count は 0 以上である必要があります: got={object_count}")

    seed_raw = scene.get("seed")
    seed = None if seed_raw is None else _as_int(seed_raw, key="scene.seed")

    size_range = _as_range(scene.get("size_range"), key="scene.size_range")
    if size_range[0] <= 0:
        raise ValueError(f"scene.size_range は正の値である必要があります: got={size_range}")

    circle_segments = _as_int(scene.get("circle_segments"), key="scene.circle_segments")
    if circle_segments < 3:
        raise ValueError(f"scene.circle_segments は 3 以上である必要があります: got={circle_segments}")

    return SceneSettings(
        object_count=object_count,
        seed=seed,
        speed_range=_as_range(scene.get("speed_range"), key="scene.speed_range"),
        rotation_speed_range=_as_range(
            scene.get("rotation_speed_range"), key="scene.rotation_speed_range"
        ),
        size_range=size_range,
        color_min=_as_rgb255(scene.get("color_min"), key="scene.color_min"),
        color_max=_as_rgb255(scene.get("color_max"), key="scene.color_max"),
        circle_segments=circle_segments,
    )


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.shapedrift/config.yaml` / `~/.config/shapedrift/config.yaml`
    3) `run(config_path=...)` / `set_config_path()` の明示パス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        window=_parse_window(payload),
        scene=_parse_scene(payload),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "WindowConfig", "runtime_config", "set_config_path"]
