# どこで: `src/dotgrid/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: CLI の既定値（桁数・正方形数・seed・表示モード）をユーザーが差し替えられるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

- `config.yaml` を「同梱デフォルト → ユーザー設定（任意）」の順に適用して `RuntimeConfig` を構築
- 探索パス（CWD / HOME）と、明示指定（`set_config_path()`）の両方に対応
- 1 回ロードした結果をプロセス内でキャッシュ（設定を切り替える場合は `set_config_path()` で破棄）

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  ネストした mapping は「部分的にマージ」されず「丸ごと置換」される。
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from dotgrid.core.braille import RENDER_MODES


@dataclass(frozen=True, slots=True)
class SchotterConfig:
    """Schotter の既定パラメータ（`config.yaml` の `schotter`）。"""

    console_cols: int
    squares_per_row: int
    squares_per_col: int
    seed: int | None


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """dotgrid の実行時設定。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。無ければ None。
    schotter:
        Schotter の既定パラメータ。
    render_mode:
        "braille" または "ascii"。
    caption:
        CLI 出力の末尾にキャプション行を付けるか。
    """

    config_path: Path | None
    schotter: SchotterConfig
    render_mode: str
    caption: bool


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    None を渡すと明示指定を解除する。いずれの場合もキャッシュを破棄する。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補を返す（先勝ち）。"""

    return (
        Path.cwd() / ".dotgrid" / "config.yaml",
        Path.home() / ".config" / "dotgrid" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int(value: Any, *, key: str) -> int | None:
    """任意値を int として解釈して返す。bool は受け付けない。"""

    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_bool(value: Any, *, key: str) -> bool | None:
    """任意値を bool として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int) and int(value) in (0, 1):
        return bool(int(value))
    raise RuntimeError(f"{key} は bool である必要があります: got={value!r}")


def _require_positive_int(value: Any, *, key: str) -> int:
    v = _as_int(value, key=key)
    if v is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    if v <= 0:
        raise ValueError(f"{key} は正の値である必要があります: got={v}")
    return v


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。"""

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """UTF-8 の YAML ファイルを読み、dict を返す。"""

    return _load_yaml_text(path.read_text(encoding="utf-8"), source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱 `dotgrid/resource/default_config.yaml` をロードする。"""

    blob = (
        resources.files("dotgrid")
        .joinpath("resource", "default_config.yaml")
        .read_text(encoding="utf-8")
    )
    return _load_yaml_text(blob, source="dotgrid/resource/default_config.yaml")


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `dotgrid/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
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
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

    version = _as_int(payload.get("version"), key="version")
    if version is None:
        raise RuntimeError("config.yaml の version が未設定です")
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    schotter = _as_mapping(payload.get("schotter"), key="schotter")
    schotter_cfg = SchotterConfig(
        console_cols=_require_positive_int(
            schotter.get("console_cols"), key="schotter.console_cols"
        ),
        squares_per_row=_require_positive_int(
            schotter.get("squares_per_row"), key="schotter.squares_per_row"
        ),
        squares_per_col=_require_positive_int(
            schotter.get("squares_per_col"), key="schotter.squares_per_col"
        ),
        seed=_as_int(schotter.get("seed"), key="schotter.seed"),
    )

    render = _as_mapping(payload.get("render"), key="render")
    mode = str(render.get("mode", "braille")).strip()
    if mode not in RENDER_MODES:
        raise RuntimeError(
            f"render.mode は {RENDER_MODES} のいずれかである必要があります: got={mode!r}"
        )
    caption = _as_bool(render.get("caption"), key="render.caption")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        schotter=schotter_cfg,
        render_mode=mode,
        caption=True if caption is None else caption,
    )
    _CONFIG_CACHE = cfg
    return cfg
