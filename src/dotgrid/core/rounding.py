# どこで: `src/dotgrid/core/rounding.py`。
# 何を: float→int 変換の丸め規則（half away from zero）を 1 か所に定義する。
# なぜ: 角の座標・レイアウト・摂動で丸めが食い違うと、正方形が閉じなくなるため。

from __future__ import annotations

import math

import numpy as np


def round_half_away(value: float) -> int:
    """0.5 境界を絶対値方向へ丸めた整数を返す。

    `round()` は偶数丸め（banker's rounding）なので使わない。
    """
    v = float(value)
    return int(math.copysign(math.floor(abs(v) + 0.5), v))


def round_half_away_array(values: np.ndarray) -> np.ndarray:
    """配列版の `round_half_away`。int64 配列を返す。"""
    arr = np.asarray(values, dtype=np.float64)
    return (np.sign(arr) * np.floor(np.abs(arr) + 0.5)).astype(np.int64)
