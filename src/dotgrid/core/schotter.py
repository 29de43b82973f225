"""
どこで: `src/dotgrid/core/schotter.py`。Georg Nees の Schotter（1968）の合成。
何を: 正方形グリッドのレイアウトを決め、行が下がるほど回転/変位を大きくして描く。
なぜ: キャンバス・ラスタライザ・エンコーダを通しで使う生成アートを 1 呼び出しで得るため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np

from dotgrid.core.braille import render
from dotgrid.core.canvas import PixelBuffer
from dotgrid.core.errors import CanvasTooSmallError
from dotgrid.core.raster import draw_square
from dotgrid.core.rounding import round_half_away

logger = logging.getLogger(__name__)

SCHOTTER_CAPTION = "Georg Nees - schotter, plotter on paper, 1968."

# CLI から受け付けるパラメータの範囲（範囲外はクランプする）。
CONSOLE_COLS_RANGE = (1, 1000)
SQUARES_RANGE = (1, 200)


class RandomSource(Protocol):
    """Schotter が使う乱数源。`numpy.random.Generator` がそのまま満たす。"""

    def random(self) -> Any: ...

    def integers(self, low: int, high: int) -> Any: ...


@dataclass(frozen=True, slots=True)
class SchotterLayout:
    """Schotter 1 枚分のレイアウト。

    Attributes
    ----------
    needed_width, needed_height:
        必要なキャンバス寸法 [px]。
    padding:
        外周の余白 [px]。
    square_side:
        正方形 1 個ぶんのセル幅 [px]。
    squares_per_row, squares_per_col:
        横/縦に並べる正方形の数。
    """

    needed_width: int
    needed_height: int
    padding: float
    square_side: float
    squares_per_row: int
    squares_per_col: int


def _as_positive_int(value: Any, *, name: str) -> int:
    try:
        v = int(value)
    except Exception as exc:
        raise ValueError(f"{name} は整数である必要がある: got={value!r}") from exc
    if v != value:
        raise ValueError(f"{name} は整数値である必要がある: got={value!r}")
    if v <= 0:
        raise ValueError(f"{name} は 1 以上である必要がある: got={v}")
    return v


def _clamp(value: int, bounds: tuple[int, int], *, name: str) -> int:
    lo, hi = bounds
    clamped = min(max(int(value), lo), hi)
    if clamped != int(value):
        logger.warning(
            "%s=%d is out of range [%d, %d]; clamped to %d", name, value, lo, hi, clamped
        )
    return clamped


def clamp_schotter_args(
    console_cols: int,
    squares_per_row: int,
    squares_per_col: int,
) -> tuple[int, int, int]:
    """ユーザー入力を受け付け範囲へクランプして返す。"""
    return (
        _clamp(console_cols, CONSOLE_COLS_RANGE, name="console_cols"),
        _clamp(squares_per_row, SQUARES_RANGE, name="squares_per_row"),
        _clamp(squares_per_col, SQUARES_RANGE, name="squares_per_col"),
    )


def compute_layout(
    console_cols: int,
    squares_per_row: int,
    squares_per_col: int,
) -> SchotterLayout:
    """端末の桁数と正方形の個数からレイアウトを計算する。

    Braille 1 文字は横 2 px なので、必要幅は `2 * console_cols` になる。
    """
    cols = _as_positive_int(console_cols, name="console_cols")
    per_row = _as_positive_int(squares_per_row, name="squares_per_row")
    per_col = _as_positive_int(squares_per_col, name="squares_per_col")

    needed_width = cols * 2
    padding = 2.0 if needed_width > 4 else 0.0
    square_side = (float(needed_width) - padding * 2.0) / float(per_row)
    needed_height = round_half_away(square_side * per_col + padding * 2.0)

    return SchotterLayout(
        needed_width=needed_width,
        needed_height=needed_height,
        padding=padding,
        square_side=square_side,
        squares_per_row=per_row,
        squares_per_col=per_col,
    )


def _signed_magnitude(rng: RandomSource, factor: float) -> float:
    """[0, factor) の一様値を返す。直後のコイン投げで符号を反転する。"""
    r = float(rng.random()) * factor
    if int(rng.integers(0, 2)):
        r = -r
    return r


def draw_schotter(
    buffer: PixelBuffer,
    console_cols: int,
    squares_per_row: int,
    squares_per_col: int,
    *,
    rng: RandomSource | None = None,
) -> SchotterLayout:
    """buffer に Schotter を描き、使ったレイアウトを返す。

    Parameters
    ----------
    buffer : PixelBuffer
        描画先。レイアウトの必要寸法以上である必要がある。
    console_cols, squares_per_row, squares_per_col : int
        `compute_layout()` と同じ。
    rng : RandomSource | None, optional
        乱数源。None なら `numpy.random.default_rng()`。
        正方形 1 個につき `random()` → `integers(0, 2)` を 3 回繰り返す。

    Raises
    ------
    CanvasTooSmallError
        buffer がレイアウトより小さい場合（描画前に送出する）。
    """
    layout = compute_layout(console_cols, squares_per_row, squares_per_col)
    if buffer.width < layout.needed_width or buffer.height < layout.needed_height:
        raise CanvasTooSmallError(
            needed_width=layout.needed_width,
            needed_height=layout.needed_height,
            actual_width=buffer.width,
            actual_height=buffer.height,
        )
    if rng is None:
        rng = np.random.default_rng()

    side = layout.square_side
    padding = layout.padding
    logger.debug(
        "schotter layout: %dx%d px, side=%.3f, padding=%.1f, squares=%dx%d",
        layout.needed_width,
        layout.needed_height,
        side,
        padding,
        layout.squares_per_row,
        layout.squares_per_col,
    )

    # 行ごとに乱れが増えるので、走査順は上→下、左→右で固定する。
    for y in range(layout.squares_per_col):
        factor = float(y + 1) / float(layout.squares_per_col + 1)
        for x in range(layout.squares_per_row):
            sx = round_half_away(x * side + side / 2.0 + padding)
            sy = round_half_away(y * side + side / 2.0 + padding)

            r1 = _signed_magnitude(rng, factor)
            r2 = _signed_magnitude(rng, factor)
            r3 = _signed_magnitude(rng, factor)

            angle = r1
            sx += round_half_away(r2 * side / 3.0)
            sy += round_half_away(r3 * side / 3.0)
            draw_square(buffer, sx, sy, side, angle)

    return layout


def create_and_render(
    console_cols: int,
    squares_per_row: int,
    squares_per_col: int,
    *,
    rng: RandomSource | None = None,
    mode: str = "braille",
) -> str:
    """レイアウトぴったりのキャンバスを作って Schotter を描き、テキストで返す。"""
    layout = compute_layout(console_cols, squares_per_row, squares_per_col)
    buffer = PixelBuffer.create(layout.needed_width, layout.needed_height)
    draw_schotter(buffer, console_cols, squares_per_row, squares_per_col, rng=rng)
    return render(buffer, mode)
