"""
どこで: `src/dotgrid/core/braille.py`。PixelBuffer のテキスト化。
何を: 2x4 ピクセルのタイルを Braille 文字（U+2800..U+28FF）1 字に詰めて描画文字列を作る。
なぜ: 端末上でピクセル単位の絵を、1 文字あたり 8 ピクセルの密度で表示するため。

タイル内のビット配置（括弧内はビット番号）::

    [0] [3]
    [1] [4]
    [2] [5]
    [6] [7]
"""

from __future__ import annotations

import numpy as np

from dotgrid.core.canvas import PIXEL_OFF, PIXEL_ON, PixelBuffer

BRAILLE_BASE = 0x2800
TILE_WIDTH = 2
TILE_HEIGHT = 4

# PIXEL_WEIGHTS[dy, dx] はタイル内オフセット (dx, dy) のビット値。
PIXEL_WEIGHTS = np.array(
    [
        [1 << 0, 1 << 3],
        [1 << 1, 1 << 4],
        [1 << 2, 1 << 5],
        [1 << 6, 1 << 7],
    ],
    dtype=np.int64,
)

RENDER_MODES = ("braille", "ascii")

# 格納値 → ASCII デバッグ表示の対応。0/1 以外は "?"。
_ASCII_TABLE = np.array(["?"] * 256, dtype="<U1")
_ASCII_TABLE[PIXEL_OFF] = "."
_ASCII_TABLE[PIXEL_ON] = "@"


def translate_pixel_block(byte: int) -> str:
    """8 ビット値を対応する Braille 文字に変換する。"""
    b = int(byte)
    if b < 0 or b > 255:
        raise ValueError(f"pixel block は 0..255 である必要がある: got={b}")
    return chr(BRAILLE_BASE + b)


def _tile_codes(grid: np.ndarray) -> np.ndarray:
    """(H, W) のピクセル配列からタイルごとのビット値 (ceil(H/4), ceil(W/2)) を返す。

    端の欠けたタイルは off で埋める。非 0 の格納値は on とみなす。
    """
    h, w = grid.shape
    rows = -(-h // TILE_HEIGHT)
    cols = -(-w // TILE_WIDTH)
    on = np.zeros((rows * TILE_HEIGHT, cols * TILE_WIDTH), dtype=np.int64)
    on[:h, :w] = grid != PIXEL_OFF

    tiles = on.reshape(rows, TILE_HEIGHT, cols, TILE_WIDTH)
    return np.einsum("rycx,yx->rc", tiles, PIXEL_WEIGHTS)


def render_braille(buffer: PixelBuffer) -> str:
    """バッファ全体を Braille 文字の複数行テキストにする。

    出力は `ceil(height/4)` 行 x `ceil(width/2)` 文字で、各行の末尾に改行が付く。
    """
    codes = _tile_codes(buffer.as_array())
    lines = ["".join(translate_pixel_block(c) for c in row) for row in codes.tolist()]
    return "".join(line + "\n" for line in lines)


def render_ascii(buffer: PixelBuffer) -> str:
    """1 ピクセル 1 文字のデバッグ表示（`.` = off, `@` = on, `?` = その他）。"""
    chars = _ASCII_TABLE[buffer.as_array()]
    return "".join("".join(row) + "\n" for row in chars.tolist())


def render(buffer: PixelBuffer, mode: str = "braille") -> str:
    """mode に応じてバッファをテキスト化する。"""
    mode_s = str(mode)
    if mode_s == "braille":
        return render_braille(buffer)
    if mode_s == "ascii":
        return render_ascii(buffer)
    raise ValueError(f"未知の render mode です: {mode_s!r} (choices={RENDER_MODES})")
