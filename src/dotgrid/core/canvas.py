"""
どこで: `src/dotgrid/core/canvas.py`。モノクロピクセルバッファの実体。
何を: 固定サイズの 1 次元 uint8 配列を (x, y) で読み書きする PixelBuffer を提供する。
なぜ: ラスタライザとエンコーダが共有する、唯一のアドレス計算と範囲外ポリシーを持たせるため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from dotgrid.core.errors import BufferTooSmallError, PixelOutOfBoundsError

PIXEL_OFF = 0
PIXEL_ON = 1

# 幅・高さは u32 の範囲に制限する。
_MAX_DIM = 2**32


def _as_dim(value: Any, *, name: str) -> int:
    """幅/高さを 0 以上 2**32 未満の int として解釈して返す。"""
    try:
        v = int(value)
    except Exception as exc:
        raise ValueError(f"{name} は整数である必要がある: got={value!r}") from exc
    if v != value:
        raise ValueError(f"{name} は整数値である必要がある: got={value!r}")
    if v < 0 or v >= _MAX_DIM:
        raise ValueError(f"{name} は 0 以上 2**32 未満である必要がある: got={v}")
    return v


def _as_pixel_value(value: Any) -> int:
    """書き込み値を 0..255 の int として解釈して返す。"""
    try:
        v = int(value)
    except Exception as exc:
        raise ValueError(f"pixel 値は整数である必要がある: got={value!r}") from exc
    if v < 0 or v > 255:
        raise ValueError(f"pixel 値は 0..255 である必要がある: got={v}")
    return v


def _as_store(buf: Any) -> np.ndarray:
    """呼び出し側のバッファを 1 次元 uint8 配列として取り込む。

    連続な 1 次元 uint8 の ndarray はそのまま採用する（所有権は PixelBuffer に移る）。
    それ以外はコピーして所有配列にする。
    """
    if isinstance(buf, np.ndarray):
        if buf.dtype == np.uint8 and buf.ndim == 1 and buf.flags.c_contiguous:
            return buf
        return np.ascontiguousarray(buf, dtype=np.uint8).reshape(-1)
    if isinstance(buf, (bytes, bytearray, memoryview)):
        return np.frombuffer(buf, dtype=np.uint8).copy()
    return np.asarray(list(buf), dtype=np.uint8).reshape(-1)


class PixelBuffer:
    """幅 x 高さのモノクロピクセルグリッド。

    ピクセルは行優先（`index = y * width + x`）で 1 次元の uint8 配列に格納する。
    格納値は通常 0（off）か 1（on）。

    アクセスは 2 系統ある。

    - permissive: `get_pixel()` / `draw_pixel()`。範囲外は 0 を返す / 何もしない。
      描画・レンダリングはこちらを使う。
    - strict: `pixel()` / `set_pixel()`。範囲外は `PixelOutOfBoundsError`。
    """

    __slots__ = ("_width", "_height", "_pixels")

    def __init__(self, width: int, height: int, pixels: np.ndarray) -> None:
        self._width = _as_dim(width, name="width")
        self._height = _as_dim(height, name="height")
        self._pixels = pixels

    @classmethod
    def create(cls, width: int, height: int, buf: Any = None) -> PixelBuffer:
        """キャンバスを生成する。

        Parameters
        ----------
        width, height : int
            グリッドの寸法。
        buf : array-like | bytes | None, optional
            呼び出し側が用意したピクセル格納領域。None なら 0 埋めで確保する。
            指定時は中身をそのまま使う（0 埋めはしない）。

        Raises
        ------
        BufferTooSmallError
            `buf` の長さが `width * height` に満たない場合。
        """
        w = _as_dim(width, name="width")
        h = _as_dim(height, name="height")
        needed = w * h
        if buf is None:
            return cls(w, h, np.zeros((needed,), dtype=np.uint8))

        store = _as_store(buf)
        if needed > int(store.size):
            raise BufferTooSmallError(needed=needed, actual=int(store.size))
        return cls(w, h, store)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """格納配列そのもの（長さは width * height 以上）。"""
        return self._pixels

    def index(self, x: int, y: int) -> int | None:
        """(x, y) の線形インデックスを返す。範囲外なら None。

        全アクセサはこの関数だけを経由してアドレスを計算する。
        """
        xi = int(x)
        yi = int(y)
        if xi < 0 or yi < 0 or xi >= self._width or yi >= self._height:
            return None
        i = yi * self._width + xi
        if i >= int(self._pixels.size):
            return None
        return i

    def get_pixel(self, x: int, y: int) -> int:
        """(x, y) の格納値を返す。範囲外は off（0）として扱う。"""
        i = self.index(x, y)
        if i is None:
            return PIXEL_OFF
        return int(self._pixels[i])

    def pixel(self, x: int, y: int) -> int:
        """(x, y) の格納値を返す。範囲外は `PixelOutOfBoundsError`。"""
        i = self.index(x, y)
        if i is None:
            raise PixelOutOfBoundsError(x, y, self._width, self._height)
        return int(self._pixels[i])

    def draw_pixel(self, x: int, y: int, value: int = PIXEL_ON) -> bool:
        """(x, y) に value を書く。範囲外は黙って無視し False を返す。"""
        v = _as_pixel_value(value)
        i = self.index(x, y)
        if i is None:
            return False
        self._pixels[i] = v
        return True

    def set_pixel(self, x: int, y: int, value: int = PIXEL_ON) -> None:
        """(x, y) に value を書く。範囲外は `PixelOutOfBoundsError`。"""
        v = _as_pixel_value(value)
        i = self.index(x, y)
        if i is None:
            raise PixelOutOfBoundsError(x, y, self._width, self._height)
        self._pixels[i] = v

    def clear(self) -> None:
        """全ピクセルを off にする。"""
        self._pixels[: self._width * self._height] = PIXEL_OFF

    def fill(self) -> None:
        """全ピクセルを on にする。"""
        self._pixels[: self._width * self._height] = PIXEL_ON

    def as_array(self) -> np.ndarray:
        """グリッド部分を shape (height, width) の読み取り専用ビューで返す。"""
        grid = self._pixels[: self._width * self._height].reshape(
            self._height, self._width
        )
        grid.setflags(write=False)
        return grid

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self._width}, height={self._height})"
