"""
どこで: `src/dotgrid/core/raster.py`。PixelBuffer への線分・回転正方形の描画。
何を: 整数 Bresenham で線分を、外接円上の 4 点で回転正方形を描く。
なぜ: Schotter 合成が使う最小限のラスタライズを、浮動小数の誤差なく行うため。
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from dotgrid.core.canvas import PIXEL_ON, PixelBuffer
from dotgrid.core.rounding import round_half_away, round_half_away_array

Point = tuple[int, int]

_SQRT2 = math.sqrt(2.0)


@njit(cache=True)
def _bresenham_into(
    out: np.ndarray,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    xmin: int,
    ymin: int,
    xmax: int,
    ymax: int,
) -> int:
    """(x1,y1)->(x2,y2) の格子点のうち、矩形 [xmin,xmax]x[ymin,ymax] 内の点を
    out へ順に書き込む（Numba）。

    矩形を出て、以降戻らないことが確定した時点で走査を打ち切る。書き込んだ点数を返す。
    """
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    err = dx - dy

    x = x1
    y = y1
    n = 0
    while True:
        if x > xmax and (sx > 0 or dx == 0):
            break
        if x < xmin and (sx < 0 or dx == 0):
            break
        if y > ymax and (sy > 0 or dy == 0):
            break
        if y < ymin and (sy < 0 or dy == 0):
            break

        if x >= xmin and x <= xmax and y >= ymin and y <= ymax:
            out[n, 0] = x
            out[n, 1] = y
            n += 1
        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy

    return n


def _walk(
    x1: int, y1: int, x2: int, y2: int, xmin: int, ymin: int, xmax: int, ymax: int
) -> np.ndarray:
    # 矩形内の点は x, y とも単調に動く相異なる点なので、幅 + 高さ 点を超えない。
    box = max(xmax - xmin + 1, 0) + max(ymax - ymin + 1, 0)
    n_max = min(abs(x2 - x1) + abs(y2 - y1), box) + 1
    out = np.empty((n_max, 2), dtype=np.int64)
    n = int(_bresenham_into(out, x1, y1, x2, y2, xmin, ymin, xmax, ymax))
    return out[:n]


def bresenham_points(x1: int, y1: int, x2: int, y2: int) -> np.ndarray:
    """線分上の格子点を両端を含めて返す。

    Returns
    -------
    np.ndarray
        int64 shape (N, 2)。N は `max(|dx|, |dy|) + 1`。
    """
    x1_i, y1_i, x2_i, y2_i = int(x1), int(y1), int(x2), int(y2)
    return _walk(
        x1_i,
        y1_i,
        x2_i,
        y2_i,
        min(x1_i, x2_i),
        min(y1_i, y2_i),
        max(x1_i, x2_i),
        max(y1_i, y2_i),
    )


def draw_line(
    buffer: PixelBuffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: int = PIXEL_ON,
) -> int:
    """(x1,y1) から (x2,y2) まで Bresenham で線分を描く。

    キャンバス外の点は書かずに捨てる。走査はキャンバスを出た時点で終わるので、
    遠方の端点でもメモリ使用量はキャンバス寸法で抑えられる。
    実際に書き込んだピクセル数を返す。
    """
    points = _walk(
        int(x1),
        int(y1),
        int(x2),
        int(y2),
        0,
        0,
        buffer.width - 1,
        buffer.height - 1,
    )
    written = 0
    for x, y in points.tolist():
        if buffer.draw_pixel(x, y, color):
            written += 1
    return written


def square_corners(
    center_x: float,
    center_y: float,
    size: float,
    angle: float,
) -> list[Point]:
    """中心・一辺・回転角 [rad] から正方形の 4 頂点を返す。

    `size` を外接円の半径 `size / sqrt(2)`（整数丸め）に換算し、
    π/4 + angle から π/2 刻みで円周上をサンプルする。
    x は sin、y は cos で取る。
    """
    radius = round_half_away(float(size) / _SQRT2)
    k = math.pi / 4.0 + float(angle) + np.arange(4, dtype=np.float64) * (math.pi / 2.0)
    xs = round_half_away_array(radius * np.sin(k) + float(center_x))
    ys = round_half_away_array(radius * np.cos(k) + float(center_y))
    return [(int(x), int(y)) for x, y in zip(xs.tolist(), ys.tolist())]


def draw_square(
    buffer: PixelBuffer,
    center_x: float,
    center_y: float,
    size: float,
    angle: float,
) -> list[Point]:
    """回転した正方形を 4 本の線分で描き、使った頂点を返す。"""
    corners = square_corners(center_x, center_y, size, angle)
    for j in range(4):
        p = corners[j]
        q = corners[(j + 1) % 4]
        draw_line(buffer, p[0], p[1], q[0], q[1], PIXEL_ON)
    return corners
