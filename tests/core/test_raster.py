"""Bresenham 線分と回転正方形の描画に関するテスト群。"""

from __future__ import annotations

import math

import numpy as np

from dotgrid.core.canvas import PixelBuffer
from dotgrid.core.raster import bresenham_points, draw_line, draw_square, square_corners


def _on_pixels(buf: PixelBuffer) -> set[tuple[int, int]]:
    ys, xs = np.nonzero(buf.as_array())
    return set(zip(xs.tolist(), ys.tolist()))


def test_degenerate_line_plots_single_pixel() -> None:
    buf = PixelBuffer.create(5, 5)
    assert draw_line(buf, 2, 3, 2, 3, 1) == 1
    assert _on_pixels(buf) == {(2, 3)}


def test_horizontal_line_plots_collinear_points() -> None:
    buf = PixelBuffer.create(5, 5)
    draw_line(buf, 0, 0, 3, 0, 1)
    assert _on_pixels(buf) == {(0, 0), (1, 0), (2, 0), (3, 0)}


def test_bresenham_points_order_and_shallow_slope() -> None:
    pts = bresenham_points(0, 0, 3, 1).tolist()
    assert pts == [[0, 0], [1, 0], [2, 1], [3, 1]]


def test_bresenham_points_vertical_and_reversed() -> None:
    assert bresenham_points(2, 0, 2, 3).tolist() == [[2, 0], [2, 1], [2, 2], [2, 3]]
    assert bresenham_points(3, 0, 0, 0).tolist() == [[3, 0], [2, 0], [1, 0], [0, 0]]


def test_bresenham_points_steep_line_is_connected() -> None:
    pts = bresenham_points(0, 0, -2, 7)

    assert pts.shape == (8, 2)
    assert pts[0].tolist() == [0, 0]
    assert pts[-1].tolist() == [-2, 7]
    step = np.abs(np.diff(pts, axis=0))
    assert int(step.max()) == 1
    # 主軸 (y) は毎反復 1 だけ進む。
    assert np.all(step[:, 1] == 1)


def test_line_outside_canvas_is_clipped_silently() -> None:
    buf = PixelBuffer.create(4, 4)
    written = draw_line(buf, -2, 1, 5, 1, 1)

    assert written == 4
    assert _on_pixels(buf) == {(0, 1), (1, 1), (2, 1), (3, 1)}


def test_square_corners_axis_aligned_are_symmetric() -> None:
    # radius = round(16 / sqrt(2)) = 11, 11 * sin(pi/4) = 7.78 -> 8
    corners = square_corners(10, 10, 16, 0.0)

    assert corners == [(18, 18), (18, 2), (2, 2), (2, 18)]
    for x, y in corners:
        assert (20 - x, 20 - y) in corners


def test_square_corners_rotated_quarter_turn_is_diamond() -> None:
    corners = square_corners(15, 15, 16, math.pi / 4)
    assert corners == [(26, 15), (15, 4), (4, 15), (15, 26)]


def test_draw_square_is_closed_outline() -> None:
    buf = PixelBuffer.create(20, 20)
    corners = draw_square(buf, 10, 10, 16, 0.0)

    on = _on_pixels(buf)
    for c in corners:
        assert c in on
    # 4 辺 x 17 点から共有する 4 頂点を除いた数。
    assert len(on) == 64
    assert (18, 10) in on
    assert (10, 2) in on
    assert (10, 10) not in on


def test_line_to_distant_endpoint_stays_bounded() -> None:
    """遠方の端点でもキャンバス内の点だけを描き、走査はキャンバスを出たところで終わる。"""
    buf = PixelBuffer.create(4, 4)

    assert draw_line(buf, 0, 0, 2**40, 0, 1) == 4
    assert _on_pixels(buf) == {(0, 0), (1, 0), (2, 0), (3, 0)}

    assert draw_line(buf, 1, 3, 1, -(2**40), 1) == 4
    assert draw_line(buf, 10, 0, 10, 2**40, 1) == 0
    assert _on_pixels(buf) == {(0, 0), (1, 0), (2, 0), (3, 0), (1, 1), (1, 2), (1, 3)}


def test_line_entering_canvas_from_outside_matches_full_walk() -> None:
    buf = PixelBuffer.create(8, 8)
    written = draw_line(buf, -300, -100, 20, 7, 1)

    expected = {
        (x, y)
        for x, y in bresenham_points(-300, -100, 20, 7).tolist()
        if 0 <= x < 8 and 0 <= y < 8
    }
    assert written == len(expected)
    assert _on_pixels(buf) == expected
