"""
dotgrid: モノクロのピクセルキャンバスに線分/回転正方形を描き、Braille 文字で端末に出す。
"""

from __future__ import annotations

from dotgrid.core.braille import (
    render,
    render_ascii,
    render_braille,
    translate_pixel_block,
)
from dotgrid.core.canvas import PixelBuffer
from dotgrid.core.errors import (
    BufferTooSmallError,
    CanvasError,
    CanvasTooSmallError,
    PixelOutOfBoundsError,
)
from dotgrid.core.raster import draw_line, draw_square, square_corners
from dotgrid.core.schotter import (
    SchotterLayout,
    compute_layout,
    create_and_render,
    draw_schotter,
)

__all__ = [
    "BufferTooSmallError",
    "CanvasError",
    "CanvasTooSmallError",
    "PixelBuffer",
    "PixelOutOfBoundsError",
    "SchotterLayout",
    "compute_layout",
    "create_and_render",
    "draw_line",
    "draw_schotter",
    "draw_square",
    "render",
    "render_ascii",
    "render_braille",
    "square_corners",
    "translate_pixel_block",
]
