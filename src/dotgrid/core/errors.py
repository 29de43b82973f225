# どこで: `src/dotgrid/core/errors.py`。
# 何を: キャンバス関連の例外階層を定義する。
# なぜ: 構築/アドレス/レイアウトの各失敗を、呼び出し側が型で区別できるようにするため。

from __future__ import annotations


class CanvasError(ValueError):
    """dotgrid のキャンバス操作で送出される例外の基底クラス。"""


class BufferTooSmallError(CanvasError):
    """指定サイズに対して、与えられたピクセルバッファが小さすぎる。"""

    def __init__(self, needed: int, actual: int) -> None:
        self.needed = int(needed)
        self.actual = int(actual)
        super().__init__(
            f"pixel buffer が小さすぎます: needed={self.needed}, actual={self.actual}"
        )


class PixelOutOfBoundsError(CanvasError):
    """strict アクセサで範囲外の座標を参照した。"""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = int(x)
        self.y = int(y)
        self.width = int(width)
        self.height = int(height)
        super().__init__(
            f"pixel ({self.x}, {self.y}) は範囲外です: size={self.width}x{self.height}"
        )


class CanvasTooSmallError(CanvasError):
    """要求されたレイアウトがキャンバスに収まらない。"""

    def __init__(
        self,
        needed_width: int,
        needed_height: int,
        actual_width: int,
        actual_height: int,
    ) -> None:
        self.needed_width = int(needed_width)
        self.needed_height = int(needed_height)
        self.actual_width = int(actual_width)
        self.actual_height = int(actual_height)
        super().__init__(
            "canvas が小さすぎます: "
            f"needed={self.needed_width}x{self.needed_height}, "
            f"actual={self.actual_width}x{self.actual_height}"
        )
