"""Braille エンコーダと ASCII デバッグ表示に関するテスト群。"""

from __future__ import annotations

import unicodedata

import numpy as np
import pytest

from dotgrid.core.braille import (
    render,
    render_ascii,
    render_braille,
    translate_pixel_block,
)
from dotgrid.core.canvas import PixelBuffer

# タイル内オフセット (dx, dy) → Unicode の点番号。
_DOT_NUMBERS = {
    (0, 0): 1,
    (0, 1): 2,
    (0, 2): 3,
    (1, 0): 4,
    (1, 1): 5,
    (1, 2): 6,
    (0, 3): 7,
    (1, 3): 8,
}
_BIT_OFFSETS = [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2), (0, 3), (1, 3)]


def test_translate_pixel_block_is_bijection_onto_braille_block() -> None:
    chars = [translate_pixel_block(b) for b in range(256)]

    assert len(set(chars)) == 256
    assert chars[0] == "⠀"
    assert chars[255] == "⣿"
    for b, ch in enumerate(chars):
        assert ord(ch) == 0x2800 + b
        assert unicodedata.name(ch).startswith("BRAILLE PATTERN")
        assert len(ch.encode("utf-8")) == 3


def test_translate_pixel_block_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        translate_pixel_block(256)
    with pytest.raises(ValueError):
        translate_pixel_block(-1)


@pytest.mark.parametrize("offset", sorted(_DOT_NUMBERS))
def test_single_pixel_maps_to_standard_dot(offset: tuple[int, int]) -> None:
    buf = PixelBuffer.create(2, 4)
    buf.draw_pixel(offset[0], offset[1], 1)

    text = render_braille(buf)

    assert text.endswith("\n")
    ch = text[0]
    assert unicodedata.name(ch) == f"BRAILLE PATTERN DOTS-{_DOT_NUMBERS[offset]}"


def test_blank_buffer_renders_blank_glyphs() -> None:
    buf = PixelBuffer.create(4, 8)
    assert render_braille(buf) == "⠀⠀\n⠀⠀\n"


def test_full_tile_renders_all_dots() -> None:
    buf = PixelBuffer.create(2, 4)
    buf.fill()
    assert render_braille(buf) == "⣿\n"


def test_partial_tiles_pad_with_off_pixels() -> None:
    buf = PixelBuffer.create(3, 5)
    buf.draw_pixel(2, 4, 1)

    assert render_braille(buf) == "⠀⠀\n⠀⠁\n"


def test_render_braille_matches_get_pixel_reference() -> None:
    width, height = 7, 9
    rng = np.random.default_rng(0)
    store = rng.integers(0, 2, size=width * height).astype(np.uint8)
    buf = PixelBuffer.create(width, height, store)

    expected_lines = []
    for ty in range(0, height, 4):
        line = ""
        for tx in range(0, width, 2):
            byte = 0
            for bit, (dx, dy) in enumerate(_BIT_OFFSETS):
                if buf.get_pixel(tx + dx, ty + dy):
                    byte |= 1 << bit
            line += chr(0x2800 + byte)
        expected_lines.append(line + "\n")

    text = render_braille(buf)
    assert text == "".join(expected_lines)
    assert len(text.splitlines()) == 3
    assert all(len(line) == 4 for line in text.splitlines())


def test_nonbinary_stored_byte_is_on_in_braille_and_unknown_in_ascii() -> None:
    buf = PixelBuffer.create(2, 4, bytes([7, 0, 0, 0, 0, 0, 0, 0]))

    assert buf.get_pixel(0, 0) == 7
    assert render_braille(buf) == "⠁\n"
    assert render_ascii(buf).splitlines()[0] == "?."


def test_render_ascii_one_char_per_pixel() -> None:
    buf = PixelBuffer.create(3, 2)
    buf.draw_pixel(0, 0, 1)
    buf.draw_pixel(2, 1, 1)

    assert render_ascii(buf) == "@..\n..@\n"
    assert render(buf, "ascii") == render_ascii(buf)
    assert render(buf) == render_braille(buf)


def test_render_unknown_mode_raises() -> None:
    with pytest.raises(ValueError):
        render(PixelBuffer.create(2, 4), "png")
