"""Tests for the built-in hex font."""

from __future__ import annotations

from pychip8.video.font import FONT_GLYPHS, GLYPH_BYTES, glyph_address


def _glyph(digit: int) -> bytes:
    return FONT_GLYPHS[digit * GLYPH_BYTES : (digit + 1) * GLYPH_BYTES]


def test_font_table_layout() -> None:
    assert len(FONT_GLYPHS) == 80
    assert _glyph(0) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
    assert _glyph(0xF) == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])


def test_glyphs_use_high_nibble_only() -> None:
    assert all(byte & 0x0F == 0 for byte in FONT_GLYPHS)


def test_glyph_address() -> None:
    assert glyph_address(0) == 0x50
    assert glyph_address(7) == 0x50 + 35
    assert glyph_address(1, font_start=0) == 5
