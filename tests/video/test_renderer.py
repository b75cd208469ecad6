"""Unit tests for the framebuffer renderer."""

from __future__ import annotations

import pytest

from pychip8.video import MONOCHROME, PHOSPHOR, FrameBuffer, Renderer, palette_by_name, validate_palette


def test_render_maps_pixels_to_palette() -> None:
    fb = FrameBuffer()
    fb.set_pixel(0, 0, True)

    result = Renderer().render(fb)

    assert (result.width, result.height) == (64, 32)
    assert result.get_pixel(0, 0) == (255, 255, 255)
    assert result.get_pixel(1, 0) == (0, 0, 0)
    assert len(result.pixels) == 64 * 32 * 3


def test_render_scale_factor() -> None:
    fb = FrameBuffer()
    fb.set_pixel(1, 0, True)

    result = Renderer(PHOSPHOR).render(fb, scale=4)

    assert (result.width, result.height) == (256, 128)
    on, off = PHOSPHOR[1], PHOSPHOR[0]
    assert result.get_pixel(3, 0) == off
    assert result.get_pixel(4, 0) == on
    assert result.get_pixel(7, 3) == on
    assert result.get_pixel(8, 0) == off
    assert result.get_pixel(4, 4) == off


def test_render_rejects_bad_scale() -> None:
    with pytest.raises(ValueError):
        Renderer().render(FrameBuffer(), scale=0)


def test_validate_palette() -> None:
    assert validate_palette([(0, 0, 256), (1, 2, 3)]) == ((0, 0, 0), (1, 2, 3))
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0), (1, 1, 1)])


def test_validate_palette_accepts_hex_strings() -> None:
    assert validate_palette(["#000000", "33ff66"]) == ((0, 0, 0), (0x33, 0xFF, 0x66))
    with pytest.raises(ValueError):
        validate_palette(["#00000", "#ffffff"])
    with pytest.raises(ValueError):
        validate_palette(["#gggggg", "#ffffff"])


def test_palette_by_name() -> None:
    assert palette_by_name("Phosphor") == PHOSPHOR
    assert palette_by_name("mono") == MONOCHROME
    with pytest.raises(ValueError, match="unknown palette"):
        palette_by_name("sepia")
