"""Framebuffer and rendering helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_GLYPHS, GLYPH_BYTES, glyph_address
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer, FrameBufferError
from .palette import MONOCHROME, PALETTES, PHOSPHOR, palette_by_name, parse_color, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "FrameBuffer",
    "FrameBufferError",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FONT_GLYPHS",
    "GLYPH_BYTES",
    "glyph_address",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PHOSPHOR",
    "PALETTES",
    "palette_by_name",
    "parse_color",
    "validate_palette",
]
