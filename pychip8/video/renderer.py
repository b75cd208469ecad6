"""Convert the framebuffer into RGB pixel data for presentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import FrameBuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build a surface") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scales the framebuffer and maps pixels onto a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        background, foreground = validate_palette(palette)
        self._off = bytes(background)
        self._on = bytes(foreground)

    def render(self, framebuffer: FrameBuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        width = framebuffer.width * scale
        height = framebuffer.height * scale
        buffer = bytearray()
        for row in framebuffer.rows():
            line = b"".join((self._on if pixel else self._off) * scale for pixel in row)
            buffer.extend(line * scale)
        return RenderResult(width=width, height=height, pixels=bytes(buffer))
