"""64x32 monochrome framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable

from pychip8.errors import Chip8Error

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


class FrameBufferError(Chip8Error):
    """Raised for pixel coordinates outside the framebuffer."""


class FrameBuffer:
    """Grid of boolean pixels addressed as ``(x, y)``."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise FrameBufferError("framebuffer dimensions must be positive")
        self._width = width
        self._height = height
        self._pixels = bytearray(width * height)
        self.dirty = True

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self.dirty = True

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[self._offset(x, y)] != 0

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        self._pixels[self._offset(x, y)] = 1 if on else 0
        self.dirty = True

    def xor_pixel(self, x: int, y: int) -> bool:
        """Toggle one pixel; return True if it was lit before the toggle."""

        offset = self._offset(x, y)
        was_on = self._pixels[offset] != 0
        self._pixels[offset] ^= 1
        self.dirty = True
        return was_on

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite with its origin at ``(x, y)``.

        The origin is reduced modulo the screen size, and every set sprite bit
        is then wrapped independently on each axis. Returns True if any lit
        pixel was switched off.
        """

        origin_x = x % self._width
        origin_y = y % self._height
        collision = False
        for row, bits in enumerate(rows):
            py = (origin_y + row) % self._height
            for column in range(SPRITE_WIDTH):
                if bits & (0x80 >> column) == 0:
                    continue
                px = (origin_x + column) % self._width
                if self.xor_pixel(px, py):
                    collision = True
        return collision

    def rows(self) -> tuple[tuple[bool, ...], ...]:
        width = self._width
        return tuple(
            tuple(value != 0 for value in self._pixels[row * width : (row + 1) * width])
            for row in range(self._height)
        )

    def lit_count(self) -> int:
        return sum(self._pixels)

    def to_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if pixel else off for pixel in row) for row in self.rows())

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise FrameBufferError(f"pixel ({x}, {y}) outside {self._width}x{self._height} framebuffer")
        return y * self._width + x
