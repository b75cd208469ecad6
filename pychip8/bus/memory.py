"""Flat 4 KiB address space for the CHIP-8 interpreter.

The layout follows the classic interpreter memory map: the 80-byte hex font
lives at ``0x050`` and programs are loaded at ``0x200``. Every access is
bounds-checked; addresses outside the address space raise
:class:`AddressOutOfRange` instead of wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass

from pychip8.errors import Chip8Error

MEMORY_SIZE = 0x1000
FONT_START = 0x050
PROGRAM_START = 0x200
FONT_TABLE_SIZE = 80
# The last byte at 0xFFF is addressable but never part of a loaded image.
MAX_PROGRAM_SIZE = (MEMORY_SIZE - 1) - PROGRAM_START


class AddressSpaceError(Chip8Error):
    """Raised when the address space is misconfigured or used incorrectly."""


class AddressOutOfRange(AddressSpaceError):
    """Raised for reads or writes outside the address space."""

    def __init__(self, address: int, capacity: int) -> None:
        super().__init__(f"address {address:#06x} outside address space 0x000-{capacity - 1:#05x}")
        self.address = address
        self.capacity = capacity


class RomTooLarge(AddressSpaceError):
    """Raised when a program image does not fit in the program region."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"program image is {size} bytes; at most {limit} bytes fit")
        self.size = size
        self.limit = limit


@dataclass
class AddressSpace:
    """Byte-addressable memory holding the font table and loaded program."""

    capacity: int = MEMORY_SIZE
    font_start: int = FONT_START
    program_start: int = PROGRAM_START

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise AddressSpaceError("address space must have a positive capacity")
        if not 0 <= self.font_start < self.program_start < self.capacity:
            raise AddressSpaceError("font and program regions must lie inside the address space")
        self._data = bytearray(self.capacity)

    @property
    def max_program_size(self) -> int:
        return (self.capacity - 1) - self.program_start

    def load(self, image: bytes) -> None:
        """Copy ``image`` into memory starting at the program region."""

        limit = self.max_program_size
        if len(image) > limit:
            raise RomTooLarge(len(image), limit)
        start = self.program_start
        self._data[start : start + len(image)] = image

    def load_font(self, glyphs: bytes) -> None:
        """Write the 16 five-byte hex digit glyphs at the font offset."""

        if len(glyphs) != FONT_TABLE_SIZE:
            raise AddressSpaceError(f"font table must be {FONT_TABLE_SIZE} bytes, got {len(glyphs)}")
        start = self.font_start
        self._data[start : start + len(glyphs)] = glyphs

    def read(self, address: int) -> int:
        return self._data[self._offset(address)]

    def write(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Return the big-endian 16-bit word at ``address``."""

        high = self.read(address)
        low = self.read(address + 1)
        return (high << 8) | low

    def read_block(self, address: int, length: int) -> bytes:
        if length < 0:
            raise AddressSpaceError("length must not be negative")
        if length == 0:
            return b""
        self._offset(address)
        self._offset(address + length - 1)
        return bytes(self._data[address : address + length])

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def _offset(self, address: int) -> int:
        if not 0 <= address < self.capacity:
            raise AddressOutOfRange(address, self.capacity)
        return address
