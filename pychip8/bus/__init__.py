"""Memory helpers for the CHIP-8 interpreter."""

from .memory import (
    FONT_START,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    AddressOutOfRange,
    AddressSpace,
    AddressSpaceError,
    RomTooLarge,
)

__all__ = [
    "AddressSpace",
    "AddressSpaceError",
    "AddressOutOfRange",
    "RomTooLarge",
    "MEMORY_SIZE",
    "FONT_START",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
]
