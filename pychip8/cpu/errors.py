"""Exceptions raised by the CHIP-8 CPU."""

from __future__ import annotations

from pychip8.errors import Chip8Error


class CPUError(Chip8Error):
    """Base error for CPU-related failures."""


class InvalidOpcode(CPUError):
    """Raised when an instruction word does not decode to a known operation."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"invalid opcode {opcode:#06x}")
        self.opcode = opcode


class StackOverflow(CPUError):
    """Raised when a call is made with every stack slot in use."""


class StackUnderflow(CPUError):
    """Raised when returning with an empty call stack."""
