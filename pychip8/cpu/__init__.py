"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8CPU, ExecutionState
from .errors import CPUError, InvalidOpcode, StackOverflow, StackUnderflow
from .registers import RegisterFile
from . import opcodes

__all__ = [
    "Chip8CPU",
    "ExecutionState",
    "RegisterFile",
    "CPUError",
    "InvalidOpcode",
    "StackOverflow",
    "StackUnderflow",
    "opcodes",
]
