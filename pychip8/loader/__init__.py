"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .binary import (
    ProgramLoadError,
    load_program,
    load_program_from_path,
    read_program,
    read_program_from_path,
)
from .program import ProgramImage

__all__ = [
    "ProgramImage",
    "ProgramLoadError",
    "read_program",
    "read_program_from_path",
    "load_program",
    "load_program_from_path",
]
