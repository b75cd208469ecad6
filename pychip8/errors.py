"""Common exception root for the CHIP-8 engine."""

from __future__ import annotations


class Chip8Error(Exception):
    """Base class for conditions raised while stepping the engine."""


__all__ = ["Chip8Error"]
