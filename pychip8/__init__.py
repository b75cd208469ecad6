"""CHIP-8 interpreter.

The execution engine lives in :mod:`pychip8.cpu` and operates on the memory,
framebuffer and keypad models from :mod:`pychip8.bus`, :mod:`pychip8.video`
and :mod:`pychip8.io`. :mod:`pychip8.system` assembles them into a machine and
:mod:`pychip8.ui` drives it from a pygame window.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video
from .errors import Chip8Error

__all__: list[str] = [
    "Chip8Error",
    "bus",
    "cpu",
    "video",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
