"""Loader for raw CHIP-8 program images."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_PROGRAM_SIZE, AddressSpace, RomTooLarge
from pychip8.utils import debug_enabled, debug_log

from .program import ProgramImage


class ProgramLoadError(RuntimeError):
    """Raised when a program image cannot be read from storage."""


def read_program(stream: BinaryIO, *, name: str = "", limit: int = MAX_PROGRAM_SIZE) -> ProgramImage:
    """Read a program image from ``stream``.

    At most ``limit + 1`` bytes are read so oversized images are rejected
    without buffering the whole file.
    """

    try:
        data = stream.read(limit + 1)
    except OSError as exc:
        raise ProgramLoadError(f"failed to read program {name or '<stream>'}: {exc}") from exc
    if len(data) > limit:
        remainder = stream.read()
        raise RomTooLarge(len(data) + len(remainder), limit)
    return ProgramImage(data=bytes(data), name=name)


def read_program_from_path(path: Path, *, limit: int = MAX_PROGRAM_SIZE) -> ProgramImage:
    """Read a program image from the filesystem."""

    try:
        with path.open("rb") as handle:
            image = read_program(handle, name=path.name, limit=limit)
    except FileNotFoundError as exc:
        raise ProgramLoadError(f"program file not found: {path}") from exc
    except IsADirectoryError as exc:
        raise ProgramLoadError(f"program path is a directory: {path}") from exc
    except PermissionError as exc:
        raise ProgramLoadError(f"program file not readable: {path}") from exc
    except OSError as exc:
        raise ProgramLoadError(f"failed to open program {path}: {exc}") from exc
    if debug_enabled("load"):
        debug_log("load", "read %s size=%d", path, image.size)
    return image


def load_program(image: ProgramImage, memory: AddressSpace) -> ProgramImage:
    """Write ``image`` into the program region of ``memory``."""

    memory.load(image.data)
    if debug_enabled("load"):
        debug_log(
            "load",
            "loaded %s at %03x-%03x",
            image.name or "<image>",
            image.load_address,
            image.end_address,
        )
    return image


def load_program_from_path(path: Path, memory: AddressSpace) -> ProgramImage:
    """Read ``path`` and load it into ``memory``."""

    return load_program(read_program_from_path(path, limit=memory.max_program_size), memory)
