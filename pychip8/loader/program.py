"""Program image metadata."""

from __future__ import annotations

from dataclasses import dataclass

from pychip8.bus.memory import PROGRAM_START


@dataclass(frozen=True)
class ProgramImage:
    """Raw program bytes plus where they came from."""

    data: bytes
    name: str = ""
    load_address: int = PROGRAM_START

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def end_address(self) -> int:
        """Address of the last byte occupied by the image."""

        return self.load_address + max(self.size, 1) - 1
