"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from pychip8.bus import AddressSpace
from pychip8.cpu import Chip8CPU, RegisterFile
from pychip8.io import Keyboard, KeypadState
from pychip8.loader import ProgramImage, load_program
from pychip8.video import FONT_GLYPHS, FrameBuffer


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    program: Optional[ProgramImage] = None
    font: bytes = FONT_GLYPHS
    random_byte: Optional[Callable[[], int]] = None


@dataclass
class Machine:
    """Aggregates the state owned by one interpreter run."""

    memory: AddressSpace
    registers: RegisterFile
    display: FrameBuffer
    keypad: KeypadState
    keyboard: Keyboard
    cpu: Chip8CPU
    program: Optional[ProgramImage] = None

    def step(self):
        return self.cpu.step()

    def run(self, steps: int) -> None:
        """Execute ``steps`` cycles back to back."""

        for _ in range(steps):
            self.cpu.step()


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine: zeroed memory, font, then program."""

    config = config or MachineConfig()

    memory = AddressSpace()
    memory.load_font(config.font)
    if config.program is not None:
        load_program(config.program, memory)

    registers = RegisterFile()
    display = FrameBuffer()
    keypad = KeypadState()
    keyboard = Keyboard(keypad)

    if config.random_byte is not None:
        cpu = Chip8CPU(memory, registers, display, keypad, config.random_byte)
    else:
        cpu = Chip8CPU(memory, registers, display, keypad)

    return Machine(
        memory=memory,
        registers=registers,
        display=display,
        keypad=keypad,
        keyboard=keyboard,
        cpu=cpu,
        program=config.program,
    )
