from __future__ import annotations

import pytest

from pychip8.bus import FONT_START, MAX_PROGRAM_SIZE, RomTooLarge
from pychip8.loader import ProgramImage
from pychip8.system import MachineConfig, create_machine
from pychip8.video import FONT_GLYPHS


def test_create_machine_loads_font_and_program() -> None:
    program = ProgramImage(b"\x00\xe0", name="cls")

    machine = create_machine(MachineConfig(program=program))

    assert machine.memory.read_block(FONT_START, len(FONT_GLYPHS)) == FONT_GLYPHS
    assert machine.memory.read_word(0x200) == 0x00E0
    assert machine.registers.pc == 0x200
    assert machine.program is program
    assert machine.cpu.memory is machine.memory
    assert machine.cpu.display is machine.display
    assert machine.keyboard.keypad is machine.keypad


def test_create_machine_without_program_has_zeroed_program_area() -> None:
    machine = create_machine()

    assert machine.memory.read_block(0x200, 0x100) == bytes(0x100)
    assert machine.display.lit_count() == 0


def test_create_machine_rejects_oversized_program() -> None:
    program = ProgramImage(bytes(MAX_PROGRAM_SIZE + 1))

    with pytest.raises(RomTooLarge):
        create_machine(MachineConfig(program=program))


def test_run_counts_cycles() -> None:
    machine = create_machine(MachineConfig(program=ProgramImage(b"\x12\x00")))

    machine.run(5)

    assert machine.cpu.cycle_count == 5
    assert machine.registers.pc == 0x200
