"""CHIP-8 register file."""

from __future__ import annotations

from dataclasses import dataclass, field

from pychip8.bus.memory import PROGRAM_START

from .errors import CPUError, StackOverflow, StackUnderflow

REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF


@dataclass
class RegisterFile:
    """General registers, index, program counter, call stack and timers."""

    v: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    index: int = 0x0000
    pc: int = PROGRAM_START
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    sp: int = 0
    delay_timer: int = 0x00
    sound_timer: int = 0x00

    def get_v(self, register: int) -> int:
        return self.v[self._check_register(register)]

    def set_v(self, register: int, value: int) -> None:
        self.v[self._check_register(register)] = value & 0xFF

    def set_flag(self, enabled: bool) -> None:
        self.v[FLAG_REGISTER] = 1 if enabled else 0

    def set_index(self, value: int) -> None:
        self.index = value & 0xFFFF

    def set_pc(self, value: int) -> None:
        self.pc = value & 0xFFFF

    def advance(self, amount: int = 2) -> None:
        self.pc = (self.pc + amount) & 0xFFFF

    def set_delay_timer(self, value: int) -> None:
        self.delay_timer = value & 0xFF

    def set_sound_timer(self, value: int) -> None:
        self.sound_timer = value & 0xFF

    def push(self, address: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(f"call stack full ({STACK_DEPTH} entries) pushing {address:#05x}")
        self.stack[self.sp] = address & 0xFFFF
        self.sp += 1

    def pop(self) -> int:
        if self.sp <= 0:
            raise StackUnderflow("return with empty call stack")
        self.sp -= 1
        return self.stack[self.sp]

    def tick_timers(self) -> None:
        """Decrement both timers once, stopping at zero."""

        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    def reset(self) -> None:
        self.v[:] = [0] * REGISTER_COUNT
        self.index = 0x0000
        self.pc = PROGRAM_START
        self.stack[:] = [0] * STACK_DEPTH
        self.sp = 0
        self.delay_timer = 0x00
        self.sound_timer = 0x00

    def clone(self) -> "RegisterFile":
        return RegisterFile(
            list(self.v),
            self.index,
            self.pc,
            list(self.stack),
            self.sp,
            self.delay_timer,
            self.sound_timer,
        )

    @staticmethod
    def _check_register(register: int) -> int:
        if not 0 <= register < REGISTER_COUNT:
            raise CPUError(f"register index {register} out of range (0-15)")
        return register
