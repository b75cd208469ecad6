"""CHIP-8 CPU: fetch, dispatch and instruction semantics."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict

from pychip8.bus import AddressSpace
from pychip8.io import KeypadState
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FrameBuffer
from pychip8.video.font import glyph_address

from .errors import CPUError
from .opcodes import OPERATION_INFO, Instruction, Operation, decode
from .registers import FLAG_REGISTER, RegisterFile


def _system_random_byte() -> int:
    return random.getrandbits(8)


class ExecutionState(Enum):
    """Externally visible state of the CPU between steps."""

    RUNNING = auto()
    AWAITING_KEY = auto()


@dataclass
class Chip8CPU:
    """Interpreter core operating on memory, registers, display and keypad."""

    memory: AddressSpace
    registers: RegisterFile = field(default_factory=RegisterFile)
    display: FrameBuffer = field(default_factory=FrameBuffer)
    keypad: KeypadState = field(default_factory=KeypadState)
    random_byte: Callable[[], int] = field(default_factory=lambda: _system_random_byte)

    execution_state: ExecutionState = ExecutionState.RUNNING
    cycle_count: int = 0
    last_opcode: int | None = None
    key_register: int | None = None

    def __post_init__(self) -> None:
        handlers: Dict[Operation, Callable[[Instruction], None]] = {}
        for operation in Operation:
            handler = getattr(self, OPERATION_INFO[operation].handler, None)
            if handler is None:
                raise CPUError(f"handler for {operation.name} not implemented")
            handlers[operation] = handler
        self._handlers = handlers

    @property
    def awaiting_key(self) -> bool:
        return self.execution_state is ExecutionState.AWAITING_KEY

    def reset(self) -> None:
        """Return registers, display and state to their power-on values."""

        self.registers.reset()
        self.display.clear()
        self.execution_state = ExecutionState.RUNNING
        self.cycle_count = 0
        self.last_opcode = None
        self.key_register = None

    def step(self) -> Instruction | None:
        """Advance the machine by one cycle.

        Returns the executed instruction, or ``None`` when the cycle was spent
        waiting for a key press.
        """

        if self.execution_state is ExecutionState.AWAITING_KEY:
            self._poll_key()
            self._finish_cycle()
            return None

        pc_before = self.registers.pc
        opcode = self.memory.read_word(pc_before)
        self.last_opcode = opcode
        self.registers.advance()
        instruction = decode(opcode)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, opcode, instruction.disassemble())

        self._handlers[instruction.operation](instruction)
        self._finish_cycle()
        return instruction

    def peek_instruction(self) -> Instruction:
        """Decode the word at PC without executing it."""

        return decode(self.memory.read_word(self.registers.pc))

    # ------------------------------------------------------------------
    # Flow control

    def op_sys(self, instruction: Instruction) -> None:
        """Legacy machine-code call, treated as a plain jump."""

        self.registers.set_pc(instruction.nnn)

    def op_cls(self, _: Instruction) -> None:
        self.display.clear()

    def op_ret(self, _: Instruction) -> None:
        self.registers.set_pc(self.registers.pop())

    def op_jp(self, instruction: Instruction) -> None:
        self.registers.set_pc(instruction.nnn)

    def op_call(self, instruction: Instruction) -> None:
        self.registers.push(self.registers.pc)
        self.registers.set_pc(instruction.nnn)

    def op_jp_v0(self, instruction: Instruction) -> None:
        self.registers.set_pc(instruction.nnn + self.registers.get_v(0))

    # ------------------------------------------------------------------
    # Conditional skips

    def op_se_imm(self, instruction: Instruction) -> None:
        self._skip_if(self.registers.get_v(instruction.x) == instruction.kk)

    def op_sne_imm(self, instruction: Instruction) -> None:
        self._skip_if(self.registers.get_v(instruction.x) != instruction.kk)

    def op_se_reg(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self._skip_if(vx == vy)

    def op_sne_reg(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self._skip_if(vx != vy)

    def op_skp(self, instruction: Instruction) -> None:
        key = self.registers.get_v(instruction.x)
        self._skip_if(self.keypad.is_pressed(key))

    def op_sknp(self, instruction: Instruction) -> None:
        key = self.registers.get_v(instruction.x)
        self._skip_if(not self.keypad.is_pressed(key))

    # ------------------------------------------------------------------
    # Register loads and arithmetic

    def op_ld_imm(self, instruction: Instruction) -> None:
        self.registers.set_v(instruction.x, instruction.kk)

    def op_add_imm(self, instruction: Instruction) -> None:
        value = self.registers.get_v(instruction.x) + instruction.kk
        self.registers.set_v(instruction.x, value)

    def op_ld_reg(self, instruction: Instruction) -> None:
        self.registers.set_v(instruction.x, self.registers.get_v(instruction.y))

    def op_or(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self.registers.set_v(instruction.x, vx | vy)

    def op_and(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self.registers.set_v(instruction.x, vx & vy)

    def op_xor(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self.registers.set_v(instruction.x, vx ^ vy)

    def op_add_reg(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        total = vx + vy
        self._write_with_flag(instruction.x, total, total > 0xFF)

    def op_sub(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self._write_with_flag(instruction.x, vx - vy, vx > vy)

    def op_subn(self, instruction: Instruction) -> None:
        vx, vy = self._operands(instruction)
        self._write_with_flag(instruction.x, vy - vx, vy > vx)

    def op_shr(self, instruction: Instruction) -> None:
        vx = self.registers.get_v(instruction.x)
        self._write_with_flag(instruction.x, vx >> 1, (vx & 0x01) != 0)

    def op_shl(self, instruction: Instruction) -> None:
        vx = self.registers.get_v(instruction.x)
        self._write_with_flag(instruction.x, vx << 1, (vx & 0x80) != 0)

    def op_rnd(self, instruction: Instruction) -> None:
        value = self.random_byte() & 0xFF
        self.registers.set_v(instruction.x, value & instruction.kk)

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, instruction: Instruction) -> None:
        origin_x, origin_y = self._operands(instruction)
        self.registers.set_flag(False)
        sprite = self.memory.read_block(self.registers.index, instruction.n)
        if self.display.draw_sprite(origin_x, origin_y, sprite):
            self.registers.set_flag(True)

    # ------------------------------------------------------------------
    # Timers and keypad

    def op_ld_vx_dt(self, instruction: Instruction) -> None:
        self.registers.set_v(instruction.x, self.registers.delay_timer)

    def op_ld_vx_k(self, instruction: Instruction) -> None:
        self.key_register = instruction.x
        self.execution_state = ExecutionState.AWAITING_KEY
        self._poll_key()

    def op_ld_dt_vx(self, instruction: Instruction) -> None:
        self.registers.set_delay_timer(self.registers.get_v(instruction.x))

    def op_ld_st_vx(self, instruction: Instruction) -> None:
        self.registers.set_sound_timer(self.registers.get_v(instruction.x))

    # ------------------------------------------------------------------
    # Index register and memory

    def op_ld_i(self, instruction: Instruction) -> None:
        self.registers.set_index(instruction.nnn)

    def op_add_i_vx(self, instruction: Instruction) -> None:
        self.registers.set_index(self.registers.index + self.registers.get_v(instruction.x))

    def op_ld_f_vx(self, instruction: Instruction) -> None:
        digit = self.registers.get_v(instruction.x)
        self.registers.set_index(glyph_address(digit, self.memory.font_start))

    def op_ld_b_vx(self, instruction: Instruction) -> None:
        value = self.registers.get_v(instruction.x)
        address = self.registers.index
        self.memory.write(address, value // 100)
        self.memory.write(address + 1, (value // 10) % 10)
        self.memory.write(address + 2, value % 10)

    def op_ld_mem_vx(self, instruction: Instruction) -> None:
        address = self.registers.index
        for register in range(instruction.x + 1):
            self.memory.write(address + register, self.registers.get_v(register))

    def op_ld_vx_mem(self, instruction: Instruction) -> None:
        address = self.registers.index
        for register in range(instruction.x + 1):
            self.registers.set_v(register, self.memory.read(address + register))

    # ------------------------------------------------------------------
    # Helpers

    def _operands(self, instruction: Instruction) -> tuple[int, int]:
        return self.registers.get_v(instruction.x), self.registers.get_v(instruction.y)

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.registers.advance()

    def _write_with_flag(self, register: int, value: int, flag: bool) -> None:
        # VF is written last so the flag survives when the destination is VF.
        self.registers.set_v(register, value)
        self.registers.set_v(FLAG_REGISTER, 1 if flag else 0)

    def _poll_key(self) -> None:
        key = self.keypad.first_pressed()
        if key is None:
            # The wait loop decays both timers on top of the per-cycle tick.
            self.registers.tick_timers()
            return
        if self.key_register is None:
            raise CPUError("awaiting key without a destination register")
        self.registers.set_v(self.key_register, key)
        if debug_enabled("cpu"):
            debug_log("cpu", "key=%X stored in V%X", key, self.key_register)
        self.key_register = None
        self.execution_state = ExecutionState.RUNNING

    def _finish_cycle(self) -> None:
        self.registers.tick_timers()
        self.cycle_count += 1
