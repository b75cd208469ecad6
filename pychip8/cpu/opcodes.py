"""Instruction decoding for the CHIP-8 instruction set.

Decoding is two-tier. The top nibble selects a primary operation; the groups
``0x0``, ``0x8``, ``0xE`` and ``0xF`` are resolved further on the low byte
(or, for ``0x8``, the low nibble). The result is a frozen :class:`Instruction`
with every operand field already extracted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Mapping

from .errors import InvalidOpcode


class Operation(Enum):
    """The 35 operations of the base CHIP-8 instruction set."""

    SYS = auto()
    CLS = auto()
    RET = auto()
    JP = auto()
    CALL = auto()
    SE_IMM = auto()
    SNE_IMM = auto()
    SE_REG = auto()
    LD_IMM = auto()
    ADD_IMM = auto()
    LD_REG = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_REG = auto()
    SUB = auto()
    SHR = auto()
    SUBN = auto()
    SHL = auto()
    SNE_REG = auto()
    LD_I = auto()
    JP_V0 = auto()
    RND = auto()
    DRW = auto()
    SKP = auto()
    SKNP = auto()
    LD_VX_DT = auto()
    LD_VX_K = auto()
    LD_DT_VX = auto()
    LD_ST_VX = auto()
    ADD_I_VX = auto()
    LD_F_VX = auto()
    LD_B_VX = auto()
    LD_MEM_VX = auto()
    LD_VX_MEM = auto()


@dataclass(frozen=True)
class OperationInfo:
    """Mnemonic, handler name and disassembly template for an operation."""

    mnemonic: str
    handler: str
    template: str


OPERATION_INFO: Final[Mapping[Operation, OperationInfo]] = {
    Operation.SYS: OperationInfo("SYS", "op_sys", "SYS {nnn:#05x}"),
    Operation.CLS: OperationInfo("CLS", "op_cls", "CLS"),
    Operation.RET: OperationInfo("RET", "op_ret", "RET"),
    Operation.JP: OperationInfo("JP", "op_jp", "JP {nnn:#05x}"),
    Operation.CALL: OperationInfo("CALL", "op_call", "CALL {nnn:#05x}"),
    Operation.SE_IMM: OperationInfo("SE", "op_se_imm", "SE V{x:X}, {kk:#04x}"),
    Operation.SNE_IMM: OperationInfo("SNE", "op_sne_imm", "SNE V{x:X}, {kk:#04x}"),
    Operation.SE_REG: OperationInfo("SE", "op_se_reg", "SE V{x:X}, V{y:X}"),
    Operation.LD_IMM: OperationInfo("LD", "op_ld_imm", "LD V{x:X}, {kk:#04x}"),
    Operation.ADD_IMM: OperationInfo("ADD", "op_add_imm", "ADD V{x:X}, {kk:#04x}"),
    Operation.LD_REG: OperationInfo("LD", "op_ld_reg", "LD V{x:X}, V{y:X}"),
    Operation.OR: OperationInfo("OR", "op_or", "OR V{x:X}, V{y:X}"),
    Operation.AND: OperationInfo("AND", "op_and", "AND V{x:X}, V{y:X}"),
    Operation.XOR: OperationInfo("XOR", "op_xor", "XOR V{x:X}, V{y:X}"),
    Operation.ADD_REG: OperationInfo("ADD", "op_add_reg", "ADD V{x:X}, V{y:X}"),
    Operation.SUB: OperationInfo("SUB", "op_sub", "SUB V{x:X}, V{y:X}"),
    Operation.SHR: OperationInfo("SHR", "op_shr", "SHR V{x:X}"),
    Operation.SUBN: OperationInfo("SUBN", "op_subn", "SUBN V{x:X}, V{y:X}"),
    Operation.SHL: OperationInfo("SHL", "op_shl", "SHL V{x:X}"),
    Operation.SNE_REG: OperationInfo("SNE", "op_sne_reg", "SNE V{x:X}, V{y:X}"),
    Operation.LD_I: OperationInfo("LD", "op_ld_i", "LD I, {nnn:#05x}"),
    Operation.JP_V0: OperationInfo("JP", "op_jp_v0", "JP V0, {nnn:#05x}"),
    Operation.RND: OperationInfo("RND", "op_rnd", "RND V{x:X}, {kk:#04x}"),
    Operation.DRW: OperationInfo("DRW", "op_drw", "DRW V{x:X}, V{y:X}, {n}"),
    Operation.SKP: OperationInfo("SKP", "op_skp", "SKP V{x:X}"),
    Operation.SKNP: OperationInfo("SKNP", "op_sknp", "SKNP V{x:X}"),
    Operation.LD_VX_DT: OperationInfo("LD", "op_ld_vx_dt", "LD V{x:X}, DT"),
    Operation.LD_VX_K: OperationInfo("LD", "op_ld_vx_k", "LD V{x:X}, K"),
    Operation.LD_DT_VX: OperationInfo("LD", "op_ld_dt_vx", "LD DT, V{x:X}"),
    Operation.LD_ST_VX: OperationInfo("LD", "op_ld_st_vx", "LD ST, V{x:X}"),
    Operation.ADD_I_VX: OperationInfo("ADD", "op_add_i_vx", "ADD I, V{x:X}"),
    Operation.LD_F_VX: OperationInfo("LD", "op_ld_f_vx", "LD F, V{x:X}"),
    Operation.LD_B_VX: OperationInfo("LD", "op_ld_b_vx", "LD B, V{x:X}"),
    Operation.LD_MEM_VX: OperationInfo("LD", "op_ld_mem_vx", "LD [I], V{x:X}"),
    Operation.LD_VX_MEM: OperationInfo("LD", "op_ld_vx_mem", "LD V{x:X}, [I]"),
}


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction word."""

    raw: int
    operation: Operation
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    def __post_init__(self) -> None:
        if not 0 <= self.raw <= 0xFFFF:
            raise ValueError(f"instruction word out of range: {self.raw}")

    @property
    def mnemonic(self) -> str:
        return OPERATION_INFO[self.operation].mnemonic

    @property
    def handler(self) -> str:
        return OPERATION_INFO[self.operation].handler

    def disassemble(self) -> str:
        template = OPERATION_INFO[self.operation].template
        return template.format(x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn)

    def __str__(self) -> str:
        return self.disassemble()


PRIMARY_OPERATIONS: Final[Mapping[int, Operation]] = {
    0x1: Operation.JP,
    0x2: Operation.CALL,
    0x3: Operation.SE_IMM,
    0x4: Operation.SNE_IMM,
    0x5: Operation.SE_REG,
    0x6: Operation.LD_IMM,
    0x7: Operation.ADD_IMM,
    0x9: Operation.SNE_REG,
    0xA: Operation.LD_I,
    0xB: Operation.JP_V0,
    0xC: Operation.RND,
    0xD: Operation.DRW,
}

ARITHMETIC_OPERATIONS: Final[Mapping[int, Operation]] = {
    0x0: Operation.LD_REG,
    0x1: Operation.OR,
    0x2: Operation.AND,
    0x3: Operation.XOR,
    0x4: Operation.ADD_REG,
    0x5: Operation.SUB,
    0x6: Operation.SHR,
    0x7: Operation.SUBN,
    0xE: Operation.SHL,
}

KEY_OPERATIONS: Final[Mapping[int, Operation]] = {
    0x9E: Operation.SKP,
    0xA1: Operation.SKNP,
}

MISC_OPERATIONS: Final[Mapping[int, Operation]] = {
    0x07: Operation.LD_VX_DT,
    0x0A: Operation.LD_VX_K,
    0x15: Operation.LD_DT_VX,
    0x18: Operation.LD_ST_VX,
    0x1E: Operation.ADD_I_VX,
    0x29: Operation.LD_F_VX,
    0x33: Operation.LD_B_VX,
    0x55: Operation.LD_MEM_VX,
    0x65: Operation.LD_VX_MEM,
}


def decode(word: int) -> Instruction:
    """Decode a raw 16-bit instruction word."""

    word &= 0xFFFF
    group = (word & 0xF000) >> 12
    low_byte = word & 0x00FF

    if group == 0x0:
        if word == 0x00E0:
            operation = Operation.CLS
        elif word == 0x00EE:
            operation = Operation.RET
        else:
            operation = Operation.SYS
    elif group == 0x8:
        operation = _lookup(ARITHMETIC_OPERATIONS, word & 0x000F, word)
    elif group == 0xE:
        operation = _lookup(KEY_OPERATIONS, low_byte, word)
    elif group == 0xF:
        operation = _lookup(MISC_OPERATIONS, low_byte, word)
    else:
        operation = PRIMARY_OPERATIONS[group]

    return Instruction(
        raw=word,
        operation=operation,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=low_byte,
        nnn=word & 0x0FFF,
    )


def _lookup(table: Mapping[int, Operation], key: int, word: int) -> Operation:
    operation = table.get(key)
    if operation is None:
        raise InvalidOpcode(word)
    return operation
