"""Tests for CHIP-8 instruction decoding."""

from __future__ import annotations

import pytest

from pychip8.cpu import InvalidOpcode
from pychip8.cpu.opcodes import OPERATION_INFO, Operation, decode


@pytest.mark.parametrize(
    "word, operation",
    [
        (0x00E0, Operation.CLS),
        (0x00EE, Operation.RET),
        (0x0123, Operation.SYS),
        (0x1ABC, Operation.JP),
        (0x2ABC, Operation.CALL),
        (0x3A12, Operation.SE_IMM),
        (0x4A12, Operation.SNE_IMM),
        (0x5AB0, Operation.SE_REG),
        (0x6A12, Operation.LD_IMM),
        (0x7A12, Operation.ADD_IMM),
        (0x8AB0, Operation.LD_REG),
        (0x8AB1, Operation.OR),
        (0x8AB2, Operation.AND),
        (0x8AB3, Operation.XOR),
        (0x8AB4, Operation.ADD_REG),
        (0x8AB5, Operation.SUB),
        (0x8AB6, Operation.SHR),
        (0x8AB7, Operation.SUBN),
        (0x8ABE, Operation.SHL),
        (0x9AB0, Operation.SNE_REG),
        (0xA123, Operation.LD_I),
        (0xB123, Operation.JP_V0),
        (0xCA12, Operation.RND),
        (0xDAB5, Operation.DRW),
        (0xEA9E, Operation.SKP),
        (0xEAA1, Operation.SKNP),
        (0xFA07, Operation.LD_VX_DT),
        (0xFA0A, Operation.LD_VX_K),
        (0xFA15, Operation.LD_DT_VX),
        (0xFA18, Operation.LD_ST_VX),
        (0xFA1E, Operation.ADD_I_VX),
        (0xFA29, Operation.LD_F_VX),
        (0xFA33, Operation.LD_B_VX),
        (0xFA55, Operation.LD_MEM_VX),
        (0xFA65, Operation.LD_VX_MEM),
    ],
)
def test_decode_selects_operation(word: int, operation: Operation) -> None:
    assert decode(word).operation is operation


def test_every_operation_is_decodable() -> None:
    assert len(Operation) == 35
    assert set(OPERATION_INFO) == set(Operation)


def test_operand_fields_are_extracted() -> None:
    instruction = decode(0xD7A5)

    assert instruction.raw == 0xD7A5
    assert instruction.x == 0x7
    assert instruction.y == 0xA
    assert instruction.n == 0x5
    assert instruction.kk == 0xA5
    assert instruction.nnn == 0x7A5


@pytest.mark.parametrize(
    "word",
    [0x8AB8, 0x8ABF, 0x8AB9, 0xE100, 0xE19F, 0xF000, 0xF1FF, 0xF164, 0xF156],
)
def test_unknown_group_codes_raise(word: int) -> None:
    with pytest.raises(InvalidOpcode) as excinfo:
        decode(word)
    assert excinfo.value.opcode == word


def test_decode_is_pure() -> None:
    first = decode(0x8124)
    second = decode(0x8124)

    assert first == second
    assert first is not second


@pytest.mark.parametrize(
    "word, text",
    [
        (0x00E0, "CLS"),
        (0x1234, "JP 0x234"),
        (0x6A0F, "LD VA, 0x0f"),
        (0x8AB4, "ADD VA, VB"),
        (0xD125, "DRW V1, V2, 5"),
        (0xF30A, "LD V3, K"),
        (0xF265, "LD V2, [I]"),
        (0xB300, "JP V0, 0x300"),
    ],
)
def test_disassemble(word: int, text: str) -> None:
    assert decode(word).disassemble() == text
    assert str(decode(word)) == text
