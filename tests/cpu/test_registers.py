"""Tests for the CHIP-8 register file."""

from __future__ import annotations

import pytest

from pychip8.cpu import CPUError, RegisterFile, StackOverflow, StackUnderflow


def test_power_on_values() -> None:
    regs = RegisterFile()

    assert regs.v == [0] * 16
    assert regs.pc == 0x200
    assert regs.index == 0
    assert regs.sp == 0
    assert regs.delay_timer == 0
    assert regs.sound_timer == 0


def test_set_v_masks_to_byte() -> None:
    regs = RegisterFile()
    regs.set_v(3, 0x1FF)

    assert regs.get_v(3) == 0xFF


def test_register_index_is_checked() -> None:
    regs = RegisterFile()

    with pytest.raises(CPUError):
        regs.get_v(16)
    with pytest.raises(CPUError):
        regs.set_v(-1, 0)


def test_push_pop_is_lifo() -> None:
    regs = RegisterFile()
    regs.push(0x202)
    regs.push(0x340)

    assert regs.pop() == 0x340
    assert regs.pop() == 0x202
    assert regs.sp == 0


def test_stack_overflow_after_sixteen_entries() -> None:
    regs = RegisterFile()
    for depth in range(16):
        regs.push(0x200 + depth * 2)

    with pytest.raises(StackOverflow):
        regs.push(0x300)
    assert regs.sp == 16


def test_pop_on_empty_stack_underflows() -> None:
    regs = RegisterFile()

    with pytest.raises(StackUnderflow):
        regs.pop()


def test_tick_timers_stops_at_zero() -> None:
    regs = RegisterFile()
    regs.set_delay_timer(2)
    regs.set_sound_timer(1)

    regs.tick_timers()
    assert (regs.delay_timer, regs.sound_timer) == (1, 0)

    regs.tick_timers()
    regs.tick_timers()
    assert (regs.delay_timer, regs.sound_timer) == (0, 0)


def test_index_and_pc_are_sixteen_bit() -> None:
    regs = RegisterFile()
    regs.set_index(0x1FFFF)
    regs.set_pc(0x10002)

    assert regs.index == 0xFFFF
    assert regs.pc == 0x0002


def test_clone_is_independent() -> None:
    regs = RegisterFile()
    regs.set_v(0, 0x12)
    regs.push(0x222)
    copy = regs.clone()

    regs.set_v(0, 0x34)
    regs.pop()

    assert copy.get_v(0) == 0x12
    assert copy.sp == 1
    assert copy.stack[0] == 0x222


def test_reset_restores_power_on_state() -> None:
    regs = RegisterFile()
    regs.set_v(5, 9)
    regs.set_index(0x300)
    regs.push(0x204)
    regs.set_delay_timer(10)
    regs.reset()

    assert regs == RegisterFile()
