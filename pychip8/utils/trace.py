"""Bounded history of recent CPU steps for post-mortem diagnostics."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional

from .debug import debug_log


@dataclass(frozen=True)
class TraceEntry:
    pc: int
    opcode: Optional[int]
    mnemonic: str
    index: int
    sp: int
    delay_timer: int
    sound_timer: int
    registers: tuple[int, ...]
    awaiting_key: bool
    note: str = ""

    def flags(self) -> str:
        parts = (["KEY"] if self.awaiting_key else []) + ([self.note] if self.note else [])
        return ",".join(parts) or "-"

    def format(self) -> str:
        opcode = "----" if self.opcode is None else f"{self.opcode:04X}"
        regs = " ".join(f"{value:02X}" for value in self.registers)
        return (
            f"pc={self.pc:04X} opcode={opcode} {self.mnemonic or '?':<4} I={self.index:04X} SP={self.sp:X} "
            f"DT={self.delay_timer:02X} ST={self.sound_timer:02X} V=[{regs}] flags={self.flags()}"
        )


class TraceRecorder:
    """Keeps the newest ``capacity`` register snapshots, oldest first."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._history: Deque[TraceEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._history.maxlen or 0

    def __len__(self) -> int:
        return len(self._history)

    def record_step(
        self,
        registers,
        opcode: Optional[int],
        *,
        awaiting_key: bool,
        mnemonic: str = "",
        note: str = "",
    ) -> None:
        """Snapshot ``registers`` (a :class:`RegisterFile`) with step metadata."""

        self._history.append(
            TraceEntry(
                pc=registers.pc & 0xFFFF,
                opcode=None if opcode is None else opcode & 0xFFFF,
                mnemonic=mnemonic,
                index=registers.index & 0xFFFF,
                sp=registers.sp,
                delay_timer=registers.delay_timer & 0xFF,
                sound_timer=registers.sound_timer & 0xFF,
                registers=tuple(value & 0xFF for value in registers.v),
                awaiting_key=awaiting_key,
                note=note,
            )
        )

    def entries(self, limit: Optional[int] = None) -> Iterator[TraceEntry]:
        history = list(self._history)
        if limit is not None:
            history = history[len(history) - min(len(history), max(limit, 0)) :]
        return iter(history)

    def last_entry(self) -> Optional[TraceEntry]:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()

    def format_entries(self, limit: Optional[int] = None) -> List[str]:
        return [entry.format() for entry in self.entries(limit)]

    def dump(self, category: str, limit: Optional[int] = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)
