"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from pychip8.bus import AddressSpaceError
from pychip8.errors import Chip8Error
from pychip8.loader import ProgramImage, ProgramLoadError, read_program_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer
from pychip8.video.palette import RGBColor

SHELL_HELP = "Commands: c(pu), m(em) [start_hex] [len], d(isplay), k(eypad), t(race), s(tep), q(uit), Enter resumes"
SHELL_ALIASES: Dict[str, str] = {
    "cpu": "c",
    "mem": "m",
    "display": "d",
    "keypad": "k",
    "trace": "t",
    "step": "s",
}


@dataclass
class AppConfig:
    """Configuration for the pygame front end."""

    program_path: Optional[Path] = None
    scale: int = 10
    delay_ms: int = 5
    palette: Sequence[RGBColor] = field(default=MONOCHROME)
    trap_errors: bool = False


class Chip8App:
    """Driver loop: poll input, step the CPU once, present the framebuffer."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._delay_ms = max(0, config.delay_ms)
        self._machine: Machine | None = None
        self._pygame = None
        self._perf_enabled = debug_enabled("perf")
        self._perf_last_time = 0.0
        self._perf_last_cycles = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace") or config.trap_errors:
            self._trace_recorder = TraceRecorder(512)

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    def run(self) -> None:
        if not self._config.program_path:
            raise RuntimeError("program image is required")
        program = self._load_program(self._config.program_path)
        machine = self._create_machine(program)
        self._machine = machine

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        self._pygame = pygame
        scale = self._config.scale
        try:
            pygame.init()
            pygame.display.set_caption(f"CHIP-8 - {program.name}")
            screen = pygame.display.set_mode((machine.display.width * scale, machine.display.height * scale))
        except pygame.error as exc:
            pygame.quit()
            raise RuntimeError(f"display initialisation failed: {exc}") from exc

        renderer = Renderer(self._config.palette)
        self._running = True
        self._perf_last_time = time.perf_counter()

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_F1:
                        self.adjust_delay(+1)
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_F2:
                        self.adjust_delay(-1)
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_F12:
                        self._enter_debug_shell(machine)
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame.key.name(event.key), pressed=False)

                if not self._running:
                    break

                self._step_cpu(machine)

                if machine.display.dirty:
                    frame = renderer.render(machine.display, scale=scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()
                    machine.display.dirty = False

                if self._perf_enabled:
                    self._report_perf(machine)

                if self._delay_ms:
                    pygame.time.delay(self._delay_ms)
        finally:
            pygame.quit()

    def adjust_delay(self, amount: int) -> None:
        self._delay_ms = max(0, self._delay_ms + amount)
        if debug_enabled("perf"):
            debug_log("perf", "delay_ms=%d", self._delay_ms)

    def _handle_key_event(self, name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        if pressed:
            machine.keyboard.press(name)
        else:
            machine.keyboard.release(name)

    def _load_program(self, program_path: Path) -> ProgramImage:
        try:
            return read_program_from_path(program_path)
        except ProgramLoadError as exc:
            raise RuntimeError(str(exc)) from exc
        except AddressSpaceError as exc:
            raise RuntimeError(f"Failed to load program {program_path}: {exc}") from exc

    def _create_machine(self, program: ProgramImage) -> Machine:
        try:
            return create_machine(MachineConfig(program=program))
        except AddressSpaceError as exc:
            raise RuntimeError(f"Failed to load program {program.name}: {exc}") from exc

    def _step_cpu(self, machine: Machine) -> None:
        cpu = machine.cpu
        trace = self._trace_recorder
        state_before = cpu.registers.clone() if trace is not None else None
        try:
            instruction = cpu.step()
        except Chip8Error as exc:
            if trace is not None and state_before is not None:
                trace.record_step(
                    state_before,
                    cpu.last_opcode,
                    awaiting_key=cpu.awaiting_key,
                    note=type(exc).__name__,
                )
            if self._config.trap_errors:
                print(f"\nEmulation error at pc={state_before.pc if state_before else cpu.registers.pc:03X}: {exc}")
                self._enter_debug_shell(machine)
                self._running = False
                return
            self._running = False
            if trace is not None:
                trace.dump("trace", limit=64)
            raise RuntimeError(f"Emulation halted: {exc}") from exc

        if trace is not None and state_before is not None:
            if instruction is None:
                trace.record_step(state_before, None, awaiting_key=True, mnemonic="WAIT", note="key-wait")
            else:
                trace.record_step(
                    state_before,
                    instruction.raw,
                    awaiting_key=cpu.awaiting_key,
                    mnemonic=instruction.mnemonic,
                )

    def _report_perf(self, machine: Machine) -> None:
        now = time.perf_counter()
        elapsed = now - self._perf_last_time
        if elapsed < 1.0:
            return
        cycles = machine.cpu.cycle_count - self._perf_last_cycles
        debug_log("perf", "steps=%d steps_per_sec=%.1f delay_ms=%d", cycles, cycles / elapsed, self._delay_ms)
        self._perf_last_time = now
        self._perf_last_cycles = machine.cpu.cycle_count

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        commands: Dict[str, Callable[[str], None]] = {
            "c": lambda _: self._dump_cpu(machine),
            "m": lambda args: self._dump_memory(machine, args or None),
            "d": lambda _: print(machine.display.to_text()),
            "k": lambda _: self._dump_keypad(machine),
            "t": lambda _: self._dump_trace(),
            "s": lambda _: self._debug_step(machine),
        }
        print("\n--- CHIP-8 paused ---")
        print(SHELL_HELP)

        while True:
            try:
                line = input("chip8> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming.")
                break
            if not line:
                break
            name, _, args = line.partition(" ")
            if name in {"q", "quit"}:
                print("Stopping interpreter.")
                self._running = False
                break
            command = commands.get(SHELL_ALIASES.get(name, name))
            if command is None:
                print(SHELL_HELP)
                continue
            command(args.strip())

        if self._pygame is not None:
            self._pygame.event.clear()

    def _dump_cpu(self, machine: Machine) -> None:
        cpu = machine.cpu
        regs = cpu.registers
        opcode = "----" if cpu.last_opcode is None else f"{cpu.last_opcode:04X}"
        print(
            "PC={:04X} I={:04X} SP={:X} DT={:02X} ST={:02X} opcode={} state={}".format(
                regs.pc,
                regs.index,
                regs.sp,
                regs.delay_timer,
                regs.sound_timer,
                opcode,
                cpu.execution_state.name,
            )
        )
        print("Reg  Val  | Stack")
        for slot in range(len(regs.v)):
            marker = " <-" if slot == regs.sp else ""
            print(f"V{slot:X}   {regs.v[slot]:02X}   | {regs.stack[slot]:04X}{marker}")

    def _dump_keypad(self, machine: Machine) -> None:
        pressed = [f"{key:X}" for key, down in enumerate(machine.keypad.snapshot()) if down]
        print(f"Keys pressed: {' '.join(pressed) if pressed else '-'}")

    def _dump_trace(self, limit: int = 64) -> None:
        if self._trace_recorder is None:
            print("Trace recorder is disabled. Set CHIP8_DEBUG=trace or pass --trap.")
            return
        lines = list(self._trace_recorder.format_entries(limit))
        if not lines:
            print("Trace buffer is empty.")
            return
        print("Last trace entries:")
        for line in lines:
            print(f"  {line}")

    def _debug_step(self, machine: Machine) -> None:
        cpu = machine.cpu
        try:
            instruction = cpu.step()
        except Chip8Error as exc:
            print(f"Step failed: {exc}")
            return
        if instruction is None:
            print(f"Waiting for key (V{cpu.key_register:X})" if cpu.key_register is not None else "Waiting for key")
        else:
            print(f"{instruction.raw:04X}  {instruction.disassemble()}")
        self._dump_cpu(machine)

    def _dump_memory(self, machine: Machine, args: str | None = None) -> None:
        """Hex dump ``[start_hex] [length]``; prompts for the start when omitted."""

        memory = machine.memory
        if args is None:
            try:
                args = input(f"Start address (hex) [{memory.program_start:03X}]: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("Cancelled.")
                return
        fields = args.split()
        try:
            start = int(fields[0], 16) if fields else memory.program_start
            length = int(fields[1], 0) if len(fields) > 1 else 0x80
        except ValueError:
            print("Usage: m [start_hex] [length]")
            return
        if length <= 0 or len(fields) > 2:
            print("Usage: m [start_hex] [length]")
            return

        end = min(start + length, memory.capacity)
        if not 0 <= start < end:
            print(f"Address range outside memory (000-{memory.capacity - 1:03X}).")
            return
        for row in range(start, end, 16):
            chunk = memory.read_block(row, min(16, end - row))
            print(f"{row:03X}: " + " ".join(f"{value:02X}" for value in chunk))
