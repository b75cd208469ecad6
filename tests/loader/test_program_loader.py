"""Tests for reading program images and placing them in memory."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE, AddressSpace, RomTooLarge
from pychip8.loader import (
    ProgramImage,
    ProgramLoadError,
    load_program,
    load_program_from_path,
    read_program,
    read_program_from_path,
)
from pychip8.utils import reload_categories


def test_read_program_from_stream() -> None:
    image = read_program(io.BytesIO(b"\x00\xe0\x12\x00"), name="loop.ch8")

    assert image.data == b"\x00\xe0\x12\x00"
    assert image.name == "loop.ch8"
    assert image.size == 4
    assert image.load_address == 0x200
    assert image.end_address == 0x203


def test_read_program_accepts_exact_limit() -> None:
    image = read_program(io.BytesIO(bytes(MAX_PROGRAM_SIZE)))

    assert image.size == MAX_PROGRAM_SIZE


def test_read_program_rejects_oversized_stream() -> None:
    with pytest.raises(RomTooLarge) as excinfo:
        read_program(io.BytesIO(bytes(MAX_PROGRAM_SIZE + 10)))

    assert excinfo.value.size == MAX_PROGRAM_SIZE + 10
    assert excinfo.value.limit == MAX_PROGRAM_SIZE


def test_read_program_from_path(tmp_path: Path) -> None:
    path = tmp_path / "pong.ch8"
    path.write_bytes(b"\x6a\x02\x6b\x0c")

    image = read_program_from_path(path)

    assert image.name == "pong.ch8"
    assert image.data == b"\x6a\x02\x6b\x0c"


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(ProgramLoadError, match="not found"):
        read_program_from_path(tmp_path / "missing.ch8")


def test_directory_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(ProgramLoadError):
        read_program_from_path(tmp_path)


def test_load_program_places_bytes_at_program_start() -> None:
    memory = AddressSpace()

    load_program(ProgramImage(b"\xa2\x2a\x60\x0c"), memory)

    assert memory.read_block(0x200, 4) == b"\xa2\x2a\x60\x0c"
    assert memory.read(0x1FF) == 0
    assert memory.read(0x204) == 0


def test_load_program_from_path(tmp_path: Path) -> None:
    path = tmp_path / "tiny.ch8"
    path.write_bytes(b"\x12\x00")
    memory = AddressSpace()

    image = load_program_from_path(path, memory)

    assert image.size == 2
    assert memory.read_word(0x200) == 0x1200


def test_empty_program_is_allowed() -> None:
    memory = AddressSpace()

    image = load_program(read_program(io.BytesIO(b"")), memory)

    assert image.size == 0
    assert memory.read_word(0x200) == 0


def test_load_logs_occupied_range(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "load")
    reload_categories()
    try:
        load_program(ProgramImage(b"\x00\xe0\x12\x00", name="loop.ch8"), AddressSpace())
    finally:
        reload_categories()

    assert capsys.readouterr().out == "[CHIP8][load] loaded loop.ch8 at 200-203\n"
