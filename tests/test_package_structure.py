"""Baseline tests ensuring the package skeleton loads correctly."""

import pychip8


def test_package_exports() -> None:
    for name in ("cpu", "bus", "video", "io", "loader", "system", "ui", "utils"):
        assert hasattr(pychip8, name), f"missing submodule: {name}"


def test_bus_exports() -> None:
    from pychip8 import bus

    for name in ("AddressSpace", "AddressOutOfRange", "RomTooLarge", "AddressSpaceError"):
        assert hasattr(bus, name), f"bus missing symbol: {name}"


def test_engine_errors_share_a_root() -> None:
    from pychip8.bus import AddressOutOfRange, RomTooLarge
    from pychip8.cpu import InvalidOpcode, StackOverflow, StackUnderflow
    from pychip8.io import InvalidKey

    for cls in (AddressOutOfRange, RomTooLarge, InvalidOpcode, StackOverflow, StackUnderflow, InvalidKey):
        assert issubclass(cls, pychip8.Chip8Error)
