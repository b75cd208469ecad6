"""Hexadecimal keypad state and host keyboard mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pychip8.errors import Chip8Error
from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


# Keypad       Keyboard
# 1 2 3 C      1 2 3 4
# 4 5 6 D      q w e r
# 7 8 9 E      a s d f
# A 0 B F      z x c v
KEY_MAP_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


class InvalidKey(Chip8Error):
    """Raised for keypad indices outside 0x0-0xF."""

    def __init__(self, key: int) -> None:
        super().__init__(f"key index {key} outside keypad (0x0-0xF)")
        self.key = key


@dataclass
class KeypadState:
    """Sixteen pressed/released flags, one per hex key."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def press(self, key: int) -> None:
        self.set(key, True)

    def release(self, key: int) -> None:
        self.set(key, False)

    def set(self, key: int, pressed: bool) -> None:
        self._keys[self._check(key)] = bool(pressed)

    def is_pressed(self, key: int) -> bool:
        return self._keys[self._check(key)]

    def first_pressed(self) -> int | None:
        """Return the lowest pressed key index, if any."""

        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def reset(self) -> None:
        self._keys[:] = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise InvalidKey(key)
        return key


@dataclass
class Keyboard:
    """Translates host key names into keypad presses."""

    keypad: KeypadState = field(default_factory=KeypadState)
    key_map: Mapping[str, int] = field(default_factory=lambda: dict(KEY_MAP_TEMPLATE))

    def press(self, key_name: str) -> bool:
        return self._apply(key_name, True)

    def release(self, key_name: str) -> bool:
        return self._apply(key_name, False)

    def lookup(self, key_name: str) -> int | None:
        return self.key_map.get(key_name.lower())

    def _apply(self, key_name: str, pressed: bool) -> bool:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped key=%s pressed=%s", key_name, pressed)
            return False
        self.keypad.set(key, pressed)
        if debug_enabled("input"):
            debug_log("input", "key=%s index=%X pressed=%s", key_name, key, pressed)
        return True
