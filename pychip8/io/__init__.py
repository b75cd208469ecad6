"""Input helpers for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEY_MAP_TEMPLATE, InvalidKey, Keyboard, KeypadState

__all__ = [
    "KeypadState",
    "Keyboard",
    "InvalidKey",
    "KEY_COUNT",
    "KEY_MAP_TEMPLATE",
]
