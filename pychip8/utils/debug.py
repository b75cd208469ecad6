"""Category-gated diagnostic output controlled by ``CHIP8_DEBUG``.

``CHIP8_DEBUG`` holds a comma separated list of categories (``cpu``,
``input``, ``trace``, ``perf``, ``load``) or ``all``. The value is read once
and cached; call :func:`reload_categories` after changing the environment.
"""

from __future__ import annotations

import os
from typing import FrozenSet, Optional

ENV_VAR = "CHIP8_DEBUG"
KNOWN_CATEGORIES: FrozenSet[str] = frozenset({"cpu", "input", "trace", "perf", "load"})

_enabled: Optional[FrozenSet[str]] = None


def parse_categories(value: str) -> FrozenSet[str]:
    return frozenset(part.strip().lower() for part in value.split(",") if part.strip())


def _categories() -> FrozenSet[str]:
    global _enabled
    if _enabled is None:
        _enabled = parse_categories(os.environ.get(ENV_VAR, ""))
        unknown = _enabled - KNOWN_CATEGORIES - {"all"}
        if unknown:
            print(f"[CHIP8] ignoring unknown {ENV_VAR} categories: {', '.join(sorted(unknown))}")
    return _enabled


def reload_categories() -> None:
    global _enabled
    _enabled = None


def debug_enabled(category: str | None = None) -> bool:
    categories = _categories()
    if not categories:
        return False
    if category is None or "all" in categories:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
