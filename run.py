"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import PALETTES, palette_by_name


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "program",
        type=Path,
        help="Path to the CHIP-8 program image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=5,
        help="Milliseconds to wait between cycles (default: 5; F1/F2 adjust at runtime)",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--trap",
        action="store_true",
        help="Open the debug shell instead of exiting when execution fails",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")

    if args.scale <= 0:
        parser.error("--scale must be positive")

    if args.delay < 0:
        parser.error("--delay must not be negative")

    config = AppConfig(
        program_path=args.program,
        scale=args.scale,
        delay_ms=args.delay,
        palette=palette_by_name(args.palette),
        trap_errors=args.trap,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
