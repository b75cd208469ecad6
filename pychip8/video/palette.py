"""Two-colour palettes for framebuffer rendering."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple, Union

RGBColor = Tuple[int, int, int]
ColorSpec = Union[RGBColor, Sequence[int], str]

# (background, foreground)
MONOCHROME: Tuple[RGBColor, RGBColor] = ((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF))
PHOSPHOR: Tuple[RGBColor, RGBColor] = ((0x10, 0x18, 0x10), (0x33, 0xFF, 0x66))
AMBER: Tuple[RGBColor, RGBColor] = ((0x1A, 0x10, 0x00), (0xFF, 0xB0, 0x00))

PALETTES: Dict[str, Tuple[RGBColor, RGBColor]] = {
    "mono": MONOCHROME,
    "phosphor": PHOSPHOR,
    "amber": AMBER,
}


def parse_color(color: ColorSpec) -> RGBColor:
    """Accept an RGB triple or a ``#rrggbb`` string."""

    if isinstance(color, str):
        text = color.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"colour {color!r} is not in #rrggbb form")
        try:
            value = int(text, 16)
        except ValueError as exc:
            raise ValueError(f"colour {color!r} is not in #rrggbb form") from exc
        return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    if len(color) != 3:
        raise ValueError("palette entries must be RGB tuples")
    red, green, blue = (int(channel) & 0xFF for channel in color)
    return (red, green, blue)


def validate_palette(palette: Sequence[ColorSpec]) -> Tuple[RGBColor, RGBColor]:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    background, foreground = palette
    return parse_color(background), parse_color(foreground)


def palette_by_name(name: str) -> Tuple[RGBColor, RGBColor]:
    try:
        return PALETTES[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PALETTES))
        raise ValueError(f"unknown palette {name!r} (choose from {choices})") from None
