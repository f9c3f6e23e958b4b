"""Conversion of 16-bit RGB565 colours to 8-bit-per-channel RGB."""

from __future__ import annotations

import argparse
from typing import Sequence

DEFAULT_COLOR = 0xF81F


def rgb565_to_rgb(value: int) -> tuple[int, int, int]:
    """Expand an RGB565 value to an (r, g, b) triple of 8-bit channels."""
    value &= 0xFFFF
    argb = 0xFF000000 | (value & 0xF800) << 8 | (value & 0x07E0) << 5 | (value & 0x001F) << 3
    return (argb >> 16) & 0xFF, (argb >> 8) & 0xFF, argb & 0xFF


def format_hex(rgb: Sequence[int]) -> str:
    """Format an (r, g, b) triple as ``#rrggbb``."""
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def format_rgb(rgb: Sequence[int]) -> str:
    """Format an (r, g, b) triple as ``RGB(r,g,b)``."""
    r, g, b = rgb
    return f"RGB({r},{g},{b})"


def _parse_value(text: str) -> int:
    value = int(text, 0)
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"{text!r} is not a 16-bit value")
    return value


def main(argv: Sequence[str] | None = None) -> int:
    """Print an RGB565 colour in hex and decimal notation."""
    parser = argparse.ArgumentParser(description="Show an RGB565 colour as 8-bit RGB.")
    parser.add_argument(
        "value",
        nargs="?",
        type=_parse_value,
        default=DEFAULT_COLOR,
        help="RGB565 value, e.g. 0xF81F (default)",
    )
    args = parser.parse_args(argv)
    rgb = rgb565_to_rgb(args.value)
    print(format_hex(rgb))
    print(format_rgb(rgb))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())