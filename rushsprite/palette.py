"""Colour palettes stored in several 16- and 32-bit pixel formats."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class PixelFormat(IntEnum):
    """Palette entry encodings, named by their format tag."""

    ARGB8888 = 0x8888
    ARGB4444 = 0x4444
    ARGB1555 = 0x5515
    RGB565 = 0x6505

    @property
    def entry_size(self) -> int:
        return 4 if self is PixelFormat.ARGB8888 else 2


class PaletteError(ValueError):
    """Raised for malformed palette data."""


TRANSPARENT_565 = 0xF81F


@dataclass(frozen=True)
class Palette:
    """One palette: colours as 32-bit values laid out as RGBA bytes in memory."""

    colors: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.colors)

    def color(self, index: int) -> int:
        """Return colour ``index``, or 0 when it is out of range."""
        if 0 <= index < len(self.colors):
            return self.colors[index]
        return 0


def _argb_to_rgba32(argb: int) -> int:
    # Swap the R and B bytes so that little-endian memory reads R, G, B, A.
    return (argb & 0xFF00FF00) | ((argb >> 16) & 0xFF) | ((argb & 0xFF) << 16)


def decode_color(value: int, pixel_format: int) -> int:
    """Decode one raw palette entry to a 32-bit RGBA value."""
    fmt = PixelFormat(pixel_format)
    if fmt is PixelFormat.ARGB8888:
        argb = value & 0xFFFFFFFF
    elif fmt is PixelFormat.ARGB4444:
        c = value & 0xFFFF
        argb = (
            (c & 0xF000) << 16 | (c & 0xF000) << 12
            | (c & 0x0F00) << 12 | (c & 0x0F00) << 8
            | (c & 0x00F0) << 8 | (c & 0x00F0) << 4
            | (c & 0x000F) << 4 | (c & 0x000F)
        ) & 0xFFFFFFFF
    elif fmt is PixelFormat.ARGB1555:
        c = value & 0xFFFF
        if not c & 0x8000:
            return 0
        argb = 0xFF000000 | (c & 0x7C00) << 9 | (c & 0x03E0) << 6 | (c & 0x001F) << 3
    else:
        c = value & 0xFFFF
        if c == TRANSPARENT_565:
            return 0
        argb = 0xFF000000 | (c & 0xF800) << 8 | (c & 0x07E0) << 5 | (c & 0x001F) << 3
    return _argb_to_rgba32(argb)


def load_palettes(
    data: bytes, pixel_format: int, total_palettes: int, total_pixels: int
) -> list[Palette]:
    """Decode ``total_palettes`` palettes of ``total_pixels`` entries each."""
    if total_palettes <= 0 or total_pixels <= 0:
        raise PaletteError("palette count and size must be positive")
    try:
        fmt = PixelFormat(pixel_format)
    except ValueError:
        raise PaletteError(f"unsupported pixel format {pixel_format:#06x}") from None
    size = fmt.entry_size
    stride = size * total_pixels
    needed = stride * total_palettes
    if len(data) < needed:
        raise PaletteError(f"palette data holds {len(data)} bytes, {needed} needed")
    palettes = []
    for start in range(0, needed, stride):
        block = data[start:start + stride]
        colors = tuple(
            decode_color(int.from_bytes(block[pos:pos + size], "little"), fmt)
            for pos in range(0, stride, size)
        )
        palettes.append(Palette(colors))
    return palettes