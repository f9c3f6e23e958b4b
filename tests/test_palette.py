import struct

import pytest

from rushsprite.color import rgb565_to_rgb
from rushsprite.palette import (
    Palette,
    PaletteError,
    PixelFormat,
    decode_color,
    load_palettes,
)


def _channels(rgba):
    return rgba & 0xFF, (rgba >> 8) & 0xFF, (rgba >> 16) & 0xFF, (rgba >> 24) & 0xFF


def test_8888_bytes_become_rgba_memory_order():
    raw = bytes([0x11, 0x22, 0x33, 0xFF])
    (palette,) = load_palettes(raw, 0x8888, 1, 1)
    # Stored little-endian as B, G, R, A; decoded value lays out R, G, B, A.
    assert palette.color(0).to_bytes(4, "little") == bytes([0x33, 0x22, 0x11, 0xFF])


def test_565_transparent_key():
    assert decode_color(0xF81F, PixelFormat.RGB565) == 0


@pytest.mark.parametrize("value", [0x0000, 0x07E0, 0xF800, 0x001F, 0x1234, 0xFFFF])
def test_565_matches_rgb_expansion(value):
    r, g, b, a = _channels(decode_color(value, PixelFormat.RGB565))
    assert (r, g, b) == rgb565_to_rgb(value)
    assert a == 0xFF


@pytest.mark.parametrize("value", [0x0000, 0x7FFF, 0x1234])
def test_1555_without_alpha_bit_is_transparent(value):
    assert decode_color(value, PixelFormat.ARGB1555) == 0


@pytest.mark.parametrize("value", [0x8000, 0xFFFF, 0x9234])
def test_1555_with_alpha_bit_is_opaque(value):
    r, g, b, a = _channels(decode_color(value, PixelFormat.ARGB1555))
    assert a == 0xFF
    assert (r >> 3, g >> 3, b >> 3) == ((value >> 10) & 0x1F, (value >> 5) & 0x1F, value & 0x1F)


@pytest.mark.parametrize("value", range(0, 0x10000, 4093))
def test_4444_duplicates_nibbles(value):
    r, g, b, a = _channels(decode_color(value, PixelFormat.ARGB4444))
    assert all(c % 0x11 == 0 for c in (r, g, b, a))
    assert (a >> 4, r >> 4, g >> 4, b >> 4) == (
        (value >> 12) & 0xF, (value >> 8) & 0xF, (value >> 4) & 0xF, value & 0xF
    )


def test_8888_alpha_preserved():
    for alpha in (0x00, 0x80, 0xFF):
        raw = alpha << 24 | 0x102030
        assert _channels(decode_color(raw, PixelFormat.ARGB8888))[3] == alpha


def test_load_several_palettes_in_order():
    values = [0x1234, 0xF81F, 0x07E0, 0xFFFF]
    raw = struct.pack("<4H", *values)
    palettes = load_palettes(raw, PixelFormat.RGB565, 2, 2)
    assert [len(p) for p in palettes] == [2, 2]
    decoded = [p.color(i) for p in palettes for i in range(2)]
    assert decoded == [decode_color(v, PixelFormat.RGB565) for v in values]


def test_color_out_of_range_is_zero():
    palette = Palette((0xDEADBEEF,))
    assert palette.color(0) == 0xDEADBEEF
    assert palette.color(1) == 0
    assert palette.color(-1) == 0


def test_entry_sizes():
    assert PixelFormat.ARGB8888.entry_size == 4
    assert {PixelFormat(f).entry_size for f in (0x4444, 0x5515, 0x6505)} == {2}


@pytest.mark.parametrize("count, pixels", [(0, 4), (1, 0)])
def test_load_rejects_zero_sizes(count, pixels):
    with pytest.raises(PaletteError):
        load_palettes(b"\x00" * 16, PixelFormat.RGB565, count, pixels)


def test_load_rejects_unknown_format():
    with pytest.raises(PaletteError):
        load_palettes(b"\x00" * 16, 0x1234, 1, 2)


def test_load_rejects_short_data():
    with pytest.raises(PaletteError):
        load_palettes(b"\x00" * 7, PixelFormat.ARGB8888, 1, 2)


def test_decode_rejects_unknown_format():
    with pytest.raises(ValueError):
        decode_color(0, 0x1111)