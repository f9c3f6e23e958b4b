"""Sprite resources: texture sizes, tile layouts, animations, palettes and pixel data."""

from __future__ import annotations

from dataclasses import dataclass

from .chunk import Chunk, ChunkError
from .palette import Palette, PaletteError, PixelFormat, load_palettes

MAGIC = bytes((0xDF, 0x03, 0x01, 0x01, 0x01, 0x01))

_TILE_INFO_EXTRA = 4
_UNKNOWN_RECORD_SIZE = 5


class SpriteError(ValueError):
    """Raised when sprite data is malformed or truncated."""


@dataclass(frozen=True)
class Dimension:
    """Width and height of one texture."""

    w: int
    h: int


@dataclass(frozen=True)
class TilePos:
    """Placement of one texture inside a composed frame."""

    tex_index: int
    x: int
    y: int
    transform: int


@dataclass(frozen=True)
class PosInfo:
    """A run of ``count`` entries starting at ``offset`` in another table."""

    count: int
    offset: int


@dataclass(frozen=True)
class Sprite:
    """Everything a sprite chunk holds, with tile offsets already scaled."""

    scale: int
    dimensions: tuple[Dimension, ...]
    tile_pos: tuple[TilePos, ...]
    tile_pos_info: tuple[PosInfo, ...]
    animation_info: tuple[PosInfo, ...]
    palettes: tuple[Palette, ...]
    texture_decode_type: int
    texture_data: tuple[bytes, ...]

    @property
    def texture_count(self) -> int:
        return len(self.dimensions)

    @property
    def palette_count(self) -> int:
        return len(self.palettes)

    def palette(self, index: int) -> Palette:
        """Return palette ``index``."""
        if not 0 <= index < len(self.palettes):
            raise SpriteError(
                f"palette index {index} out of range (sprite has {len(self.palettes)})"
            )
        return self.palettes[index]


def _read_pos_info(chunk: Chunk, count: int) -> tuple[PosInfo, ...]:
    entries = []
    for _ in range(count):
        raw = chunk.read_bytes(4)
        entries.append(
            PosInfo(
                count=int.from_bytes(raw[0:2], "little") & 0xFF,
                offset=int.from_bytes(raw[2:4], "little"),
            )
        )
    return tuple(entries)


def _signed8(value: int) -> int:
    return value - 0x100 if value & 0x80 else value


def _parse(chunk: Chunk, scale: int) -> Sprite:
    if chunk.read_bytes(len(MAGIC)) != MAGIC:
        raise SpriteError("bad sprite magic header")

    total_textures = chunk.read_u16()
    if not total_textures:
        raise SpriteError("sprite holds no textures")

    dimensions = []
    for _ in range(total_textures):
        dim = chunk.read_u16()
        dimensions.append(Dimension(w=dim & 0xFF, h=dim >> 8))

    tile_pos = []
    for _ in range(chunk.read_u16()):
        index, x, y, transform = chunk.read_bytes(4)
        tile_pos.append(
            TilePos(
                tex_index=index,
                x=_signed8(x) * scale,
                y=_signed8(y) * scale,
                transform=transform,
            )
        )

    total_tile_pos_info = chunk.read_u16()
    tile_pos_info: tuple[PosInfo, ...] = ()
    if total_tile_pos_info:
        tile_pos_info = _read_pos_info(chunk, total_tile_pos_info)
        chunk.skip(total_tile_pos_info * _TILE_INFO_EXTRA)

    unknown = chunk.read_u16()
    if unknown:
        chunk.skip(unknown * _UNKNOWN_RECORD_SIZE)

    animation_info = _read_pos_info(chunk, chunk.read_u16())

    palette_type = chunk.read_u16()
    total_palettes = chunk.read_u8()
    total_pixels = chunk.read_u8()
    entry_size = 4 if palette_type == PixelFormat.ARGB8888 else 2
    palette_data = chunk.read_bytes(total_palettes * total_pixels * entry_size)
    palettes = load_palettes(palette_data, palette_type, total_palettes, total_pixels)

    decode_type = chunk.read_u16()
    texture_data = []
    for _ in range(total_textures):
        length = chunk.read_u16()
        texture_data.append(chunk.read_bytes(length))

    return Sprite(
        scale=scale,
        dimensions=tuple(dimensions),
        tile_pos=tuple(tile_pos),
        tile_pos_info=tile_pos_info,
        animation_info=animation_info,
        palettes=tuple(palettes),
        texture_decode_type=decode_type,
        texture_data=tuple(texture_data),
    )


def load_sprite(chunk: Chunk, scale: int = 1) -> Sprite:
    """Parse a sprite from ``chunk``; scales below 1 are treated as 1."""
    scale = max(scale, 1)
    try:
        return _parse(chunk, scale)
    except (ChunkError, PaletteError) as exc:
        raise SpriteError(str(exc)) from exc