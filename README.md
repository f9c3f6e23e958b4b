# rushsprite

Tools for taking apart the sprite archives of an old mobile game:
read a chunk out of a packed file, parse its palettes and tile
layout, compose frames on an RGBA canvas and save the result as PNG.

## Installation

```
pip install .
```

Pillow is the only runtime dependency. To run the tests:

```
pip install .[test]
pytest
```

## Commands

### `rushsprite-color`

Converts an RGB565 value to 8-bit RGB and prints it in two forms. The
value may be given in any base Python's `int(text, 0)` accepts; it
defaults to `0xF81F`, the colour the game uses as its transparent key.

```
$ rushsprite-color
#ff00ff
RGB(255,0,255)
$ rushsprite-color 0x07E0
#00fc00
RGB(0,252,0)
```

### `angkor-grass`

Renders the eight-frame grass animation over a 3 x 3 grid of
background cells (360 x 360 pixels) and writes one PNG per frame.

```
$ angkor-grass [--tiles DIR] [--save DIR]
```

`--tiles` (default `tiles`) is the directory holding the tile images
`0.png` to `13.png`; tile 13 is the background. `--save` (default
`save`) receives `angkor_grass_frame1.png` to
`angkor_grass_frame8.png` and is created if missing. The written
paths are printed; on a missing or unreadable tile the command prints
an error and exits with status 1.

## Library overview

Each module can be used on its own.

| Module | What it provides |
| --- | --- |
| `rushsprite.color` | `rgb565_to_rgb`, `format_hex`, `format_rgb`, `main` |
| `rushsprite.chunk` | `load_chunk` and the `Chunk` reader (`read_u8`, `read_u16`, `read_bytes`, `skip`, `rewind`, `save`, `position`, `size`, `data`); errors raise `ChunkError` |
| `rushsprite.palette` | `PixelFormat`, `decode_color`, `load_palettes` and `Palette.color`; errors raise `PaletteError` |
| `rushsprite.sprite` | `load_sprite`, returning a `Sprite` with its `Dimension`, `TilePos` and `PosInfo` tables; errors raise `SpriteError` |
| `rushsprite.canvas` | an RGBA `Canvas` with `clear`, `draw_region`, `read_pixels`, `screenshot` and `region_screenshot`, plus `Texture`, `create_texture`, `save_png` and the `Transform` flags; errors raise `CanvasError` |
| `rushsprite.extractor` | `parse_options`, `Options`, `help_text`, `BoundingBox` and `FrameRenderer`; option errors raise `OptionError` |
| `rushsprite.angkor` | `GrassAnimation`, `draw_background`, `load_tiles`, `save_frames`, `main` |

### Reading a sprite

```python
from rushsprite.chunk import load_chunk
from rushsprite.sprite import load_sprite

chunk = load_chunk("sprites.bin", 3)   # fourth chunk of the archive
sprite = load_sprite(chunk, 2)         # tile offsets scaled by 2
palette = sprite.palette(0)
print(sprite.texture_count, sprite.palette_count, len(sprite.tile_pos_info))
```

A packed file starts with one byte giving the number of chunks, then
a table of (offset, size) pairs as little-endian 32-bit values; each
offset counts from the end of that table. A sprite chunk begins with
the magic bytes `DF 03 01 01 01 01`; a wrong header, a truncated
chunk or bad palette data raises `SpriteError`.

### Palette formats

Palettes are stored in one of four pixel formats, chosen by a 16-bit
tag: `0x8888` (ARGB8888), `0x4444` (ARGB4444), `0x5515` (ARGB1555,
entries without the alpha bit are fully transparent) and `0x6505`
(RGB565, with `0xF81F` meaning transparent). All of them decode to
32-bit values whose little-endian bytes are R, G, B, A.
`Palette.color` returns 0 for an index out of range.

### Composing frames

`Canvas` alpha-blends textures onto its pixels, clipping at the
edges. The low two bits of a transform select none, a horizontal
mirror, a vertical flip (mirror plus 180° turn) or a 180° turn.

```python
from rushsprite.canvas import Canvas, create_texture
from rushsprite.extractor import FrameRenderer

canvas = Canvas(64, 64)
red = create_texture(bytes([255, 0, 0, 255]) * 4, 2, 2, 8)
renderer = FrameRenderer(canvas, [red])     # no tile info: one frame per texture
box = renderer.render(0)                    # drawn at the canvas centre
canvas.region_screenshot("frame.png", box.left, box.top, box.width, box.height)
```

With `tile_pos` and `tile_pos_info` from a `Sprite`, each frame is
built from the tiles its `PosInfo` entry points to, offset from the
origin. `parse_options` reads `-s SCALE` (1 to 5, default 3),
`-c CHUNK_INDEX` (required), `-p PALETTE_INDEX` (default 0) and a
file name into an `Options` object.

### Saving images

```python
from rushsprite.canvas import save_png

save_png("pixel.png", 1, 1, 4, bytes([255, 0, 255, 255]), 4)
```

`save_png` takes 1 to 4 channels (grey, grey + alpha, RGB, RGBA); a
stride of 0 means tightly packed rows.

## What the package does not do

- It does not decode a sprite's texture pixel data. `Sprite` keeps
  each texture's raw bytes and its `texture_decode_type`, but turning
  them into RGBA pixels is left to the caller; textures for
  `FrameRenderer` must be built with `create_texture`.
- There is no command that extracts a sprite's frames from a packed
  file; `parse_options` and `FrameRenderer` are the pieces such a
  command would use.
- Nothing is shown on screen: all drawing happens on an off-screen
  `Canvas` and is saved as PNG files.