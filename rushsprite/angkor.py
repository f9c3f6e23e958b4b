"""A fixed eight-frame grass animation composed from fourteen tile images."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from PIL import Image

from .canvas import Canvas, CanvasError, Texture, create_texture

PathLike = Union[str, "os.PathLike[str]"]

TILE_COUNT = 14
BACKGROUND_TILE = 13
CELL = 120
GRID = 3
ORIGIN = CELL
STEP = 5
FRAME_COUNT = 8
FRAMES_PER_SECOND = 8

# (count, offset) into PLACEMENTS for every frame.
FRAME_INFO = (
    (1, 0x00),
    (8, 0x01),
    (8, 0x09),
    (8, 0x11),
    (8, 0x19),
    (8, 0x21),
    (8, 0x29),
    (7, 0x31),
)

# (tile index, x, y, transform); x and y are in steps of STEP pixels.
PLACEMENTS = (
    (0, 0, 0, 0),
    (1, 0, 12, 0), (9, 8, 4, 0), (10, -1, 6, 0), (8, 20, 4, 0),
    (7, -1, 3, 0), (6, 15, 0, 0), (5, 3, 3, 0), (4, 2, -1, 0),
    (1, 0, 12, 0), (9, 7, 3, 0), (10, -3, 6, 0), (8, 21, 4, 0),
    (7, -2, 2, 0), (6, 16, -1, 0), (5, 2, 2, 0), (4, 1, -3, 0),
    (1, 0, 12, 0), (9, 6, 3, 0), (10, -4, 6, 0), (8, 23, 4, 0),
    (7, -3, 2, 0), (6, 17, -2, 0), (5, 1, 2, 0), (4, 0, -3, 0),
    (10, -4, 8, 0), (8, 23, 7, 0), (7, -4, 4, 0), (6, 18, 0, 0),
    (5, 1, 3, 0), (4, 0, -2, 0), (2, 0, 17, 0), (11, 7, 9, 0),
    (8, -3, 11, 1), (7, -5, 6, 0), (6, 21, 12, 0), (5, 1, 5, 0),
    (5, -1, 0, 1), (4, 19, 3, 1), (2, 0, 17, 0), (9, 11, 5, 1),
    (8, -3, 15, 1), (7, -6, 8, 0), (7, 22, 5, 1), (5, 1, 7, 0),
    (5, 22, 15, 0), (5, -3, 2, 1), (11, 7, 13, 0), (3, 0, 16, 0),
    (7, -2, 19, 0), (7, -3, 8, 0), (7, 21, 18, 1), (5, 2, 9, 0),
    (11, 5, 16, 0), (3, 0, 16, 0), (12, 24, 9, 0),
)


def draw_background(canvas: Canvas, texture: Texture) -> None:
    """Cover a 3 x 3 grid of cells with ``texture``."""
    for y in range(GRID):
        for x in range(GRID):
            canvas.draw_region(texture, x * CELL, y * CELL, 0)


def load_tiles(directory: PathLike = "tiles") -> list[Texture]:
    """Load ``0.png`` to ``13.png`` from ``directory`` as RGBA textures."""
    base = Path(directory)
    tiles = []
    for index in range(TILE_COUNT):
        with Image.open(base / f"{index}.png") as image:
            rgba = image.convert("RGBA")
        tiles.append(create_texture(rgba.tobytes(), rgba.width, rgba.height, rgba.width * 4))
    return tiles


@dataclass
class GrassAnimation:
    """Draws the animation's frames in turn, wrapping after the last."""

    tiles: Sequence[Texture]
    frame: int = 0

    def __post_init__(self) -> None:
        if len(self.tiles) < BACKGROUND_TILE:
            raise ValueError(f"animation needs {BACKGROUND_TILE} tiles, got {len(self.tiles)}")

    def draw_frame(self, canvas: Canvas) -> None:
        """Draw the current frame onto ``canvas`` and advance to the next."""
        count, offset = FRAME_INFO[self.frame]
        for index, x, y, transform in PLACEMENTS[offset:offset + count]:
            canvas.draw_region(self.tiles[index], ORIGIN + x * STEP, ORIGIN + y * STEP, transform)
        self.frame = (self.frame + 1) % FRAME_COUNT


def save_frames(tiles_dir: PathLike = "tiles", save_dir: PathLike = "save") -> list[Path]:
    """Render every frame over the background and save each as a PNG file."""
    tiles = load_tiles(tiles_dir)
    animation = GrassAnimation(tiles)
    canvas = Canvas(CELL * GRID, CELL * GRID)
    out_dir = Path(save_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for number in range(1, FRAME_COUNT + 1):
        draw_background(canvas, tiles[BACKGROUND_TILE])
        animation.draw_frame(canvas)
        path = out_dir / f"angkor_grass_frame{number}.png"
        canvas.screenshot(path)
        paths.append(path)
    return paths


def main(argv: Sequence[str] | None = None) -> int:
    """Render the grass animation's frames to PNG files."""
    parser = argparse.ArgumentParser(description="Render the Angkor grass animation frames.")
    parser.add_argument("--tiles", default="tiles", help="directory holding 0.png to 13.png")
    parser.add_argument("--save", default="save", help="directory for the frame images")
    args = parser.parse_args(argv)
    try:
        paths = save_frames(args.tiles, args.save)
    except (OSError, CanvasError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    for path in paths:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())