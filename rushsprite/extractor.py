"""Command-line options and frame composition for extracting sprite animations."""

from __future__ import annotations

import copy
import re
import sys
from dataclasses import dataclass, field
from typing import Sequence

from .canvas import Canvas, Texture, Transform
from .sprite import PosInfo, TilePos

CANVAS_SIZE = 2000
PROGRAM = "animation_extractor"
VERSION = "1.0"

MIN_SCALE = 1
MAX_SCALE = 5


class OptionError(ValueError):
    """Raised when the command line cannot be used."""


@dataclass
class Options:
    """Settings for one extraction run."""

    scale: int = 3
    chunk_index: int | None = None
    palette_index: int = 0
    animation_src: str | None = None


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _warn_default(name: str) -> None:
    print(f"Info: Invalid {name}, using default setting.", file=sys.stderr)


def parse_options(argv: Sequence[str] | None = None) -> Options:
    """Parse ``-s SCALE``, ``-c CHUNK_INDEX``, ``-p PALETTE_INDEX`` and a file name.

    Out-of-range scales and palette indexes fall back to their defaults;
    a negative chunk index, an unknown option, a missing option value,
    or a missing chunk index or file raise :class:`OptionError`.
    """
    if argv is None:
        argv = sys.argv[1:]
    options = Options()
    args = iter(argv)
    for arg in args:
        if len(arg) != 2 or arg[0] != "-":
            options.animation_src = arg
            continue
        flag = arg[1]
        if flag not in "scp":
            raise OptionError(f"{PROGRAM}: invalid option -- {flag}")
        value = next(args, None)
        if value is None:
            raise OptionError(f"{PROGRAM}: option requires an argument -- {flag}")
        number = _atoi(value)
        if flag == "s":
            if MIN_SCALE <= number <= MAX_SCALE:
                options.scale = number
            else:
                _warn_default("scale")
        elif flag == "c":
            if number < 0:
                raise OptionError("Invalid chunk index")
            options.chunk_index = number
        else:
            if number >= 0:
                options.palette_index = number
            else:
                _warn_default("palette_index")

    if options.chunk_index is None:
        raise OptionError("No chunk index to be used.")
    if options.animation_src is None:
        raise OptionError("No file to be used.")
    return options


def help_text() -> str:
    """Return the usage message."""
    return (
        f"Animation eXtractor v{VERSION}.\n\n"
        f"Usage: {PROGRAM} [-s SCALE] [-c CHUNK_INDEX] [-p PALETTE_INDEX] [FILE]\n\n"
        "Extract animations from DiamondRush's file\n\n"
        "  -s SCALE          Rescale the image\n"
        "  -c CHUNK_INDEX    Specify the chunk to extract\n"
        "  -p PALETTE_INDEX  Specify the palette to be used\n"
    )


@dataclass
class BoundingBox:
    """The smallest rectangle holding everything drawn since the last reset."""

    limit: int = CANVAS_SIZE
    left: int = field(init=False)
    top: int = field(init=False)
    right: int = field(init=False)
    bottom: int = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forget everything included so far."""
        self.left = self.top = self.limit
        self.right = self.bottom = 0

    def include(self, x: int, y: int, width: int, height: int) -> None:
        """Grow the box to cover a ``width`` x ``height`` rectangle at (x, y)."""
        self.left = min(self.left, x)
        self.top = min(self.top, y)
        self.right = max(self.right, x + width)
        self.bottom = max(self.bottom, y + height)

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class FrameRenderer:
    """Composes animation frames from textures and tile placements onto a canvas.

    Without tile placement info every texture is a frame of its own.
    """

    def __init__(
        self,
        canvas: Canvas,
        textures: Sequence[Texture],
        tile_pos: Sequence[TilePos] = (),
        tile_pos_info: Sequence[PosInfo] = (),
        origin: tuple[int, int] | None = None,
    ) -> None:
        self.canvas = canvas
        self.textures = tuple(textures)
        self.tile_pos = tuple(tile_pos)
        self.tile_pos_info = tuple(tile_pos_info)
        self.origin = origin if origin is not None else (canvas.width // 2, canvas.height // 2)
        self.bounds = BoundingBox(limit=max(canvas.width, canvas.height))

    def frame_count(self) -> int:
        """Number of frames that can be rendered."""
        return len(self.tile_pos_info) or len(self.textures)

    def _draw(self, texture: Texture, x: int, y: int, transform: int) -> None:
        self.bounds.include(x, y, texture.width, texture.height)
        self.canvas.draw_region(texture, x, y, transform)

    def render(self, index: int) -> BoundingBox:
        """Clear the canvas, draw frame ``index`` and return the area it covers."""
        total = self.frame_count()
        if not 0 <= index < total:
            raise IndexError(f"frame {index} out of range ({total} frames)")
        self.bounds.reset()
        self.canvas.clear()
        ox, oy = self.origin
        if not self.tile_pos_info:
            self._draw(self.textures[index], ox, oy, Transform.NONE)
        else:
            info = self.tile_pos_info[index]
            for pos in range(info.offset, info.offset + info.count):
                tile = self.tile_pos[pos]
                self._draw(self.textures[tile.tex_index], ox + tile.x, oy + tile.y, tile.transform)
        return copy.copy(self.bounds)