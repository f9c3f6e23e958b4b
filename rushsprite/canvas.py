"""An off-screen RGBA canvas with textures, alpha blending and PNG output."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Union

from PIL import Image

PathLike = Union[str, "os.PathLike[str]"]
PixelSource = Union[bytes, bytearray, memoryview, Iterable[int]]

_MODES = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}


class Transform(IntEnum):
    """How a texture is flipped or rotated when drawn; only the low two bits count."""

    NONE = 0
    MIRROR = 1
    MIRROR_ROT180 = 2
    ROT180 = 3


class CanvasError(ValueError):
    """Raised for invalid canvas, texture or image parameters."""


@dataclass(frozen=True)
class Texture:
    """An image of ``width`` x ``height`` RGBA pixels, rows packed tightly."""

    width: int
    height: int
    pixels: bytes

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA value at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise CanvasError(f"pixel ({x}, {y}) outside {self.width}x{self.height} texture")
        pos = (y * self.width + x) * 4
        r, g, b, a = self.pixels[pos:pos + 4]
        return r, g, b, a


def _as_bytes(pixels: PixelSource) -> bytes:
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        return bytes(pixels)
    values = [value & 0xFFFFFFFF for value in pixels]
    return struct.pack(f"<{len(values)}I", *values)


def create_texture(pixels: PixelSource, width: int, height: int, pitch: int) -> Texture:
    """Build a texture from RGBA data whose rows are ``pitch`` bytes apart.

    ``pixels`` is raw RGBA bytes or a sequence of 32-bit values laid out
    as RGBA bytes in little-endian memory.
    """
    if width <= 0 or height <= 0:
        raise CanvasError(f"invalid texture size {width}x{height}")
    row = width * 4
    if pitch < row:
        raise CanvasError(f"pitch {pitch} is smaller than a row of {row} bytes")
    data = _as_bytes(pixels)
    needed = pitch * (height - 1) + row
    if len(data) < needed:
        raise CanvasError(f"texture data holds {len(data)} bytes, {needed} needed")
    packed = b"".join(data[start:start + row] for start in range(0, pitch * height, pitch))
    return Texture(width, height, packed)


def save_png(
    path: PathLike, width: int, height: int, components: int, data: bytes, stride: int = 0
) -> None:
    """Write 8-bit pixel data with 1 to 4 channels as a PNG file.

    A ``stride`` of 0 means rows are packed tightly.
    """
    if width <= 0 or height <= 0:
        raise CanvasError(f"invalid image size {width}x{height}")
    mode = _MODES.get(components)
    if mode is None:
        raise CanvasError(f"unsupported component count {components}")
    row = width * components
    if stride == 0:
        stride = row
    if stride < row:
        raise CanvasError(f"stride {stride} is smaller than a row of {row} bytes")
    raw = bytes(data)
    needed = stride * (height - 1) + row
    if len(raw) < needed:
        raise CanvasError(f"image data holds {len(raw)} bytes, {needed} needed")
    packed = b"".join(raw[start:start + row] for start in range(0, stride * height, stride))
    Image.frombytes(mode, (width, height), packed).save(path, format="PNG")


def _blend(src: int, dst: int, alpha: int) -> int:
    return (src * alpha + dst * (255 - alpha) + 127) // 255


class Canvas:
    """A render target of RGBA pixels that textures are blended onto."""

    def __init__(self, width: int, height: int, color: tuple[int, int, int, int] = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise CanvasError(f"invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self.color = tuple(color)
        self._pixels = bytearray(width * height * 4)
        self.clear()

    def clear(self) -> None:
        """Fill the whole canvas with the draw colour."""
        self._pixels[:] = bytes(self.color) * (self.width * self.height)

    def draw_region(self, texture: Texture, x: int, y: int, transform: int = Transform.NONE) -> None:
        """Blend ``texture`` onto the canvas with its top-left corner at (x, y)."""
        mode = Transform(transform & 0x3)
        flip_x = mode in (Transform.MIRROR, Transform.ROT180)
        flip_y = mode in (Transform.MIRROR_ROT180, Transform.ROT180)
        tw, th = texture.width, texture.height
        src = texture.pixels
        dst = self._pixels
        x0, x1 = max(x, 0), min(x + tw, self.width)
        y0, y1 = max(y, 0), min(y + th, self.height)
        for cy in range(y0, y1):
            ty = cy - y
            sy = th - 1 - ty if flip_y else ty
            for cx in range(x0, x1):
                tx = cx - x
                sx = tw - 1 - tx if flip_x else tx
                spos = (sy * tw + sx) * 4
                alpha = src[spos + 3]
                if alpha == 0:
                    continue
                dpos = (cy * self.width + cx) * 4
                if alpha == 255:
                    dst[dpos:dpos + 4] = src[spos:spos + 4]
                    continue
                dst[dpos] = _blend(src[spos], dst[dpos], alpha)
                dst[dpos + 1] = _blend(src[spos + 1], dst[dpos + 1], alpha)
                dst[dpos + 2] = _blend(src[spos + 2], dst[dpos + 2], alpha)
                dst[dpos + 3] = alpha + (dst[dpos + 3] * (255 - alpha) + 127) // 255

    def read_pixels(self, x: int = 0, y: int = 0, width: int | None = None, height: int | None = None) -> bytes:
        """Return the RGBA bytes of a rectangle, rows packed tightly."""
        if width is None:
            width = self.width - x
        if height is None:
            height = self.height - y
        if x < 0 or y < 0 or width <= 0 or height <= 0:
            raise CanvasError("invalid region")
        if x + width > self.width or y + height > self.height:
            raise CanvasError(
                f"region {width}x{height} at ({x}, {y}) exceeds {self.width}x{self.height} canvas"
            )
        row = width * 4
        stride = self.width * 4
        start = (y * self.width + x) * 4
        return b"".join(
            bytes(self._pixels[pos:pos + row])
            for pos in range(start, start + stride * height, stride)
        )

    def screenshot(self, path: PathLike) -> None:
        """Save the whole canvas as a PNG file."""
        save_png(path, self.width, self.height, 4, self.read_pixels(), self.width * 4)

    def region_screenshot(self, path: PathLike, x: int, y: int, width: int, height: int) -> None:
        """Save a rectangle of the canvas as a PNG file."""
        if x < 0 or y < 0 or width <= 0 or height <= 0:
            raise CanvasError("region_screenshot: invalid region")
        save_png(path, width, height, 4, self.read_pixels(x, y, width, height), width * 4)