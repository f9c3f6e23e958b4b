"""Chunked container files and a cursor for reading a single chunk."""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

_ENTRY = struct.Struct("<II")


class ChunkError(ValueError):
    """Raised when a chunk cannot be loaded or read past its end."""


class Chunk:
    """A block of bytes with a read position."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self.position = 0

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def _take(self, count: int) -> bytes:
        end = self.position + count
        if count > len(self._data) or end > len(self._data):
            raise ChunkError(
                f"cannot read {count} bytes at offset {self.position} of {len(self._data)}"
            )
        out = self._data[self.position:end]
        self.position = end
        return out

    def read_u8(self) -> int:
        """Read one unsigned byte."""
        return self._take(1)[0]

    def read_u16(self) -> int:
        """Read a little-endian unsigned 16-bit value."""
        return int.from_bytes(self._take(2), "little")

    def rewind(self) -> None:
        """Move the read position back to the start."""
        self.position = 0

    def skip(self, count: int) -> None:
        """Advance the read position by ``count`` bytes."""
        if count <= 0:
            raise ChunkError("skip count must be positive")
        self._take(count)

    def read_bytes(self, count: int) -> bytes:
        """Read ``count`` bytes."""
        if count <= 0:
            raise ChunkError("read count must be positive")
        return self._take(count)

    def save(self, path: PathLike) -> None:
        """Write the chunk's bytes to ``path``."""
        if not self._data:
            raise ChunkError("cannot save an empty chunk")
        Path(path).write_bytes(self._data)


def load_chunk(path: PathLike, index: int) -> Chunk:
    """Load chunk number ``index`` from a chunked container file.

    The file starts with a one-byte chunk count, followed by a table of
    little-endian (offset, size) pairs; offsets are relative to the end
    of that table.
    """
    if index < 0:
        raise ChunkError(f"invalid chunk index {index}")
    with open(path, "rb") as fp:
        head = fp.read(1)
        if not head or head[0] == 0:
            raise ChunkError("file holds no chunks")
        total = head[0]
        if index >= total:
            raise ChunkError(f"chunk index {index} out of range (file has {total})")
        table = fp.read(_ENTRY.size * total)
        if len(table) != _ENTRY.size * total:
            raise ChunkError("truncated chunk table")
        offset, size = _ENTRY.unpack_from(table, index * _ENTRY.size)
        fp.seek(offset, os.SEEK_CUR)
        data = fp.read(size)
    if size == 0 or len(data) != size:
        raise ChunkError(f"chunk {index} is empty or truncated")
    return Chunk(data)