"""Read paletted sprite chunks, compose their frames on an RGBA canvas and save them as PNG images."""

__version__ = "1.0.0"

__all__ = ["angkor", "canvas", "chunk", "color", "extractor", "palette", "sprite"]