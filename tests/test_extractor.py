import pytest

from rushsprite.canvas import Canvas, Transform, create_texture
from rushsprite.extractor import (
    CANVAS_SIZE,
    BoundingBox,
    FrameRenderer,
    OptionError,
    Options,
    help_text,
    parse_options,
)
from rushsprite.sprite import PosInfo, TilePos

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def solid(color, width, height):
    return create_texture(bytes(color) * (width * height), width, height, width * 4)


def pixel(canvas, x, y):
    return tuple(canvas.read_pixels(x, y, 1, 1))


def test_parse_defaults():
    assert parse_options(["-c", "2", "sprites.bin"]) == Options(
        scale=3, chunk_index=2, palette_index=0, animation_src="sprites.bin"
    )


def test_parse_all_options():
    opts = parse_options(["-s", "5", "-p", "4", "-c", "0", "a.bin"])
    assert (opts.scale, opts.palette_index, opts.chunk_index) == (5, 4, 0)


def test_invalid_scale_falls_back(capsys):
    opts = parse_options(["-s", "9", "-c", "1", "a.bin"])
    assert opts.scale == 3
    assert "Invalid scale" in capsys.readouterr().err


def test_negative_palette_falls_back():
    assert parse_options(["-p", "-2", "-c", "1", "a.bin"]).palette_index == 0


def test_non_numeric_value_reads_leading_digits():
    assert parse_options(["-c", "7x", "a.bin"]).chunk_index == 7


def test_last_file_wins():
    assert parse_options(["a.bin", "-c", "1", "b.bin"]).animation_src == "b.bin"


def test_negative_chunk_index_is_error():
    with pytest.raises(OptionError, match="Invalid chunk index"):
        parse_options(["-c", "-1", "a.bin"])


def test_unknown_option():
    with pytest.raises(OptionError, match="invalid option -- x"):
        parse_options(["-x", "1", "a.bin"])


def test_missing_option_value():
    with pytest.raises(OptionError, match="requires an argument -- c"):
        parse_options(["a.bin", "-c"])


def test_missing_chunk_index():
    with pytest.raises(OptionError, match="No chunk index"):
        parse_options(["a.bin"])


def test_missing_file():
    with pytest.raises(OptionError, match="No file"):
        parse_options(["-c", "3"])


def test_help_text_mentions_options():
    text = help_text()
    assert "Usage: animation_extractor" in text
    assert "-c CHUNK_INDEX" in text


def test_bounding_box_reset_and_include():
    box = BoundingBox()
    assert (box.left, box.top, box.right, box.bottom) == (CANVAS_SIZE, CANVAS_SIZE, 0, 0)
    assert box.empty
    box.include(10, 20, 5, 6)
    assert (box.left, box.top) == (10, 20)
    assert (box.right, box.bottom) == (10 + 5, 20 + 6)
    box.include(4, 30, 2, 2)
    assert box.left == 4
    assert box.bottom == 30 + 2
    assert box.width == box.right - box.left
    box.reset()
    assert box.empty


def test_render_single_textures():
    canvas = Canvas(40, 40)
    renderer = FrameRenderer(canvas, [solid(RED, 3, 2), solid(BLUE, 4, 4)])
    assert renderer.frame_count() == 2
    box = renderer.render(1)
    assert (box.left, box.top, box.width, box.height) == (20, 20, 4, 4)
    assert pixel(canvas, 20, 20) == BLUE
    assert pixel(canvas, 19, 20) == (0, 0, 0, 0)


def test_render_clears_previous_frame():
    canvas = Canvas(40, 40)
    renderer = FrameRenderer(canvas, [solid(RED, 8, 8), solid(BLUE, 1, 1)])
    renderer.render(0)
    renderer.render(1)
    assert pixel(canvas, 25, 25) == (0, 0, 0, 0)


def test_render_tiles():
    canvas = Canvas(40, 40)
    tiles = [
        TilePos(tex_index=0, x=-3, y=-2, transform=0),
        TilePos(tex_index=1, x=2, y=4, transform=0),
        TilePos(tex_index=1, x=0, y=0, transform=0),
    ]
    info = [PosInfo(count=2, offset=0), PosInfo(count=1, offset=2)]
    renderer = FrameRenderer(canvas, [solid(RED, 2, 2), solid(BLUE, 1, 1)], tiles, info)
    assert renderer.frame_count() == 2
    box = renderer.render(0)
    assert (box.left - 20, box.top - 20) == (-3, -2)
    assert (box.right - 20, box.bottom - 20) == (2 + 1, 4 + 1)
    assert pixel(canvas, 17, 18) == RED
    assert pixel(canvas, 22, 24) == BLUE


def test_render_passes_transform():
    canvas = Canvas(10, 10)
    texture = create_texture(bytes(RED) + bytes(BLUE), 2, 1, 8)
    tiles = [TilePos(tex_index=0, x=0, y=0, transform=Transform.MIRROR)]
    renderer = FrameRenderer(canvas, [texture], tiles, [PosInfo(1, 0)], origin=(0, 0))
    renderer.render(0)
    assert pixel(canvas, 0, 0) == BLUE
    assert pixel(canvas, 1, 0) == RED


def test_render_out_of_range():
    renderer = FrameRenderer(Canvas(10, 10), [solid(RED, 1, 1)])
    with pytest.raises(IndexError):
        renderer.render(1)
    with pytest.raises(IndexError):
        renderer.render(-1)


def test_render_bad_tile_offset():
    renderer = FrameRenderer(Canvas(10, 10), [solid(RED, 1, 1)], [], [PosInfo(2, 0)])
    with pytest.raises(IndexError):
        renderer.render(0)