import struct

import pytest
from PIL import Image

from pixelgate.atlas import Atlas
from pixelgate.rect_packer import Rect, is_pow_2
from pixelgate.sprite_atlas import (
    AtlasRegion,
    PackedAtlas,
    form_atlas,
    pre_multiply_alpha,
    rerun_print,
    split_tiled_image,
    trim,
)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def blank(width, height):
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))


def solid(width, height, color):
    return Image.new("RGBA", (width, height), color)


def test_rerun_print(capsys):
    rerun_print(True, "some/file.png")
    rerun_print(False, "other/file.png")
    out = capsys.readouterr().out
    assert "some/file.png" in out
    assert "other/file.png" not in out


def test_trim_single_pixel():
    image = blank(4, 4)
    image.putpixel((1, 2), RED)
    assert trim(image) == Rect(pos=(2, 1), dims=(1, 1))


def test_trim_full_image():
    assert trim(solid(3, 5, RED)) == Rect(pos=(0, 0), dims=(5, 3))


def test_trim_empty_raises():
    with pytest.raises(ValueError):
        trim(blank(2, 2))


def test_split_untiled_name():
    image = solid(2, 2, RED)
    result = split_tiled_image("disc", image)
    assert result == [("disc", image)]


def test_split_tiled_skips_empty_tiles():
    image = blank(4, 2)
    image.putpixel((0, 0), RED)
    result = split_tiled_image("bg_t2", image)
    assert [name for name, _ in result] == ["bgR0C0"]
    assert result[0][1].size == (2, 2)


def test_split_tiled_rows_and_columns():
    image = solid(4, 4, RED)
    names = [name for name, _ in split_tiled_image("bg_t2", image)]
    assert names == ["bgR0C0", "bgR0C1", "bgR1C0", "bgR1C1"]


def test_split_not_divisible():
    with pytest.raises(ValueError):
        split_tiled_image("bg_t3", solid(4, 4, RED))


def test_split_zero_tile_width():
    with pytest.raises(ValueError):
        split_tiled_image("bg_t0", solid(4, 4, RED))


def test_pre_multiply_alpha_invariants():
    image = blank(2, 1)
    image.putpixel((0, 0), (10, 20, 30, 255))
    image.putpixel((1, 0), (255, 255, 255, 0))
    pre_multiply_alpha(image)
    assert image.getpixel((0, 0)) == (10, 20, 30, 255)
    assert image.getpixel((1, 0)) == (0, 0, 0, 0)


def test_region_bytes_anchor_of_untrimmed_sprite():
    region = AtlasRegion(
        atlas_rect=Rect(pos=(5, 3), dims=(2, 4)),
        raw_sprite_rect=Rect(pos=(0, 0), dims=(2, 4)),
        raw_sprite_dims=(2, 4),
    )
    data = region.to_bytes()
    assert len(data) == 12
    left, top, right, bottom, ax2, ay2 = struct.unpack(">HHHHhh", data)
    assert (left, top) == (3, 5)
    assert (ax2, ay2) == (left + right, top + bottom)


def test_pack_places_sprites():
    sprites = [("a", solid(3, 2, RED)), ("b", solid(1, 1, BLUE))]
    atlas = PackedAtlas.pack(sprites, 1)
    assert [name for name, _ in atlas.regions] == ["a", "b"]
    assert is_pow_2(atlas.image.width) and is_pow_2(atlas.image.height)
    for (name, region), (_, sprite) in zip(atlas.regions, sprites):
        assert region.atlas_rect.dims == (sprite.height, sprite.width)
        top, left = region.atlas_rect.pos
        assert atlas.image.getpixel((left, top)) == sprite.getpixel((0, 0))


def test_pack_padded_regions_do_not_overlap():
    sprites = [(f"s{i}", solid(3, 3, RED)) for i in range(5)]
    atlas = PackedAtlas.pack(sprites, 1)
    cells = []
    for _, region in atlas.regions:
        top, left = region.atlas_rect.pos
        height, width = region.atlas_rect.dims
        cells.extend((r, c) for r in range(top - 1, top + height + 1) for c in range(left - 1, left + width + 1))
    assert len(cells) == len(set(cells))


def test_pack_too_large_returns_none():
    assert PackedAtlas.pack([("huge", solid(600, 10, RED))], 1) is None


def test_bytes_read_back_as_atlas():
    sprites = [("a", solid(4, 2, RED)), ("b", solid(2, 6, BLUE))]
    packed = PackedAtlas.pack(sprites, 1)
    data = packed.to_bytes()
    width, height, count = struct.unpack(">HHH", data[:6])
    assert (width, height, count) == (packed.image.width, packed.image.height, 2)
    atlas = Atlas.from_bytes(data)
    assert set(atlas.images) == {0, 1}
    for coords in atlas.images.values():
        assert coords.anchor == ((coords.lt[0] + coords.rb[0]) / 2, (coords.lt[1] + coords.rb[1]) / 2)


def test_form_atlas(tmp_path, capsys):
    src = tmp_path / "sprites_src"
    src.mkdir()
    disc = blank(4, 4)
    disc.putpixel((1, 1), RED)
    disc.save(src / "disc.png")
    solid(4, 2, BLUE).save(src / "bg_t2.png")
    (src / "notes.txt").write_text("ignored")

    out = tmp_path / "sprites"
    names = form_atlas(src, out, 1, True)
    assert names == ["bgR0C0", "bgR0C1", "disc"]

    atlas = Atlas.from_bytes((tmp_path / "sprites.atlas").read_bytes())
    assert len(atlas.images) == 3
    with Image.open(tmp_path / "sprites.png") as image:
        assert atlas.dims == (float(image.width), float(image.height))
    assert "sprites.atlas" in capsys.readouterr().out


def test_form_atlas_out_with_extension(tmp_path):
    with pytest.raises(ValueError):
        form_atlas(tmp_path, tmp_path / "sprites.png", 1, False)


def test_form_atlas_duplicate_names(tmp_path):
    solid(1, 1, RED).save(tmp_path / "a_t1.png")
    solid(1, 1, RED).save(tmp_path / "aR0C0.png")
    with pytest.raises(ValueError):
        form_atlas(tmp_path, tmp_path / "out", 1, False)