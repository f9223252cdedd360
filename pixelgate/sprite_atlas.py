"""Packing sprite images into a texture atlas and its binary description."""

from __future__ import annotations

import math
import os
import re
import struct
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image

from pixelgate.rect_packer import Pack, Rect

MAX_DIM = 512
_TILED_REGEX = re.compile(r"(.*)_t([0-9]+)")
_U32_MAX = 0xFFFFFFFF

PathLike = Union[str, "os.PathLike[str]"]


def rerun_print(check_rerun: bool, path: PathLike) -> None:
    """Print a rerun-if-changed line for ``path`` when ``check_rerun`` is set."""
    if check_rerun:
        print(f"rerun-if-changed={os.fspath(path)}")


@dataclass(frozen=True)
class AtlasRegion:
    """Placement of one trimmed sprite in the atlas."""

    atlas_rect: Rect
    raw_sprite_rect: Rect
    raw_sprite_dims: tuple[int, int]  # (height, width) of the untrimmed sprite

    def to_bytes(self) -> bytes:
        """Big-endian left, top, right, bottom and doubled anchor x, y."""
        left, top = self.atlas_rect.pos[1], self.atlas_rect.pos[0]
        right, bottom = left + self.atlas_rect.dims[1], top + self.atlas_rect.dims[0]
        anchor_x2 = 2 * left + self.raw_sprite_dims[1] - 2 * self.raw_sprite_rect.pos[1]
        anchor_y2 = 2 * top + self.raw_sprite_dims[0] - 2 * self.raw_sprite_rect.pos[0]
        return struct.pack(">HHHHhh", left, top, right, bottom, anchor_x2, anchor_y2)


@lru_cache(maxsize=None)
def _premultiplied(channel: int, alpha: int) -> int:
    return int(math.floor(alpha / 255.0 * channel + 0.5))


def pre_multiply_alpha(image: Image.Image) -> None:
    """Multiply the colour channels of an RGBA image by its alpha, in place."""
    data = iter(image.tobytes())
    image.frombytes(bytes(
        value
        for r, g, b, a in zip(data, data, data, data)
        for value in (_premultiplied(r, a), _premultiplied(g, a), _premultiplied(b, a), a)
    ))


def _has_visible_pixel(image: Image.Image) -> bool:
    return image.getchannel("A").getbbox() is not None


def trim(image: Image.Image) -> Rect:
    """The smallest rectangle holding every pixel with non-zero alpha."""
    bbox = image.getchannel("A").getbbox()
    if bbox is None:
        raise ValueError("image contains no pixels with non-zero alpha")
    left, top, right, bottom = bbox
    return Rect(pos=(top, left), dims=(bottom - top, right - left))


def split_tiled_image(name: str, image: Image.Image) -> list[tuple[str, Image.Image]]:
    """Split an image named ``<prefix>_t<width>`` into its non-empty square tiles."""
    match = _TILED_REGEX.search(name)
    if match is None:
        return [(name, image)]
    prefix, digits = match.groups()
    tile_width = int(digits)
    if tile_width > _U32_MAX:
        raise ValueError("invalid tile width")
    if tile_width == 0:
        raise ValueError("tile width must be positive")
    width, height = image.size
    if width % tile_width or height % tile_width:
        raise ValueError("image dimensions are not divisible by tile width")

    tiles = []
    for row in range(height // tile_width):
        for col in range(width // tile_width):
            left, top = col * tile_width, row * tile_width
            tile = image.crop((left, top, left + tile_width, top + tile_width))
            if _has_visible_pixel(tile):
                tiles.append((f"{prefix}R{row}C{col}", tile))
    return tiles


def _render_sprite(atlas: Image.Image, sprite: Image.Image, dst: Rect, src: Rect) -> None:
    if dst.dims != src.dims:
        raise ValueError("source and destination dimensions differ")
    height, width = src.dims
    top, left = src.pos
    atlas.paste(sprite.crop((left, top, left + width, top + height)), (dst.pos[1], dst.pos[0]))


@dataclass
class PackedAtlas:
    """A packed atlas image and the named regions of the sprites in it."""

    regions: list[tuple[str, AtlasRegion]]
    image: Image.Image

    @staticmethod
    def pack(images: Sequence[tuple[str, Image.Image]], pad: int) -> Optional[PackedAtlas]:
        """Trim and pack named RGBA images with ``pad`` pixels around each, or None if they do not fit."""
        trimmed = [trim(image) for _, image in images]
        padded_dims = [(r.dims[0] + 2 * pad, r.dims[1] + 2 * pad) for r in trimmed]
        pack = Pack.pack(MAX_DIM, padded_dims)
        if pack is None:
            return None

        atlas_image = Image.new("RGBA", (max(pack.width, 1), max(pack.height, 1)), (0, 0, 0, 0))
        regions = []
        for (name, sprite), raw_rect, slot in zip(images, trimmed, pack.rects):
            rect = Rect(
                pos=(slot.pos[0] + pad, slot.pos[1] + pad),
                dims=(slot.dims[0] - 2 * pad, slot.dims[1] - 2 * pad),
            )
            region = AtlasRegion(
                atlas_rect=rect,
                raw_sprite_rect=raw_rect,
                raw_sprite_dims=(sprite.height, sprite.width),
            )
            _render_sprite(atlas_image, sprite, rect, raw_rect)
            regions.append((name, region))
        pre_multiply_alpha(atlas_image)
        return PackedAtlas(regions=regions, image=atlas_image)

    def to_bytes(self) -> bytes:
        """Binary atlas description: width, height, region count, then each region."""
        header = struct.pack(">HHH", self.image.width, self.image.height, len(self.regions))
        return header + b"".join(region.to_bytes() for _, region in self.regions)

    def write(self, path: PathLike) -> None:
        Path(path).write_bytes(self.to_bytes())


def form_atlas(images_dir: PathLike, out: PathLike, pad: int, check_rerun: bool) -> list[str]:
    """Pack every ``.png`` in ``images_dir`` into ``out.png`` and ``out.atlas``; return sprite names by ID."""
    images_dir = Path(images_dir)
    out = Path(out)
    if out.suffix:
        raise ValueError("out must not have an extension, will use .png and .atlas extensions")
    rerun_print(check_rerun, images_dir)
    image_out = out.with_suffix(".png")
    atlas_out = out.with_suffix(".atlas")

    images: list[tuple[str, Image.Image]] = []
    for image_path in images_dir.iterdir():
        if not (image_path.is_file() and image_path.suffix == ".png"):
            continue
        rerun_print(check_rerun, image_path)
        with Image.open(image_path) as opened:
            rgba = opened.convert("RGBA")
        images.extend(split_tiled_image(image_path.stem, rgba))

    images.sort(key=lambda item: item[0])
    names = [name for name, _ in images]
    if len(set(names)) != len(names):
        raise ValueError("should have no duplicate names")

    atlas = PackedAtlas.pack(images, pad)
    if atlas is None:
        raise ValueError("failed to form atlas: sprites do not fit")
    atlas.image.save(image_out)
    rerun_print(check_rerun, image_out)
    atlas.write(atlas_out)
    rerun_print(check_rerun, atlas_out)
    return [name for name, _ in atlas.regions]