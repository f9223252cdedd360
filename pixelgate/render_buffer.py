"""Screen dimension bookkeeping and batching of sprite vertex data."""

from __future__ import annotations

import math
import struct
from array import array
from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Callable, Optional, Protocol

from pixelgate.app_info import AppInfo
from pixelgate.atlas import Atlas
from pixelgate.geom import Affine

FLOATS_PER_VERTEX = 7


class Mode(Enum):
    """Render modes; batched data is flushed whenever the mode changes."""

    SPRITE = auto()


class SpriteDrawer(Protocol):
    def draw_sprites(self, buffer: RenderBuffer) -> None: ...


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else math.inf


def _snap(value: float, tile: float, rounder: Callable[[float], int]) -> float:
    if math.isinf(value):
        return value
    return rounder(value * tile) / tile


def _half_over(value: float) -> float:
    return _f32(0.5 / value) if value else math.inf


@dataclass
class RenderDims:
    """How app pixels map onto the native window pixels."""

    min_dims: tuple[float, float]
    max_dims: tuple[float, float]
    tile_width: Optional[int]
    native_dims: tuple[int, int]
    pixel_scalar: float
    native_pre_pad: tuple[int, int]
    used_native_dims: tuple[int, int]
    dims: tuple[float, float]

    @staticmethod
    def compute(
        min_dims: tuple[float, float],
        max_dims: tuple[float, float],
        tile_width: Optional[int],
        native_dims: tuple[int, int],
    ) -> RenderDims:
        native_w, native_h = native_dims
        from_min = min(_ratio(native_w, min_dims[0]), _ratio(native_h, min_dims[1]))
        from_max = max(native_w / max_dims[0], native_h / max_dims[1])
        if tile_width is not None:
            from_min = _snap(from_min, float(tile_width), math.floor)
            from_max = _snap(from_max, float(tile_width), math.ceil)
        pixel_scalar = max(min(from_min, from_max), 1.0)
        used = (
            min(native_w, math.floor(max_dims[0] * pixel_scalar)),
            min(native_h, math.floor(max_dims[1] * pixel_scalar)),
        )
        pre_pad = ((native_w - used[0]) // 2, (native_h - used[1]) // 2)
        return RenderDims(
            min_dims=min_dims,
            max_dims=max_dims,
            tile_width=tile_width,
            native_dims=(native_w, native_h),
            pixel_scalar=pixel_scalar,
            native_pre_pad=pre_pad,
            used_native_dims=used,
            dims=(used[0] / pixel_scalar, used[1] / pixel_scalar),
        )

    def set_native_dims(self, native_dims: tuple[int, int]) -> None:
        """Recompute everything for a new native window size."""
        updated = RenderDims.compute(self.min_dims, self.max_dims, self.tile_width, native_dims)
        for f in fields(self):
            setattr(self, f.name, getattr(updated, f.name))

    def to_app_pos(self, raw_x: int, raw_y: int) -> tuple[float, float]:
        """Convert a native window position (origin top-left) to app coordinates."""
        flipped_y = self.native_dims[1] - raw_y
        return (
            (raw_x - self.native_pre_pad[0]) / self.pixel_scalar,
            (flipped_y - self.native_pre_pad[1]) / self.pixel_scalar,
        )


class RenderBuffer:
    """Vertex data waiting to be drawn, with the atlas and dimensions it refers to."""

    def __init__(self, info: AppInfo, native_dims: tuple[int, int], sprite_atlas: Atlas):
        self.sprite_atlas = sprite_atlas
        self.mode = Mode.SPRITE
        self.vbo_data = array("f")
        self.dims = RenderDims.compute(info.min_dims, info.max_dims, info.tile_width, native_dims)

    def _change_mode(self, core: SpriteDrawer, mode: Mode) -> None:
        if mode is not self.mode:
            self.flush(core)
            self.mode = mode

    def flush(self, core: SpriteDrawer) -> None:
        """Draw any batched data and empty the batch."""
        if self.vbo_data:
            if self.mode is Mode.SPRITE:
                core.draw_sprites(self)
            del self.vbo_data[:]

    def append_sprite(self, core: SpriteDrawer, affine: Affine, sprite_id: int, flash_ratio: float) -> None:
        self._change_mode(core, Mode.SPRITE)
        append_sprite_vertices(self, affine, sprite_id, flash_ratio)


def _add_vertex(vbo: array, pad, flash_ratio: float, src, dst) -> None:
    vbo.extend((
        dst[0],
        dst[1],
        _half_over(pad[0]),
        _half_over(pad[1]),
        _f32(src[0] + pad[0]),
        _f32(src[1] + pad[1]),
        flash_ratio,
    ))


def append_sprite_vertices(buffer: RenderBuffer, affine: Affine, sprite_id: int, flash_ratio: float) -> None:
    """Append the two triangles of a sprite, in clip coordinates, to the buffer."""
    if buffer.mode is not Mode.SPRITE:
        raise RuntimeError("buffer is not in sprite mode")
    coords = buffer.sprite_atlas.images[sprite_id]
    dims = buffer.dims
    affine = affine.post_scale(dims.pixel_scalar)
    flash = min(max(_f32(flash_ratio), 0.0), 1.0)

    pad = (
        _half_over(_f32(affine.mat.col_0().length())),
        _half_over(_f32(affine.mat.col_1().length())),
    )

    lt, rb = coords.lt, coords.rb
    lb, rt = (lt[0], rb[1]), (rb[0], lt[1])
    anchor = coords.anchor

    dst_lt = (lt[0] - anchor[0], -(lt[1] - anchor[1]))
    dst_rb = (rb[0] - anchor[0], -(rb[1] - anchor[1]))
    dst_lb = (dst_lt[0], dst_rb[1])
    dst_rt = (dst_rb[0], dst_lt[1])

    native_w, native_h = dims.native_dims
    affine = affine.post_translate(
        dims.native_pre_pad[0] - 0.5 * native_w,
        dims.native_pre_pad[1] - 0.5 * native_h,
    ).post_scale_axes(2.0 / native_w, 2.0 / native_h)

    def to_clip(point):
        x, y = affine.apply(point)
        return (_f32(x), _f32(y))

    aff_lt, aff_rb, aff_lb, aff_rt = (to_clip(p) for p in (dst_lt, dst_rb, dst_lb, dst_rt))

    vbo = buffer.vbo_data
    for src, dst in ((lt, aff_lt), (rt, aff_rt), (lb, aff_lb), (rt, aff_rt), (lb, aff_lb), (rb, aff_rb)):
        _add_vertex(vbo, pad, flash, src, dst)