import struct
from enum import IntEnum

import pytest

from pixelgate.app_info import AppInfo
from pixelgate.atlas import Atlas
from pixelgate.geom import Affine
from pixelgate.render_buffer import FLOATS_PER_VERTEX, RenderBuffer
from pixelgate.renderer import Renderer


class SpriteId(IntEnum):
    Disc = 0


class RecordingCore:
    def __init__(self):
        self.scissors = []
        self.clears = []
        self.batches = []

    def set_scissor(self, x, y, w, h):
        self.scissors.append((x, y, w, h))

    def clear(self, color):
        self.clears.append(color)

    def draw_sprites(self, buffer):
        self.batches.append(list(buffer.vbo_data))


def make_renderer(native=(800, 600)):
    data = struct.pack(">HHH", 16, 16, 1) + struct.pack(">HHHHhh", 1, 1, 5, 5, 6, 6)
    info = AppInfo.with_max_dims(86.0, 48.0).with_min_dims(64.0, 44.0).with_tile_width(16)
    core = RecordingCore()
    return Renderer(RenderBuffer(info, native, Atlas.from_bytes(data)), core), core


def expected_scissor(renderer):
    dims = renderer.buffer.dims
    return (*dims.native_pre_pad, *dims.used_native_dims)


def test_construction_sets_scissor():
    renderer, core = make_renderer((1000, 700))
    assert core.scissors == [expected_scissor(renderer)]


def test_set_screen_dims_only_updates_on_change():
    renderer, core = make_renderer()
    old_px = renderer.native_px()
    renderer.set_screen_dims((800, 600))
    assert len(core.scissors) == 1
    renderer.set_screen_dims((400, 300))
    assert len(core.scissors) == 2
    assert core.scissors[-1] == expected_scissor(renderer)
    assert renderer.native_px() == pytest.approx(2 * old_px)


def test_native_px_is_inverse_pixel_scalar():
    renderer, _ = make_renderer()
    assert renderer.native_px() * renderer.buffer.dims.pixel_scalar == pytest.approx(1.0)
    assert renderer.native_px() <= 1.0


def test_app_dims_and_to_app_pos_follow_render_dims():
    renderer, _ = make_renderer((1000, 700))
    dims = renderer.buffer.dims
    assert renderer.app_dims() == dims.dims
    assert renderer.to_app_pos(13, 250) == dims.to_app_pos(13, 250)


def test_sprite_draws_are_batched_until_flush():
    renderer, core = make_renderer()
    sprites = renderer.sprite_mode()
    sprites.draw(Affine.translate(10.0, 10.0), SpriteId.Disc)
    sprites.draw_flash(Affine.id(), SpriteId.Disc, 0.5)
    assert core.batches == []
    renderer.flush()
    assert len(core.batches) == 1
    batch = core.batches[0]
    assert len(batch) == 2 * 6 * FLOATS_PER_VERTEX
    flashes = batch[FLOATS_PER_VERTEX - 1::FLOATS_PER_VERTEX]
    assert flashes == [0.0] * 6 + [0.5] * 6


def test_clear_flushes_before_clearing():
    renderer, core = make_renderer()
    renderer.sprite_mode().draw(Affine.id(), SpriteId.Disc)
    renderer.clear((1, 2, 3))
    assert len(core.batches) == 1
    assert core.clears == [(1, 2, 3)]
    assert len(renderer.buffer.vbo_data) == 0