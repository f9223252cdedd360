import pytest

from pixelgate.app_context import AppContext
from pixelgate.asset_id import make_asset_ids
from pixelgate.input import KeyCode
from pixelgate.tower import (
    HeldDisc,
    TowerGame,
    disc_pos,
    disc_sprite,
    pillar_for_cursor,
)

SPRITES = ["BgTileR0C0", "BgTileR0C1", "Disc0", "Disc1", "Disc2", "Disc3", "Disc4", "Pillars"]
ASSETS = make_asset_ids(SPRITES, ["Tick"], ["Error", "Shuffle"])


class RecordingAudio:
    def __init__(self):
        self.calls = []

    def play_sound(self, sound):
        self.calls.append(("sound", sound))

    def play_music(self, music, loops):
        self.calls.append(("music", music, loops))

    def stop_music(self):
        self.calls.append(("stop",))


class RecordingSprites:
    def __init__(self):
        self.drawn = []

    def draw(self, affine, sprite):
        self.drawn.append((affine, sprite))


class RecordingRenderer:
    def __init__(self):
        self.sprites = RecordingSprites()

    def sprite_mode(self):
        return self.sprites


def make_ctx(dims=(86.0, 48.0)):
    audio = RecordingAudio()
    return AppContext(audio, dims, 1.0), audio


def sound(name):
    return ("sound", int(ASSETS.sound[name]))


def test_disc_sprite_names():
    assert [disc_sprite(v) for v in range(5)] == ["Disc0", "Disc1", "Disc2", "Disc3", "Disc4"]


@pytest.mark.parametrize("value", [-1, 5, 9])
def test_disc_sprite_rejects_illegal_value(value):
    with pytest.raises(ValueError):
        disc_sprite(value)


def test_disc_pos_first_slot():
    assert disc_pos(0, 0) == (-27.0, 2.5)


def test_disc_pos_spacing_is_uniform():
    x0, y0 = disc_pos(0, 0)
    x1, y1 = disc_pos(1, 1)
    x2, y2 = disc_pos(2, 2)
    assert x1 - x0 == x2 - x1
    assert y1 - y0 == y2 - y1


def test_pillar_for_cursor_center_is_middle_pillar():
    assert pillar_for_cursor((43.0, 24.0), (86.0, 48.0)) == 1


def test_pillar_for_cursor_outside_returns_none():
    assert pillar_for_cursor((0.0, 0.0), (86.0, 48.0)) is None


def test_start_loops_tick_music():
    ctx, audio = make_ctx()
    TowerGame(ASSETS).start(ctx)
    assert audio.calls == [("music", int(ASSETS.music["Tick"]), True)]


def test_initial_pillars():
    game = TowerGame(ASSETS)
    assert game.pillars == [[4, 3, 2, 1, 0], [], []]
    assert game.held is None


def test_pick_up_top_disc():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS)
    game.key_down(KeyCode.NUM1, ctx)
    assert game.pillars[0] == [4, 3, 2, 1]
    assert game.held == HeldDisc(0, disc_pos(0, 4))
    assert audio.calls == [sound("Shuffle")]


def test_drop_on_empty_pillar():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS)
    game.key_down(KeyCode.NUM1, ctx)
    game.key_down(KeyCode.NUM2, ctx)
    assert game.pillars == [[4, 3, 2, 1], [0], []]
    assert game.held is None
    assert audio.calls == [sound("Shuffle"), sound("Shuffle")]


def test_drop_on_smaller_disc_is_refused():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS, pillars=[[4, 3, 2], [0], []], held=HeldDisc(1, (0.0, 0.0)))
    game.key_down(KeyCode.NUM2, ctx)
    assert game.pillars == [[4, 3, 2], [0], []]
    assert game.held == HeldDisc(1, (0.0, 0.0))
    assert audio.calls == [sound("Error")]


def test_pick_from_empty_pillar_is_error():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS)
    game.key_down(KeyCode.NUM3, ctx)
    assert game.held is None
    assert audio.calls == [sound("Error")]


def test_unrelated_key_does_nothing():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS)
    game.key_down(KeyCode.A, ctx)
    assert game.pillars == [[4, 3, 2, 1, 0], [], []]
    assert audio.calls == []


def test_mouse_click_uses_cursor():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS, pillars=[[], [2, 1], []])
    ctx.set_cursor((43.0, 24.0))
    game.key_down(KeyCode.MOUSE_LEFT, ctx)
    assert game.pillars == [[], [2], []]
    assert game.held is not None and game.held.value == 1


def test_mouse_click_off_pillars_does_nothing():
    ctx, audio = make_ctx()
    game = TowerGame(ASSETS)
    ctx.set_cursor((0.0, 0.0))
    game.key_down(KeyCode.MOUSE_LEFT, ctx)
    assert audio.calls == []
    assert game.held is None


def test_advance_raises_held_disc_and_caps():
    ctx, _ = make_ctx()
    game = TowerGame(ASSETS, held=HeldDisc(2, (0.0, 10.0)))
    game.advance(0.01, ctx)
    assert game.held.pos[0] == 0.0
    assert 10.0 < game.held.pos[1] <= 35.0
    game.advance(10.0, ctx)
    assert game.held.pos == (0.0, 35.0)


def test_advance_without_held_disc_keeps_state():
    ctx, _ = make_ctx()
    game = TowerGame(ASSETS)
    game.advance(1.0, ctx)
    assert game.held is None
    assert game.pillars == [[4, 3, 2, 1, 0], [], []]


def test_render_draws_pillars_and_every_disc():
    ctx, _ = make_ctx()
    game = TowerGame(ASSETS, pillars=[[4, 3], [2], [1]], held=HeldDisc(0, (0.0, 20.0)))
    renderer = RecordingRenderer()
    game.render(renderer, ctx)
    drawn = [sprite for _, sprite in renderer.sprites.drawn]
    assert drawn.count(ASSETS.sprite["Pillars"]) == 1
    disc_draws = [s for s in drawn if s.name.startswith("Disc")]
    assert sorted(s.name for s in disc_draws) == ["Disc0", "Disc1", "Disc2", "Disc3", "Disc4"]
    assert drawn[-1] == ASSETS.sprite["Disc0"]


def test_render_background_tiles_alternate():
    ctx, _ = make_ctx()
    renderer = RecordingRenderer()
    TowerGame(ASSETS).render(renderer, ctx)
    tiles = [s for _, s in renderer.sprites.drawn if s.name.startswith("BgTile")]
    assert tiles[0] == ASSETS.sprite["BgTileR0C0"]
    assert tiles[1] == ASSETS.sprite["BgTileR0C1"]
    first_affine = renderer.sprites.drawn[0][0]
    assert first_affine.apply((0.0, 0.0)) == (8.0, 8.0)