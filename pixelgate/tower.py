"""A Tower of Hanoi game showing how an app is built on the package."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from pixelgate.app import App
from pixelgate.app_context import AppContext
from pixelgate.app_info import AppInfo
from pixelgate.asset_id import AppAssetId, make_asset_ids
from pixelgate.asset_packer import AssetPacker
from pixelgate.geom import Affine
from pixelgate.input import KeyCode
from pixelgate.renderer import Renderer
from pixelgate.runtime import ASSETS_DIR, run

DISC_COUNT = 5
HELD_MAX_HEIGHT = 35.0
HELD_RISE_SPEED = 200.0
TILE_SIZE = 16

_KEY_PILLARS = {KeyCode.NUM1: 0, KeyCode.NUM2: 1, KeyCode.NUM3: 2}


@dataclass
class HeldDisc:
    """A disc lifted off a pillar, rising towards the top of the screen."""

    value: int
    pos: tuple[float, float]


def disc_sprite(value: int) -> str:
    """Name of the sprite for the disc of the given size."""
    if not 0 <= value < DISC_COUNT:
        raise ValueError(f"illegal disc value {value}")
    return f"Disc{value}"


def disc_pos(pillar_index: int, height_index: int) -> tuple[float, float]:
    """Position of a disc relative to the pillars' base."""
    return (-27.0 + pillar_index * 27.0, 2.5 + height_index * 5.0)


def pillar_for_cursor(cursor: tuple[float, float], dims: tuple[float, float]) -> Optional[int]:
    """Index of the pillar under the cursor, or None if there is none."""
    x = cursor[0] - 0.5 * dims[0]
    y = cursor[1] - 0.5 * dims[1]
    for idx in range(3):
        cursor_x = x + 13.5 - 13.5 * idx
        if -6.0 < cursor_x < 6.0 and -5.5 < y < 9.0:
            return idx
    return None


def _initial_pillars() -> list[list[int]]:
    return [list(range(DISC_COUNT - 1, -1, -1)), [], []]


class TowerGame(App):
    """Move discs between three pillars, never placing a disc on a smaller one."""

    def __init__(
        self,
        assets: AppAssetId,
        pillars: Optional[list[list[int]]] = None,
        held: Optional[HeldDisc] = None,
    ):
        self.assets = assets
        self.pillars = pillars if pillars is not None else _initial_pillars()
        self.held = held

    def _sprite(self, name: str):
        return self.assets.sprite[name]

    def _play(self, ctx: AppContext, sound: str) -> None:
        ctx.audio.play_sound(self.assets.sound[sound])

    def start(self, ctx: AppContext) -> None:
        ctx.audio.loop_music(self.assets.music["Tick"])

    def advance(self, seconds: float, ctx: AppContext) -> None:
        if self.held is not None:
            x, y = self.held.pos
            self.held.pos = (x, min(y + seconds * HELD_RISE_SPEED, HELD_MAX_HEIGHT))

    def key_down(self, key: KeyCode, ctx: AppContext) -> None:
        if key is KeyCode.MOUSE_LEFT:
            index = pillar_for_cursor(ctx.cursor, ctx.dims)
        else:
            index = _KEY_PILLARS.get(key)
        if index is None:
            return

        pillar = self.pillars[index]
        if self.held is not None:
            if not pillar or pillar[-1] > self.held.value:
                pillar.append(self.held.value)
                self.held = None
                self._play(ctx, "Shuffle")
            else:
                self._play(ctx, "Error")
        elif pillar:
            value = pillar.pop()
            self.held = HeldDisc(value, disc_pos(index, len(pillar)))
            self._play(ctx, "Shuffle")
        else:
            self._play(ctx, "Error")

    def render(self, renderer: Renderer, ctx: AppContext) -> None:
        app_width, app_height = ctx.dims
        sprites = renderer.sprite_mode()
        tiles = (self._sprite("BgTileR0C0"), self._sprite("BgTileR0C1"))
        for x in range(math.ceil(app_width / TILE_SIZE)):
            for y in range(math.ceil(app_height / TILE_SIZE)):
                affine = Affine.translate(8.0 + x * TILE_SIZE, 8.0 + y * TILE_SIZE)
                sprites.draw(affine, tiles[(x + y) % 2])

        base = Affine.translate(0.5 * app_width, 0.5 * app_height - 5.0).pre_scale(0.5)
        sprites.draw(base, self._sprite("Pillars"))
        for pillar_index, pillar in enumerate(self.pillars):
            for height_index, value in enumerate(pillar):
                pos = disc_pos(pillar_index, height_index)
                sprites.draw(base.pre_translate(*pos), self._sprite(disc_sprite(value)))
        if self.held is not None:
            sprites.draw(base.pre_translate(*self.held.pos), self._sprite(disc_sprite(self.held.value)))


def _app_info() -> AppInfo:
    return (
        AppInfo.with_max_dims(86.0, 48.0)
        .with_min_dims(64.0, 44.0)
        .with_tile_width(16)
        .with_title("Tower")
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Pack the game's assets and run the game."""
    parser = argparse.ArgumentParser(description="Play the Tower game.")
    parser.add_argument("--src-assets", default="src_assets", help="directory of source assets")
    args = parser.parse_args(argv)

    src = Path(args.src_assets)
    packer = AssetPacker(ASSETS_DIR)
    sprites = packer.sprites(src / "sprites")
    music = packer.music(src / "music")
    sounds = packer.sounds(src / "sounds")
    assets = make_asset_ids(sprites, music, sounds)

    run(_app_info(), TowerGame(assets))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())