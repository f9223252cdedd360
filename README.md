# pixelgate

pixelgate is a small layer for 2D pixel-art games built on pygame and
Pillow. It keeps game logic apart from asset handling, rendering, audio and
input.

It has two halves:

* **Asset packing** (`pixelgate.asset_packer`, `pixelgate.sprite_atlas`) –
  sprites (`.png`) are trimmed of transparent padding and packed into one
  power-of-two texture atlas of at most 512×512 pixels, with a compact
  binary index; music and sound files (`.ogg`, optionally with `.mp3`
  fallbacks) are copied into the assets directory under numbered names; and
  a Python module of `IntEnum` classes is generated so that every asset is
  referred to by name.
* **Running an app** (`pixelgate.runtime`) – a resizable pygame window with a
  frame-rate clock, keyboard and mouse input, music and sound playback, and a
  sprite renderer that draws with affine transforms in "app pixel"
  coordinates.

## Packing assets

Place source assets in directories such as:

```
src_assets/sprites/   *.png
src_assets/music/     *.ogg
src_assets/sounds/    *.ogg
```

Each sprite's handle is its file name without the extension. A sprite whose
name ends in `_t<N>` (for example `BgTile_t16.png`) is treated as a sheet of
`N`×`N` tiles; each tile with at least one visible pixel gets its own handle,
the prefix followed by `R<row>C<col>` (`BgTileR0C0`, `BgTileR0C1`, ...).
Handles are numbered in sorted name order. Audio handles are the `.ogg` file
names, numbered in sorted path order.

Pack them from Python with `AssetPacker`:

```python
from pathlib import Path
from pixelgate.asset_packer import AssetPacker

packer = AssetPacker(Path("assets"))
packer.sprites(Path("src_assets/sprites"))   # returns the sprite names by ID
packer.music(Path("src_assets/music"))
packer.sounds(Path("src_assets/sounds"))
packer.gen_asset_id_code(Path("asset_id.py"))
```

This writes `assets/sprites.png`, `assets/sprites.atlas`,
`assets/music<N>.ogg` and `assets/sound<N>.ogg`, and a module `asset_id.py`
defining `SpriteId`, `MusicId`, `SoundId` and `ASSET_ID` (an `AppAssetId`
holding the three enums).

`sprites` must be called before `gen_asset_id_code`; `music` and `sounds` may
be left out when a game has no audio, and each packing method may be called
only once. Call `rerun_if_changed()` before packing to have a
`rerun-if-changed=<path>` line printed for every file read or written, and
`enable_mp3_fallback()` before packing audio to copy the `.mp3` file next to
each `.ogg` one. Asset names must be valid Python identifiers that are not
keywords and do not start with an underscore; otherwise `ValueError` is
raised.

Instead of a generated module, `pixelgate.asset_id.make_asset_ids(sprites,
music, sounds)` builds the same enums at run time from the name lists that
the packing methods return.

The same packing is available from the command line:

```
pixelgate-pack
```

Options: `--assets-dir` (default `assets`), `--sprites`, `--music`,
`--sounds` (defaults `src_assets/sprites`, `src_assets/music`,
`src_assets/sounds`; all three directories must exist), `--out` (default
`asset_id.py`), `--rerun-if-changed` and `--mp3-fallback`.

## Writing an app

Subclass `pixelgate.app.App` and implement `advance`, `key_down` and
`render`; `start` and `key_up` do nothing unless overridden.

```python
from pixelgate.app import App
from pixelgate.app_info import AppInfo
from pixelgate.geom import Affine
from pixelgate.input import KeyCode
from pixelgate.runtime import run

from asset_id import MusicId, SoundId, SpriteId


class MyGame(App):
    def start(self, ctx):
        ctx.audio.loop_music(MusicId.theme)

    def advance(self, seconds, ctx):
        ...

    def key_down(self, key, ctx):
        if key is KeyCode.SPACE:
            ctx.audio.play_sound(SoundId.jump)

    def render(self, renderer, ctx):
        width, height = ctx.dims
        sprites = renderer.sprite_mode()
        sprites.draw(Affine.translate(0.5 * width, 0.5 * height), SpriteId.player)


info = (
    AppInfo.with_max_dims(86.0, 48.0)
    .with_min_dims(64.0, 44.0)
    .with_tile_width(16)
    .with_title("My Game")
)
run(info, MyGame())
```

`run` reads `assets/sprites.atlas`, `assets/sprites.png` and the numbered
sound files from an `assets` directory in the working directory. Only one app
may be run per process; a second call raises `RuntimeError`.

`AppInfo` is immutable: each `with_*` method returns a new value and raises
`ValueError` for out-of-range settings (maximum dimensions 1–3000, window
size 10–3000, target frame rate 20 up to 200, tile width 1–10000).
`with_workload_info()` prints the average and peak frame workload every few
seconds; `with_gl_info()` prints the video driver, SDL and pygame versions at
start-up.

Useful members of the `AppContext` passed to every hook:

* `ctx.dims` and `ctx.cursor` – app size and mouse position in app pixels,
  with the origin at the bottom left;
* `ctx.native_px` and `ctx.native_px_align(x, y)` – the size of a window pixel
  in app pixels, and a position snapped to window pixels;
* `ctx.audio` – `play_sound`, `play_music`, `loop_music`, `stop_music`;
* `ctx.request_fullscreen()`, `ctx.cancel_fullscreen()`, `ctx.is_fullscreen`;
* `ctx.close()` – end the run loop;
* `ctx.cookie` and `ctx.set_cookie(data)` – up to 699 bytes of data.

Keys arrive as `pixelgate.input.KeyCode` members: `A`–`Z`, `NUM0`–`NUM9`,
the arrow keys, `RETURN`, `SPACE`, `BACKSPACE`, `DELETE`, and `MOUSE_LEFT`,
`MOUSE_RIGHT`, `MOUSE_MIDDLE`. A held key is reported once until released.

`pixelgate.geom.Affine` composes transforms: `pre_*` methods apply the new
step first (`base.pre_translate(x, y)` moves within the base frame), `post_*`
methods apply it last. `SpriteRenderer.draw_flash` blends a sprite towards
white by a ratio clamped to 0–1. `Renderer.clear(color)` fills the drawing
area with an (r, g, b) colour.

## Example game

`pixelgate.tower` is a Tower of Hanoi game. Press `1`, `2`, `3` or click a
pillar to pick up and drop discs; a disc may only rest on a larger one.

```
pixelgate-tower --src-assets src_assets
```

It packs the assets from `--src-assets` (default `src_assets`) into `assets`
and then runs. It needs sprites named `Disc0`–`Disc4`, `Pillars` and a tile
sheet giving `BgTileR0C0` and `BgTileR0C1`, music named `Tick`, and sounds
named `Shuffle` and `Error`. These asset files are not included in the
package.

## What pixelgate does not do

* Sprites are drawn in software with Pillow onto the pygame window surface;
  there is no GPU renderer and no shader pipeline.
* Cookie data lives only in memory for the running app; it is not saved
  anywhere.
* The packer produces assets for the pygame runtime only; it does not
  generate web pages or scripts for running a game in a browser.
* There is no text rendering and no game controller input.