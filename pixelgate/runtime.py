"""Running an app in a window: setup, the frame loop and shutdown."""

from __future__ import annotations

import itertools
import os
import threading
from pathlib import Path

import pygame
from PIL import Image

from pixelgate.app import MAX_TIMESTEP, App
from pixelgate.app_context import AppContext
from pixelgate.app_info import AppInfo
from pixelgate.atlas import Atlas
from pixelgate.clock import AppClock
from pixelgate.core_audio import CoreAudio
from pixelgate.core_renderer import CoreRenderer
from pixelgate.events import EventHandler
from pixelgate.render_buffer import RenderBuffer
from pixelgate.renderer import Renderer

ASSETS_DIR = Path("assets")


class _OnceFlag:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._set = False

    def swap(self) -> bool:
        with self._lock:
            previous, self._set = self._set, True
            return previous


_APP_CREATED = _OnceFlag()


def mark_app_created() -> None:
    """Record that an app was created; raise if one already was."""
    if _APP_CREATED.swap():
        raise RuntimeError("Cannot construct more than one App.")


def _count_assets(assets_dir: Path, prefix: str) -> int:
    return next(n for n in itertools.count() if not (Path(assets_dir) / f"{prefix}{n}.ogg").is_file())


def _build_renderer(info: AppInfo, target: pygame.Surface, assets_dir: Path = ASSETS_DIR) -> Renderer:
    assets_dir = Path(assets_dir)
    with (assets_dir / "sprites.atlas").open("rb") as stream:
        atlas = Atlas.read(stream)
    with Image.open(assets_dir / "sprites.png") as image:
        texture = image.convert("RGBA")
    buffer = RenderBuffer(info, info.window_pixels, atlas)
    return Renderer(buffer, CoreRenderer(target, texture))


def _print_display_info() -> None:
    print(f"Video driver: {pygame.display.get_driver()}")
    print(f"SDL version: {'.'.join(str(part) for part in pygame.get_sdl_version())}")
    print(f"pygame version: {pygame.version.ver}")


def _try_set_mode(size: tuple[int, int], flags: int) -> bool:
    try:
        pygame.display.set_mode(size, flags)
    except pygame.error:
        return False
    return True


def _resolve_fullscreen(info: AppInfo, ctx: AppContext) -> None:
    if not ctx.is_fullscreen and ctx.desires_fullscreen:
        ctx.set_is_fullscreen(_try_set_mode((0, 0), pygame.FULLSCREEN))
    elif ctx.is_fullscreen and not ctx.desires_fullscreen:
        ctx.set_is_fullscreen(not _try_set_mode(info.window_pixels, pygame.RESIZABLE))


def _run_loop(info: AppInfo, app: App) -> None:
    pygame.mixer.init()
    pygame.mixer.set_num_channels(4)
    screen = pygame.display.set_mode(info.window_pixels, pygame.RESIZABLE)
    pygame.display.set_caption(info.title)

    renderer = _build_renderer(info, screen)
    core = renderer.core
    audio = CoreAudio(_count_assets(ASSETS_DIR, "sound"), assets_dir=ASSETS_DIR)
    ctx = AppContext(audio, renderer.app_dims(), renderer.native_px())

    if info.print_gl_info:
        _print_display_info()

    app.start(ctx)
    clock = AppClock(info)
    events = EventHandler()

    while True:
        screen = pygame.display.get_surface()
        screen.fill((0, 0, 0))
        width, height = screen.get_size()
        if width > 0 and height > 0:
            core.target = screen
            renderer.set_screen_dims((width, height))
            ctx.set_dims(renderer.app_dims(), renderer.native_px())
            app.render(renderer, ctx)
            renderer.flush()
        pygame.display.flip()

        elapsed = clock.step()
        _resolve_fullscreen(info, ctx)

        if not events.process_events(pygame.event.get(), app, ctx, renderer):
            break
        app.advance(min(elapsed, MAX_TIMESTEP), ctx)
        if ctx.take_close_request():
            break


def run(info: AppInfo, app: App) -> None:
    """Open a window and run ``app`` until it closes; may be called only once."""
    mark_app_created()
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.mixer.pre_init(44100, -16, 2, 1024)
    pygame.init()
    try:
        _run_loop(info, app)
    finally:
        pygame.quit()