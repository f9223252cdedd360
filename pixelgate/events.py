"""Translating window events into app key and cursor callbacks."""

from __future__ import annotations

import string
from typing import Any, Iterable, Optional, Protocol

import pygame

from pixelgate.app import App
from pixelgate.app_context import AppContext
from pixelgate.input import KeyCode

_KEY_MAP = {
    **{getattr(pygame, f"K_{letter.lower()}"): KeyCode[letter] for letter in string.ascii_uppercase},
    **{getattr(pygame, f"K_{digit}"): KeyCode[f"NUM{digit}"] for digit in string.digits},
    pygame.K_RIGHT: KeyCode.RIGHT,
    pygame.K_LEFT: KeyCode.LEFT,
    pygame.K_DOWN: KeyCode.DOWN,
    pygame.K_UP: KeyCode.UP,
    pygame.K_RETURN: KeyCode.RETURN,
    pygame.K_SPACE: KeyCode.SPACE,
    pygame.K_BACKSPACE: KeyCode.BACKSPACE,
    pygame.K_DELETE: KeyCode.DELETE,
}

_MOUSE_MAP = {
    pygame.BUTTON_LEFT: KeyCode.MOUSE_LEFT,
    pygame.BUTTON_RIGHT: KeyCode.MOUSE_RIGHT,
    pygame.BUTTON_MIDDLE: KeyCode.MOUSE_MIDDLE,
}


class PositionMapper(Protocol):
    def to_app_pos(self, raw_x: int, raw_y: int) -> tuple[float, float]: ...


def pygame_to_key(key: int) -> Optional[KeyCode]:
    """The key code for a pygame key constant, or None if it is not handled."""
    return _KEY_MAP.get(key)


def mouse_button_to_key(button: int) -> Optional[KeyCode]:
    """The key code for a pygame mouse button number, or None if it is not handled."""
    return _MOUSE_MAP.get(button)


class EventHandler:
    """Tracks held keys and forwards presses and releases to the app."""

    def __init__(self) -> None:
        self.held_keys: set[KeyCode] = set()

    def _press(self, key: Optional[KeyCode], app: App, ctx: AppContext) -> None:
        if key is not None and key not in self.held_keys:
            self.held_keys.add(key)
            app.key_down(key, ctx)

    def _release(self, key: Optional[KeyCode], app: App, ctx: AppContext) -> None:
        if key is not None and key in self.held_keys:
            self.held_keys.discard(key)
            app.key_up(key, ctx)

    def process_events(
        self,
        events: Iterable[Any],
        app: App,
        ctx: AppContext,
        renderer: PositionMapper,
    ) -> bool:
        """Handle the events in order; return False once the app is to close."""
        for event in events:
            kind = event.type
            if kind == pygame.QUIT:
                ctx.close()
            elif kind == pygame.KEYDOWN:
                self._press(pygame_to_key(event.key), app, ctx)
            elif kind == pygame.KEYUP:
                self._release(pygame_to_key(event.key), app, ctx)
            elif kind == pygame.MOUSEMOTION:
                ctx.set_cursor(renderer.to_app_pos(*event.pos))
            elif kind == pygame.MOUSEBUTTONDOWN:
                ctx.set_cursor(renderer.to_app_pos(*event.pos))
                self._press(mouse_button_to_key(event.button), app, ctx)
            elif kind == pygame.MOUSEBUTTONUP:
                ctx.set_cursor(renderer.to_app_pos(*event.pos))
                self._release(mouse_button_to_key(event.button), app, ctx)
            if ctx.take_close_request():
                return False
        return True