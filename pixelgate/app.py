"""The interface an application implements to be run."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pixelgate.app_context import AppContext
from pixelgate.input import KeyCode
from pixelgate.renderer import Renderer

MAX_TIMESTEP = 1.0 / 15.0


class App(ABC):
    """Application behaviour driven by the run loop."""

    def start(self, ctx: AppContext) -> None:
        """Called once when the app starts; does nothing by default."""

    @abstractmethod
    def advance(self, seconds: float, ctx: AppContext) -> None:
        """Advance the app state by ``seconds``."""

    @abstractmethod
    def key_down(self, key: KeyCode, ctx: AppContext) -> None:
        """Called when a key or mouse button is pressed."""

    def key_up(self, key: KeyCode, ctx: AppContext) -> None:
        """Called when a key or mouse button is released; does nothing by default."""

    @abstractmethod
    def render(self, renderer: Renderer, ctx: AppContext) -> None:
        """Draw the app in its current state."""