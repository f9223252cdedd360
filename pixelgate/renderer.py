"""Drawing to the screen in app coordinates."""

from __future__ import annotations

from typing import Protocol

from pixelgate.geom import Affine
from pixelgate.render_buffer import RenderBuffer


class CoreBackend(Protocol):
    def set_scissor(self, x: int, y: int, w: int, h: int) -> None: ...

    def clear(self, color: tuple[int, int, int]) -> None: ...

    def draw_sprites(self, buffer: RenderBuffer) -> None: ...


class Renderer:
    """Draws in app pixels with the origin at the bottom-left, +X right and +Y up.

    Switching render modes flushes batched data, so keep switches few.
    """

    def __init__(self, buffer: RenderBuffer, core: CoreBackend):
        self.buffer = buffer
        self.core = core
        self._set_scissor()

    def clear(self, color: tuple[int, int, int]) -> None:
        """Clear the screen with an (r, g, b) colour."""
        self.buffer.flush(self.core)
        self.core.clear(color)

    def sprite_mode(self) -> SpriteRenderer:
        """Enter sprite mode."""
        return SpriteRenderer(self)

    def app_dims(self) -> tuple[float, float]:
        return self.buffer.dims.dims

    def native_px(self) -> float:
        return 1.0 / self.buffer.dims.pixel_scalar

    def to_app_pos(self, raw_x: int, raw_y: int) -> tuple[float, float]:
        return self.buffer.dims.to_app_pos(raw_x, raw_y)

    def flush(self) -> None:
        self.buffer.flush(self.core)

    def set_screen_dims(self, dims: tuple[int, int]) -> None:
        """Adapt to a new native window size."""
        dims = (int(dims[0]), int(dims[1]))
        if dims != self.buffer.dims.native_dims:
            self.buffer.dims.set_native_dims(dims)
            self._set_scissor()

    def _set_scissor(self) -> None:
        dims = self.buffer.dims
        self.core.set_scissor(
            dims.native_pre_pad[0],
            dims.native_pre_pad[1],
            dims.used_native_dims[0],
            dims.used_native_dims[1],
        )


class SpriteRenderer:
    """Sprite drawing mode of a ``Renderer``."""

    def __init__(self, renderer: Renderer):
        self._renderer = renderer

    def draw(self, affine: Affine, sprite: int) -> None:
        """Draw ``sprite`` transformed by ``affine`` from the origin."""
        self.draw_flash(affine, sprite, 0.0)

    def draw_flash(self, affine: Affine, sprite: int, flash_ratio: float) -> None:
        """Draw ``sprite`` blended with white by ``flash_ratio``, clamped to 0..1."""
        renderer = self._renderer
        renderer.buffer.append_sprite(renderer.core, affine, int(sprite), flash_ratio)