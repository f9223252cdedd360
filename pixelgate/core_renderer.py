"""Software drawing of batched sprite vertices onto a pygame surface."""

from __future__ import annotations

import math
from itertools import islice
from typing import Iterable, Iterator, Optional, Sequence

import pygame
from PIL import Image

from pixelgate.render_buffer import FLOATS_PER_VERTEX, RenderBuffer

_QUAD_FLOATS = 6 * FLOATS_PER_VERTEX
_TRANSPARENT = (0, 0, 0, 0)


def _quads(data: Iterable[float]) -> Iterator[tuple[float, ...]]:
    values = iter(data)
    while True:
        quad = tuple(islice(values, _QUAD_FLOATS))
        if len(quad) < _QUAD_FLOATS:
            return
        yield quad


def _vertex(quad: Sequence[float], index: int) -> Sequence[float]:
    start = index * FLOATS_PER_VERTEX
    return quad[start:start + FLOATS_PER_VERTEX]


def _tex_point(vertex: Sequence[float]) -> tuple[float, float]:
    pad_x = 0.5 / vertex[2] if vertex[2] else 0.0
    pad_y = 0.5 / vertex[3] if vertex[3] else 0.0
    return (vertex[4] - pad_x, vertex[5] - pad_y)


class CoreRenderer:
    """Draws premultiplied-alpha sprites from an atlas texture onto ``target``."""

    def __init__(self, target: pygame.Surface, sprites_tex: Image.Image):
        self.target = target
        self.sprites_tex = sprites_tex.convert("RGBA")
        self._scissor: Optional[tuple[int, int, int, int]] = None

    def set_scissor(self, x: int, y: int, w: int, h: int) -> None:
        """Limit drawing to a rectangle given with a bottom-left origin."""
        self._scissor = (x, y, w, h)

    def _clip_rect(self) -> pygame.Rect:
        bounds = self.target.get_rect()
        if self._scissor is None:
            return bounds
        x, y, w, h = self._scissor
        return pygame.Rect(x, bounds.height - y - h, w, h).clip(bounds)

    def clear(self, color: tuple[int, int, int]) -> None:
        """Fill the scissor rectangle with an (r, g, b) colour."""
        self.target.fill(color, self._clip_rect())

    def draw_sprites(self, buffer: RenderBuffer) -> None:
        """Draw every sprite batched in ``buffer`` and empty the batch."""
        clip = self._clip_rect()
        previous = self.target.get_clip()
        self.target.set_clip(clip)
        try:
            for quad in _quads(buffer.vbo_data):
                self._draw_quad(quad, clip)
        finally:
            self.target.set_clip(previous)
        del buffer.vbo_data[:]

    def _screen_point(self, vertex: Sequence[float]) -> tuple[float, float]:
        width, height = self.target.get_size()
        return ((vertex[0] + 1.0) * 0.5 * width, (1.0 - vertex[1]) * 0.5 * height)

    def _draw_quad(self, quad: Sequence[float], clip: pygame.Rect) -> None:
        lt, rt, lb, rb = (_vertex(quad, index) for index in (0, 1, 2, 5))
        d_lt, d_rt, d_lb, d_rb = (self._screen_point(v) for v in (lt, rt, lb, rb))
        du = (d_rt[0] - d_lt[0], d_rt[1] - d_lt[1])
        dv = (d_lb[0] - d_lt[0], d_lb[1] - d_lt[1])
        det = du[0] * dv[1] - dv[0] * du[1]
        if abs(det) < 1e-12:
            return

        s_lt, s_rt, s_lb, s_rb = (_tex_point(v) for v in (lt, rt, lb, rb))
        tex_w, tex_h = self.sprites_tex.size
        sx0 = max(math.floor(min(s_lt[0], s_rb[0])), 0)
        sx1 = min(math.ceil(max(s_lt[0], s_rb[0])), tex_w)
        sy0 = max(math.floor(min(s_lt[1], s_rb[1])), 0)
        sy1 = min(math.ceil(max(s_lt[1], s_rb[1])), tex_h)
        if sx1 <= sx0 or sy1 <= sy0:
            return

        corners = (d_lt, d_rt, d_lb, d_rb)
        x0 = max(math.floor(min(p[0] for p in corners)), clip.left)
        x1 = min(math.ceil(max(p[0] for p in corners)), clip.right)
        y0 = max(math.floor(min(p[1] for p in corners)), clip.top)
        y1 = min(math.ceil(max(p[1] for p in corners)), clip.bottom)
        if x1 <= x0 or y1 <= y0:
            return

        su = (s_rt[0] - s_lt[0], s_rt[1] - s_lt[1])
        sv = (s_lb[0] - s_lt[0], s_lb[1] - s_lt[1])
        a00 = (su[0] * dv[1] - sv[0] * du[1]) / det
        a01 = (sv[0] * du[0] - su[0] * dv[0]) / det
        a10 = (su[1] * dv[1] - sv[1] * du[1]) / det
        a11 = (sv[1] * du[0] - su[1] * dv[0]) / det
        ox, oy = x0 - d_lt[0], y0 - d_lt[1]
        coefficients = (
            a00, a01, a00 * ox + a01 * oy + s_lt[0] - sx0,
            a10, a11, a10 * ox + a11 * oy + s_lt[1] - sy0,
        )

        sprite = self.sprites_tex.crop((sx0, sy0, sx1, sy1)).transform(
            (x1 - x0, y1 - y0),
            Image.Transform.AFFINE,
            coefficients,
            resample=Image.Resampling.BILINEAR,
            fillcolor=_TRANSPARENT,
        )
        flash = min(max(lt[6], 0.0), 1.0)
        if flash > 0.0:
            alpha = sprite.getchannel("A")
            sprite = Image.blend(sprite, Image.merge("RGBA", (alpha, alpha, alpha, alpha)), flash)

        pixels = sprite.tobytes()
        surface = pygame.image.frombuffer(pixels, sprite.size, "RGBA")
        self.target.blit(surface, (x0, y0), special_flags=pygame.BLEND_PREMULTIPLIED)