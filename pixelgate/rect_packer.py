"""Packing of rectangles into power-of-two sized regions."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from operator import or_
from typing import Optional, Sequence

MAX_MAX_DIM = 10_000


class BitGrid:
    """A grid of occupied cells into which rectangles are placed first-fit."""

    def __init__(self, height: int, width: int):
        self.height = height
        self.width = width
        self._rows = [0] * height

    def fill_rect(self, height: int, width: int) -> Optional[tuple[int, int]]:
        """Occupy the first free ``height`` x ``width`` spot, returning its (row, col)."""
        block = (1 << width) - 1
        for row in range(self.height - height + 1):
            occupied = reduce(or_, self._rows[row:row + height], 0)
            for col in range(self.width - width + 1):
                mask = block << col
                if not occupied & mask:
                    for r in range(row, row + height):
                        self._rows[r] |= mask
                    return (row, col)
        return None


@dataclass(frozen=True)
class Rect:
    """A rectangle: ``pos`` is the upper-left (row, col), ``dims`` is (height, width)."""

    pos: tuple[int, int]
    dims: tuple[int, int]


def log_ceil_pow_2(value: int) -> int:
    """Smallest ``log`` with ``2 ** log >= value``."""
    for log in range(32):
        if 1 << log >= value:
            return log
    raise ValueError("value is too large")


def ceil_pow_2(value: int) -> int:
    return 1 << log_ceil_pow_2(value)


def is_pow_2(value: int) -> bool:
    return ceil_pow_2(value) == value


def _overall_dims(rects: Sequence[Rect]) -> tuple[int, int]:
    return (
        max((ceil_pow_2(r.pos[0] + r.dims[0]) for r in rects), default=0),
        max((ceil_pow_2(r.pos[1] + r.dims[1]) for r in rects), default=0),
    )


@dataclass
class Pack:
    """Result of packing: rectangles in input order and overall (height, width)."""

    rects: list[Rect] = field(default_factory=list)
    dims: tuple[int, int] = (0, 0)

    @property
    def height(self) -> int:
        return self.dims[0]

    @property
    def width(self) -> int:
        return self.dims[1]

    def area(self) -> int:
        return self.height * self.width

    @staticmethod
    def pack(max_dim: int, rects: Sequence[tuple[int, int]]) -> Optional[Pack]:
        """Pack (height, width) rectangles into the smallest area, or None if impossible."""
        if not (max_dim <= MAX_MAX_DIM and is_pow_2(max_dim)):
            raise ValueError(f"invalid max_dim {max_dim}")
        if not all(h > 0 and w > 0 for h, w in rects):
            raise ValueError("rectangle dimensions must be positive")
        if any(h > max_dim or w > max_dim for h, w in rects):
            return None

        ordered = sorted(enumerate(rects), key=lambda item: -(item[1][0] * item[1][1]))
        order = [idx for idx, _ in ordered]
        ordered_dims = [dims for _, dims in ordered]

        candidates = (
            _try_pack_rects(max_dim, 1 << lw, ordered_dims)
            for lw in range(log_ceil_pow_2(max_dim) + 1)
        )
        packs = [pack for pack in candidates if pack is not None]
        if not packs:
            return None
        best = min(packs, key=Pack.area)
        restored: list[Optional[Rect]] = [None] * len(best.rects)
        for idx, rect in zip(order, best.rects):
            restored[idx] = rect
        best.rects = [rect for rect in restored if rect is not None]
        return best


def _try_pack_rects(max_height: int, width: int, ordered_rects: Sequence[tuple[int, int]]) -> Optional[Pack]:
    if any(h > max_height or w > width for h, w in ordered_rects):
        return None
    if sum(h * w for h, w in ordered_rects) > max_height * width:
        return None

    grid = BitGrid(max_height, width)
    result = []
    for h, w in ordered_rects:
        pos = grid.fill_rect(h, w)
        if pos is None:
            return None
        result.append(Rect(pos=pos, dims=(h, w)))
    return Pack(rects=result, dims=_overall_dims(result))