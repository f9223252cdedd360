"""Reading the binary sprite atlas description at run time."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import BinaryIO

PAD = 1


@dataclass(frozen=True)
class ImageCoords:
    """Pixel coordinates of a sprite in the atlas, relative to the top-left origin."""

    lt: tuple[float, float]  # left, top
    rb: tuple[float, float]  # right, bottom
    anchor: tuple[float, float]  # anchor x, y


def _read(stream: BinaryIO, fmt: str) -> tuple:
    size = struct.calcsize(fmt)
    data = stream.read(size)
    if len(data) != size:
        raise EOFError("truncated atlas data")
    return struct.unpack(fmt, data)


@dataclass(frozen=True)
class Atlas:
    """Atlas dimensions and the coordinates of each sprite keyed by its ID."""

    dims: tuple[float, float]
    images: dict[int, ImageCoords]

    @classmethod
    def read(cls, stream: BinaryIO) -> Atlas:
        """Read an atlas description from a binary stream."""
        width, height, count = _read(stream, ">HHH")
        images = {}
        for sprite_id in range(count):
            left, top, right, bottom, anchor_x2, anchor_y2 = _read(stream, ">HHHHhh")
            if left < PAD or top < PAD:
                raise ValueError(f"sprite {sprite_id} lies outside the atlas padding")
            images[sprite_id] = ImageCoords(
                lt=(float(left - PAD), float(top - PAD)),
                rb=(float(right + PAD), float(bottom + PAD)),
                anchor=(0.5 * anchor_x2, 0.5 * anchor_y2),
            )
        return cls(dims=(float(width), float(height)), images=images)

    @classmethod
    def from_bytes(cls, data: bytes) -> Atlas:
        return cls.read(io.BytesIO(data))