"""Initialization settings for running an app."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class AppInfo:
    """Initialization settings, built by chaining ``with_*`` methods."""

    max_dims: tuple[float, float]
    window_pixels: tuple[int, int] = (800, 600)
    min_dims: tuple[float, float] = (0.0, 0.0)
    tile_width: Optional[int] = None
    title: str = "untitled app"
    target_fps: float = 60.0
    print_workload_info: bool = False
    print_gl_info: bool = False

    @classmethod
    def with_max_dims(cls, max_width: float, max_height: float) -> AppInfo:
        """Start settings with the maximum app dimensions in app pixels."""
        if not 1.0 <= max_width <= 3000.0:
            raise ValueError(f"unrealistic max_width: {max_width}")
        if not 1.0 <= max_height <= 3000.0:
            raise ValueError(f"unrealistic max_height: {max_height}")
        return cls(max_dims=(max_width, max_height))

    def with_min_dims(self, min_width: float, min_height: float) -> AppInfo:
        """Set the minimum app dimensions (default 0)."""
        if min_width > self.max_dims[0] or min_height > self.max_dims[1]:
            raise ValueError("min dims must not exceed max dims")
        return replace(self, min_dims=(min_width, min_height))

    def with_tile_width(self, tile_width: int) -> AppInfo:
        """Set the tile width to which native pixels are aligned."""
        if not 0 < tile_width <= 10000:
            raise ValueError(f"unrealistic tile_width {tile_width}")
        return replace(self, tile_width=tile_width)

    def with_title(self, title: str) -> AppInfo:
        return replace(self, title=title)

    def with_native_dims(self, width: int, height: int) -> AppInfo:
        """Set the initial window size in native pixels."""
        if not 10 <= width <= 3000:
            raise ValueError(f"unrealistic window width {width}")
        if not 10 <= height <= 3000:
            raise ValueError(f"unrealistic window height {height}")
        return replace(self, window_pixels=(width, height))

    def with_target_fps(self, target_fps: float) -> AppInfo:
        if not 20.0 <= target_fps < 200.0:
            raise ValueError(f"unrealistic target_fps: {target_fps}")
        return replace(self, target_fps=target_fps)

    def with_workload_info(self) -> AppInfo:
        """Print workload info periodically."""
        return replace(self, print_workload_info=True)

    def with_gl_info(self) -> AppInfo:
        """Print graphics version info at start-up."""
        return replace(self, print_gl_info=True)