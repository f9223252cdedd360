"""Frame pacing and workload reporting for the run loop."""

from __future__ import annotations

import math
import time
from typing import Optional, Protocol

from pixelgate.app_info import AppInfo

WORKLOAD_PRINT_INTERVAL_MS = 3_000


class Timer(Protocol):
    """A millisecond clock that can also wait."""

    def ticks(self) -> int: ...

    def delay(self, millis: int) -> None: ...


class MonotonicTimer:
    """Milliseconds elapsed since construction, measured with a monotonic clock."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def ticks(self) -> int:
        return int((time.monotonic() - self._start) * 1000)

    def delay(self, millis: int) -> None:
        time.sleep(millis / 1000.0)


class AppClock:
    """Holds each frame to the target frame rate and tracks how busy frames are."""

    def __init__(self, info: AppInfo, timer: Optional[Timer] = None):
        self._timer: Timer = timer if timer is not None else MonotonicTimer()
        self._last_ticks = self._timer.ticks()
        self.frame_dur_millis = int(math.floor(1000.0 / info.target_fps + 0.5))
        self._work_load_sum = 0.0
        self._work_load_max = 0.0
        self._work_load_frames = 0
        self._last_print_ticks: Optional[int] = 1 if info.print_workload_info else None

    def step(self) -> float:
        """Wait out the rest of the frame; return the seconds since the previous step."""
        now = self._timer.ticks()
        dt = now - self._last_ticks
        self._append_workload(now, dt)
        while dt < self.frame_dur_millis:
            self._timer.delay(self.frame_dur_millis - dt)
            dt = self._timer.ticks() - self._last_ticks
        elapsed = dt / 1000.0
        self._last_ticks = self._timer.ticks()
        return elapsed

    def _append_workload(self, now: int, dt: int) -> None:
        work_load = dt / self.frame_dur_millis
        self._work_load_sum += work_load
        self._work_load_max = max(self._work_load_max, work_load)
        self._work_load_frames += 1
        if self._last_print_ticks is None:
            return
        if now > self._last_print_ticks + WORKLOAD_PRINT_INTERVAL_MS:
            average = 100.0 * self._work_load_sum / self._work_load_frames
            print(f"Work Load: Average {average:.1f}%, Max {100.0 * self._work_load_max:.1f}%")
            self._work_load_sum = 0.0
            self._work_load_max = 0.0
            self._work_load_frames = 0
            self._last_print_ticks = now