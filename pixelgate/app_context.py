"""The context handed to an app: dimensions, cursor, audio, fullscreen and cookie state."""

from __future__ import annotations

import math
from typing import Protocol

MAX_COOKIE_LEN = 700


class AudioBackend(Protocol):
    """What ``Audio`` needs from the platform audio layer."""

    def play_sound(self, sound: int) -> None: ...

    def play_music(self, music: int, loops: bool) -> None: ...

    def stop_music(self) -> None: ...


class Audio:
    """Audio playback addressed by asset enum members."""

    def __init__(self, core: AudioBackend):
        self._core = core

    def play_sound(self, sound: int) -> None:
        """Play the given sound effect once."""
        self._core.play_sound(int(sound))

    def play_music(self, music: int) -> None:
        """Play the given music once, replacing any music playing."""
        self._core.play_music(int(music), False)

    def loop_music(self, music: int) -> None:
        """Loop the given music, replacing any music playing."""
        self._core.play_music(int(music), True)

    def stop_music(self) -> None:
        """Stop the music playing, if any."""
        self._core.stop_music()


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


class AppContext:
    """State shared with the app's callbacks."""

    def __init__(self, audio: AudioBackend, dims: tuple[float, float], native_px: float):
        self.audio = Audio(audio)
        self._dims = (float(dims[0]), float(dims[1]))
        self._cursor = (0.0, 0.0)
        self._close_requested = False
        self._native_px = native_px
        self._is_fullscreen = False
        self._desires_fullscreen = False
        self._cookie = b""

    @property
    def dims(self) -> tuple[float, float]:
        """App (width, height), bounded by the min/max dimensions of ``AppInfo``."""
        return self._dims

    @property
    def cursor(self) -> tuple[float, float]:
        """Mouse cursor (x, y) in app coordinates, within ``dims``."""
        return self._cursor

    @property
    def native_px(self) -> float:
        """Width of a native pixel in app pixels; at most 1."""
        return self._native_px

    @property
    def is_fullscreen(self) -> bool:
        return self._is_fullscreen

    @property
    def desires_fullscreen(self) -> bool:
        return self._desires_fullscreen

    @property
    def cookie(self) -> bytes:
        """Current cookie data, empty if unset."""
        return self._cookie

    def _bound_cursor(self) -> None:
        x, y = self._cursor
        self._cursor = (min(max(x, 0.0), self._dims[0]), min(max(y, 0.0), self._dims[1]))

    def set_cursor(self, cursor: tuple[float, float]) -> None:
        self._cursor = (float(cursor[0]), float(cursor[1]))
        self._bound_cursor()

    def set_dims(self, dims: tuple[float, float], native_px: float) -> None:
        self._dims = (float(dims[0]), float(dims[1]))
        self._native_px = native_px
        self._bound_cursor()

    def native_px_align(self, x: float, y: float) -> tuple[float, float]:
        """Align a position to the nearest native pixel boundaries."""
        px = self._native_px
        return (_round_half_away(x / px) * px, _round_half_away(y / px) * px)

    def request_fullscreen(self) -> None:
        self._desires_fullscreen = True

    def cancel_fullscreen(self) -> None:
        self._desires_fullscreen = False

    def set_is_fullscreen(self, is_fullscreen: bool) -> None:
        self._is_fullscreen = is_fullscreen
        self._desires_fullscreen = is_fullscreen

    def close(self) -> None:
        """Ask for the app to close."""
        self._close_requested = True

    def take_close_request(self) -> bool:
        """Return whether a close was requested and reset the request."""
        requested = self._close_requested
        self._close_requested = False
        return requested

    def set_cookie(self, cookie: bytes) -> None:
        """Replace the cookie data; it must be shorter than 700 bytes."""
        data = bytes(cookie)
        if len(data) >= MAX_COOKIE_LEN:
            raise ValueError(f"cookie too long: {len(data)} bytes")
        if data != self._cookie:
            self._cookie = data