"""Sound effect and music playback from the packed assets directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pygame

ASSETS_DIR = Path("assets")
_ONCE = 0
_FOREVER = -1


class CoreAudio:
    """Plays sounds and music by ID, loading ``sound<id>.ogg`` and ``music<id>.ogg`` files."""

    def __init__(self, sound_count: int, *, assets_dir: Path = ASSETS_DIR, mixer: Optional[Any] = None):
        self._mixer = mixer if mixer is not None else pygame.mixer
        self._assets_dir = Path(assets_dir)
        self._sounds = [
            self._mixer.Sound(str(self._assets_dir / f"sound{sound_id}.ogg"))
            for sound_id in range(sound_count)
        ]
        self.current_music: Optional[int] = None

    def play_sound(self, sound: int) -> None:
        """Play a sound effect once on any free channel."""
        self._sounds[sound].play()

    def play_music(self, music: int, loops: bool) -> None:
        """Play music once or forever, replacing any music playing."""
        path = self._assets_dir / f"music{music}.ogg"
        self.stop_music()
        self._mixer.music.load(str(path))
        self._mixer.music.play(_FOREVER if loops else _ONCE)
        self.current_music = music

    def stop_music(self) -> None:
        """Stop the music playing, if any."""
        if self.current_music is not None:
            self.current_music = None
            self._mixer.music.stop()