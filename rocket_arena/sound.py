"""
Best-effort sound playback.

The bank loads its clips on the first user interaction and plays them by
logical name. A clip that fails to load is skipped and a failed playback is
logged for that call only. Either way the game keeps running.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# logical name -> clip (arcade resource handle or file path)
SOUND_FILES = {
    "fire": ":resources:sounds/laser1.wav",
    "explosion": ":resources:sounds/explosion2.wav",
    "game_over": ":resources:sounds/gameover1.wav",
    "click": ":resources:sounds/coin1.wav",
    "music": ":resources:music/funkyrobot.mp3",
}

SOUND_VOLUMES = {
    "fire": 0.3,
    "explosion": 0.4,
    "game_over": 0.5,
    "click": 0.3,
    "music": 0.1,
}

MUSIC = "music"


class SoundBank:
    """
    Plays named clips through a backend exposing `load_sound(path)` and
    `play_sound(sound, volume=..., loop=...)` (the `arcade` module in the game).
    """

    def __init__(
        self,
        backend: Any = None,
        files: Optional[Mapping[str, str]] = None,
        volumes: Optional[Mapping[str, float]] = None,
    ):
        self.backend = backend
        self.files = dict(SOUND_FILES if files is None else files)
        self.volumes = dict(SOUND_VOLUMES if volumes is None else volumes)
        self.enabled = False
        self.initialized = False
        self._sounds: Dict[str, Any] = {}
        self._music_player = None

    def ensure_init(self):
        """Load clips and start the music loop; only the first call does anything"""
        if self.initialized:
            return
        self.initialized = True

        if self.backend is None:
            logger.info("Sound disabled")
            return

        for name, path in self.files.items():
            try:
                self._sounds[name] = self.backend.load_sound(path)
            except Exception as e:
                logger.warning("Audio unavailable for %r: %s", name, e)

        self.enabled = bool(self._sounds)
        self.start_music()

    def play(self, name: str):
        if not self.enabled or name == MUSIC:
            return
        sound = self._sounds.get(name)
        if sound is None:
            return
        try:
            self.backend.play_sound(sound, volume=self.volumes.get(name, 1.0))
        except Exception as e:
            logger.warning("Sound %r failed to play: %s", name, e)

    def start_music(self):
        if not self.enabled or self._music_player is not None:
            return
        sound = self._sounds.get(MUSIC)
        if sound is None:
            return
        try:
            self._music_player = self.backend.play_sound(
                sound, volume=self.volumes.get(MUSIC, 1.0), loop=True
            )
        except Exception as e:
            logger.warning("Background music failed to play: %s", e)
