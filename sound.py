# Audio playback through pygame.mixer; every failure degrades to silent play.
from __future__ import annotations

import logging
import os
from typing import Optional

# Keep pygame quiet on import; the window is tkinter, pygame only supplies audio.
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

try:
    from .game_logic import CUE_CATCH, CUE_GAME_OVER, CUE_GREET, CUE_THEME
    from .utils import AssetLoadError, SoundPlayer, sound_path
except ImportError:
    from game_logic import CUE_CATCH, CUE_GAME_OVER, CUE_GREET, CUE_THEME
    from utils import AssetLoadError, SoundPlayer, sound_path


logger = logging.getLogger(__name__)

MUSIC_GAIN_DB = -20.0


def db_to_volume(gain_db: float) -> float:
    """Convert a gain in decibels to pygame's 0..1 volume scale."""
    return max(0.0, min(1.0, 10 ** (gain_db / 20.0)))


class PygameSoundPlayer:
    """SoundPlayer backed by pygame.mixer.Sound objects."""

    def __init__(self) -> None:
        self.available = False
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init()
            self.available = True
        except pygame.error as exc:
            logger.warning("Audio unavailable, playing silently: %s", exc)

    def load_clip(self, path: str) -> pygame.mixer.Sound:
        if not os.path.isfile(path):
            raise AssetLoadError(f"Sound file not found: {path}")
        if not self.available:
            raise AssetLoadError(f"No audio device for {path}")
        try:
            return pygame.mixer.Sound(path)
        except pygame.error as exc:
            raise AssetLoadError(f"Cannot decode {path}: {exc}") from exc

    def play(self, handle: pygame.mixer.Sound, loop: bool = False, gain_db: float = 0.0) -> None:
        handle.set_volume(db_to_volume(gain_db))
        handle.play(loops=-1 if loop else 0)

    def stop(self, handle: pygame.mixer.Sound) -> None:
        handle.stop()


class GameSounds:
    """Maps game cues to clips: greet/theme loop, catch/game-over play once."""

    def __init__(self, player: Optional[SoundPlayer], assets_dir: str) -> None:
        self.player = player
        self.clips: dict[str, object] = {}
        self.current_music: Optional[object] = None
        if player is None:
            return
        for cue in (CUE_GREET, CUE_THEME, CUE_CATCH, CUE_GAME_OVER):
            path = sound_path(assets_dir, cue)
            try:
                self.clips[cue] = player.load_clip(path)
            except AssetLoadError as exc:
                logger.warning("Skipping %s sound: %s", cue, exc)

    def _stop_music(self) -> None:
        if self.current_music is not None:
            self.player.stop(self.current_music)
            self.current_music = None

    def on_cue(self, cue: str) -> None:
        clip = self.clips.get(cue)
        if cue in (CUE_GREET, CUE_THEME, CUE_GAME_OVER) and self.player is not None:
            self._stop_music()
        if clip is None:
            return

        if cue == CUE_GREET:
            self.player.play(clip, loop=True)
            self.current_music = clip
        elif cue == CUE_THEME:
            self.player.play(clip, loop=True, gain_db=MUSIC_GAIN_DB)
            self.current_music = clip
        elif cue == CUE_GAME_OVER:
            self.player.play(clip, loop=False, gain_db=MUSIC_GAIN_DB)
            self.current_music = clip
        else:
            self.player.play(clip)

    def shutdown(self) -> None:
        if self.player is not None:
            self._stop_music()
