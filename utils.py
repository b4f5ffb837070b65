# Shared helpers: asset paths, collaborator protocols and logging setup.
from __future__ import annotations

import logging
import os
from typing import Any, Protocol

try:
    from .game_logic import Cell
except ImportError:
    from game_logic import Cell


BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ASSETS_DIR = os.path.join(BASE_DIR, "assets")
SOUND_FILES = {
    "greet": "greet.wav",
    "theme": "theme.wav",
    "catch": "catch.wav",
    "game_over": "game_over.wav",
}
ICON_FILE = os.path.join("icons", "appIcon.png")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AssetLoadError(Exception):
    """A sound or icon asset could not be loaded."""


class Renderer(Protocol):
    def clear(self) -> None: ...

    def draw_line(self, p1: tuple[int, int], p2: tuple[int, int]) -> None: ...

    def fill_rect(self, cell: Cell, color: str) -> None: ...

    def fill_oval(self, cell: Cell, color: str) -> None: ...

    def draw_text(self, text: str, color: str, font_size: int, box: tuple[int, int]) -> None: ...


class SoundPlayer(Protocol):
    def load_clip(self, path: str) -> Any: ...

    def play(self, handle: Any, loop: bool = False, gain_db: float = 0.0) -> None: ...

    def stop(self, handle: Any) -> None: ...


def sound_path(assets_dir: str, cue: str) -> str:
    return os.path.join(assets_dir, "sounds", SOUND_FILES[cue])


def icon_path(assets_dir: str) -> str:
    return os.path.join(assets_dir, ICON_FILE)


def configure_logging(level: str = "INFO") -> None:
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
