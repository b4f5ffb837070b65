# Tkinter window for the Snake game: canvas renderer, key input and tick timer.
from __future__ import annotations

import argparse
import logging
import os
import tkinter as tk
from typing import Optional, Sequence

# Support both package imports and running this file directly.
try:
    from .game_logic import (
        MAX_TICK_MS,
        MIN_TICK_MS,
        Cell,
        GameConfig,
        GridModel,
        InputEvent,
        SnakeGame,
        map_key,
    )
    from .render import render_frame
    from .sound import GameSounds, PygameSoundPlayer
    from .utils import ASSETS_DIR, configure_logging, icon_path
except ImportError:
    from game_logic import (
        MAX_TICK_MS,
        MIN_TICK_MS,
        Cell,
        GameConfig,
        GridModel,
        InputEvent,
        SnakeGame,
        map_key,
    )
    from render import render_frame
    from sound import GameSounds, PygameSoundPlayer
    from utils import ASSETS_DIR, configure_logging, icon_path


logger = logging.getLogger(__name__)

WINDOW_TITLE = "Snake Game"
BG = "#000000"
GRID_COLOR = "#293340"
FONT_FAMILY = "Courier"


class TkRenderer:
    """Renderer drawing on a Tk canvas; the field sits below the header band."""

    def __init__(self, canvas: tk.Canvas, grid: GridModel) -> None:
        self.canvas = canvas
        self.grid = grid

    def _cell_box(self, cell: Cell) -> tuple[int, int, int, int]:
        x, y = cell
        size = self.grid.cell_size
        top = self.grid.header_height
        return x * size, top + y * size, (x + 1) * size, top + (y + 1) * size

    def clear(self) -> None:
        self.canvas.delete("all")

    def draw_line(self, p1: tuple[int, int], p2: tuple[int, int]) -> None:
        top = self.grid.header_height
        self.canvas.create_line(p1[0], p1[1] + top, p2[0], p2[1] + top, fill=GRID_COLOR, dash=(4,))

    def fill_rect(self, cell: Cell, color: str) -> None:
        self.canvas.create_rectangle(*self._cell_box(cell), fill=color, outline="")

    def fill_oval(self, cell: Cell, color: str) -> None:
        self.canvas.create_oval(*self._cell_box(cell), fill=color, outline="")

    def draw_text(self, text: str, color: str, font_size: int, box: tuple[int, int]) -> None:
        box_w, box_h = box
        self.canvas.create_text(
            box_w // 2,
            box_h // 2,
            text=text,
            fill=color,
            font=(FONT_FAMILY, font_size, "bold italic"),
            anchor="center",
        )


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""

    def __init__(self, root: tk.Tk, config: GameConfig, sounds: Optional[GameSounds] = None) -> None:
        self.root = root
        self.config = config
        self.sounds = sounds
        self.after_id: str | None = None  # Tkinter timer id for the game loop
        self.icon: Optional[tk.PhotoImage] = None

        self.root.title(WINDOW_TITLE)
        self.root.configure(bg=BG)
        self.root.resizable(False, False)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self.game = SnakeGame(config, cue_handler=sounds.on_cue if sounds else None)
        width, height = self.game.grid.window_pixels
        self.canvas = tk.Canvas(root, width=width, height=height, bg=BG, highlightthickness=0, bd=0)
        self.canvas.pack()
        self.renderer = TkRenderer(self.canvas, self.game.grid)

        self.root.bind("<Key>", self._on_key)
        self.draw()

    def _on_key(self, event: tk.Event) -> None:
        input_event = map_key(event.keysym)
        if input_event is None:
            return
        if input_event is InputEvent.QUIT:
            self.close()
            return

        was_running = self.game.running
        self.game.handle_input(input_event)
        if self.game.running and not was_running:
            self.draw()
            self._schedule()

    def _schedule(self) -> None:
        self.after_id = self.root.after(self.config.tick_ms, self.tick)

    def _cancel_loop(self) -> None:
        """Cancel scheduled tick callback if one exists."""
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None

    def tick(self) -> None:
        """Single frame of the game loop; reschedules itself while running."""
        self.after_id = None
        self.game.tick()
        self.draw()
        if self.game.running:
            self._schedule()

    def draw(self) -> None:
        render_frame(
            self.renderer,
            self.game.snapshot(),
            self.game.grid,
            restart_hint=self.config.restart_from_game_over,
        )

    def close(self) -> None:
        self._cancel_loop()
        if self.sounds is not None:
            self.sounds.shutdown()
        self.root.destroy()


def load_window_icon(root: tk.Tk, assets_dir: str) -> Optional[tk.PhotoImage]:
    """Set the window icon; a missing or broken image only logs a warning."""
    path = icon_path(assets_dir)
    if not os.path.isfile(path):
        logger.warning("Window icon not found: %s", path)
        return None
    try:
        image = tk.PhotoImage(file=path)
    except tk.TclError as exc:
        logger.warning("Cannot load window icon %s: %s", path, exc)
        return None
    root.iconphoto(True, image)
    return image


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake")
    parser.add_argument("--tick-ms", type=int, default=80, help=f"Tick interval ({MIN_TICK_MS}-{MAX_TICK_MS} ms)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for apple placement")
    parser.add_argument("--assets", default=ASSETS_DIR, help="Directory holding sounds/ and icons/")
    parser.add_argument("--no-sound", action="store_true", help="Disable audio")
    parser.add_argument("--strict-bounds", action="store_true", help="End the game as soon as the head leaves the grid")
    parser.add_argument(
        "--tail-growth",
        action="store_true",
        help="Grow along the tail's own segment instead of opposite the heading",
    )
    parser.add_argument("--avoid-snake", action="store_true", help="Never spawn the apple under the snake")
    parser.add_argument("--no-restart", action="store_true", help="Do not allow ENTER to restart after game over")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    try:
        return GameConfig(
            tick_ms=args.tick_ms,
            seed=args.seed,
            strict_bounds=args.strict_bounds,
            growth_from_heading=not args.tail_growth,
            avoid_snake_on_spawn=args.avoid_snake,
            restart_from_game_over=not args.no_restart,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid setting: {exc}")


def run_player_gui(argv: Optional[Sequence[str]] = None) -> None:
    """Launch the Snake game window."""
    args = parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        raise SystemExit(str(exc))
    config = config_from_args(args)

    root = tk.Tk()
    icon = load_window_icon(root, args.assets)
    sounds = None if args.no_sound else GameSounds(PygameSoundPlayer(), args.assets)
    app = SnakeApp(root, config, sounds)
    app.icon = icon
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
