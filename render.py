# Frame drawing for the three game screens, on any Renderer implementation.
from __future__ import annotations

try:
    from .game_logic import GameSnapshot, GameState, GridModel
    from .utils import Renderer
except ImportError:
    from game_logic import GameSnapshot, GameState, GridModel
    from utils import Renderer


WELCOME_COLOR = "#0000ff"
ALERT_COLOR = "#ff0000"
APPLE_COLOR = "#a45a52"
SNAKE_HEAD = "#50dc78"
SNAKE_BODY = "#a8e4a0"
SCORE_COLOR = SNAKE_BODY

TITLE_FONT = 50
GAME_OVER_FONT = 75
HINT_FONT = 24
SCORE_FONT = 36


def render_frame(
    renderer: Renderer, snapshot: GameSnapshot, grid: GridModel, restart_hint: bool = False
) -> None:
    """Draw one full frame; never touches game state."""
    renderer.clear()
    if snapshot.state is GameState.IDLE:
        render_welcome(renderer, grid)
    elif snapshot.state is GameState.RUNNING:
        render_gameplay(renderer, snapshot, grid)
    else:
        render_game_over(renderer, snapshot, grid, restart_hint)


def _caption_boxes(grid: GridModel, font_size: int) -> tuple[tuple[int, int], tuple[int, int]]:
    """Boxes for a headline and the hint line beneath it.

    Text is centred horizontally in the box and sits on half the box height.
    """
    width, height = grid.window_pixels
    headline = (width, height)
    hint = (width, height + 3 * font_size // 2 + grid.header_height)
    return headline, hint


def render_welcome(renderer: Renderer, grid: GridModel) -> None:
    headline, hint = _caption_boxes(grid, HINT_FONT)
    renderer.draw_text("Welcome to the Snake game", WELCOME_COLOR, TITLE_FONT, headline)
    renderer.draw_text("Please, press ENTER to start the game...", ALERT_COLOR, HINT_FONT, hint)


def render_gameplay(renderer: Renderer, snapshot: GameSnapshot, grid: GridModel) -> None:
    field_w, field_h = grid.field_pixels
    cell = grid.cell_size

    for row in range(grid.height):
        renderer.draw_line((0, row * cell), (field_w, row * cell))
    for col in range(grid.width):
        renderer.draw_line((col * cell, 0), (col * cell, field_h))

    if snapshot.apple is not None:
        renderer.fill_oval(snapshot.apple, APPLE_COLOR)

    # Tail first so the head stays visible while the body is still stacked.
    for idx in range(len(snapshot.snake) - 1, -1, -1):
        color = SNAKE_HEAD if idx == 0 else SNAKE_BODY
        renderer.fill_rect(snapshot.snake[idx], color)

    renderer.draw_text(
        f"Score: {snapshot.score}",
        SCORE_COLOR,
        SCORE_FONT,
        (field_w, SCORE_FONT // 2 + grid.header_height),
    )


def render_game_over(
    renderer: Renderer, snapshot: GameSnapshot, grid: GridModel, restart_hint: bool = False
) -> None:
    headline, hint = _caption_boxes(grid, HINT_FONT)
    renderer.draw_text("Game over", ALERT_COLOR, GAME_OVER_FONT, headline)
    renderer.draw_text(f"Your final score is: {snapshot.score}.", ALERT_COLOR, HINT_FONT, hint)
    if restart_hint:
        width, _ = hint
        renderer.draw_text(
            "Press ENTER to play again", WELCOME_COLOR, HINT_FONT, (width, hint[1] + 3 * HINT_FONT)
        )
