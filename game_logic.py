# Core Snake game state and rules, independent from GUI/audio code.
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, Optional

import numpy as np


logger = logging.getLogger(__name__)

# Bounds used when validating configuration from the command line.
MIN_GRID_SIZE = 8
MAX_GRID_SIZE = 100
MIN_CELL_SIZE = 8
MAX_CELL_SIZE = 48
MIN_TICK_MS = 40
MAX_TICK_MS = 500
MIN_INITIAL_LENGTH = 1

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
OPPOSITES = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}
DELTAS = {UP: (0, -1), DOWN: (0, 1), LEFT: (-1, 0), RIGHT: (1, 0)}

# Sound cue names emitted by SnakeGame.
CUE_GREET = "greet"
CUE_THEME = "theme"
CUE_CATCH = "catch"
CUE_GAME_OVER = "game_over"

Cell = tuple[int, int]


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


class Collision(Enum):
    NONE = "none"
    SELF = "self"
    BOUNDARY = "boundary"


class InputEvent(Enum):
    UP = UP
    DOWN = DOWN
    LEFT = LEFT
    RIGHT = RIGHT
    START = "start"
    QUIT = "quit"


KEY_BINDINGS = {
    "Up": InputEvent.UP,
    "Down": InputEvent.DOWN,
    "Left": InputEvent.LEFT,
    "Right": InputEvent.RIGHT,
    "w": InputEvent.UP,
    "s": InputEvent.DOWN,
    "a": InputEvent.LEFT,
    "d": InputEvent.RIGHT,
    "Return": InputEvent.START,
    "KP_Enter": InputEvent.START,
    "Escape": InputEvent.QUIT,
}


def map_key(keysym: str) -> Optional[InputEvent]:
    """Translate a Tk keysym into an InputEvent (None for unbound keys)."""
    return KEY_BINDINGS.get(keysym)


def apply_direction_event(current: str, pending: str, event: InputEvent) -> str:
    """Return the new pending heading; reversals and non-direction events are no-ops."""
    if event.value not in OPPOSITES:
        return pending
    if OPPOSITES[event.value] == current:
        return pending
    return event.value


@dataclass(frozen=True)
class GameConfig:
    """Settings shared between the logic layer, the renderer and the window."""
    grid_width: int = 40
    grid_height: int = 30
    cell_size: int = 20
    header_height: int = 50
    tick_ms: int = 80
    initial_length: int = 6
    origin: Cell = (0, 0)
    seed: Optional[int] = None
    # Policies below default to the classic rules: lenient right/bottom edge,
    # growth opposite the heading, apples may land under the snake.
    strict_bounds: bool = False
    growth_from_heading: bool = True
    avoid_snake_on_spawn: bool = False
    restart_from_game_over: bool = True

    def __post_init__(self) -> None:
        for label, value, low, high in (
            ("Grid width", self.grid_width, MIN_GRID_SIZE, MAX_GRID_SIZE),
            ("Grid height", self.grid_height, MIN_GRID_SIZE, MAX_GRID_SIZE),
            ("Cell size", self.cell_size, MIN_CELL_SIZE, MAX_CELL_SIZE),
            ("Tick", self.tick_ms, MIN_TICK_MS, MAX_TICK_MS),
        ):
            if not (low <= value <= high):
                raise ValueError(f"{label} must be between {low} and {high}.")
        if self.header_height < 0:
            raise ValueError("Header height cannot be negative.")
        capacity = self.grid_width * self.grid_height
        if not (MIN_INITIAL_LENGTH <= self.initial_length <= capacity):
            raise ValueError(f"Initial length must be between {MIN_INITIAL_LENGTH} and {capacity}.")
        ox, oy = self.origin
        if not (0 <= ox < self.grid_width and 0 <= oy < self.grid_height):
            raise ValueError(f"Origin {self.origin} is outside the grid.")


class GridModel:
    """Grid dimensions and coordinate checks."""

    def __init__(self, config: GameConfig) -> None:
        self.width = config.grid_width
        self.height = config.grid_height
        self.cell_size = config.cell_size
        self.header_height = config.header_height

    @property
    def capacity(self) -> int:
        return self.width * self.height

    @property
    def field_pixels(self) -> tuple[int, int]:
        return self.width * self.cell_size, self.height * self.cell_size

    @property
    def window_pixels(self) -> tuple[int, int]:
        field_w, field_h = self.field_pixels
        return field_w, field_h + self.header_height

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height


class SnakeState:
    """Snake body, head at index 0, tail last."""

    def __init__(self, cells: list[Cell]) -> None:
        if not cells:
            raise ValueError("Snake needs at least one cell.")
        self.body: list[Cell] = list(cells)

    @classmethod
    def at_origin(cls, origin: Cell, length: int) -> SnakeState:
        # Every segment starts stacked on the origin and uncoils as the head moves.
        return cls([origin] * length)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def advance(self, direction: str) -> Cell:
        """Shift every segment onto its predecessor, then step the head once."""
        for part in range(len(self.body) - 1, 0, -1):
            self.body[part] = self.body[part - 1]

        delta = DELTAS.get(direction)
        if delta is None:
            logger.error("Unexpected direction %r; head left in place", direction)
            return self.head

        x, y = self.head
        self.body[0] = (x + delta[0], y + delta[1])
        return self.head

    def grow(self, direction: str, from_heading: bool = True) -> Cell:
        """Append one tail segment behind the former tail.

        With ``from_heading`` the offset is the opposite of the current heading,
        whatever way the tail itself was travelling. Otherwise the new segment
        extends the tail's own last segment.
        """
        tail_x, tail_y = self.body[-1]
        if from_heading:
            delta = DELTAS.get(direction)
            if delta is None:
                logger.error("Unexpected direction %r; growing in place", direction)
                delta = (0, 0)
            new_tail = (tail_x - delta[0], tail_y - delta[1])
        elif len(self.body) > 1:
            prev_x, prev_y = self.body[-2]
            new_tail = (tail_x + (tail_x - prev_x), tail_y + (tail_y - prev_y))
        else:
            new_tail = (tail_x, tail_y)
        self.body.append(new_tail)
        return new_tail


class AppleSpawner:
    """Seedable apple placement."""

    def __init__(self, seed: Optional[int] = None, avoid_snake: bool = False) -> None:
        self.rng = np.random.default_rng(seed)
        self.avoid_snake = avoid_snake

    def spawn(self, snake: SnakeState, grid: GridModel) -> Cell:
        if self.avoid_snake:
            free = np.ones((grid.height, grid.width), dtype=bool)
            for x, y in snake.body:
                if grid.contains((x, y)):
                    free[y, x] = False
            free_idx = np.flatnonzero(free)
            if free_idx.size:
                idx = int(self.rng.choice(free_idx))
                return idx % grid.width, idx // grid.width
            logger.debug("No free cell left for the apple; picking any cell")

        # Uniform over the whole grid, so the apple may land under the snake.
        return int(self.rng.integers(grid.width)), int(self.rng.integers(grid.height))


class CollisionChecker:
    def __init__(self, strict_bounds: bool = False) -> None:
        self.strict_bounds = strict_bounds

    def out_of_bounds(self, cell: Cell, grid: GridModel) -> bool:
        x, y = cell
        if self.strict_bounds:
            return not grid.contains(cell)
        # Lenient check: the head may sit one unit past the right/bottom edge.
        return x < 0 or x > grid.width or y < 0 or y > grid.height

    def check(self, snake: SnakeState, grid: GridModel) -> Collision:
        head = snake.head
        if head in snake.body[1:]:
            return Collision.SELF
        if self.out_of_bounds(head, grid):
            return Collision.BOUNDARY
        return Collision.NONE


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of one frame for rendering."""
    state: GameState
    snake: tuple[Cell, ...]
    apple: Optional[Cell]
    score: int
    direction: str


class SnakeGame:
    """Game loop state machine (no Tkinter/audio code)."""

    def __init__(
        self,
        config: GameConfig,
        spawner: Optional[AppleSpawner] = None,
        cue_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.config = config
        self.grid = GridModel(config)
        self.spawner = spawner or AppleSpawner(config.seed, config.avoid_snake_on_spawn)
        self.collisions = CollisionChecker(config.strict_bounds)
        self.cue_handler = cue_handler

        self.state = GameState.IDLE
        self.snake = SnakeState.at_origin(config.origin, config.initial_length)
        self.apple: Optional[Cell] = None
        self.score = 0
        self.direction = RIGHT
        self.pending_direction = RIGHT       # queued from input; applied next tick
        self.last_collision = Collision.NONE
        self._cue(CUE_GREET)

    def _cue(self, name: str) -> None:
        if self.cue_handler is not None:
            self.cue_handler(name)

    def reset(self) -> None:
        """Reinitialize snake, apple, score and heading."""
        self.snake = SnakeState.at_origin(self.config.origin, self.config.initial_length)
        self.score = 0
        self.direction = RIGHT
        self.pending_direction = RIGHT
        self.last_collision = Collision.NONE
        self.apple = self.spawner.spawn(self.snake, self.grid)

    def start(self) -> None:
        self.reset()
        self.state = GameState.RUNNING
        logger.info("New game started, apple at %s", self.apple)
        self._cue(CUE_THEME)

    def handle_input(self, event: InputEvent) -> None:
        if event is InputEvent.START:
            if self.state is GameState.IDLE:
                self.start()
            elif self.state is GameState.GAME_OVER and self.config.restart_from_game_over:
                self.start()
            return
        if event is InputEvent.QUIT:
            return
        self.pending_direction = apply_direction_event(self.direction, self.pending_direction, event)

    def tick(self) -> Collision:
        """Advance one step: move, eat-check, collision-check (in that order)."""
        if self.state is not GameState.RUNNING:
            return Collision.NONE

        self.direction = self.pending_direction
        head = self.snake.advance(self.direction)

        if head == self.apple:
            if len(self.snake) < self.grid.capacity:
                self.snake.grow(self.direction, self.config.growth_from_heading)
                self._cue(CUE_CATCH)
            self.score += 1
            self.apple = self.spawner.spawn(self.snake, self.grid)

        collision = self.collisions.check(self.snake, self.grid)
        if collision is not Collision.NONE:
            self.state = GameState.GAME_OVER
            self.last_collision = collision
            logger.info("Game over (%s collision) with score %d", collision.value, self.score)
            self._cue(CUE_GAME_OVER)
        return collision

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            state=self.state,
            snake=tuple(self.snake.body),
            apple=self.apple,
            score=self.score,
            direction=self.direction,
        )
