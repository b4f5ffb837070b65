"""
Tests for snake_gui.py - window wiring with Tk replaced by mocks (no display needed).
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

pytest.importorskip("tkinter")

import snake_gui  # noqa: E402
from game_logic import GameConfig, GameState, GridModel  # noqa: E402


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setattr(snake_gui.tk, "Canvas", MagicMock())
    root = MagicMock()
    root.after.return_value = "after#1"
    return snake_gui.SnakeApp(root, GameConfig(seed=5))


def key(keysym):
    return SimpleNamespace(keysym=keysym)


class TestTkRenderer:
    def test_cells_are_offset_below_header(self):
        canvas = MagicMock()
        renderer = snake_gui.TkRenderer(canvas, GridModel(GameConfig()))
        renderer.fill_rect((2, 3), "#ffffff")
        canvas.create_rectangle.assert_called_once_with(40, 110, 60, 130, fill="#ffffff", outline="")

    def test_lines_are_dashed_and_offset(self):
        canvas = MagicMock()
        renderer = snake_gui.TkRenderer(canvas, GridModel(GameConfig()))
        renderer.draw_line((0, 20), (800, 20))
        args, kwargs = canvas.create_line.call_args
        assert args == (0, 70, 800, 70)
        assert kwargs["dash"] == (4,)

    def test_text_centered_in_box(self):
        canvas = MagicMock()
        renderer = snake_gui.TkRenderer(canvas, GridModel(GameConfig()))
        renderer.draw_text("Score: 1", "#a8e4a0", 36, (800, 68))
        args, kwargs = canvas.create_text.call_args
        assert args == (400, 34)
        assert kwargs["text"] == "Score: 1"
        assert kwargs["anchor"] == "center"


class TestSnakeApp:
    def test_enter_starts_tick_timer(self, app):
        assert app.game.state is GameState.IDLE
        app._on_key(key("Return"))
        assert app.game.state is GameState.RUNNING
        app.root.after.assert_called_once_with(80, app.tick)
        assert app.after_id == "after#1"

    def test_tick_reschedules_while_running(self, app):
        app._on_key(key("Return"))
        app.tick()
        assert app.game.snake.head == (1, 0)
        assert app.root.after.call_count == 2

    def test_timer_stops_on_game_over(self, app):
        app._on_key(key("Return"))
        app._on_key(key("Up"))
        app.tick()
        assert app.game.state is GameState.GAME_OVER
        assert app.after_id is None
        assert app.root.after.call_count == 1

    def test_escape_closes_window(self, app):
        app._on_key(key("Return"))
        app._on_key(key("Escape"))
        app.root.after_cancel.assert_called_once_with("after#1")
        app.root.destroy.assert_called_once()

    def test_unbound_keys_ignored(self, app):
        app._on_key(key("F5"))
        assert app.game.state is GameState.IDLE


class TestCommandLine:
    def test_defaults(self):
        args = snake_gui.parse_args([])
        config = snake_gui.config_from_args(args)
        assert config.tick_ms == 80
        assert config.strict_bounds is False
        assert config.growth_from_heading is True
        assert config.restart_from_game_over is True

    def test_policy_flags(self):
        args = snake_gui.parse_args(["--strict-bounds", "--tail-growth", "--avoid-snake", "--no-restart", "--seed", "3"])
        config = snake_gui.config_from_args(args)
        assert config.strict_bounds is True
        assert config.growth_from_heading is False
        assert config.avoid_snake_on_spawn is True
        assert config.restart_from_game_over is False
        assert config.seed == 3

    def test_invalid_tick_exits(self):
        args = snake_gui.parse_args(["--tick-ms", "5"])
        with pytest.raises(SystemExit, match="Invalid setting"):
            snake_gui.config_from_args(args)

    def test_missing_icon_is_not_fatal(self, tmp_path):
        root = MagicMock()
        assert snake_gui.load_window_icon(root, str(tmp_path)) is None
        root.iconphoto.assert_not_called()
