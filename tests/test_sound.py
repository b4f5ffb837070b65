"""
Tests for sound.py - cue handling and graceful degradation without audio assets.
"""

import logging

import pytest

from sound import MUSIC_GAIN_DB, GameSounds, PygameSoundPlayer, db_to_volume
from utils import AssetLoadError


class FakePlayer:
    def __init__(self, missing=()):
        self.missing = set(missing)
        self.events = []

    def load_clip(self, path):
        for name in self.missing:
            if path.endswith(name):
                raise AssetLoadError(f"Sound file not found: {path}")
        return path.rsplit("/", 1)[-1]

    def play(self, handle, loop=False, gain_db=0.0):
        self.events.append(("play", handle, loop, gain_db))

    def stop(self, handle):
        self.events.append(("stop", handle))


class TestDbToVolume:
    def test_unity_gain(self):
        assert db_to_volume(0.0) == 1.0

    def test_attenuation(self):
        assert db_to_volume(-20.0) == pytest.approx(0.1)

    def test_clamped(self):
        assert db_to_volume(12.0) == 1.0


class TestGameSounds:
    def test_greet_loops(self):
        player = FakePlayer()
        sounds = GameSounds(player, "/assets")
        sounds.on_cue("greet")
        assert player.events == [("play", "greet.wav", True, 0.0)]

    def test_theme_replaces_greeting(self):
        player = FakePlayer()
        sounds = GameSounds(player, "/assets")
        sounds.on_cue("greet")
        sounds.on_cue("theme")
        assert player.events[1:] == [
            ("stop", "greet.wav"),
            ("play", "theme.wav", True, MUSIC_GAIN_DB),
        ]

    def test_game_over_plays_once(self):
        player = FakePlayer()
        sounds = GameSounds(player, "/assets")
        sounds.on_cue("theme")
        sounds.on_cue("catch")
        sounds.on_cue("game_over")
        assert player.events[1:] == [
            ("play", "catch.wav", False, 0.0),
            ("stop", "theme.wav"),
            ("play", "game_over.wav", False, MUSIC_GAIN_DB),
        ]

    def test_missing_clip_is_skipped(self, caplog):
        player = FakePlayer(missing=["catch.wav"])
        with caplog.at_level(logging.WARNING, logger="sound"):
            sounds = GameSounds(player, "/assets")
        assert "catch" not in sounds.clips
        assert "Skipping catch sound" in caplog.text
        sounds.on_cue("catch")
        assert player.events == []

    def test_missing_theme_still_stops_greeting(self):
        player = FakePlayer(missing=["theme.wav"])
        sounds = GameSounds(player, "/assets")
        sounds.on_cue("greet")
        sounds.on_cue("theme")
        assert player.events[-1] == ("stop", "greet.wav")

    def test_no_player_is_silent(self):
        sounds = GameSounds(None, "/assets")
        for cue in ("greet", "theme", "catch", "game_over"):
            sounds.on_cue(cue)
        sounds.shutdown()

    def test_shutdown_stops_music(self):
        player = FakePlayer()
        sounds = GameSounds(player, "/assets")
        sounds.on_cue("theme")
        sounds.shutdown()
        assert player.events[-1] == ("stop", "theme.wav")


class TestPygameSoundPlayer:
    def test_missing_file_raises_asset_error(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
        player = PygameSoundPlayer()
        with pytest.raises(AssetLoadError, match="not found"):
            player.load_clip(str(tmp_path / "nothing.wav"))

    def test_undecodable_file_raises_asset_error(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
        bogus = tmp_path / "bogus.wav"
        bogus.write_bytes(b"not a wave file")
        player = PygameSoundPlayer()
        with pytest.raises(AssetLoadError):
            player.load_clip(str(bogus))
