"""Shared fixtures: a seeded random source per test and ready-made game states."""

import random

import pytest

from grassroots import config, game_loop, names, rng
from grassroots.models import Club


@pytest.fixture(autouse=True)
def seeded_rng():
    """Every test replays the same rolls."""
    source = random.Random(1234)
    rng.use_source(source)
    names.seed(1234)
    return source


@pytest.fixture
def club_details():
    return {
        "name": "Sileby Town",
        "nickname": "The Stags",
        "location": "Sileby",
        "kit_primary": "#FF0000",
        "kit_secondary": "#FFFFFF",
    }


@pytest.fixture
def new_state(club_details):
    """A fresh game still waiting on opponent customisation."""
    return game_loop.new_game(club_details, seed=42)


@pytest.fixture
def state(new_state):
    """A fresh game in pre-season, week 1."""
    return game_loop.apply_opponent_customisation(new_state)


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = str(tmp_path / "saves" / "test.sqlite")
    monkeypatch.setattr(config, "DB_PATH", path)
    return path


@pytest.fixture
def make_clubs():
    def _make(count, quality=8):
        return [Club(id=f"C{i}", name=f"Club {i}", overall_team_quality=quality) for i in range(count)]
    return _make
