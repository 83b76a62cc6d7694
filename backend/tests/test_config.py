"""
Tests for GameConfig and environment loading.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig, DEFAULT_CORS_ORIGINS  # noqa: E402
from domain.constants import WALL, WRAP  # noqa: E402


ENV_KEYS = [
    "SNAKE_CELL_COUNT", "SNAKE_CELL_SIZE", "SNAKE_TICK_MS", "SNAKE_RESET_DELAY_MS",
    "SNAKE_RESUME_GRACE_MS", "SNAKE_INITIAL_LENGTH", "SNAKE_BOUNDARY",
    "SNAKE_MAX_FOOD_TRIES", "CORS_ALLOWED_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_match_classic_game():
    config = GameConfig.from_env()
    assert config.cell_count == 20
    assert config.cell_size == 20
    assert config.tick_ms == 100
    assert config.reset_delay_ms == 1000
    assert config.initial_length == 4
    assert config.boundary == WRAP
    assert config.max_food_tries == 500
    assert config.cors_origins == DEFAULT_CORS_ORIGINS


def test_center():
    assert GameConfig(cell_count=20).center == (10, 10)
    assert GameConfig(cell_count=7).center == (3, 3)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SNAKE_CELL_COUNT", "12")
    monkeypatch.setenv("SNAKE_TICK_MS", "80")
    monkeypatch.setenv("SNAKE_BOUNDARY", " Wall ")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test,")

    config = GameConfig.from_env()

    assert config.cell_count == 12
    assert config.tick_ms == 80
    assert config.boundary == WALL
    assert config.cors_origins == ["http://a.test", "http://b.test"]


def test_bad_integer_env(monkeypatch):
    monkeypatch.setenv("SNAKE_TICK_MS", "fast")
    with pytest.raises(ValueError, match="SNAKE_TICK_MS"):
        GameConfig.from_env()


def test_empty_env_uses_default(monkeypatch):
    monkeypatch.setenv("SNAKE_CELL_COUNT", "")
    assert GameConfig.from_env().cell_count == 20


@pytest.mark.parametrize("kwargs", [
    {"cell_count": 1},
    {"cell_size": 0},
    {"tick_ms": 0},
    {"reset_delay_ms": -1},
    {"initial_length": 0},
    {"max_food_tries": 0},
    {"boundary": "bounce"},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
