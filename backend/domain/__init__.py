"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (timers, rendering, HTTP, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, STOPPED, VALID_MOVES, KEY_BINDINGS,
    WRAP, WALL, BOUNDARY_POLICIES,
)
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'STOPPED', 'VALID_MOVES', 'KEY_BINDINGS',
    'WRAP', 'WALL', 'BOUNDARY_POLICIES',
    'Snake',
    'GameState',
]
