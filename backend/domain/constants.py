"""
Game constants for the snake game.
"""

from typing import Dict, Tuple

# Movement directions as (dx, dy); y grows downward like the canvas
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
STOPPED = (0, 0)
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTION_NAMES: Dict[Tuple[int, int], str] = {
    UP: "UP",
    DOWN: "DOWN",
    LEFT: "LEFT",
    RIGHT: "RIGHT",
    STOPPED: "NONE",
}

# Arrow keys plus WASD
KEY_BINDINGS: Dict[str, Tuple[int, int]] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}

# Boundary policies
WRAP = "wrap"
WALL = "wall"
BOUNDARY_POLICIES = {WRAP, WALL}

# Game settings
CELL_COUNT = 20
CELL_SIZE = 20
TICK_MS = 100
RESET_DELAY_MS = 1000
RESUME_GRACE_MS = 50
INITIAL_LENGTH = 4
MAX_FOOD_TRIES = 500
