"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Tuple

from .constants import DIRECTION_NAMES, WRAP


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick: how many ticks have advanced the snake since start (0-based)
        cells: list of (x, y), head first
        velocity: (dx, dy) of the snake
        food: (x, y) of the apple
        score: current score
        max_length: current length cap of the snake
        cell_count: board is cell_count x cell_count
        paused: whether updates are suspended
        game_over: whether the game-over transition is in progress
        games_played: how many resets have happened
        boundary: "wrap" or "wall"
    """

    def __init__(
        self,
        tick: int,
        cells: List[Tuple[int, int]],
        velocity: Tuple[int, int],
        food: Tuple[int, int],
        score: int,
        max_length: int,
        cell_count: int,
        paused: bool = False,
        game_over: bool = False,
        games_played: int = 0,
        boundary: str = WRAP
    ):
        self.tick = tick
        self.cells = cells
        self.velocity = velocity
        self.food = food
        self.score = score
        self.max_length = max_length
        self.cell_count = cell_count
        self.paused = paused
        self.game_over = game_over
        self.games_played = games_played
        self.boundary = boundary

    @property
    def head(self) -> Tuple[int, int]:
        return self.cells[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = apple
        T = snake body
        H = snake head
        Row 0 is printed first, matching the canvas orientation.
        """
        board = [['.' for _ in range(self.cell_count)] for _ in range(self.cell_count)]

        fx, fy = self.food
        board[fy][fx] = 'A'

        # Draw tail to head so the head wins on overlapping cells
        for pos_idx in range(len(self.cells) - 1, -1, -1):
            x, y = self.cells[pos_idx]
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.cell_count)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.cell_count)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; tuples become lists once dumped."""
        return {
            "tick": self.tick,
            "cells": [list(c) for c in self.cells],
            "velocity": list(self.velocity),
            "direction": DIRECTION_NAMES.get(self.velocity, "NONE"),
            "food": list(self.food),
            "score": self.score,
            "max_length": self.max_length,
            "cell_count": self.cell_count,
            "paused": self.paused,
            "game_over": self.game_over,
            "games_played": self.games_played,
            "boundary": self.boundary,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, head={self.cells[0] if self.cells else None}, "
            f"food={self.food}, score={self.score}, game_over={self.game_over}>"
        )
