"""
Base player interface for the game engine.
"""

import random
from typing import List, Optional, Tuple

from domain.constants import VALID_MOVES, WRAP, STOPPED
from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player looks at a snapshot and returns the direction it would press,
    or None to keep going the way the snake already moves. The game still
    applies its own input rules to whatever the player returns.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of UP, DOWN, LEFT, RIGHT, or None
        """
        raise NotImplementedError

    @staticmethod
    def allowed_moves(game_state: GameState) -> List[Tuple[int, int]]:
        """Directions the game will not reject as a reversal (plus straight on)."""
        dx, dy = game_state.velocity
        if game_state.velocity == STOPPED:
            return sorted(VALID_MOVES)
        return sorted(m for m in VALID_MOVES if m != (-dx, -dy))

    @staticmethod
    def next_cell(game_state: GameState, move: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Where the head lands for a move, or None if that is through a wall."""
        n = game_state.cell_count
        hx, hy = game_state.head
        x, y = hx + move[0], hy + move[1]
        if game_state.boundary == WRAP:
            return (x % n, y % n)
        if 0 <= x < n and 0 <= y < n:
            return (x, y)
        return None

    @staticmethod
    def is_safe(game_state: GameState, cell: Optional[Tuple[int, int]]) -> bool:
        if cell is None:
            return False
        # The tail moves out of the way unless the snake is unfurling or eating
        body = game_state.cells
        if len(body) >= game_state.max_length and cell != game_state.food:
            body = body[:-1]
        return cell not in body

    def as_key_press(self, game_state: GameState, move: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Moving straight on needs no key press."""
        return None if move == game_state.velocity else move
