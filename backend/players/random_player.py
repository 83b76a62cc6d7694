"""
Random player implementation - picks random safe moves.
"""

from typing import List, Optional, Tuple

from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls and self-collisions.
    """

    def get_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        # Filter out moves that:
        # 1. Hit walls
        # 2. Hit own body (except tail, which will move)
        valid_moves: List[Tuple[int, int]] = [
            move for move in self.allowed_moves(game_state)
            if self.is_safe(game_state, self.next_cell(game_state, move))
        ]

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return None

        return self.as_key_press(game_state, self.rng.choice(valid_moves))
