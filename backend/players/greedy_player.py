"""
Greedy player implementation - heads for the apple along safe cells.
"""

from typing import Optional, Tuple

from domain.constants import WRAP
from domain.game_state import GameState
from .base import Player


class GreedyPlayer(Player):
    """
    Picks the safe move that brings the head closest to the apple.
    Distance wraps around the edges when the board does. Ties are broken
    at random.
    """

    def get_move(self, game_state: GameState) -> Optional[Tuple[int, int]]:
        best_moves = []
        best_distance = None
        for move in self.allowed_moves(game_state):
            cell = self.next_cell(game_state, move)
            if not self.is_safe(game_state, cell):
                continue
            distance = self.distance(game_state, cell, game_state.food)
            if best_distance is None or distance < best_distance:
                best_moves = [move]
                best_distance = distance
            elif distance == best_distance:
                best_moves.append(move)

        if not best_moves:
            return None

        return self.as_key_press(game_state, self.rng.choice(best_moves))

    @staticmethod
    def distance(game_state: GameState, a: Tuple[int, int], b: Tuple[int, int]) -> int:
        dx = abs(a[0] - b[0])
        dy = abs(a[1] - b[1])
        if game_state.boundary == WRAP:
            n = game_state.cell_count
            dx = min(dx, n - dx)
            dy = min(dy, n - dy)
        return dx + dy
