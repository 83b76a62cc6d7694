"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple

from .constants import STOPPED


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        cells: deque of (x, y) from head at index 0 to tail at the end
        velocity: (dx, dy), one of the four axis directions or STOPPED
        max_length: how many cells the body may hold; grows on feeding
    """

    def __init__(self, cells: List[Tuple[int, int]], max_length: int):
        self.cells = deque(cells)
        self.velocity: Tuple[int, int] = STOPPED
        self.max_length = max_length

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.cells[0]

    @property
    def is_moving(self) -> bool:
        return self.velocity != STOPPED

    def occupies(self, cell: Tuple[int, int]) -> bool:
        return cell in self.cells

    def reset(self, head: Tuple[int, int], max_length: int):
        """Put the snake back to a single cell, standing still."""
        self.cells.clear()
        self.cells.append(head)
        self.velocity = STOPPED
        self.max_length = max_length

    def __len__(self):
        return len(self.cells)
