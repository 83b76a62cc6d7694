"""
Display collaborators: the score readout and the transient game-over message.

The game only ever writes to a display; it never reads back from one.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class Display:
    """
    Base class/interface for score and message output.
    """

    def show_score(self, score: int):
        raise NotImplementedError

    def show_game_over(self, text: str):
        raise NotImplementedError

    def hide_game_over(self):
        raise NotImplementedError


class MemoryDisplay(Display):
    """
    Keeps the latest readout in memory so another layer (the web API,
    a renderer, a test) can pick it up.
    """

    def __init__(self):
        self.score = 0
        self.message: Optional[str] = None

    def show_score(self, score: int):
        self.score = score

    def show_game_over(self, text: str):
        self.message = text

    def hide_game_over(self):
        self.message = None

    @property
    def overlay_visible(self) -> bool:
        return self.message is not None


class LogDisplay(MemoryDisplay):
    """Memory display that also logs every change."""

    def show_score(self, score: int):
        if score != self.score:
            logger.info(f"Score: {score}")
        super().show_score(score)

    def show_game_over(self, text: str):
        logger.info(text)
        super().show_game_over(text)

    def hide_game_over(self):
        if self.message is not None:
            logger.debug("Game over message hidden")
        super().hide_game_over()
