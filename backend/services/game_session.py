"""
A running game behind the web front.

The browser polls; every request first advances the timer loop to the
current time, so the tick and the deferred reset fire on schedule without
a background thread. One lock keeps requests from interleaving inside the
game.
"""

import logging
import random
import threading
from typing import Any, Callable, Dict, Optional

from config import GameConfig
from loop import TimerLoop, monotonic_ms
from main import SnakeGame
from services.display import LogDisplay
from services.frame_renderer import FrameRenderer

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one SnakeGame plus its display, renderer and timer loop."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = monotonic_ms,
        rng: Optional[random.Random] = None
    ):
        self.config = config or GameConfig()
        self.loop = TimerLoop(clock=clock)
        self.display = LogDisplay()
        self.renderer = FrameRenderer(cell_size=self.config.cell_size)
        self.game = SnakeGame(config=self.config, display=self.display, loop=self.loop, rng=rng)
        self.lock = threading.Lock()
        self.game.start()
        logger.info(f"Started game session {self.game.game_id}")

    def sync(self) -> int:
        """Run every timer that has come due since the last request."""
        return self.loop.run_pending()

    def state(self) -> Dict[str, Any]:
        with self.lock:
            self.sync()
            return self._state_dict()

    def press(self, key: str) -> Dict[str, Any]:
        with self.lock:
            self.sync()
            accepted = self.game.handle_key(key)
            return {"accepted": accepted, "state": self._state_dict()}

    def toggle_pause(self) -> Dict[str, Any]:
        with self.lock:
            self.sync()
            paused = self.game.toggle_pause()
            return {"paused": paused, "state": self._state_dict()}

    def reset(self) -> Dict[str, Any]:
        with self.lock:
            self.sync()
            self.game.reset()
            return self._state_dict()

    def frame_png(self) -> bytes:
        with self.lock:
            self.sync()
            state = self.game.get_current_state()
            message = self.display.message
        return self.renderer.render_png(state, message)

    def _state_dict(self) -> Dict[str, Any]:
        data = self.game.get_current_state().to_dict()
        data["message"] = self.display.message
        data["final_score"] = self.game.final_score
        return data
