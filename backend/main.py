import random
import time
from datetime import datetime, timezone
import os
import json
import uuid
import argparse
import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple, Any

from dotenv import load_dotenv

from config import GameConfig
from domain.constants import KEY_BINDINGS, VALID_MOVES, WRAP, DIRECTION_NAMES
from domain.game_state import GameState
from domain.snake import Snake
from loop import ManualClock, Timer, TimerLoop
from players import Player, get_player_class, AVAILABLE_VARIANTS
from services.display import Display, LogDisplay

load_dotenv()

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Manages:
      - Board (cell_count x cell_count)
      - The snake, its pending direction and its length cap
      - The apple
      - Score, pause and the game-over gate
      - The tick and deferred-reset timers
      - History for replay
    """
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        display: Optional[Display] = None,
        loop: Optional[TimerLoop] = None,
        rng: Optional[random.Random] = None,
        game_id: Optional[str] = None,
        record_history: bool = False
    ):
        self.config = config or GameConfig()
        self.display = display or LogDisplay()
        self.loop = loop or TimerLoop()
        self.rng = rng or random.Random()
        self.game_id = game_id or str(uuid.uuid4())
        self.start_time = time.time()

        self.snake = Snake([self.config.center], self.config.initial_length)
        self.food: Tuple[int, int] = (0, 0)
        self.score = 0
        self.final_score: Optional[int] = None
        self.final_scores: List[int] = []
        self.pending_direction: Optional[Tuple[int, int]] = None
        self.is_game_over = False
        self.paused = False
        self.tick_count = 0
        self.games_played = 0
        self.last_reset_at: Optional[float] = None

        self.record = record_history
        self.history: List[GameState] = []
        self.frame_listeners: List[Callable[[GameState], None]] = []

        self._tick_timer: Optional[Timer] = None
        self._reset_timer: Optional[Timer] = None

        self.place_food()
        self.display.hide_game_over()
        self.display.show_score(self.score)
        logger.debug(f"Game {self.game_id} created: {self.config.cell_count}x{self.config.cell_count}, "
                     f"boundary={self.config.boundary}")

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------
    def start(self) -> Timer:
        """Schedule the periodic update-then-render callback."""
        if self._tick_timer is None or self._tick_timer.cancelled:
            self._tick_timer = self.loop.set_interval(self.step, self.config.tick_ms)
        return self._tick_timer

    def stop(self):
        self.loop.cancel(self._tick_timer)
        self._tick_timer = None

    def add_frame_listener(self, listener: Callable[[GameState], None]):
        self.frame_listeners.append(listener)

    def step(self):
        """One timer firing: update unless paused, then hand the frame to every listener."""
        if not self.paused:
            self.tick()
        state = self.get_current_state()
        if self.record:
            self.history.append(state)
        for listener in self.frame_listeners:
            listener(state)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> bool:
        """
        Map a key name (arrow keys or WASD) to a direction change.
        Unknown keys are ignored.
        """
        if len(key) == 1:
            key = key.lower()
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            logger.debug(f"Ignoring unbound key {key!r}")
            return False
        return self.change_direction(direction)

    def change_direction(self, direction: Tuple[int, int]) -> bool:
        """
        Queue a direction for the next tick.

        Rejected while the game-over gate is set, and when the direction lies on
        the axis the snake is already moving along (that covers reversing into
        the neck). Any direction is accepted while the snake stands still.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction {direction}")
        if self.is_game_over:
            logger.debug("Ignoring direction change during game over")
            return False

        dx, dy = self.snake.velocity
        if self.snake.is_moving and (direction[0] == 0) == (dx == 0):
            logger.debug(f"Rejected {DIRECTION_NAMES[direction]} while moving {DIRECTION_NAMES[(dx, dy)]}")
            return False

        self.pending_direction = direction
        return True

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        logger.info("Paused" if self.paused else "Resumed")
        return self.paused

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def in_grace_window(self) -> bool:
        if self.last_reset_at is None:
            return False
        return self.loop.now_ms() - self.last_reset_at < self.config.resume_grace_ms

    def tick(self) -> bool:
        """
        Advance the snake by one cell.

          1) Skip while paused, during game over or right after a reset
          2) Take the pending direction; stand still if there is none
          3) Compute the new head and apply the boundary policy
          4) Check the new head against the body that will remain
          5) Grow and move the apple if the head lands on it
          6) Insert the head and trim the tail down to max_length

        Returns:
            True if the snake moved
        """
        if self.paused or self.is_game_over or self.in_grace_window():
            return False

        if self.pending_direction is not None:
            self.snake.velocity = self.pending_direction
            self.pending_direction = None

        if not self.snake.is_moving:
            return False

        n = self.config.cell_count
        hx, hy = self.snake.head
        dx, dy = self.snake.velocity
        x, y = hx + dx, hy + dy

        if self.config.boundary == WRAP:
            x %= n
            y %= n
        elif not (0 <= x < n and 0 <= y < n):
            logger.info(f"Hit the wall at {(x, y)}")
            self.handle_game_over()
            return False

        new_head = (x, y)
        grows = new_head == self.food
        new_max = self.snake.max_length + (1 if grows else 0)

        # The tail cells dropped this tick no longer block the head
        body = list(self.snake.cells)
        dropped = max(0, len(body) + 1 - new_max)
        if new_head in body[:len(body) - dropped]:
            logger.info(f"Ran into itself at {new_head}")
            self.handle_game_over()
            return False

        self.snake.max_length = new_max
        self.snake.cells.appendleft(new_head)
        while len(self.snake.cells) > self.snake.max_length:
            self.snake.cells.pop()

        self.tick_count += 1

        if grows:
            self.score = self.snake.max_length - self.config.initial_length
            self.display.show_score(self.score)
            self.place_food()
            logger.info(f"Ate apple at {new_head}; score {self.score}, next apple at {self.food}")

        return True

    def place_food(self) -> Tuple[int, int]:
        """
        Put the apple on a random cell not occupied by the snake.

        Gives up after max_food_tries samples and keeps the last one, which
        may sit on the snake when the board is (nearly) full.
        """
        n = self.config.cell_count
        cell = self.food
        for _ in range(self.config.max_food_tries):
            cell = (self.rng.randrange(n), self.rng.randrange(n))
            if not self.snake.occupies(cell):
                self.food = cell
                return cell

        logger.warning(f"No free cell found after {self.config.max_food_tries} tries, placing apple at {cell}")
        self.food = cell
        return cell

    def set_food(self, cell: Tuple[int, int]):
        """Place the apple at a specific cell."""
        x, y = cell
        n = self.config.cell_count
        if not (0 <= x < n and 0 <= y < n):
            raise ValueError(f"Apple out of bounds at {cell}.")
        self.food = (x, y)

    # ------------------------------------------------------------------
    # Game over / reset
    # ------------------------------------------------------------------
    def handle_game_over(self) -> bool:
        """
        Start the game-over transition once; later calls are no-ops until
        the deferred reset has run.

        Returns:
            True if this call started the transition
        """
        if self.is_game_over:
            logger.debug("Game over already in progress")
            return False

        self.is_game_over = True
        self.final_score = self.score
        self.final_scores.append(self.final_score)
        self.display.show_game_over(f"Game Over! Score: {self.final_score}")
        logger.info(f"Game Over after {self.tick_count} ticks with score {self.final_score}")

        self._reset_timer = self.loop.set_timeout(self.reset, self.config.reset_delay_ms)
        return True

    def reset(self):
        """Restore the starting position in place and clear the gate."""
        self.loop.cancel(self._reset_timer)
        self._reset_timer = None

        self.snake.reset(self.config.center, self.config.initial_length)
        self.pending_direction = None
        self.score = 0
        self.place_food()

        self.display.hide_game_over()
        self.display.show_score(self.score)

        self.games_played += 1
        self.last_reset_at = self.loop.now_ms()
        self.is_game_over = False
        logger.info(f"Game reset (games played: {self.games_played})")

    # ------------------------------------------------------------------
    # Snapshots & replay
    # ------------------------------------------------------------------
    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick=self.tick_count,
            cells=list(self.snake.cells),
            velocity=self.snake.velocity,
            food=self.food,
            score=self.score,
            max_length=self.snake.max_length,
            cell_count=self.config.cell_count,
            paused=self.paused,
            game_over=self.is_game_over,
            games_played=self.games_played,
            boundary=self.config.boundary
        )

    def serialize_history(self, history: List[GameState]) -> List[Dict[str, Any]]:
        """
        Convert the list of GameState objects to a JSON-serializable list of dicts.
        """
        return [state.to_dict() for state in history]

    def save_history_to_json(self, filename: Optional[str] = None) -> str:
        if filename is None:
            filename = os.path.join('completed_games', f"snake_game_{self.game_id}.json")

        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.fromtimestamp(time.time(), tz=timezone.utc).isoformat(),
            "cell_count": self.config.cell_count,
            "boundary": self.config.boundary,
            "tick_ms": self.config.tick_ms,
            "initial_length": self.config.initial_length,
            "ticks": self.tick_count,
            "games_played": self.games_played,
            "final_scores": self.final_scores,
            "current_score": self.score
        }

        data = {
            "metadata": metadata,
            "rounds": self.serialize_history(self.history)
        }

        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filename, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Saved {len(self.history)} frames to {filename}")
        return filename


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(config: GameConfig, ticks: int, player_variant: str = "greedy",
                   seed: Optional[int] = None, output: Optional[str] = None) -> Dict:
    """
    Runs the game headless with an autopilot player on a manual clock.

    Args:
        config: Game configuration
        ticks: How many tick intervals to run
        player_variant: Autopilot variant key (see players.AVAILABLE_VARIANTS)
        seed: Seed for apple placement and the autopilot
        output: Optional replay JSON path

    Returns:
        A dictionary summarizing the run (game_id, ticks, final_scores, ...).
    """
    clock = ManualClock()
    loop = TimerLoop(clock=clock)
    rng = random.Random(seed)

    game = SnakeGame(config=config, loop=loop, rng=rng, record_history=output is not None)
    player: Player = get_player_class(player_variant)(rng=random.Random(seed))

    def feed_input():
        direction = player.get_move(game.get_current_state())
        if direction is not None:
            game.change_direction(direction)

    # Scheduled first so input lands ahead of the tick due at the same instant
    loop.set_interval(feed_input, config.tick_ms)
    game.start()

    for _ in range(ticks):
        clock.advance(config.tick_ms)
        loop.run_pending()

    if output is not None:
        game.save_history_to_json(output)

    return {
        "game_id": game.game_id,
        "ticks": game.tick_count,
        "games_played": game.games_played,
        "final_scores": game.final_scores,
        "current_score": game.score,
        "length": len(game.snake)
    }


def watch(config: GameConfig, player_variant: str = "greedy", seed: Optional[int] = None):
    """Run the autopilot in real time, printing the board every frame."""
    rng = random.Random(seed)
    game = SnakeGame(config=config, rng=rng)
    player: Player = get_player_class(player_variant)(rng=random.Random(seed))

    def feed_input():
        direction = player.get_move(game.get_current_state())
        if direction is not None:
            game.change_direction(direction)

    def show(state: GameState):
        print("\033[2J\033[H" + state.print_board())
        print(f"Score: {state.score}  Games: {state.games_played}")

    game.add_frame_listener(show)
    game.loop.set_interval(feed_input, config.tick_ms)
    game.start()
    game.loop.run_forever()


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Play Snake in the browser, or run the autopilot headless."
    )
    parser.add_argument("--serve", action="store_true",
                        help="Run the web app instead of a headless simulation")
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--watch", action="store_true",
                        help="Run the autopilot in real time in the terminal")
    parser.add_argument("--ticks", type=int, default=500,
                        help="Number of ticks for a headless simulation")
    parser.add_argument("--player", type=str, default="greedy", choices=AVAILABLE_VARIANTS,
                        help="Autopilot variant")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for apples and the autopilot")
    parser.add_argument("--cell-count", type=int, default=None,
                        help="Board size N for an N x N grid")
    parser.add_argument("--boundary", type=str, default=None, choices=["wrap", "wall"],
                        help="Wrap around the edges or die on the wall")
    parser.add_argument("--output", type=str, default=None,
                        help="Write a replay JSON of the simulation here")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = GameConfig.from_env()
    overrides = {}
    if args.cell_count is not None:
        overrides["cell_count"] = args.cell_count
    if args.boundary is not None:
        overrides["boundary"] = args.boundary
    if overrides:
        config = replace(config, **overrides)

    if args.serve:
        from app import create_app
        create_app(config).run(host=args.host, port=args.port)
        return

    if args.watch:
        watch(config, args.player, args.seed)
        return

    result = run_simulation(config, args.ticks, args.player, args.seed, args.output)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
