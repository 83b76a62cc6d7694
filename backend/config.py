"""
Game configuration.

Values come from environment variables (a local .env file is loaded first),
falling back to the classic 20x20 / 100 ms settings.
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

from domain.constants import (
    CELL_COUNT,
    CELL_SIZE,
    TICK_MS,
    RESET_DELAY_MS,
    RESUME_GRACE_MS,
    INITIAL_LENGTH,
    MAX_FOOD_TRIES,
    WRAP,
    BOUNDARY_POLICIES,
)

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5000",
    "http://127.0.0.1:5000",
]


@dataclass
class GameConfig:
    cell_count: int = CELL_COUNT
    cell_size: int = CELL_SIZE
    tick_ms: int = TICK_MS
    reset_delay_ms: int = RESET_DELAY_MS
    resume_grace_ms: int = RESUME_GRACE_MS
    initial_length: int = INITIAL_LENGTH
    boundary: str = WRAP
    max_food_tries: int = MAX_FOOD_TRIES
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    def __post_init__(self):
        if self.cell_count < 2:
            raise ValueError(f"cell_count must be at least 2, got {self.cell_count}")
        if self.cell_size < 1:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.reset_delay_ms < 0 or self.resume_grace_ms < 0:
            raise ValueError("reset_delay_ms and resume_grace_ms cannot be negative")
        if self.initial_length < 1:
            raise ValueError(f"initial_length must be at least 1, got {self.initial_length}")
        if self.max_food_tries < 1:
            raise ValueError(f"max_food_tries must be at least 1, got {self.max_food_tries}")
        if self.boundary not in BOUNDARY_POLICIES:
            raise ValueError(
                f"Unknown boundary policy '{self.boundary}'. "
                f"Expected one of: {', '.join(sorted(BOUNDARY_POLICIES))}"
            )

    @property
    def center(self):
        mid = self.cell_count // 2
        return (mid, mid)

    @classmethod
    def from_env(cls) -> "GameConfig":
        """
        Build a config from environment variables.

        Uses environment variables:
        - SNAKE_CELL_COUNT, SNAKE_CELL_SIZE, SNAKE_TICK_MS
        - SNAKE_RESET_DELAY_MS, SNAKE_RESUME_GRACE_MS
        - SNAKE_INITIAL_LENGTH, SNAKE_BOUNDARY, SNAKE_MAX_FOOD_TRIES
        - CORS_ALLOWED_ORIGINS (comma-separated)

        Raises:
            ValueError: If a value is not a valid integer or policy
        """
        origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
        if origins_env:
            origins = [o.strip() for o in origins_env.split(",") if o.strip()]
        else:
            origins = list(DEFAULT_CORS_ORIGINS)

        return cls(
            cell_count=_int_env("SNAKE_CELL_COUNT", CELL_COUNT),
            cell_size=_int_env("SNAKE_CELL_SIZE", CELL_SIZE),
            tick_ms=_int_env("SNAKE_TICK_MS", TICK_MS),
            reset_delay_ms=_int_env("SNAKE_RESET_DELAY_MS", RESET_DELAY_MS),
            resume_grace_ms=_int_env("SNAKE_RESUME_GRACE_MS", RESUME_GRACE_MS),
            initial_length=_int_env("SNAKE_INITIAL_LENGTH", INITIAL_LENGTH),
            boundary=os.getenv("SNAKE_BOUNDARY", WRAP).strip().lower(),
            max_food_tries=_int_env("SNAKE_MAX_FOOD_TRIES", MAX_FOOD_TRIES),
            cors_origins=origins,
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")
