"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Simulation parameters.

    Supports JSON serialization so a run can be reproduced from a file.
    """

    # Grid
    grid_width: int = 16
    grid_height: int = 16

    # Timing (seconds between ticks)
    tick_period: float = 1.0

    # Initial chain; start defaults to (width // 4, height // 2)
    start_col: int | None = None
    start_row: int | None = None
    start_direction: str = "right"
    initial_body_length: int = 1

    # Food placement
    seed: int | None = None
    max_spawn_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.grid_width < 3 or self.grid_height < 3:
            raise ValueError("grid_width and grid_height must each be at least 3.")
        if self.tick_period <= 0:
            raise ValueError("tick_period must be positive.")
        if self.initial_body_length < 1:
            raise ValueError("initial_body_length must be at least 1.")
        if self.max_spawn_attempts is not None and self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")
        if self.start_direction.strip().upper() not in Direction.__members__:
            raise ValueError(f"Unknown start_direction {self.start_direction!r}.")

        col, row = self.start_position
        dc, dr = self.direction.value
        for i in range(self.initial_body_length + 1):
            c, r = col - dc * i, row - dr * i
            if not (0 < c < self.grid_width - 1 and 0 < r < self.grid_height - 1):
                raise ValueError(
                    "initial snake does not fit inside the walls; move the "
                    "start position or reduce initial_body_length."
                )

    @property
    def direction(self) -> Direction:
        """The validated starting head direction."""
        return Direction[self.start_direction.strip().upper()]

    @property
    def start_position(self) -> tuple[int, int]:
        col = self.start_col if self.start_col is not None else self.grid_width // 4
        row = self.start_row if self.start_row is not None else self.grid_height // 2
        return col, row

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **overrides) -> GameConfig:
        """Return a copy with *overrides* applied (``None`` values skipped)."""
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**d)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
