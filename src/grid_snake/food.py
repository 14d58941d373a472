"""Food placement and consumption."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from grid_snake.grid import Grid, Position
    from grid_snake.queues import GrowthQueue
    from grid_snake.snake import SnakeChain

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Keeps at most one food cell on the grid.

    Placement draws uniformly over the interior rectangle with a seeded
    NumPy RNG and rejects cells under the snake. After ``max_attempts``
    rejected draws it falls back to choosing among the remaining free
    cells, so a nearly full board still terminates.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = (
            max_attempts if max_attempts is not None else 4 * grid.interior_size
        )
        self.position: Position | None = None

    def place(self, pos: Position) -> None:
        """Put the food at an explicit interior position."""
        if not self.grid.is_interior(pos):
            raise ValueError(f"Food must be placed inside the walls, got {pos}.")
        self.position = pos

    def ensure_food(self, chain: SnakeChain) -> Position | None:
        """Create food if none exists.

        Returns the food position, or ``None`` when every interior cell is
        covered by the snake.
        """
        if self.position is not None:
            return self.position

        occupied = set(chain.positions)
        for _ in range(self.max_attempts):
            col = int(self.rng.integers(1, self.grid.width - 1))
            row = int(self.rng.integers(1, self.grid.height - 1))
            if (col, row) not in occupied:
                self.position = (col, row)
                return self.position

        free = self.grid.free_cells(occupied)
        if not free:
            logger.warning("No free interior cell left for food.")
            return None
        logger.debug(
            "Rejection sampling gave up after %d draws; %d free cells left.",
            self.max_attempts, len(free),
        )
        self.position = free[int(self.rng.integers(len(free)))]
        return self.position

    def try_consume(self, head: Position, growth: GrowthQueue) -> bool:
        """Eat the food under *head*, queueing growth for the next move."""
        if self.position is None or head != self.position:
            return False
        self.position = None
        growth.set()
        return True

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {
            "position": list(self.position) if self.position is not None else None,
        }
