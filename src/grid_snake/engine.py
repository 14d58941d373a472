"""Tick-based game engine composing grid, chain, queues and food."""

from __future__ import annotations

import enum
import logging
from typing import NamedTuple

import numpy as np

from grid_snake import collision
from grid_snake.collision import Collision, Outcome
from grid_snake.config import GameConfig
from grid_snake.food import FoodSpawner
from grid_snake.grid import Grid, Position
from grid_snake.queues import DirectionQueue, GrowthQueue, parse_direction
from grid_snake.snake import Direction, SnakeChain

logger = logging.getLogger(__name__)


class EntityKind(enum.Enum):
    """Kind tags exposed to presentation layers."""

    WALL = "wall"
    HEAD = "head"
    BODY = "body"
    FOOD = "food"


class Entity(NamedTuple):
    position: Position
    kind: EntityKind


class GameEngine:
    """Single-snake simulation state.

    The engine owns the grid, the chain, both single-slot queues and the
    food spawner. Each call to :meth:`step` runs one whole tick and returns
    an :class:`Outcome`; nothing in between is observable.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_width, self.config.grid_height)
        self.rng = np.random.default_rng(self.config.seed)

        self.snake = SnakeChain(
            self.config.start_position,
            self.config.direction,
            body_length=self.config.initial_body_length,
        )

        self.directions = DirectionQueue()
        self.growth = GrowthQueue()
        self.food = FoodSpawner(
            self.grid, rng=self.rng, max_attempts=self.config.max_spawn_attempts,
        )
        self.food.ensure_food(self.snake)

        self.score = 0
        self.tick = 0
        self.game_over = False
        self.end_reason: str | None = None

    def enqueue_direction(self, direction: Direction | str) -> bool:
        """Queue a direction for the next tick. Unknown input is ignored."""
        parsed = parse_direction(direction)
        if parsed is None:
            return False
        self.directions.enqueue(parsed)
        return True

    def step(self) -> Outcome:
        """Advance the game by one tick."""
        if self.game_over:
            return Outcome.TERMINAL

        self.tick += 1
        head = self.snake.advance(self.directions.take(), self.growth.take())

        hit = collision.detect(head, self.snake.body_positions, self.grid)
        if hit is not Collision.NONE:
            self._finish(hit.value)
            return Outcome.TERMINAL

        if self.food.ensure_food(self.snake) is None:
            self._finish("board_full")
            return Outcome.TERMINAL

        if self.food.try_consume(head, self.growth):
            self.score += 1
            logger.debug("Food eaten at %s on tick %d.", head, self.tick)

        return Outcome.CONTINUE

    def entities(self) -> list[Entity]:
        """Return every live entity as ``(position, kind)``."""
        result = [Entity(pos, EntityKind.WALL) for pos in self.grid.wall_cells()]
        result.append(Entity(self.snake.head, EntityKind.HEAD))
        result.extend(
            Entity(pos, EntityKind.BODY) for pos in self.snake.body_positions
        )
        if self.food.position is not None:
            result.append(Entity(self.food.position, EntityKind.FOOD))
        return result

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "game_over": self.game_over,
            "end_reason": self.end_reason,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
        }

    def _finish(self, reason: str) -> None:
        self.game_over = True
        self.end_reason = reason
        logger.info(
            "Game over (%s) at tick %d with score %d.",
            reason, self.tick, self.score,
        )
