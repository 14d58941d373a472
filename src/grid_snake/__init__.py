"""Grid Snake — tick-based snake simulation core."""

from grid_snake.collision import Collision, Outcome
from grid_snake.config import GameConfig
from grid_snake.engine import Entity, EntityKind, GameEngine
from grid_snake.food import FoodSpawner
from grid_snake.grid import Grid
from grid_snake.queues import DirectionQueue, GrowthQueue
from grid_snake.scheduler import TickScheduler
from grid_snake.snake import Direction, SnakeChain

__all__ = [
    "Collision",
    "Direction",
    "DirectionQueue",
    "Entity",
    "EntityKind",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "Grid",
    "GrowthQueue",
    "Outcome",
    "SnakeChain",
    "TickScheduler",
]
