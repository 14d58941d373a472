"""Post-move collision checks for the snake head."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from grid_snake.grid import Grid, Position


class Outcome(enum.Enum):
    """Result of a tick: keep going, or stop the simulation."""

    CONTINUE = "continue"
    TERMINAL = "terminal"


class Collision(enum.Enum):
    NONE = "none"
    WALL = "wall"
    BODY = "body"


def detect(
    head: Position,
    body_positions: Iterable[Position],
    grid: Grid,
) -> Collision:
    """Classify what the head landed on after the move."""
    if grid.is_wall(head) or not grid.in_bounds(head):
        return Collision.WALL
    if any(pos == head for pos in body_positions):
        return Collision.BODY
    return Collision.NONE


def check(
    head: Position,
    body_positions: Iterable[Position],
    grid: Grid,
) -> Outcome:
    """Return TERMINAL iff the head sits on a wall or a body segment.

    Must only be called once the whole chain has moved for the tick.
    """
    if detect(head, body_positions, grid) is Collision.NONE:
        return Outcome.CONTINUE
    return Outcome.TERMINAL
