"""Single-slot queues carrying input and growth between ticks."""

from __future__ import annotations

from grid_snake.snake import Direction

_DIRECTION_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "left": Direction.LEFT,
    "down": Direction.DOWN,
    "right": Direction.RIGHT,
    "u": Direction.UP,
    "l": Direction.LEFT,
    "d": Direction.DOWN,
    "r": Direction.RIGHT,
}


def parse_direction(value: object) -> Direction | None:
    """Map a direction event to a :class:`Direction`, or None if unrecognised."""
    if isinstance(value, Direction):
        return value
    if not isinstance(value, str):
        return None
    return _DIRECTION_NAMES.get(value.strip().lower())


class DirectionQueue:
    """Latest-wins slot for the next head direction.

    Each :meth:`enqueue` overwrites the pending value; intermediate events
    between two ticks are dropped.
    """

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending: Direction | None = None

    @property
    def pending(self) -> Direction | None:
        return self._pending

    def enqueue(self, direction: Direction) -> None:
        self._pending = direction

    def take(self) -> Direction | None:
        """Return the pending direction and clear the slot."""
        direction, self._pending = self._pending, None
        return direction


class GrowthQueue:
    """One-bit deferred growth flag, read and cleared by the next move."""

    __slots__ = ("_grow",)

    def __init__(self) -> None:
        self._grow = False

    def __bool__(self) -> bool:
        return self._grow

    def set(self) -> None:
        self._grow = True

    def take(self) -> bool:
        grow, self._grow = self._grow, False
        return grow
